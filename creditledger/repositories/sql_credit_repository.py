from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import Date, DateTime, ForeignKey, Integer, Numeric, String, Text, delete, select
from sqlalchemy.orm import Mapped, mapped_column, relationship

from creditledger.db import init_db, new_session
from creditledger.db_base import Base
from creditledger.domain.credit import Credit, CreditStatus, Payment, PaymentMethod
from creditledger.repositories.credit_repository import CreditRepository

logger = logging.getLogger(__name__)


class CreditRow(Base):
    __tablename__ = "credits"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, index=True, nullable=False)
    client_name: Mapped[str] = mapped_column(String(128), nullable=False)
    client_last_name: Mapped[str] = mapped_column(String(128), nullable=False)
    id_number: Mapped[str] = mapped_column(String(64), index=True, nullable=False)
    phone: Mapped[str] = mapped_column(String(64), nullable=False)
    address: Mapped[str] = mapped_column(String(256), nullable=False)
    total_amount: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False)
    detailed_info: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, index=True, nullable=False)
    status: Mapped[str] = mapped_column(String(16), nullable=False)

    payments: Mapped[list["PaymentRow"]] = relationship(
        order_by="PaymentRow.position",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class PaymentRow(Base):
    __tablename__ = "credit_payments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    credit_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("credits.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(Numeric(24, 2), nullable=False)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    payment_method: Mapped[str] = mapped_column(String(16), nullable=False)
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    recorded_at: Mapped[dt.datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class SqlCreditRepository(CreditRepository):
    """
    SQL implementation aligned with JsonCreditRepository behavior:
    - load(): all credits in insertion order, payments nested
    - save(): whole-collection replace inside a single transaction
    """

    def __init__(self) -> None:
        # ensure tables exist (alembic handles real deployments)
        init_db()

    def load(self) -> list[Credit]:
        with new_session() as s:
            rows = s.execute(
                select(CreditRow).order_by(CreditRow.position.asc())
            ).scalars().all()
            return [self._to_domain(r) for r in rows]

    def save(self, credits: Sequence[Credit]) -> None:
        with new_session() as s:
            with s.begin():
                s.execute(delete(PaymentRow))
                s.execute(delete(CreditRow))
                for i, c in enumerate(credits):
                    s.add(self._to_row(c, position=i))
        logger.debug("credits table replaced (%d credit(s))", len(credits))

    @staticmethod
    def _to_row(c: Credit, *, position: int) -> CreditRow:
        return CreditRow(
            id=str(c.id),
            position=position,
            client_name=c.client_name,
            client_last_name=c.client_last_name,
            id_number=c.id_number,
            phone=c.phone,
            address=c.address,
            total_amount=c.total_amount,
            detailed_info=c.detailed_info,
            date=c.date,
            status=c.status.value,
            payments=[
                PaymentRow(
                    id=str(p.id),
                    credit_id=str(c.id),
                    position=j,
                    amount=p.amount,
                    date=p.date,
                    payment_method=p.payment_method.value,
                    notes=p.notes,
                    recorded_at=p.recorded_at,
                )
                for j, p in enumerate(c.payments)
            ],
        )

    @staticmethod
    def _to_domain(row: CreditRow) -> Credit:
        payments = tuple(
            Payment.create(
                id=UUID(p.id),
                amount=Decimal(str(p.amount)),
                date=p.date,
                payment_method=PaymentMethod(p.payment_method),
                notes=p.notes,
                # sqlite rend des datetimes naïfs
                recorded_at=(
                    p.recorded_at
                    if p.recorded_at.tzinfo is not None
                    else p.recorded_at.replace(tzinfo=dt.timezone.utc)
                ),
            )
            for p in row.payments
        )
        return Credit(
            id=UUID(row.id),
            client_name=row.client_name,
            client_last_name=row.client_last_name,
            id_number=row.id_number,
            phone=row.phone,
            address=row.address,
            total_amount=Decimal(str(row.total_amount)),
            detailed_info=row.detailed_info,
            date=row.date,
            status=CreditStatus(row.status),
            payments=payments,
        )
