from __future__ import annotations

from dataclasses import dataclass, field, replace
import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid1, uuid4

from creditledger.domain.money import ZERO, _quantize_money


class CreditStatus(str, Enum):
    ACTIVE = "active"
    PAID = "paid"
    OVERDUE = "overdue"


class PaymentMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"
    CARD = "card"
    CHECK = "check"
    OTHER = "other"


@dataclass(frozen=True)
class CreditInput:
    """
    Données saisies dans le formulaire de crédit, telles quelles.
    La validation est faite par le ledger.
    """
    client_name: str
    client_last_name: str
    id_number: str
    phone: str
    address: str
    total_amount: str | int | Decimal
    detailed_info: Optional[str] = None


@dataclass(frozen=True)
class PaymentInput:
    # date / payment_method peuvent arriver en str depuis un formulaire
    amount: str | int | Decimal
    date: Optional[dt.date | str] = None
    payment_method: PaymentMethod | str = PaymentMethod.CASH
    notes: Optional[str] = None


@dataclass(frozen=True)
class Payment:
    id: UUID
    amount: Decimal
    date: dt.date
    payment_method: PaymentMethod
    notes: Optional[str]
    recorded_at: dt.datetime

    @staticmethod
    def create(
        *,
        amount: Decimal,
        date: dt.date,
        payment_method: PaymentMethod = PaymentMethod.CASH,
        notes: Optional[str] = None,
        id: Optional[UUID] = None,
        recorded_at: Optional[dt.datetime] = None,
    ) -> "Payment":
        if not isinstance(amount, Decimal):
            raise ValueError("amount must be a Decimal")
        if amount <= 0:
            raise ValueError("payment amount must be > 0")

        if not isinstance(date, dt.date):
            raise ValueError("date must be a date")

        if not isinstance(payment_method, PaymentMethod):
            raise ValueError("payment_method must be a PaymentMethod")

        norm_notes = _optional_text(notes)

        if recorded_at is None:
            final_recorded_at = dt.datetime.now(dt.timezone.utc)
        else:
            if recorded_at.tzinfo is None:
                raise ValueError("recorded_at must be timezone-aware (UTC recommended)")
            final_recorded_at = recorded_at.astimezone(dt.timezone.utc)

        return Payment(
            # id basé sur le temps (ordre de saisie)
            id=id or uuid1(),
            amount=_quantize_money(amount),
            date=date,
            payment_method=payment_method,
            notes=norm_notes,
            recorded_at=final_recorded_at,
        )


@dataclass(frozen=True)
class Credit:
    """
    Crédit accordé à un client.
    - total_amount : capital (> 0)
    - payments : abonos, ajoutés uniquement (jamais modifiés)
    - status : ACTIVE tant que le solde n'est pas soldé
    """
    id: UUID
    client_name: str
    client_last_name: str
    id_number: str
    phone: str
    address: str
    total_amount: Decimal
    detailed_info: Optional[str]
    date: dt.date
    status: CreditStatus = CreditStatus.ACTIVE
    payments: tuple[Payment, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for name in ("client_name", "client_last_name", "id_number", "phone", "address"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value.strip():
                raise ValueError(f"credit.{name} must be non-empty")
        if not isinstance(self.total_amount, Decimal):
            raise ValueError("credit.total_amount must be a Decimal")
        if self.total_amount <= 0:
            raise ValueError("credit.total_amount must be > 0")
        if not isinstance(self.date, dt.date):
            raise ValueError("credit.date must be a date")
        if not isinstance(self.status, CreditStatus):
            raise ValueError("credit.status must be a CreditStatus")
        # list -> tuple, pour garder l'objet vraiment immuable
        object.__setattr__(self, "payments", tuple(self.payments))

    @staticmethod
    def create(
        *,
        client_name: str,
        client_last_name: str,
        id_number: str,
        phone: str,
        address: str,
        total_amount: Decimal,
        date: dt.date,
        detailed_info: Optional[str] = None,
        id: Optional[UUID] = None,
    ) -> "Credit":
        return Credit(
            id=id or uuid4(),
            client_name=client_name.strip(),
            client_last_name=client_last_name.strip(),
            id_number=id_number.strip(),
            phone=phone.strip(),
            address=address.strip(),
            total_amount=_quantize_money(total_amount),
            detailed_info=_optional_text(detailed_info),
            date=date,
            status=CreditStatus.ACTIVE,
            payments=(),
        )

    @property
    def total_paid(self) -> Decimal:
        total = ZERO
        for p in self.payments:
            total += p.amount
        return total

    @property
    def remaining_balance(self) -> Decimal:
        return self.total_amount - self.total_paid

    @property
    def payment_progress(self) -> Decimal:
        """
        Pourcentage payé, arrondi au centième.
        Peut dépasser 100 (et le solde devenir négatif) si update_credit
        baisse total_amount sous le montant déjà payé.
        """
        return _quantize_money(self.total_paid * 100 / self.total_amount)

    def with_payment(self, payment: Payment) -> "Credit":
        payments = self.payments + (payment,)
        credit = replace(self, payments=payments)
        if credit.total_paid >= credit.total_amount:
            credit = replace(credit, status=CreditStatus.PAID)
        return credit


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValueError("text fields must be strings")
    stripped = value.strip()
    return stripped or None
