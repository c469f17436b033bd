# creditledger/services/credit_ledger.py
from __future__ import annotations

import datetime as dt
import logging
from dataclasses import replace
from decimal import Decimal
from typing import Callable, Optional
from uuid import UUID

from creditledger.domain.credit import Credit, CreditInput, Payment, PaymentInput, PaymentMethod
from creditledger.domain.errors import (
    DuplicateIdentityConflict,
    ExceedsBalance,
    InvalidAmount,
    InvalidPaymentDetails,
    MissingRequiredField,
    NotFound,
)
from creditledger.domain.money import to_amount
from creditledger.repositories.credit_repository import CreditRepository
from creditledger.services.credit_query_service import CreditQuery, apply_credit_query

logger = logging.getLogger(__name__)

_REQUIRED_TEXT_FIELDS = ("client_name", "client_last_name", "id_number", "phone", "address")


class CreditLedger:
    """
    Source de vérité des crédits et de leurs abonos.

    La collection est un tuple immuable : chaque mutation construit un
    nouveau tuple, le persiste via le repo, puis remplace le snapshot.
    Si la validation ou le save échoue, rien n'est appliqué.
    """

    def __init__(
        self,
        repo: CreditRepository,
        *,
        clock: Callable[[], dt.date] = dt.date.today,
    ) -> None:
        self._repo = repo
        self._clock = clock
        self._credits: tuple[Credit, ...] = tuple(repo.load())
        logger.debug("ledger loaded with %d credit(s)", len(self._credits))

    @property
    def snapshot(self) -> tuple[Credit, ...]:
        return self._credits

    # ---------- queries ----------
    def get_credit(self, credit_id: UUID) -> Credit:
        for c in self._credits:
            if c.id == credit_id:
                return c
        raise NotFound(credit_id)

    def list_credits(self, query: Optional[CreditQuery] = None) -> list[Credit]:
        return apply_credit_query(self._credits, query or CreditQuery())

    # ---------- mutations ----------
    def create_credit(self, data: CreditInput) -> Credit:
        total_amount = self._validate(data)
        self._check_identity(data, exclude_id=None)

        credit = Credit.create(
            client_name=data.client_name,
            client_last_name=data.client_last_name,
            id_number=data.id_number,
            phone=data.phone,
            address=data.address,
            total_amount=total_amount,
            detailed_info=data.detailed_info,
            date=self._clock(),
        )
        self._commit(self._credits + (credit,))
        logger.info("credit %s created for id_number=%s", credit.id, credit.id_number)
        return credit

    def update_credit(self, credit_id: UUID, data: CreditInput) -> Credit:
        current = self.get_credit(credit_id)
        total_amount = self._validate(data)
        self._check_identity(data, exclude_id=credit_id)

        # on garde id / date / status / payments
        fresh = Credit.create(
            client_name=data.client_name,
            client_last_name=data.client_last_name,
            id_number=data.id_number,
            phone=data.phone,
            address=data.address,
            total_amount=total_amount,
            detailed_info=data.detailed_info,
            date=current.date,
            id=current.id,
        )
        updated = replace(fresh, status=current.status, payments=current.payments)

        self._commit(tuple(updated if c.id == credit_id else c for c in self._credits))
        logger.info("credit %s updated", credit_id)
        return updated

    def delete_credit(self, credit_id: UUID) -> bool:
        """Return True if deleted, False if not found (no-op)."""
        remaining = tuple(c for c in self._credits if c.id != credit_id)
        if len(remaining) == len(self._credits):
            return False

        self._commit(remaining)
        logger.info("credit %s deleted", credit_id)
        return True

    def record_payment(self, credit_id: UUID, data: PaymentInput) -> Credit:
        credit = self.get_credit(credit_id)
        amount = self._parse_amount(data.amount, what="payment amount")

        remaining = credit.remaining_balance
        if amount > remaining:
            raise ExceedsBalance(amount, remaining)

        payment = Payment.create(
            amount=amount,
            date=self._parse_payment_date(data.date),
            payment_method=self._parse_payment_method(data.payment_method),
            notes=self._parse_notes(data.notes),
        )
        updated = credit.with_payment(payment)

        self._commit(tuple(updated if c.id == credit_id else c for c in self._credits))
        logger.info(
            "payment %s of %s recorded on credit %s (status=%s)",
            payment.id,
            payment.amount,
            credit_id,
            updated.status.value,
        )
        return updated

    # ---------- helpers ----------
    def _commit(self, credits: tuple[Credit, ...]) -> None:
        self._repo.save(credits)
        self._credits = credits

    def _validate(self, data: CreditInput) -> Decimal:
        missing = [
            name for name in _REQUIRED_TEXT_FIELDS
            if not isinstance(getattr(data, name), str) or not getattr(data, name).strip()
        ]
        raw_amount = data.total_amount
        if raw_amount is None or (isinstance(raw_amount, str) and not raw_amount.strip()):
            missing.append("total_amount")

        if missing:
            raise MissingRequiredField(missing)

        return self._parse_amount(raw_amount, what="total_amount")

    @staticmethod
    def _parse_amount(value, *, what: str) -> Decimal:
        try:
            amount = to_amount(value)
        except (TypeError, ValueError) as e:
            raise InvalidAmount(f"{what} is not a valid number ({value!r})") from e

        if amount <= 0:
            raise InvalidAmount(f"{what} must be > 0")
        return amount

    def _parse_payment_date(self, value) -> dt.date:
        if value is None or (isinstance(value, str) and not value.strip()):
            return self._clock()
        if isinstance(value, str):
            try:
                return dt.date.fromisoformat(value.strip())
            except ValueError as e:
                raise InvalidPaymentDetails(f"payment date must be ISO YYYY-MM-DD ({value!r})") from e
        # datetime est une sous-classe de date
        if isinstance(value, dt.datetime):
            return value.date()
        if isinstance(value, dt.date):
            return value
        raise InvalidPaymentDetails(f"payment date must be a date ({value!r})")

    @staticmethod
    def _parse_payment_method(value) -> PaymentMethod:
        if isinstance(value, PaymentMethod):
            return value
        if isinstance(value, str):
            try:
                return PaymentMethod(value.strip().lower())
            except ValueError:
                pass
        allowed = ", ".join(m.value for m in PaymentMethod)
        raise InvalidPaymentDetails(f"payment_method must be one of {allowed} (got {value!r})")

    @staticmethod
    def _parse_notes(value) -> Optional[str]:
        if value is not None and not isinstance(value, str):
            raise InvalidPaymentDetails("payment notes must be text")
        return value

    def _check_identity(self, data: CreditInput, *, exclude_id: Optional[UUID]) -> None:
        """
        Un même id_number peut porter plusieurs crédits, mais seulement
        pour la même personne (nom + prénom, insensible à la casse).
        """
        id_number = data.id_number.strip()
        person = (data.client_name.strip().lower(), data.client_last_name.strip().lower())

        for c in self._credits:
            if exclude_id is not None and c.id == exclude_id:
                continue
            if c.id_number != id_number:
                continue
            if (c.client_name.lower(), c.client_last_name.lower()) != person:
                raise DuplicateIdentityConflict(id_number)
