from __future__ import annotations

from decimal import Decimal
from uuid import UUID


class LedgerError(ValueError):
    """Base class of every validation failure raised by the credit ledger."""


class MissingRequiredField(LedgerError):
    def __init__(self, fields: list[str]) -> None:
        self.fields = list(fields)
        super().__init__(f"missing required field(s): {', '.join(self.fields)}")


class InvalidAmount(LedgerError):
    pass


class DuplicateIdentityConflict(LedgerError):
    def __init__(self, id_number: str) -> None:
        self.id_number = id_number
        super().__init__(
            f"id_number '{id_number}' is already registered to a different client"
        )


class ExceedsBalance(LedgerError):
    def __init__(self, amount: Decimal, remaining: Decimal) -> None:
        self.amount = amount
        self.remaining = remaining
        super().__init__(
            f"payment of {amount} exceeds the remaining balance ({remaining})"
        )


class NotFound(LedgerError):
    def __init__(self, credit_id: UUID) -> None:
        self.credit_id = credit_id
        super().__init__(f"unknown credit_id '{credit_id}'")


class InvalidPaymentDetails(LedgerError):
    pass
