from __future__ import annotations

import datetime as dt
from pydantic import BaseModel, Field

from creditledger.domain.credit import CreditStatus, PaymentMethod

_AMOUNT_PATTERN = r"^\d+([.,]\d{1,2})?$"


class CreditCreateRequest(BaseModel):
    # champs laissés libres (str) : la validation métier est faite par le ledger
    client_name: str = ""
    client_last_name: str = ""
    id_number: str = ""
    phone: str = ""
    address: str = ""
    total_amount: str = Field(
        default="",
        examples=["100000", "1500.50"],
        description="Principal as string, e.g. '100000' or '1500.50'",
    )
    detailed_info: str | None = None


class PaymentCreateRequest(BaseModel):
    amount: str = Field(
        ...,
        min_length=1,
        pattern=_AMOUNT_PATTERN,
        examples=["30000", "12.50"],
        description="Payment amount as string, e.g. '30000'",
    )
    date: dt.date | None = None
    payment_method: PaymentMethod = PaymentMethod.CASH
    notes: str | None = None


class PaymentResponse(BaseModel):
    id: str
    amount: str
    date: dt.date
    payment_method: PaymentMethod
    notes: str | None
    recorded_at: dt.datetime


class CreditResponse(BaseModel):
    id: str
    client_name: str
    client_last_name: str
    id_number: str
    phone: str
    address: str
    total_amount: str
    detailed_info: str | None
    date: dt.date
    status: CreditStatus
    total_paid: str
    remaining_balance: str
    payment_progress: str
    payments: list[PaymentResponse]


class LedgerTotalsResponse(BaseModel):
    credits_count: int
    total_credit: str
    total_paid: str
    total_pending: str
    active_credits: int
    paid_credits: int
    overdue_credits: int
