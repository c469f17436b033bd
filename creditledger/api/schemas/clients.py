from __future__ import annotations

import datetime as dt
from pydantic import BaseModel

from creditledger.api.schemas.credits import PaymentResponse


class ClientSummaryResponse(BaseModel):
    client_key: str
    client_name: str
    client_last_name: str
    id_number: str
    phone: str
    total_credit: str
    total_paid: str
    remaining_balance: str
    payment_progress: str
    active_credits: int
    credit_ids: list[str]


class ClientPaymentResponse(BaseModel):
    credit_id: str
    credit_date: dt.date
    payment: PaymentResponse
