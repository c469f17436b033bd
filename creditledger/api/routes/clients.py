from __future__ import annotations

from fastapi import APIRouter, HTTPException

from creditledger.api.deps import get_ledger
from creditledger.api.mappers.credit_mapper import client_payment_to_response, summary_to_response
from creditledger.api.schemas.clients import ClientPaymentResponse, ClientSummaryResponse
from creditledger.engine.client_summary import aggregate_by_client, client_payment_history


router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("", response_model=list[ClientSummaryResponse])
def list_clients() -> list[ClientSummaryResponse]:
    summaries = aggregate_by_client(get_ledger().snapshot)
    return [summary_to_response(s) for s in summaries]


@router.get("/{id_number}/payments", response_model=list[ClientPaymentResponse])
def list_client_payments(id_number: str) -> list[ClientPaymentResponse]:
    target = id_number.strip()
    credits = [c for c in get_ledger().snapshot if c.id_number == target]
    if not credits:
        raise HTTPException(status_code=404, detail="Client not found")

    return [client_payment_to_response(cp) for cp in client_payment_history(credits)]
