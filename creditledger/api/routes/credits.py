from __future__ import annotations

import logging

import datetime as dt
from uuid import UUID

from fastapi import APIRouter, HTTPException, Query, Response

from creditledger.api.deps import get_ledger
from creditledger.api.mappers.credit_mapper import credit_to_response, totals_to_response
from creditledger.api.schemas.credits import (
    CreditCreateRequest,
    CreditResponse,
    LedgerTotalsResponse,
    PaymentCreateRequest,
)
from creditledger.domain.credit import CreditInput, CreditStatus, PaymentInput
from creditledger.domain.errors import DuplicateIdentityConflict, LedgerError, NotFound
from creditledger.engine.client_summary import ledger_totals
from creditledger.services.credit_query_service import CreditQuery, SortBy, SortDir


logger = logging.getLogger(__name__)
router = APIRouter(prefix="/credits", tags=["credits"])


def _http_error(e: LedgerError) -> HTTPException:
    if isinstance(e, NotFound):
        return HTTPException(status_code=404, detail="Credit not found")
    if isinstance(e, DuplicateIdentityConflict):
        return HTTPException(status_code=409, detail=str(e))
    return HTTPException(status_code=422, detail=str(e))


def _to_input(req: CreditCreateRequest) -> CreditInput:
    return CreditInput(
        client_name=req.client_name,
        client_last_name=req.client_last_name,
        id_number=req.id_number,
        phone=req.phone,
        address=req.address,
        total_amount=req.total_amount,
        detailed_info=req.detailed_info,
    )


@router.post("", response_model=CreditResponse, status_code=201)
def create_credit(payload: CreditCreateRequest) -> CreditResponse:
    try:
        credit = get_ledger().create_credit(_to_input(payload))
    except LedgerError as e:
        raise _http_error(e)
    return credit_to_response(credit)


@router.get("", response_model=list[CreditResponse])
def list_credits(
    q: str | None = Query(default=None),
    status: CreditStatus | None = Query(default=None),
    date: dt.date | None = Query(default=None),
    sort_by: SortBy | None = Query(default=None),
    sort_dir: SortDir = Query(default="asc"),
) -> list[CreditResponse]:
    query = CreditQuery(q=q, status=status, date=date, sort_by=sort_by, sort_dir=sort_dir)
    try:
        credits = get_ledger().list_credits(query)
    except Exception as e:
        logger.exception("Failed to list credits: %s", e)
        raise HTTPException(status_code=500, detail="Internal error")
    return [credit_to_response(c) for c in credits]


@router.get("/totals", response_model=LedgerTotalsResponse)
def get_totals() -> LedgerTotalsResponse:
    return totals_to_response(ledger_totals(get_ledger().snapshot))


@router.get("/{credit_id}", response_model=CreditResponse)
def get_credit(credit_id: UUID) -> CreditResponse:
    try:
        credit = get_ledger().get_credit(credit_id)
    except LedgerError as e:
        raise _http_error(e)
    return credit_to_response(credit)


@router.put("/{credit_id}", response_model=CreditResponse)
def update_credit(credit_id: UUID, payload: CreditCreateRequest) -> CreditResponse:
    try:
        credit = get_ledger().update_credit(credit_id, _to_input(payload))
    except LedgerError as e:
        raise _http_error(e)
    return credit_to_response(credit)


@router.delete("/{credit_id}", status_code=204)
def delete_credit(credit_id: UUID) -> Response:
    # idempotent : un id inconnu n'est pas une erreur
    get_ledger().delete_credit(credit_id)
    return Response(status_code=204)


@router.post("/{credit_id}/payments", response_model=CreditResponse, status_code=201)
def record_payment(credit_id: UUID, payload: PaymentCreateRequest) -> CreditResponse:
    data = PaymentInput(
        amount=payload.amount,
        date=payload.date,
        payment_method=payload.payment_method,
        notes=payload.notes,
    )
    try:
        credit = get_ledger().record_payment(credit_id, data)
    except LedgerError as e:
        raise _http_error(e)
    return credit_to_response(credit)
