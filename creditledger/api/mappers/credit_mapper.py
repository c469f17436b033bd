from __future__ import annotations

from creditledger.api.schemas.clients import ClientPaymentResponse, ClientSummaryResponse
from creditledger.api.schemas.credits import CreditResponse, LedgerTotalsResponse, PaymentResponse
from creditledger.domain.credit import Credit, Payment
from creditledger.engine.client_summary import ClientPayment, ClientSummary, LedgerTotals


def payment_to_response(p: Payment) -> PaymentResponse:
    return PaymentResponse(
        id=str(p.id),
        amount=str(p.amount),
        date=p.date,
        payment_method=p.payment_method,
        notes=p.notes,
        recorded_at=p.recorded_at,
    )


def credit_to_response(c: Credit) -> CreditResponse:
    return CreditResponse(
        id=str(c.id),
        client_name=c.client_name,
        client_last_name=c.client_last_name,
        id_number=c.id_number,
        phone=c.phone,
        address=c.address,
        total_amount=str(c.total_amount),
        detailed_info=c.detailed_info,
        date=c.date,
        status=c.status,
        total_paid=str(c.total_paid),
        remaining_balance=str(c.remaining_balance),
        payment_progress=str(c.payment_progress),
        payments=[payment_to_response(p) for p in c.payments],
    )


def summary_to_response(s: ClientSummary) -> ClientSummaryResponse:
    return ClientSummaryResponse(
        client_key=s.client_key,
        client_name=s.client_name,
        client_last_name=s.client_last_name,
        id_number=s.id_number,
        phone=s.phone,
        total_credit=str(s.total_credit),
        total_paid=str(s.total_paid),
        remaining_balance=str(s.remaining_balance),
        payment_progress=str(s.payment_progress),
        active_credits=s.active_credits,
        credit_ids=[str(c.id) for c in s.credits],
    )


def client_payment_to_response(cp: ClientPayment) -> ClientPaymentResponse:
    return ClientPaymentResponse(
        credit_id=str(cp.credit_id),
        credit_date=cp.credit_date,
        payment=payment_to_response(cp.payment),
    )


def totals_to_response(t: LedgerTotals) -> LedgerTotalsResponse:
    return LedgerTotalsResponse(
        credits_count=t.credits_count,
        total_credit=str(t.total_credit),
        total_paid=str(t.total_paid),
        total_pending=str(t.total_pending),
        active_credits=t.active_credits,
        paid_credits=t.paid_credits,
        overdue_credits=t.overdue_credits,
    )
