# creditledger/engine/client_summary.py
from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from decimal import Decimal
from typing import Iterable, Sequence
from uuid import UUID

from creditledger.domain.credit import Credit, CreditStatus, Payment
from creditledger.domain.money import ZERO, _quantize_money

# statuts qui comptent comme "crédit en cours"
OPEN_STATUSES = frozenset({CreditStatus.ACTIVE, CreditStatus.OVERDUE})


@dataclass(frozen=True)
class ClientSummary:
    client_key: str
    client_name: str
    client_last_name: str
    id_number: str
    phone: str
    total_credit: Decimal
    total_paid: Decimal
    active_credits: int
    credits: tuple[Credit, ...]

    @property
    def remaining_balance(self) -> Decimal:
        return self.total_credit - self.total_paid

    @property
    def payment_progress(self) -> Decimal:
        if self.total_credit == 0:
            return ZERO
        return _quantize_money(self.total_paid * 100 / self.total_credit)


@dataclass(frozen=True)
class ClientPayment:
    credit_id: UUID
    credit_date: dt.date
    payment: Payment


@dataclass(frozen=True)
class LedgerTotals:
    credits_count: int
    total_credit: Decimal
    total_paid: Decimal
    total_pending: Decimal
    active_credits: int
    paid_credits: int
    overdue_credits: int


def identity_key(credit: Credit) -> str:
    """Clé client : nom + prénom + id_number, insensible à la casse."""
    return f"{credit.client_name}_{credit.client_last_name}_{credit.id_number}".lower()


def aggregate_by_client(credits: Iterable[Credit]) -> list[ClientSummary]:
    """
    Regroupe les crédits par client (identity_key).
    Ordre de sortie = ordre de première apparition du client.
    """
    groups: dict[str, list[Credit]] = {}
    for c in credits:
        groups.setdefault(identity_key(c), []).append(c)

    out: list[ClientSummary] = []
    for key, items in groups.items():
        first = items[0]
        total_credit = ZERO
        total_paid = ZERO
        active = 0
        for c in items:
            total_credit += c.total_amount
            total_paid += c.total_paid
            if c.status in OPEN_STATUSES:
                active += 1

        out.append(
            ClientSummary(
                client_key=key,
                client_name=first.client_name,
                client_last_name=first.client_last_name,
                id_number=first.id_number,
                phone=first.phone,
                total_credit=total_credit,
                total_paid=total_paid,
                active_credits=active,
                credits=tuple(items),
            )
        )
    return out


def client_payment_history(credits: Sequence[Credit]) -> list[ClientPayment]:
    """Tous les abonos des crédits donnés, du plus récent au plus ancien."""
    out = [
        ClientPayment(credit_id=c.id, credit_date=c.date, payment=p)
        for c in credits
        for p in c.payments
    ]
    # tri stable : à date égale, l'ordre de saisie est conservé
    out.sort(key=lambda x: x.payment.date, reverse=True)
    return out


def ledger_totals(credits: Iterable[Credit]) -> LedgerTotals:
    count = 0
    total_credit = ZERO
    total_paid = ZERO
    by_status: dict[CreditStatus, int] = {s: 0 for s in CreditStatus}

    for c in credits:
        count += 1
        total_credit += c.total_amount
        total_paid += c.total_paid
        by_status[c.status] += 1

    return LedgerTotals(
        credits_count=count,
        total_credit=total_credit,
        total_paid=total_paid,
        total_pending=total_credit - total_paid,
        active_credits=by_status[CreditStatus.ACTIVE],
        paid_credits=by_status[CreditStatus.PAID],
        overdue_credits=by_status[CreditStatus.OVERDUE],
    )
