# creditledger/services/credit_query_service.py
from __future__ import annotations

from dataclasses import dataclass
import datetime as dt
from typing import Literal, Optional, Sequence

from creditledger.domain.credit import Credit, CreditStatus

SortBy = Literal["date", "client", "amount", "balance"]
SortDir = Literal["asc", "desc"]


@dataclass(frozen=True)
class CreditQuery:
    q: str | None = None  # nom / prénom (case-insensitive) ou id_number
    status: CreditStatus | None = None  # None = tous
    date: dt.date | None = None  # date de création exacte
    sort_by: Optional[SortBy] = None  # None = ordre d'insertion
    sort_dir: SortDir = "asc"


def _matches_search(c: Credit, needle: str) -> bool:
    lowered = needle.lower()
    return (
        lowered in c.client_name.lower()
        or lowered in c.client_last_name.lower()
        or needle in c.id_number
    )


def apply_credit_query(credits: Sequence[Credit], q: CreditQuery) -> list[Credit]:
    out = list(credits)

    # -------- filters --------
    if q.q is not None and q.q.strip():
        needle = q.q.strip()
        out = [c for c in out if _matches_search(c, needle)]

    if q.status is not None:
        out = [c for c in out if c.status == q.status]

    if q.date is not None:
        out = [c for c in out if c.date == q.date]

    if q.sort_by is None:
        return out

    # -------- deterministic sort --------
    reverse = (q.sort_dir == "desc")

    if q.sort_by == "date":
        key = lambda c: (c.date, str(c.id))
    elif q.sort_by == "client":
        key = lambda c: (c.client_last_name.casefold(), c.client_name.casefold(), c.date, str(c.id))
    elif q.sort_by == "amount":
        key = lambda c: (c.total_amount, c.date, str(c.id))
    elif q.sort_by == "balance":
        key = lambda c: (c.remaining_balance, c.date, str(c.id))
    else:
        raise ValueError(f"unsupported sort_by '{q.sort_by}'")

    out.sort(key=key, reverse=reverse)
    return out
