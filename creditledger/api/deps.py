from __future__ import annotations

from functools import lru_cache

from creditledger.db import sql_mode_enabled
from creditledger.repositories.credit_repository import CreditRepository
from creditledger.repositories.json_credit_repository import JsonCreditRepository
from creditledger.repositories.sql_credit_repository import SqlCreditRepository
from creditledger.services.credit_ledger import CreditLedger
from creditledger.settings import get_settings


@lru_cache
def get_credit_repo() -> CreditRepository:
    # If CREDITLEDGER_DATABASE_URL is set -> use SQL repo (Postgres/SQLite)
    if sql_mode_enabled():
        return SqlCreditRepository()

    settings = get_settings()
    return JsonCreditRepository(credits_path=settings.credits_path)


@lru_cache
def get_ledger() -> CreditLedger:
    return CreditLedger(get_credit_repo())
