from __future__ import annotations

import os

from creditledger.settings import get_settings
from creditledger.repositories.json_credit_repository import JsonCreditRepository
from creditledger.repositories.sql_credit_repository import SqlCreditRepository


def main() -> int:
    if not os.getenv("CREDITLEDGER_DATABASE_URL"):
        raise SystemExit("CREDITLEDGER_DATABASE_URL is required (Postgres/SQLite URL).")

    settings = get_settings()
    src_path = settings.credits_path

    src = JsonCreditRepository(credits_path=src_path)
    dst = SqlCreditRepository()

    items = src.load()
    dst.save(items)

    payments = sum(len(c.payments) for c in items)
    print({"migrated": len(items), "payments": payments, "from": str(src_path)})
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
