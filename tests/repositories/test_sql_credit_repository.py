import datetime as dt
from decimal import Decimal

import pytest

from creditledger.db import reset_db_caches
from creditledger.domain.credit import Credit, CreditStatus, Payment, PaymentMethod
from creditledger.repositories.sql_credit_repository import SqlCreditRepository


@pytest.fixture
def repo(tmp_path, monkeypatch):
    monkeypatch.setenv("CREDITLEDGER_DATABASE_URL", f"sqlite:///{(tmp_path / 'ledger.db').as_posix()}")
    reset_db_caches()
    yield SqlCreditRepository()
    reset_db_caches()


def _credit(name: str, id_number: str, total: str) -> Credit:
    return Credit.create(
        client_name=name,
        client_last_name="Ruiz",
        id_number=id_number,
        phone="555",
        address="Calle 1",
        total_amount=Decimal(total),
        date=dt.date(2026, 1, 10),
    )


def test_empty_database_loads_nothing(repo):
    assert repo.load() == []


def test_save_and_load_keeps_order_and_payments(repo):
    a = _credit("Ana", "1", "100")
    a = a.with_payment(Payment.create(amount=Decimal("40"), date=dt.date(2026, 1, 11)))
    a = a.with_payment(
        Payment.create(amount=Decimal("60"), date=dt.date(2026, 1, 12), payment_method=PaymentMethod.CARD)
    )
    b = _credit("Zoe", "2", "50")

    repo.save([b, a])
    loaded = repo.load()

    assert [c.id for c in loaded] == [b.id, a.id]
    got = loaded[1]
    assert got.status == CreditStatus.PAID
    assert [p.amount for p in got.payments] == [Decimal("40.00"), Decimal("60.00")]
    assert got.payments[1].payment_method == PaymentMethod.CARD
    assert got.payments[0].recorded_at.tzinfo is not None
    assert got.total_amount == Decimal("100.00")


def test_save_replaces_previous_collection(repo):
    a = _credit("Ana", "1", "100").with_payment(
        Payment.create(amount=Decimal("10"), date=dt.date(2026, 1, 11))
    )
    b = _credit("Zoe", "2", "50")
    repo.save([a, b])

    repo.save([b])

    loaded = repo.load()
    assert [c.id for c in loaded] == [b.id]
    assert loaded[0].payments == ()
