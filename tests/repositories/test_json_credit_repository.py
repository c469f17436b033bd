import datetime as dt
import json
from decimal import Decimal

import pytest

from creditledger.domain.credit import Credit, CreditStatus, Payment, PaymentMethod
from creditledger.repositories.json_credit_repository import JsonCreditRepository


def _credit_with_payment() -> Credit:
    c = Credit.create(
        client_name="Ana",
        client_last_name="Ruiz",
        id_number="123",
        phone="555",
        address="Calle 1",
        total_amount=Decimal("100000"),
        detailed_info="Nevera",
        date=dt.date(2026, 1, 10),
    )
    return c.with_payment(
        Payment.create(
            amount=Decimal("30000"),
            date=dt.date(2026, 1, 20),
            payment_method=PaymentMethod.TRANSFER,
            notes="primer abono",
        )
    )


def test_missing_file_loads_empty(tmp_path):
    repo = JsonCreditRepository(credits_path=tmp_path / "credits.json")
    assert repo.load() == []


def test_save_then_load_keeps_credits_and_payments(tmp_path):
    path = tmp_path / "data" / "credits.json"
    repo = JsonCreditRepository(credits_path=path)
    c = _credit_with_payment()

    repo.save([c])

    assert path.exists()
    assert not path.with_suffix(".json.tmp").exists()
    assert repo.load() == [c]


def test_file_format_is_versioned_with_string_amounts(tmp_path):
    path = tmp_path / "credits.json"
    JsonCreditRepository(credits_path=path).save([_credit_with_payment()])

    payload = json.loads(path.read_text(encoding="utf-8"))
    assert payload["version"] == 1
    rec = payload["credits"][0]
    assert rec["total_amount"] == "100000.00"
    assert rec["status"] == "active"
    assert rec["payments"][0]["payment_method"] == "transfer"
    assert rec["payments"][0]["amount"] == "30000.00"


def test_save_replaces_whole_collection(tmp_path):
    repo = JsonCreditRepository(credits_path=tmp_path / "credits.json")
    c = _credit_with_payment()
    repo.save([c])
    repo.save([])

    assert repo.load() == []


def test_load_keeps_overdue_status(tmp_path):
    path = tmp_path / "credits.json"
    repo = JsonCreditRepository(credits_path=path)
    repo.save([_credit_with_payment()])

    payload = json.loads(path.read_text(encoding="utf-8"))
    payload["credits"][0]["status"] = "overdue"
    path.write_text(json.dumps(payload), encoding="utf-8")

    [loaded] = repo.load()
    assert loaded.status == CreditStatus.OVERDUE


@pytest.mark.parametrize(
    "mutate, fragment",
    [
        (lambda p: p.update(version=2), "version must be 1"),
        (lambda p: p["credits"][0].update(status="vencido"), "credits[0].status invalid"),
        (lambda p: p["credits"][0].pop("phone"), "missing field 'phone'"),
        (lambda p: p["credits"][0].update(total_amount="0"), "credits[0] invalid"),
        (lambda p: p["credits"][0]["payments"][0].update(date="20/01/2026"), "payments[0].date"),
        (lambda p: p["credits"].append(dict(p["credits"][0])), "duplicate credit id"),
    ],
)
def test_load_rejects_corrupt_file(tmp_path, mutate, fragment):
    path = tmp_path / "credits.json"
    repo = JsonCreditRepository(credits_path=path)
    repo.save([_credit_with_payment()])

    payload = json.loads(path.read_text(encoding="utf-8"))
    mutate(payload)
    path.write_text(json.dumps(payload), encoding="utf-8")

    with pytest.raises(ValueError) as exc:
        repo.load()
    assert fragment in str(exc.value)


def test_load_rejects_invalid_json(tmp_path):
    path = tmp_path / "credits.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(ValueError):
        JsonCreditRepository(credits_path=path).load()
