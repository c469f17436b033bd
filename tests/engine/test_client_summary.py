from dataclasses import replace
import datetime as dt
from decimal import Decimal

from creditledger.domain.credit import Credit, CreditStatus, Payment
from creditledger.engine.client_summary import (
    aggregate_by_client,
    client_payment_history,
    identity_key,
    ledger_totals,
)


def _credit(name: str, last: str, id_number: str, total: str, status=CreditStatus.ACTIVE) -> Credit:
    c = Credit.create(
        client_name=name,
        client_last_name=last,
        id_number=id_number,
        phone="555",
        address="Calle 1",
        total_amount=Decimal(total),
        date=dt.date(2026, 1, 10),
    )
    if status != CreditStatus.ACTIVE:
        c = replace(c, status=status)
    return c


def _pay(c: Credit, amount: str, day: dt.date) -> Credit:
    return c.with_payment(Payment.create(amount=Decimal(amount), date=day))


def test_identity_key_is_lowercase_concatenation():
    c = _credit("Ana", "Ruiz", "AB12", "10")
    assert identity_key(c) == "ana_ruiz_ab12"


def test_aggregate_groups_same_client_ignoring_case():
    a1 = _pay(_credit("Ana", "Ruiz", "123", "100000"), "30000", dt.date(2026, 1, 11))
    a2 = _credit("ANA", "ruiz", "123", "50000")
    other = _credit("Carlos", "Gomez", "456", "20000")

    out = aggregate_by_client([a1, other, a2])

    assert [s.client_key for s in out] == ["ana_ruiz_123", "carlos_gomez_456"]
    ana = out[0]
    assert ana.client_name == "Ana"
    assert ana.total_credit == Decimal("150000.00")
    assert ana.total_paid == Decimal("30000.00")
    assert ana.remaining_balance == Decimal("120000.00")
    assert ana.payment_progress == Decimal("20.00")
    assert ana.active_credits == 2
    assert ana.credits == (a1, a2)


def test_active_credits_counts_overdue_but_not_paid():
    items = [
        _credit("Ana", "Ruiz", "123", "10"),
        _credit("Ana", "Ruiz", "123", "10", CreditStatus.OVERDUE),
        _credit("Ana", "Ruiz", "123", "10", CreditStatus.PAID),
    ]
    [summary] = aggregate_by_client(items)
    assert summary.active_credits == 2
    assert summary.total_credit == Decimal("30.00")


def test_aggregate_empty():
    assert aggregate_by_client([]) == []


def test_payment_history_newest_first_with_credit_reference():
    c1 = _pay(_credit("Ana", "Ruiz", "123", "1000"), "100", dt.date(2026, 1, 15))
    c1 = _pay(c1, "200", dt.date(2026, 2, 1))
    c2 = _pay(_credit("Ana", "Ruiz", "123", "500"), "50", dt.date(2026, 1, 20))

    out = client_payment_history([c1, c2])

    assert [h.payment.amount for h in out] == [Decimal("200.00"), Decimal("50.00"), Decimal("100.00")]
    assert out[1].credit_id == c2.id
    assert out[1].credit_date == c2.date


def test_ledger_totals():
    items = [
        _pay(_credit("Ana", "Ruiz", "123", "100"), "40", dt.date(2026, 1, 11)),
        _credit("Luis", "Perez", "9", "50", CreditStatus.OVERDUE),
        _pay(_credit("Eva", "Lopez", "7", "30"), "30", dt.date(2026, 1, 12)),
    ]

    t = ledger_totals(items)

    assert t.credits_count == 3
    assert t.total_credit == Decimal("180.00")
    assert t.total_paid == Decimal("70.00")
    assert t.total_pending == Decimal("110.00")
    assert t.active_credits == 1
    assert t.overdue_credits == 1
    assert t.paid_credits == 1
