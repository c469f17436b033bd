from decimal import Decimal

import pytest

from creditledger.domain.money import to_amount


def test_to_amount_quantizes_strings():
    assert to_amount("100000") == Decimal("100000.00")
    assert to_amount("12,345") == Decimal("12.35")  # virgule décimale + arrondi
    assert to_amount("100_000.5") == Decimal("100000.50")


def test_to_amount_accepts_int_and_decimal():
    assert to_amount(5) == Decimal("5.00")
    assert to_amount(Decimal("1.005")) == Decimal("1.01")


@pytest.mark.parametrize("raw", ["", "   ", "abc", "NaN", "Infinity"])
def test_to_amount_rejects_invalid_strings(raw):
    with pytest.raises(ValueError):
        to_amount(raw)


def test_to_amount_rejects_bool_and_float():
    with pytest.raises(TypeError):
        to_amount(True)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        to_amount(1.5)  # type: ignore[arg-type]
