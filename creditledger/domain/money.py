from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

_QUANT = Decimal("0.01")
ZERO = Decimal("0.00")


def _parse_decimal(value: str) -> Decimal:
    """
    Parse robuste depuis string.
    Autorise "12.34", "12", "100_000" et optionnellement "12,34".
    """
    if not isinstance(value, str):
        raise TypeError("Amount must be provided as a string")

    raw = value.strip()
    if raw == "":
        raise ValueError("Amount cannot be empty")

    # tolérance minimale pour les virgules décimales des formulaires
    raw = raw.replace(",", ".")

    try:
        dec = Decimal(raw)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid decimal amount: {value!r}") from exc

    if not dec.is_finite():
        raise ValueError(f"Invalid decimal amount: {value!r}")
    return dec


def _quantize_money(amount: Decimal) -> Decimal:
    # Arrondi comptable classique
    return amount.quantize(_QUANT, rounding=ROUND_HALF_UP)


def to_amount(value: str | int | Decimal) -> Decimal:
    """
    Normalise un montant saisi (string de formulaire, int ou Decimal)
    en Decimal arrondi au centime. Ne vérifie pas le signe.
    """
    if isinstance(value, bool):
        raise TypeError("Amount cannot be a boolean")
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Invalid decimal amount: {value!r}")
        return _quantize_money(value)
    if isinstance(value, int):
        return _quantize_money(Decimal(value))
    return _quantize_money(_parse_decimal(value))
