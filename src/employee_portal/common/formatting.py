from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal
from typing import Union

Number = Union[Decimal, int, float]

CENTS = Decimal("0.01")


def to_money(value: Number) -> Decimal:
    """Round to cents the way the DECIMAL(15,2) columns store amounts."""
    return Decimal(str(value)).quantize(CENTS, rounding=ROUND_HALF_UP)


def money_to_json(value: Number) -> Union[int, float]:
    amount = to_money(value)
    return int(amount) if amount == amount.to_integral_value() else float(amount)


def format_currency_idr(value: Number) -> str:
    """Indonesian rupiah without fraction digits: 45750000 -> 'Rp 45.750.000'."""
    whole = Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    grouped = f"{int(whole):,}".replace(",", ".")
    return f"Rp {grouped}"


def format_percent(value: Number) -> str:
    """85.2 -> '85.2%'."""
    return f"{Decimal(str(value)).quantize(Decimal('0.1'), rounding=ROUND_HALF_UP)}%"
