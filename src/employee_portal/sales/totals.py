from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from ..common.formatting import to_money
from ..core.constants import TAX_RATE
from .model import DailyTotals, NewSaleItem


@dataclass(frozen=True)
class SaleTotals:
    subtotal: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    total_amount: Decimal


@dataclass(frozen=True)
class DailySalesSummary:
    total_sales: Decimal
    transactions: int
    average_sale: Decimal
    target_amount: Decimal
    progress: Decimal


def compute_sale_totals(items: Iterable[NewSaleItem], *, tax_rate: Decimal = TAX_RATE) -> SaleTotals:
    """subtotal = sum(price * qty); tax = subtotal * rate; no discounts are applied."""
    subtotal = to_money(sum((item.line_total for item in items), Decimal("0")))
    tax_amount = to_money(subtotal * tax_rate)
    discount_amount = Decimal("0.00")
    return SaleTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        discount_amount=discount_amount,
        total_amount=to_money(subtotal + tax_amount - discount_amount),
    )


def summarize_daily(totals: DailyTotals, *, target: Decimal) -> DailySalesSummary:
    total = to_money(totals.total_sales)
    average = to_money(total / totals.transactions) if totals.transactions else Decimal("0.00")

    progress = Decimal("0.0")
    if target > 0:
        progress = min(Decimal("100"), (total / target * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))

    return DailySalesSummary(
        total_sales=total,
        transactions=totals.transactions,
        average_sale=average,
        target_amount=to_money(target),
        progress=progress,
    )
