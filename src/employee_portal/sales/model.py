from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import SaleStatus
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class Sale:
    """Domain entity: a recorded sale (invoice header)."""

    sale_id: int
    invoice_number: str
    user_id: int
    customer_name: str
    sale_date: datetime
    total_amount: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    payment_method: str
    status: SaleStatus
    created_at: datetime
    notes: Optional[str] = None


@dataclass(frozen=True)
class SaleItem:
    item_id: int
    sale_id: int
    product_id: int
    quantity: int
    unit_price: Decimal
    created_at: datetime


@dataclass(frozen=True)
class NewSale:
    """Insertable shape of a Sale (no id, no created_at)."""

    invoice_number: str
    user_id: int
    customer_name: str
    sale_date: datetime
    total_amount: Decimal
    tax_amount: Decimal
    discount_amount: Decimal
    payment_method: str
    status: SaleStatus = SaleStatus.COMPLETED
    notes: Optional[str] = None


@dataclass(frozen=True)
class NewSaleItem:
    product_id: int
    quantity: int
    unit_price: Decimal

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class DailyTotals:
    total_sales: Decimal
    transactions: int


def validate_items(items) -> None:
    """Both backends reject a sale without lines or with a non-positive quantity."""
    if not items:
        raise ValidationError("A sale needs at least one item")
    for item in items:
        if item.quantity < 1:
            raise ValidationError("Item quantity must be at least 1")
