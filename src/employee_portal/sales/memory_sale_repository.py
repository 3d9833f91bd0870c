from __future__ import annotations

import itertools
import threading
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import day_bounds, now_local
from ..common.pagination import Page, paginate
from ..core.exceptions import DuplicateError
from .model import DailyTotals, NewSale, NewSaleItem, Sale, SaleItem, validate_items
from .repository import SaleRepository


def _newest_first(sales):
    return sorted(sales, key=lambda s: (s.created_at, s.sale_id), reverse=True)


class MemorySaleRepository(SaleRepository):
    def __init__(self):
        self._sales: dict[int, Sale] = {}
        self._items: dict[int, list[SaleItem]] = {}
        self._sale_ids = itertools.count(1)
        self._item_ids = itertools.count(1)
        self._lock = threading.Lock()

    def _snapshot(self) -> list[Sale]:
        with self._lock:
            return list(self._sales.values())

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        return self._sales.get(int(sale_id))

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[Sale]:
        sales = _newest_first(s for s in self._snapshot() if s.user_id == int(user_id))
        return paginate(sales, page, limit)

    def create_with_items(self, sale: NewSale, items: Sequence[NewSaleItem]) -> Sale:
        validate_items(items)
        with self._lock:
            if any(s.invoice_number == sale.invoice_number for s in self._sales.values()):
                raise DuplicateError(f"Invoice number {sale.invoice_number} already exists")

            created_at = now_local()
            stored = Sale(
                sale_id=next(self._sale_ids),
                invoice_number=sale.invoice_number,
                user_id=int(sale.user_id),
                customer_name=sale.customer_name,
                sale_date=sale.sale_date,
                total_amount=sale.total_amount,
                tax_amount=sale.tax_amount,
                discount_amount=sale.discount_amount,
                payment_method=sale.payment_method,
                status=sale.status,
                created_at=created_at,
                notes=sale.notes,
            )
            lines = [
                SaleItem(
                    item_id=next(self._item_ids),
                    sale_id=stored.sale_id,
                    product_id=int(item.product_id),
                    quantity=int(item.quantity),
                    unit_price=item.unit_price,
                    created_at=created_at,
                )
                for item in items
            ]
            # Publish header and lines together.
            self._sales[stored.sale_id] = stored
            self._items[stored.sale_id] = lines
            return stored

    def list_items(self, sale_id: int) -> Sequence[SaleItem]:
        return list(self._items.get(int(sale_id), []))

    def get_daily_totals(self, day: date) -> DailyTotals:
        start, end = day_bounds(day)
        matching = [s for s in self._snapshot() if start <= s.sale_date <= end]
        total = sum((s.total_amount for s in matching), Decimal("0"))
        return DailyTotals(total_sales=total, transactions=len(matching))

    def list_recent(self, limit: int) -> Sequence[Sale]:
        return _newest_first(self._snapshot())[: int(limit)]

    def count(self) -> int:
        return len(self._sales)
