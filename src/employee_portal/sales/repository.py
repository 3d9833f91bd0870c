from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..common.pagination import Page
from .model import DailyTotals, NewSale, NewSaleItem, Sale, SaleItem


class SaleRepository(Protocol):
    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        raise NotImplementedError

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[Sale]:
        """Newest created first."""

        raise NotImplementedError

    def create_with_items(self, sale: NewSale, items: Sequence[NewSaleItem]) -> Sale:
        """Insert the sale and all of its items atomically.

        Raises DuplicateError when the invoice number is already used; in that
        case (and on any other failure) nothing is persisted.
        """

        raise NotImplementedError

    def list_items(self, sale_id: int) -> Sequence[SaleItem]:
        raise NotImplementedError

    def get_daily_totals(self, day: date) -> DailyTotals:
        """Sum and count of sales whose sale_date is within day 00:00:00.000 - 23:59:59.999."""

        raise NotImplementedError

    def list_recent(self, limit: int) -> Sequence[Sale]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
