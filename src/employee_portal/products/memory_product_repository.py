from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..common.datetime_utils import now_local
from .model import Product, ProductCategory
from .repository import ProductRepository

# Same rows as database/seed.sql.
SAMPLE_CATEGORIES = (
    (1, "Electronics", "Electronic devices and gadgets"),
    (2, "Office Supplies", "Office supplies and stationery"),
    (3, "Furniture", "Office furniture and fixtures"),
)

SAMPLE_PRODUCTS = (
    (1, "Laptop", "High-performance work laptop", "15000000", 1, "ELEC-001"),
    (2, "Smartphone", "Business smartphone", "8000000", 1, "ELEC-002"),
    (3, "Tablet", "Professional tablet", "5000000", 1, "ELEC-003"),
    (4, "Paper Ream", "500 sheets A4 paper", "50000", 2, "SUPP-001"),
    (5, "Printer Ink", "Black printer ink cartridge", "250000", 2, "SUPP-002"),
    (6, "Stapler", "Heavy duty stapler", "15000", 2, "SUPP-003"),
    (7, "Office Chair", "Ergonomic office chair", "800000", 3, "FURN-001"),
    (8, "Desk", "Executive office desk", "1200000", 3, "FURN-002"),
    (9, "Filing Cabinet", "3-drawer filing cabinet", "600000", 3, "FURN-003"),
)


def sample_catalog() -> tuple[list[ProductCategory], list[Product]]:
    created_at = now_local()
    categories = [
        ProductCategory(category_id=cid, name=name, description=desc, created_at=created_at)
        for cid, name, desc in SAMPLE_CATEGORIES
    ]
    products = [
        Product(
            product_id=pid,
            name=name,
            description=desc,
            price=Decimal(price),
            category_id=cid,
            sku=sku,
            created_at=created_at,
        )
        for pid, name, desc, price, cid, sku in SAMPLE_PRODUCTS
    ]
    return categories, products


def _by_name(products):
    return sorted(products, key=lambda p: (p.name, p.product_id))


class MemoryProductRepository(ProductRepository):
    """Read-only catalog; starts with the sample catalog unless rows are given."""

    def __init__(
        self,
        categories: Optional[Iterable[ProductCategory]] = None,
        products: Optional[Iterable[Product]] = None,
    ):
        if categories is None and products is None:
            categories, products = sample_catalog()
        self._categories = {c.category_id: c for c in categories or ()}
        self._products = {p.product_id: p for p in products or ()}

    def get_by_id(self, product_id: int) -> Optional[Product]:
        return self._products.get(int(product_id))

    def list_by_category(self, category_id: int) -> Sequence[Product]:
        return _by_name(p for p in self._products.values() if p.category_id == int(category_id))

    def list_all(self) -> Sequence[Product]:
        return _by_name(self._products.values())

    def list_categories(self) -> Sequence[ProductCategory]:
        return sorted(self._categories.values(), key=lambda c: (c.name, c.category_id))
