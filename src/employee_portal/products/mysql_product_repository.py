from __future__ import annotations

from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Product, ProductCategory
from .repository import ProductRepository

_COLUMNS = "product_id, name, description, price, category_id, sku, created_at"


def _to_product(r: Dict[str, Any]) -> Product:
    return Product(
        product_id=int(r["product_id"]),
        name=r["name"],
        price=Decimal(str(r["price"])),
        category_id=int(r["category_id"]),
        sku=r["sku"],
        created_at=r["created_at"],
        description=r.get("description"),
    )


class MySQLProductRepository(ProductRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, product_id: int) -> Optional[Product]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM products WHERE product_id=%s", (int(product_id),))
            r = fetchone(cur)
            return _to_product(r) if r else None

    def list_by_category(self, category_id: int) -> Sequence[Product]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM products WHERE category_id=%s ORDER BY name, product_id",
                (int(category_id),),
            )
            return [_to_product(r) for r in fetchall(cur)]

    def list_all(self) -> Sequence[Product]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM products ORDER BY name, product_id")
            return [_to_product(r) for r in fetchall(cur)]

    def list_categories(self) -> Sequence[ProductCategory]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT category_id, name, description, created_at FROM product_categories ORDER BY name, category_id"
            )
            return [
                ProductCategory(
                    category_id=int(r["category_id"]),
                    name=r["name"],
                    created_at=r["created_at"],
                    description=r.get("description"),
                )
                for r in fetchall(cur)
            ]
