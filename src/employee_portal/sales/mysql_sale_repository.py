from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Dict, Optional, Sequence

import mysql.connector

from ..common.datetime_utils import day_bounds, now_local
from ..common.pagination import Page, offset_for
from ..core.enums import SaleStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, raise_if_duplicate
from .model import DailyTotals, NewSale, NewSaleItem, Sale, SaleItem, validate_items
from .repository import SaleRepository

_COLUMNS = (
    "sale_id, invoice_number, user_id, customer_name, sale_date, total_amount, tax_amount, "
    "discount_amount, payment_method, notes, status, created_at"
)


def _to_sale(r: Dict[str, Any]) -> Sale:
    return Sale(
        sale_id=int(r["sale_id"]),
        invoice_number=r["invoice_number"],
        user_id=int(r["user_id"]),
        customer_name=r["customer_name"],
        sale_date=r["sale_date"],
        total_amount=Decimal(str(r["total_amount"])),
        tax_amount=Decimal(str(r["tax_amount"])),
        discount_amount=Decimal(str(r["discount_amount"])),
        payment_method=r["payment_method"],
        status=SaleStatus(r["status"]),
        created_at=r["created_at"],
        notes=r.get("notes"),
    )


def _to_item(r: Dict[str, Any]) -> SaleItem:
    return SaleItem(
        item_id=int(r["item_id"]),
        sale_id=int(r["sale_id"]),
        product_id=int(r["product_id"]),
        quantity=int(r["quantity"]),
        unit_price=Decimal(str(r["unit_price"])),
        created_at=r["created_at"],
    )


class MySQLSaleRepository(SaleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM sales WHERE sale_id=%s", (int(sale_id),))
            r = fetchone(cur)
            return _to_sale(r) if r else None

    def list_for_user(self, user_id: int, page: int = 1, limit: int = 10) -> Page[Sale]:
        offset = offset_for(page, limit)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM sales
                WHERE user_id=%s
                ORDER BY created_at DESC, sale_id DESC
                LIMIT %s OFFSET %s
                """,
                (int(user_id), int(limit), offset),
            )
            rows = fetchall(cur)
            cur.execute("SELECT COUNT(*) AS n FROM sales WHERE user_id=%s", (int(user_id),))
            total = fetchone(cur)
        return Page(items=[_to_sale(r) for r in rows], total_count=int(total["n"]) if total else 0)

    def create_with_items(self, sale: NewSale, items: Sequence[NewSaleItem]) -> Sale:
        validate_items(items)
        created_at = now_local()
        try:
            # One transaction: a failing item insert rolls the sale back as well.
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO sales(
                        invoice_number, user_id, customer_name, sale_date, total_amount, tax_amount,
                        discount_amount, payment_method, notes, status, created_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        sale.invoice_number,
                        int(sale.user_id),
                        sale.customer_name,
                        sale.sale_date,
                        sale.total_amount,
                        sale.tax_amount,
                        sale.discount_amount,
                        sale.payment_method,
                        sale.notes,
                        sale.status.value,
                        created_at,
                    ),
                )
                sale_id = int(cur.lastrowid)
                for item in items:
                    cur.execute(
                        """
                        INSERT INTO sale_items(sale_id, product_id, quantity, unit_price, created_at)
                        VALUES(%s,%s,%s,%s,%s)
                        """,
                        (sale_id, int(item.product_id), int(item.quantity), item.unit_price, created_at),
                    )
        except mysql.connector.IntegrityError as e:
            raise_if_duplicate(e, f"Invoice number {sale.invoice_number} already exists")
            raise

        return Sale(
            sale_id=sale_id,
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

    def list_items(self, sale_id: int) -> Sequence[SaleItem]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT item_id, sale_id, product_id, quantity, unit_price, created_at
                FROM sale_items
                WHERE sale_id=%s
                ORDER BY item_id
                """,
                (int(sale_id),),
            )
            return [_to_item(r) for r in fetchall(cur)]

    def get_daily_totals(self, day: date) -> DailyTotals:
        start, end = day_bounds(day)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COALESCE(SUM(total_amount), 0) AS total_sales, COUNT(*) AS transactions
                FROM sales
                WHERE sale_date BETWEEN %s AND %s
                """,
                (start, end),
            )
            r = fetchone(cur) or {"total_sales": 0, "transactions": 0}
        return DailyTotals(total_sales=Decimal(str(r["total_sales"])), transactions=int(r["transactions"]))

    def list_recent(self, limit: int) -> Sequence[Sale]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM sales ORDER BY created_at DESC, sale_id DESC LIMIT %s",
                (int(limit),),
            )
            return [_to_sale(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS n FROM sales")
            row = fetchone(cur)
            return int(row["n"]) if row else 0
