from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Sequence

from ..auth.session import UserProfile
from ..common.datetime_utils import format_date, isoformat, now_local
from ..common.formatting import money_to_json, to_money
from ..common.pagination import Page
from ..common.validators import (
    optional_text,
    require_amount,
    require_datetime,
    require_int,
    require_non_empty,
)
from ..core.constants import DEFAULT_DAILY_SALES_TARGET, INVOICE_MAX_ATTEMPTS, MAX_AMOUNT, MAX_INT
from ..core.exceptions import AuthorizationError, DuplicateError, NotFoundError, ValidationError
from ..products.repository import ProductRepository
from ..users.repository import UserRepository
from .invoice import generate_invoice_number, is_invoice_number
from .model import NewSale, NewSaleItem, Sale, SaleItem
from .repository import SaleRepository
from .totals import DailySalesSummary, SaleTotals, compute_sale_totals, summarize_daily

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaleRequest:
    """A validated POST /api/sales payload."""

    sale_date: datetime
    customer_name: str
    items: list[NewSaleItem]
    payment_method: str
    notes: Optional[str] = None
    invoice_number: Optional[str] = None

    @classmethod
    def from_payload(cls, data: Mapping[str, Any]) -> "SaleRequest":
        raw_items = data.get("productItems")
        if not isinstance(raw_items, list) or not raw_items:
            raise ValidationError("productItems must contain at least one item")

        items = []
        subtotal = Decimal("0")
        for index, raw in enumerate(raw_items):
            if not isinstance(raw, Mapping):
                raise ValidationError(f"productItems[{index}] must be an object")
            field = f"productItems[{index}]"
            item = NewSaleItem(
                product_id=require_int(raw.get("productId"), f"{field}.productId", minimum=1, maximum=MAX_INT),
                quantity=require_int(raw.get("quantity"), f"{field}.quantity", minimum=1, maximum=MAX_INT),
                # Stored as DECIMAL(15,2); round here so both backends keep the same price.
                unit_price=to_money(require_amount(raw.get("price"), f"{field}.price")),
            )
            subtotal += item.line_total
            if subtotal > MAX_AMOUNT:
                raise ValidationError(f"Sale total must not exceed {MAX_AMOUNT}")
            items.append(item)

        invoice_number = optional_text(data.get("invoiceNumber"), "invoiceNumber")
        if invoice_number is not None and not is_invoice_number(invoice_number):
            raise ValidationError("invoiceNumber must look like INV-YYYYMMDD-XXXXXX")

        return cls(
            sale_date=require_datetime(data.get("saleDate"), "saleDate"),
            customer_name=require_non_empty(data.get("customerName"), "customerName"),
            items=items,
            payment_method=require_non_empty(data.get("paymentMethod"), "paymentMethod"),
            notes=optional_text(data.get("notes"), "notes"),
            invoice_number=invoice_number,
        )


@dataclass(frozen=True)
class RecordedSale:
    sale: Sale
    totals: SaleTotals


@dataclass(frozen=True)
class SaleDetail:
    sale: Sale
    items: Sequence[SaleItem]
    sales_person: str


class SaleService:
    """Use cases: record sales, daily statistics, sale listings."""

    def __init__(
        self,
        sales: SaleRepository,
        products: ProductRepository,
        users: UserRepository,
        *,
        daily_target: Decimal = DEFAULT_DAILY_SALES_TARGET,
        invoice_factory: Callable[[date], str] = generate_invoice_number,
    ):
        self._sales = sales
        self._products = products
        self._users = users
        self._daily_target = daily_target
        self._invoice_factory = invoice_factory

    def record_sale(self, user_id: int, request: SaleRequest) -> RecordedSale:
        for item in request.items:
            if self._products.get_by_id(item.product_id) is None:
                raise ValidationError(f"Product {item.product_id} does not exist")

        totals = compute_sale_totals(request.items)
        if totals.total_amount > MAX_AMOUNT:
            raise ValidationError(f"Sale total must not exceed {MAX_AMOUNT}")

        # A client-supplied invoice number is used once; generated ones are retried on collision.
        attempts = 1 if request.invoice_number else INVOICE_MAX_ATTEMPTS
        for attempt in range(1, attempts + 1):
            invoice_number = request.invoice_number or self._invoice_factory(request.sale_date.date())
            new_sale = NewSale(
                invoice_number=invoice_number,
                user_id=int(user_id),
                customer_name=request.customer_name,
                sale_date=request.sale_date,
                total_amount=totals.total_amount,
                tax_amount=totals.tax_amount,
                discount_amount=totals.discount_amount,
                payment_method=request.payment_method,
                notes=request.notes,
            )
            try:
                sale = self._sales.create_with_items(new_sale, request.items)
            except DuplicateError:
                if request.invoice_number:
                    raise
                logger.warning("Invoice number %s already taken (attempt %s/%s)", invoice_number, attempt, attempts)
                continue

            logger.info("User %s recorded sale %s total=%s", user_id, sale.invoice_number, sale.total_amount)
            return RecordedSale(sale=sale, totals=totals)

        raise ValidationError("Could not allocate a unique invoice number, please retry")

    def daily_stats(self, day: Optional[date] = None) -> DailySalesSummary:
        day = day or now_local().date()
        return summarize_daily(self._sales.get_daily_totals(day), target=self._daily_target)

    def recent(self, user_id: int, *, page: int = 1, limit: int = 10) -> Page[Sale]:
        return self._sales.list_for_user(user_id, page, limit)

    def detail(self, sale_id: int, viewer: UserProfile) -> SaleDetail:
        sale = self._sales.get_by_id(sale_id)
        if sale is None:
            raise NotFoundError("Sale not found")
        if sale.user_id != viewer.id and not viewer.is_admin:
            raise AuthorizationError("You can only view your own sales")

        seller = self._users.get_by_id(sale.user_id)
        return SaleDetail(
            sale=sale,
            items=self._sales.list_items(sale.sale_id),
            sales_person=seller.display_name if seller else "Unknown",
        )


def daily_stats_to_json(summary: DailySalesSummary) -> dict:
    return {
        "totalSales": money_to_json(summary.total_sales),
        "transactions": summary.transactions,
        "averageSale": money_to_json(summary.average_sale),
        "targetAmount": money_to_json(summary.target_amount),
        "progress": float(summary.progress),
    }


def sale_row_to_json(sale: Sale, sales_person: str) -> dict:
    return {
        "id": sale.sale_id,
        "invoiceNumber": sale.invoice_number,
        "date": format_date(sale.sale_date),
        "customer": sale.customer_name,
        "salesPerson": sales_person,
        "amount": money_to_json(sale.total_amount),
        "status": sale.status.value,
    }


def sale_detail_to_json(detail: SaleDetail) -> dict:
    sale = detail.sale
    data = sale_row_to_json(sale, detail.sales_person)
    data.update(
        {
            "saleDate": isoformat(sale.sale_date),
            "taxAmount": money_to_json(sale.tax_amount),
            "discountAmount": money_to_json(sale.discount_amount),
            "totalAmount": money_to_json(sale.total_amount),
            "paymentMethod": sale.payment_method,
            "notes": sale.notes,
            "createdAt": isoformat(sale.created_at),
            "items": [
                {
                    "id": item.item_id,
                    "productId": item.product_id,
                    "quantity": item.quantity,
                    "unitPrice": money_to_json(item.unit_price),
                    "lineTotal": money_to_json(item.unit_price * item.quantity),
                }
                for item in detail.items
            ],
        }
    )
    return data


def recorded_sale_to_json(recorded: RecordedSale) -> dict:
    return {
        "id": recorded.sale.sale_id,
        "invoiceNumber": recorded.sale.invoice_number,
        "subtotal": money_to_json(recorded.totals.subtotal),
        "taxAmount": money_to_json(recorded.totals.tax_amount),
        "totalAmount": money_to_json(recorded.totals.total_amount),
        "message": "Sale recorded successfully",
    }
