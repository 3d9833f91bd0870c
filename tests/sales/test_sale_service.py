from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from employee_portal.auth.session import UserProfile
from employee_portal.core.enums import Role
from employee_portal.core.exceptions import AuthorizationError, DuplicateError, NotFoundError, ValidationError
from employee_portal.products.memory_product_repository import MemoryProductRepository
from employee_portal.sales.memory_sale_repository import MemorySaleRepository
from employee_portal.sales.model import NewSale, NewSaleItem
from employee_portal.sales.service import SaleRequest, SaleService
from employee_portal.users.memory_user_repository import MemoryUserRepository


def _payload(**overrides):
    data = {
        "saleDate": "2026-10-18",
        "customerName": "PT Maju",
        "productItems": [
            {"productId": 1, "quantity": 2, "price": 100},
            {"productId": "4", "quantity": 1, "price": "50"},
        ],
        "paymentMethod": "cash",
    }
    data.update(overrides)
    return data


def _profile(user_id, role=Role.STAFF):
    return UserProfile(id=user_id, username=f"user{user_id}", role=role, email=f"user{user_id}@example.com")


class SequenceInvoices:
    def __init__(self, *numbers):
        self._numbers = list(numbers)
        self.calls = 0

    def __call__(self, day):
        self.calls += 1
        return self._numbers.pop(0)


@pytest.fixture
def sales():
    return MemorySaleRepository()


def _service(sales, invoices=None):
    kwargs = {"invoice_factory": invoices} if invoices else {}
    return SaleService(sales, MemoryProductRepository(), MemoryUserRepository(), **kwargs)


def test_record_sale_stores_totals_and_items(sales):
    recorded = _service(sales).record_sale(7, SaleRequest.from_payload(_payload()))

    assert recorded.totals.subtotal == Decimal("250.00")
    assert recorded.sale.total_amount == Decimal("277.50")
    assert recorded.sale.tax_amount == Decimal("27.50")
    assert recorded.sale.invoice_number.startswith("INV-20261018-")
    assert [(i.product_id, i.quantity) for i in sales.list_items(recorded.sale.sale_id)] == [(1, 2), (4, 1)]


def test_payload_validation():
    with pytest.raises(ValidationError):
        SaleRequest.from_payload(_payload(productItems=[]))
    with pytest.raises(ValidationError):
        SaleRequest.from_payload(_payload(productItems=[{"productId": 1, "quantity": 0, "price": 10}]))
    with pytest.raises(ValidationError):
        SaleRequest.from_payload(_payload(productItems=[{"productId": 1, "quantity": 1, "price": -1}]))
    with pytest.raises(ValidationError):
        SaleRequest.from_payload(_payload(customerName=" "))
    with pytest.raises(ValidationError):
        SaleRequest.from_payload(_payload(saleDate="18/10/2026"))
    with pytest.raises(ValidationError):
        SaleRequest.from_payload(_payload(invoiceNumber="INV-1"))


def test_unknown_product_is_rejected(sales):
    payload = _payload(productItems=[{"productId": 999, "quantity": 1, "price": 10}])
    with pytest.raises(ValidationError, match="Product 999"):
        _service(sales).record_sale(7, SaleRequest.from_payload(payload))
    assert sales.count() == 0


def test_invoice_collision_is_retried(sales):
    service = _service(sales, SequenceInvoices("INV-20261018-AAAAAA", "INV-20261018-AAAAAA", "INV-20261018-BBBBBB"))
    service.record_sale(7, SaleRequest.from_payload(_payload()))

    recorded = service.record_sale(7, SaleRequest.from_payload(_payload()))
    assert recorded.sale.invoice_number == "INV-20261018-BBBBBB"
    assert sales.count() == 2


def test_invoice_collision_gives_up_after_three_attempts(sales):
    taken = "INV-20261018-AAAAAA"
    invoices = SequenceInvoices(taken, taken, taken, taken)
    service = _service(sales, invoices)
    service.record_sale(7, SaleRequest.from_payload(_payload()))

    with pytest.raises(ValidationError, match="unique invoice number"):
        service.record_sale(7, SaleRequest.from_payload(_payload()))
    assert invoices.calls == 4
    assert sales.count() == 1


def test_client_supplied_duplicate_invoice_fails_once(sales):
    service = _service(sales)
    service.record_sale(7, SaleRequest.from_payload(_payload(invoiceNumber="INV-20261018-CCCCCC")))
    with pytest.raises(DuplicateError):
        service.record_sale(7, SaleRequest.from_payload(_payload(invoiceNumber="INV-20261018-CCCCCC")))


def test_failed_item_leaves_no_sale(sales):
    sale = NewSale(
        invoice_number="INV-20261018-DDDDDD",
        user_id=1,
        customer_name="x",
        sale_date=datetime(2026, 10, 18, 10),
        total_amount=Decimal("10"),
        tax_amount=Decimal("0"),
        discount_amount=Decimal("0"),
        payment_method="cash",
    )
    items = [
        NewSaleItem(product_id=1, quantity=1, unit_price=Decimal("10")),
        NewSaleItem(product_id=2, quantity=0, unit_price=Decimal("10")),
    ]
    with pytest.raises(ValidationError):
        sales.create_with_items(sale, items)
    assert sales.count() == 0


def test_daily_stats_sum_only_that_day(sales):
    service = _service(sales)
    service.record_sale(1, SaleRequest.from_payload(_payload(saleDate="2026-10-18T23:59:59")))
    service.record_sale(2, SaleRequest.from_payload(_payload(saleDate="2026-10-18T00:00:00")))
    service.record_sale(1, SaleRequest.from_payload(_payload(saleDate="2026-10-19T00:00:00")))

    stats = service.daily_stats(date(2026, 10, 18))
    assert stats.transactions == 2
    assert stats.total_sales == Decimal("555.00")
    assert stats.average_sale == Decimal("277.50")


def test_recent_lists_only_own_sales(sales):
    service = _service(sales)
    for _ in range(3):
        service.record_sale(1, SaleRequest.from_payload(_payload()))
    service.record_sale(2, SaleRequest.from_payload(_payload()))

    page = service.recent(1, page=1, limit=2)
    assert page.total_count == 3
    assert len(page.items) == 2
    assert page.items[0].sale_id > page.items[1].sale_id


def test_detail_for_owner_admin_and_others(sales):
    service = _service(sales)
    sale = service.record_sale(1, SaleRequest.from_payload(_payload())).sale

    assert service.detail(sale.sale_id, _profile(1)).sale == sale
    assert len(service.detail(sale.sale_id, _profile(9, Role.ADMIN)).items) == 2
    with pytest.raises(AuthorizationError):
        service.detail(sale.sale_id, _profile(2))
    with pytest.raises(NotFoundError):
        service.detail(999, _profile(1))


@pytest.mark.parametrize(
    "item, message",
    [
        ({"productId": 1, "quantity": 1, "price": "1e30"}, "price must not exceed"),
        ({"productId": 1, "quantity": 2147483648, "price": 1}, "quantity must be at most"),
        ({"productId": 1, "quantity": 2000000000, "price": "10000"}, "Sale total must not exceed"),
        ({"productId": 1, "quantity": 1, "price": "NaN"}, "non-negative number"),
    ],
)
def test_out_of_range_items_are_rejected(item, message):
    with pytest.raises(ValidationError, match=message):
        SaleRequest.from_payload(_payload(productItems=[item]))


def test_total_including_tax_must_fit_the_money_column(sales):
    items = [{"productId": 1, "quantity": 1, "price": "9999999999999.99"}]
    request = SaleRequest.from_payload(_payload(productItems=items))

    with pytest.raises(ValidationError, match="Sale total must not exceed"):
        _service(sales).record_sale(7, request)
    assert sales.count() == 0


def test_unit_price_is_rounded_to_cents(sales):
    request = SaleRequest.from_payload(_payload(productItems=[{"productId": 1, "quantity": 3, "price": "10.005"}]))
    assert request.items[0].unit_price == Decimal("10.01")

    recorded = _service(sales).record_sale(7, request)
    assert sales.list_items(recorded.sale.sale_id)[0].unit_price == Decimal("10.01")
    assert recorded.totals.subtotal == Decimal("30.03")
