from __future__ import annotations

from employee_portal.sales.invoice import is_invoice_number

SALE = {
    "saleDate": "2026-10-18",
    "customerName": "PT Maju",
    "productItems": [
        {"productId": "1", "quantity": 2, "price": 100},
        {"productId": "2", "quantity": 1, "price": 50},
    ],
    "paymentMethod": "transfer",
    "notes": "first order",
}


def test_record_sale(client, staff_headers):
    resp = client.post("/api/sales", json=SALE, headers=staff_headers)
    assert resp.status_code == 201
    body = resp.get_json()
    assert body["subtotal"] == 250
    assert body["taxAmount"] == 27.5
    assert body["totalAmount"] == 277.5
    assert body["message"] == "Sale recorded successfully"
    assert is_invoice_number(body["invoiceNumber"])


def test_record_sale_validation_error(client, staff_headers):
    resp = client.post("/api/sales", json={**SALE, "productItems": []}, headers=staff_headers)
    assert resp.status_code == 400

    resp = client.post("/api/sales", data="not json", headers=staff_headers)
    assert resp.status_code == 400


def test_daily_stats_for_a_date(client, staff_headers):
    client.post("/api/sales", json=SALE, headers=staff_headers)
    client.post("/api/sales", json=SALE, headers=staff_headers)

    body = client.get("/api/sales/daily-stats?date=2026-10-18", headers=staff_headers).get_json()
    assert body["totalSales"] == 555
    assert body["transactions"] == 2
    assert body["averageSale"] == 277.5
    assert body["targetAmount"] == 20000000

    empty = client.get("/api/sales/daily-stats?date=2026-10-17", headers=staff_headers).get_json()
    assert empty["transactions"] == 0
    assert empty["progress"] == 0.0


def test_daily_stats_rejects_bad_date(client, staff_headers):
    resp = client.get("/api/sales/daily-stats?date=yesterday", headers=staff_headers)
    assert resp.status_code == 400


def test_recent_sales(client, staff_headers):
    for _ in range(5):
        client.post("/api/sales", json=SALE, headers=staff_headers)

    body = client.get("/api/sales/recent", headers=staff_headers).get_json()
    assert body["totalCount"] == 5
    assert len(body["sales"]) == 4
    row = body["sales"][0]
    assert row["salesPerson"] == "Staff Demo"
    assert row["date"] == "Oct 18, 2026"
    assert row["amount"] == 277.5
    assert row["status"] == "completed"


def test_sale_detail_access(client, staff_headers, admin_headers):
    sale_id = client.post("/api/sales", json=SALE, headers=staff_headers).get_json()["id"]

    body = client.get(f"/api/sales/{sale_id}", headers=staff_headers).get_json()
    assert [i["lineTotal"] for i in body["items"]] == [200, 50]

    assert client.get(f"/api/sales/{sale_id}", headers=admin_headers).status_code == 200
    assert client.get("/api/sales/999", headers=staff_headers).status_code == 404


def test_oversized_price_is_a_validation_error(client, staff_headers):
    items = [{"productId": 1, "quantity": 1, "price": "1e30"}]
    resp = client.post("/api/sales", json={**SALE, "productItems": items}, headers=staff_headers)

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "productItems[0].price must not exceed 9999999999999.99"
