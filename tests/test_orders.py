import re

from sqlmodel import select

from bakery.models.customer import Customer
from bakery.models.order import Order, OrderItem
from bakery.models.product import Product


def _order_count(db) -> int:
    with db.session() as session:
        return len(session.exec(select(Order)).all())


def test_create_order_success(client, db, catalog, order_payload):
    res = client.post("/api/orders", json=order_payload())
    assert res.status_code == 201
    body = res.json()
    assert body["success"] is True

    order = body["data"]
    assert re.fullmatch(r"BM\d{8}", order["order_code"])
    assert order["status"] == "pending"
    assert order["total_amount"] == 50000
    assert order["notes"] == "Less sugar"
    assert order["customer"]["phone"] == "0901234567"
    assert order["branch"]["name"] == "District 1"
    assert order["payment_method"]["code"] == "cod"

    [item] = order["items"]
    assert item["product_id"] == catalog["croissant"]
    assert item["product_name"] == "Croissant"
    assert item["product_price"] == 25000
    assert item["quantity"] == 2
    assert item["subtotal"] == 50000

    with db.session() as session:
        customer = session.exec(select(Customer)).one()
        assert customer.id == order["customer"]["id"]
        assert customer.name == "Nguyen Van A"


def test_total_is_sum_of_subtotals(client, catalog, order_payload):
    payload = order_payload(
        items=[
            {
                "product": {"id": catalog["croissant"], "name": "Croissant", "price": 25000},
                "quantity": 1,
            },
            {
                "product": {"id": catalog["baguette"], "name": "Baguette", "price": 12500.5},
                "quantity": 3,
            },
        ],
        total_amount=62501.5,
    )
    res = client.post("/api/orders", json=payload)
    assert res.status_code == 201
    order = res.json()["data"]
    assert order["total_amount"] == 62501.5
    assert sum(i["subtotal"] for i in order["items"]) == order["total_amount"]


def test_total_within_tolerance_is_accepted(client, order_payload):
    res = client.post("/api/orders", json=order_payload(total_amount=50000.01))
    assert res.status_code == 201
    # stored total is the server total, not the submitted one
    assert res.json()["data"]["total_amount"] == 50000


def test_total_mismatch_rejected(client, db, order_payload):
    res = client.post("/api/orders", json=order_payload(total_amount=49000))
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["error"] == "total_mismatch"
    assert body["details"]["expected"] == 50000
    assert _order_count(db) == 0


def test_stale_price_rejects_whole_order(client, db, catalog, order_payload):
    payload = order_payload(
        items=[
            {
                "product": {"id": catalog["baguette"], "name": "Baguette", "price": 12500.5},
                "quantity": 1,
            },
            {
                "product": {"id": catalog["croissant"], "name": "Croissant", "price": 20000},
                "quantity": 1,
            },
        ],
        total_amount=32500.5,
    )
    res = client.post("/api/orders", json=payload)
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "stale_price"
    assert body["details"]["product_id"] == catalog["croissant"]
    assert body["details"]["current_price"] == 25000
    assert _order_count(db) == 0
    with db.session() as session:
        assert session.exec(select(Customer)).all() == []


def test_unknown_product_rejected(client, db, order_payload):
    payload = order_payload(
        items=[{"product": {"id": 9999, "name": "Ghost", "price": 1}, "quantity": 1}],
        total_amount=1,
    )
    res = client.post("/api/orders", json=payload)
    assert res.status_code == 400
    assert res.json()["error"] == "invalid_reference"
    assert _order_count(db) == 0


def test_unavailable_product_rejected(client, catalog, order_payload):
    payload = order_payload(
        items=[
            {
                "product": {"id": catalog["retired"], "name": "Old Bun", "price": 9000},
                "quantity": 1,
            }
        ],
        total_amount=9000,
    )
    res = client.post("/api/orders", json=payload)
    assert res.status_code == 400
    assert res.json()["error"] == "invalid_reference"


def test_inactive_branch_rejected(client, db, catalog, order_payload):
    res = client.post("/api/orders", json=order_payload(branch_id=catalog["closed_branch"]))
    assert res.status_code == 400
    assert res.json()["error"] == "invalid_reference"
    assert _order_count(db) == 0


def test_inactive_payment_method_rejected(client, catalog, order_payload):
    res = client.post(
        "/api/orders",
        json=order_payload(payment_method_id=catalog["inactive_payment"]),
    )
    assert res.status_code == 400
    assert res.json()["error"] == "invalid_reference"


def test_empty_items_is_validation_error(client, order_payload):
    res = client.post("/api/orders", json=order_payload(items=[], total_amount=0))
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert any(e["field"] == "items" for e in body["errors"])


def test_bad_phone_and_quantity_are_validation_errors(client, catalog, order_payload):
    payload = order_payload()
    payload["customerInfo"]["phone"] = "12ab"
    payload["items"][0]["quantity"] = 0
    res = client.post("/api/orders", json=payload)
    assert res.status_code == 400
    fields = {e["field"] for e in res.json()["errors"]}
    assert "customerInfo.phone" in fields
    assert "items.0.quantity" in fields


def test_same_phone_reuses_customer_and_updates_contact(client, db, order_payload):
    first = client.post("/api/orders", json=order_payload()).json()["data"]

    payload = order_payload()
    payload["customerInfo"]["name"] = "Nguyen Van B"
    payload["customerInfo"]["address"] = "99 Pasteur"
    payload["customerInfo"]["email"] = ""
    second = client.post("/api/orders", json=payload).json()["data"]

    assert first["customer"]["id"] == second["customer"]["id"]
    assert first["order_code"] != second["order_code"]

    with db.session() as session:
        [customer] = session.exec(select(Customer)).all()
        assert customer.name == "Nguyen Van B"
        assert customer.address == "99 Pasteur"
        assert customer.email is None

        # the first order keeps its own snapshot
        old = session.exec(
            select(Order).where(Order.order_code == first["order_code"])
        ).one()
        assert old.customer_name == "Nguyen Van A"


def test_item_snapshot_survives_price_change(client, db, catalog, order_payload):
    order = client.post("/api/orders", json=order_payload()).json()["data"]

    with db.session() as session:
        product = session.get(Product, catalog["croissant"])
        product.price = 30000
        product.name = "Croissant XL"
        session.add(product)
        session.commit()

        item = session.exec(
            select(OrderItem).where(OrderItem.order_id == order["id"])
        ).one()
        assert item.product_name == "Croissant"
        assert float(item.product_price) == 25000


def test_track_order_by_code_is_public(client, order_payload):
    created = client.post("/api/orders", json=order_payload()).json()["data"]

    res = client.get(f"/api/orders/code/{created['order_code']}")
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["id"] == created["id"]
    assert len(data["items"]) == 1

    res = client.get("/api/orders/code/BM00000000")
    assert res.status_code == 404
    assert res.json()["error"] == "not_found"


def test_staff_order_reads_require_auth(client, order_payload):
    created = client.post("/api/orders", json=order_payload()).json()["data"]

    assert client.get("/api/orders").status_code == 401
    assert client.get(f"/api/orders/{created['id']}").status_code == 401
    res = client.put(f"/api/orders/{created['id']}/status", json={"status": "confirmed"})
    assert res.status_code == 401
    assert res.json() == {"success": False, "message": "Authentication required"}


def test_list_orders_with_filters(client, catalog, order_payload, staff_headers):
    client.post("/api/orders", json=order_payload())
    payload = order_payload()
    payload["customerInfo"]["phone"] = "0911111111"
    payload["customerInfo"]["name"] = "Tran Thi C"
    client.post("/api/orders", json=payload)

    res = client.get("/api/orders", headers=staff_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["pagination"]["total_items"] == 2
    assert "items" not in data["orders"][0]

    res = client.get("/api/orders", params={"search": "Tran"}, headers=staff_headers)
    [order] = res.json()["data"]["orders"]
    assert order["customer"]["phone"] == "0911111111"

    res = client.get(
        "/api/orders",
        params={"status": "confirmed", "branch_id": catalog["branch"]},
        headers=staff_headers,
    )
    assert res.json()["data"]["orders"] == []

    res = client.get("/api/orders", params={"status": "lost"}, headers=staff_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "invalid_status"


def test_get_order_by_id(client, order_payload, staff_headers):
    created = client.post("/api/orders", json=order_payload()).json()["data"]

    res = client.get(f"/api/orders/{created['id']}", headers=staff_headers)
    assert res.status_code == 200
    assert res.json()["data"]["order_code"] == created["order_code"]

    res = client.get("/api/orders/9999", headers=staff_headers)
    assert res.status_code == 404


def test_unknown_keys_are_ignored(client, order_payload):
    payload = order_payload(coupon="FREECAKE")
    payload["items"][0]["note"] = "extra crispy"
    payload["customerInfo"]["birthday"] = "01-01"

    res = client.post("/api/orders", json=payload)
    assert res.status_code == 201
    assert "coupon" not in res.json()["data"]


def test_notes_are_limited_to_500_chars(client, order_payload):
    assert client.post("/api/orders", json=order_payload(notes="x" * 500)).status_code == 201

    res = client.post("/api/orders", json=order_payload(notes="x" * 501))
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "notes"


def test_total_amount_must_be_positive(client, order_payload):
    res = client.post("/api/orders", json=order_payload(total_amount=0))
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "total_amount"
