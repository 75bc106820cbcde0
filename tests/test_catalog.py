def test_list_products_with_pagination(client, catalog):
    res = client.get("/api/products", params={"page": 1, "limit": 1})
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True

    data = body["data"]
    assert len(data["products"]) == 1
    assert data["pagination"] == {
        "current_page": 1,
        "total_pages": 2,
        "per_page": 1,
        "total_items": 2,
        "has_next_page": True,
        "has_prev_page": False,
    }
    assert data["products"][0]["category"] == "Bread"


def test_search_and_category_filter(client, catalog):
    res = client.get("/api/products", params={"search": "french"})
    [product] = res.json()["data"]["products"]
    assert product["name"] == "Baguette"
    assert product["price"] == 12500.5

    res = client.get("/api/products", params={"category_id": catalog["category"] + 1})
    assert res.json()["data"]["products"] == []

    res = client.get(f"/api/products/category/{catalog['category']}")
    names = {p["name"] for p in res.json()["data"]}
    assert names == {"Croissant", "Baguette"}


def test_unavailable_product_is_hidden(client, catalog):
    assert client.get(f"/api/products/{catalog['croissant']}").status_code == 200

    res = client.get(f"/api/products/{catalog['retired']}")
    assert res.status_code == 404
    assert res.json()["error"] == "not_found"


def test_page_must_be_positive(client, catalog):
    res = client.get("/api/products", params={"page": 0})
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "query.page"


def test_product_writes_require_staff(client, catalog):
    res = client.post(
        "/api/products",
        json={"name": "Tart", "price": 30000, "category_id": catalog["category"]},
    )
    assert res.status_code == 401


def test_create_update_delete_product(client, catalog, manager_headers):
    res = client.post(
        "/api/products",
        json={"name": " Tart ", "price": 30000, "category_id": catalog["category"]},
        headers=manager_headers,
    )
    assert res.status_code == 201
    product = res.json()["data"]
    assert product["name"] == "Tart"
    assert product["category"] == "Bread"

    res = client.put(
        f"/api/products/{product['id']}",
        json={"price": 32000},
        headers=manager_headers,
    )
    assert res.status_code == 200
    updated = res.json()["data"]
    assert updated["price"] == 32000
    assert updated["name"] == "Tart"

    res = client.put(f"/api/products/{product['id']}", json={}, headers=manager_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "empty_update"

    res = client.delete(f"/api/products/{product['id']}", headers=manager_headers)
    assert res.status_code == 200
    assert client.get(f"/api/products/{product['id']}").status_code == 404


def test_product_requires_active_category(client, catalog, staff_headers):
    res = client.post(
        "/api/products",
        json={"name": "Tart", "price": 30000, "category_id": 999},
        headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"] == "invalid_reference"

    res = client.put(
        f"/api/products/{catalog['croissant']}",
        json={"category_id": 999},
        headers=staff_headers,
    )
    assert res.json()["error"] == "invalid_reference"


def test_product_rejects_unknown_fields(client, catalog, staff_headers):
    res = client.post(
        "/api/products",
        json={
            "name": "Tart",
            "price": 30000,
            "category_id": catalog["category"],
            "stock": 3,
        },
        headers=staff_headers,
    )
    assert res.status_code == 400


def test_admin_product_list_includes_unavailable(client, catalog, staff_headers):
    res = client.get("/api/admin/products", headers=staff_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["pagination"]["total_items"] == 3

    res = client.get(
        "/api/admin/products",
        params={"category": "Cakes"},
        headers=staff_headers,
    )
    assert res.json()["data"]["products"] == []


# -------- Categories --------


def test_categories_with_count(client, catalog):
    res = client.get("/api/categories/with-count")
    [category] = res.json()["data"]
    assert category["name"] == "Bread"
    assert category["product_count"] == 2


def test_category_crud_and_conflict(client, catalog, staff_headers):
    res = client.post(
        "/api/categories",
        json={"name": "Cakes", "description": "  "},
        headers=staff_headers,
    )
    assert res.status_code == 201
    cakes = res.json()["data"]
    assert cakes["description"] is None

    res = client.post("/api/categories", json={"name": "Cakes"}, headers=staff_headers)
    assert res.status_code == 409
    assert res.json()["error"] == "conflict"

    res = client.put(
        f"/api/categories/{cakes['id']}",
        json={"name": "Bread"},
        headers=staff_headers,
    )
    assert res.status_code == 409

    res = client.put(
        f"/api/categories/{cakes['id']}",
        json={"description": "Birthday cakes"},
        headers=staff_headers,
    )
    assert res.json()["data"]["description"] == "Birthday cakes"

    res = client.delete(f"/api/categories/{cakes['id']}", headers=staff_headers)
    assert res.status_code == 200
    assert client.get(f"/api/categories/{cakes['id']}").status_code == 404


def test_category_delete_blocked_by_available_products(client, catalog, staff_headers):
    res = client.delete(f"/api/categories/{catalog['category']}", headers=staff_headers)
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "reference_in_use"
    assert body["details"]["product_count"] == 2


# -------- Branches --------


def test_branch_list_hides_inactive(client, catalog):
    res = client.get("/api/branches")
    assert [b["name"] for b in res.json()["data"]] == ["District 1"]
    assert client.get(f"/api/branches/{catalog['closed_branch']}").status_code == 404


def test_branch_phone_is_validated(client, catalog, staff_headers):
    res = client.post(
        "/api/branches",
        json={"name": "District 3", "address": "3 Vo Van Tan", "phone": "123"},
        headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "phone"


def test_branch_with_orders_cannot_be_deleted(
    client, catalog, order_payload, staff_headers
):
    client.post("/api/orders", json=order_payload())

    res = client.delete(f"/api/branches/{catalog['branch']}", headers=staff_headers)
    assert res.status_code == 400
    assert res.json()["error"] == "reference_in_use"

    res = client.post(
        "/api/branches",
        json={"name": "District 3", "address": "3 Vo Van Tan", "phone": "0283333333"},
        headers=staff_headers,
    )
    new_id = res.json()["data"]["id"]
    assert client.delete(f"/api/branches/{new_id}", headers=staff_headers).status_code == 200


def test_branch_reactivation(client, catalog, staff_headers):
    res = client.put(
        f"/api/branches/{catalog['closed_branch']}",
        json={"is_active": True},
        headers=staff_headers,
    )
    assert res.status_code == 200
    assert client.get(f"/api/branches/{catalog['closed_branch']}").status_code == 200


# -------- Payment methods --------


def test_payment_method_lookup_by_code(client, catalog):
    res = client.get("/api/payment-methods/code/COD")
    assert res.status_code == 200
    assert res.json()["data"]["id"] == catalog["payment"]

    assert client.get("/api/payment-methods/code/voucher").status_code == 404
    assert client.get("/api/payment-methods/code/bitcoin").status_code == 404


def test_payment_method_code_is_unique(client, catalog, staff_headers):
    res = client.post(
        "/api/payment-methods",
        json={"name": "Cash", "code": " COD "},
        headers=staff_headers,
    )
    assert res.status_code == 409

    res = client.post(
        "/api/payment-methods",
        json={"name": "Bank transfer", "code": "Bank"},
        headers=staff_headers,
    )
    assert res.status_code == 201
    assert res.json()["data"]["code"] == "bank"


def test_payment_method_in_use_cannot_be_deleted(
    client, catalog, order_payload, staff_headers
):
    client.post("/api/orders", json=order_payload())
    res = client.delete(
        f"/api/payment-methods/{catalog['payment']}", headers=staff_headers
    )
    assert res.status_code == 400
    assert res.json()["error"] == "reference_in_use"


def test_branch_update_cannot_deactivate_branch_with_orders(
    client, catalog, order_payload, staff_headers
):
    client.post("/api/orders", json=order_payload())

    res = client.put(
        f"/api/branches/{catalog['branch']}",
        json={"is_active": False},
        headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"] == "reference_in_use"
    assert client.get(f"/api/branches/{catalog['branch']}").status_code == 200


def test_branch_update_validates_phone(client, catalog, staff_headers):
    res = client.put(
        f"/api/branches/{catalog['branch']}",
        json={"phone": "09-123"},
        headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["errors"][0]["field"] == "phone"


def test_payment_method_update_cannot_deactivate_when_in_use(
    client, catalog, order_payload, staff_headers
):
    client.post("/api/orders", json=order_payload())

    res = client.put(
        f"/api/payment-methods/{catalog['payment']}",
        json={"is_active": False},
        headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"] == "reference_in_use"


def test_category_update_cannot_deactivate_with_available_products(
    client, catalog, staff_headers
):
    res = client.put(
        f"/api/categories/{catalog['category']}",
        json={"is_active": False},
        headers=staff_headers,
    )
    assert res.status_code == 400
    assert res.json()["error"] == "reference_in_use"

    res = client.put(
        f"/api/categories/{catalog['category']}",
        json={"description": "Still open", "is_active": True},
        headers=staff_headers,
    )
    assert res.status_code == 200
