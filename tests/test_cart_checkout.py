import logging

from bson import ObjectId
from pymongo.errors import OperationFailure

from organic_mart.errors import PERMISSION_ERROR_EVENT, error_emitter


async def test_cart_add_list_and_total(client, customer_headers, make_product):
    dates = await make_product(name="Ajwa Dates", price=1200.0)
    nuts = await make_product(name="Cashew Nuts", category="Nuts", price=450.0)

    first = await client.post("/cart", json={"product_id": str(dates["_id"])}, headers=customer_headers)
    assert first.status_code == 201
    assert first.json()["quantity"] == 1

    await client.post("/cart", json={"product_id": str(nuts["_id"]), "quantity": 3}, headers=customer_headers)

    cart = (await client.get("/cart", headers=customer_headers)).json()
    assert cart["count"] == 2
    assert cart["total"] == 1200.0 + 3 * 450.0
    assert [line["product"]["name"] for line in cart["items"]] == ["Ajwa Dates", "Cashew Nuts"]
    assert cart["items"][1]["line_total"] == 1350.0


async def test_cart_requires_login_and_existing_product(client, customer_headers):
    assert (await client.get("/cart")).status_code == 401
    missing = await client.post("/cart", json={"product_id": str(ObjectId())}, headers=customer_headers)
    assert missing.status_code == 404


async def test_cart_skips_deleted_products(client, db, customer_headers, make_product):
    kept = await make_product(name="Chia Seeds", category="Chia Seeds", price=300.0)
    gone = await make_product(name="Old Pickle", category="Pickles", price=200.0)
    for product in (kept, gone):
        await client.post("/cart", json={"product_id": str(product["_id"])}, headers=customer_headers)
    await db.products.delete_one({"_id": gone["_id"]})

    cart = (await client.get("/cart", headers=customer_headers)).json()
    assert cart["count"] == 1
    assert cart["total"] == 300.0


async def test_remove_from_cart_only_own_items(client, db, customer_headers, admin_headers, make_product):
    product = await make_product()
    item = (await client.post("/cart", json={"product_id": str(product["_id"])}, headers=customer_headers)).json()

    assert (await client.delete(f"/cart/{item['id']}", headers=admin_headers)).status_code == 404
    assert (await client.delete(f"/cart/{item['id']}", headers=customer_headers)).status_code == 204
    assert await db.cart_items.count_documents({}) == 0


async def test_checkout_creates_one_order_per_line_and_clears_cart(
    client, db, customer, customer_headers, make_product, checkout_form
):
    dates = await make_product(name="Ajwa Dates", price=1200.0)
    gur = await make_product(name="Khejur Gur", category="Pure Gur", price=350.0)
    await client.post("/cart", json={"product_id": str(dates["_id"]), "quantity": 2}, headers=customer_headers)
    await client.post("/cart", json={"product_id": str(gur["_id"])}, headers=customer_headers)

    response = await client.post("/cart/checkout", json=checkout_form, headers=customer_headers)
    assert response.status_code == 201
    body = response.json()
    assert body["total"] == 2 * 1200.0 + 350.0

    orders = {o["product_name"]: o for o in body["orders"]}
    assert orders["Ajwa Dates"]["quantity"] == 2
    assert orders["Ajwa Dates"]["total_price"] == 2400.0
    assert orders["Khejur Gur"]["status"] == "Pending"
    assert all(o["user_id"] == customer for o in body["orders"])
    assert all(o["payment_method"] == "bkash" for o in body["orders"])

    assert await db.cart_items.count_documents({"user_id": customer}) == 0
    assert (await db.products.find_one({"_id": dates["_id"]}))["sales"] == 2

    history = (await client.get("/account/orders", headers=customer_headers)).json()
    assert history["total"] == 2


async def test_checkout_empty_cart(client, customer_headers, checkout_form):
    response = await client.post("/cart/checkout", json=checkout_form, headers=customer_headers)
    assert response.status_code == 400


async def test_checkout_validates_form(client, customer_headers, checkout_form):
    response = await client.post(
        "/cart/checkout", json={**checkout_form, "phone": "12345"}, headers=customer_headers
    )
    assert response.status_code == 422


async def test_rejected_order_write_emits_permission_error_and_keeps_cart(
    client, db, monkeypatch, customer, customer_headers, make_product, checkout_form
):
    product = await make_product()
    await client.post("/cart", json={"product_id": str(product["_id"])}, headers=customer_headers)

    async def rejected(self, *args, **kwargs):
        raise OperationFailure("not authorized on organic_mart_test", code=13)

    monkeypatch.setattr(type(db.orders), "insert_many", rejected, raising=False)

    received = []
    error_emitter.on(PERMISSION_ERROR_EVENT, received.append)
    try:
        response = await client.post("/cart/checkout", json=checkout_form, headers=customer_headers)
    finally:
        error_emitter.off(PERMISSION_ERROR_EVENT, received.append)

    assert response.status_code == 403
    body = response.json()
    assert body["error"] == "permission_denied"
    assert body["detail"]["path"] == "orders"
    assert body["detail"]["operation"] == "create"
    assert body["detail"]["request_resource_data"][0]["product_name"] == "Ajwa Dates"

    assert len(received) == 1
    assert received[0].path == "orders"
    assert await db.cart_items.count_documents({"user_id": customer}) == 1


async def test_buy_now_as_guest_and_as_user(client, db, customer, customer_headers, make_product, checkout_form):
    product = await make_product(name="Walnuts", category="Nuts", price=700.0)

    guest = await client.post(
        "/orders", json={"product_id": str(product["_id"]), "quantity": 3, "form": checkout_form}
    )
    assert guest.status_code == 201
    assert guest.json()["user_id"] is None
    assert guest.json()["total_price"] == 2100.0
    assert guest.json()["customer_name"] == "Anika Rahman"

    signed_in = await client.post(
        "/orders", json={"product_id": str(product["_id"]), "form": checkout_form}, headers=customer_headers
    )
    assert signed_in.json()["user_id"] == customer
    assert signed_in.json()["quantity"] == 1

    assert (await db.products.find_one({"_id": product["_id"]}))["sales"] == 4


async def test_buy_now_unknown_product(client, checkout_form):
    response = await client.post("/orders", json={"product_id": str(ObjectId()), "form": checkout_form})
    assert response.status_code == 404


async def test_sales_counter_failure_still_completes_order_and_clears_cart(
    client, db, monkeypatch, caplog, customer, customer_headers, make_product, checkout_form
):
    product = await make_product()
    await client.post("/cart", json={"product_id": str(product["_id"]), "quantity": 2}, headers=customer_headers)

    async def rejected(self, *args, **kwargs):
        raise OperationFailure("not authorized on organic_mart_test", code=13)

    monkeypatch.setattr(type(db.products), "update_one", rejected, raising=False)

    with caplog.at_level(logging.WARNING, logger="organic_mart.services.checkout"):
        response = await client.post("/cart/checkout", json=checkout_form, headers=customer_headers)
        assert response.status_code == 201

        bought = await client.post(
            "/orders",
            json={"product_id": str(product["_id"]), "quantity": 1, "form": checkout_form},
        )
        assert bought.status_code == 201

    assert await db.orders.count_documents({}) == 2
    assert await db.cart_items.count_documents({"user_id": customer}) == 0
    assert "Could not add 2 to sales" in caplog.text
    assert (await db.products.find_one({"_id": product["_id"]}))["sales"] == 0
