from datetime import timedelta

from bson import ObjectId

from organic_mart.utils.serializers import utcnow


async def test_list_products_filters_and_paginates(client, make_product):
    now = utcnow()
    await make_product(name="Ajwa Dates", created_at=now - timedelta(days=2), is_new=False)
    await make_product(name="Medjool Dates", created_at=now - timedelta(days=1), is_new=True)
    await make_product(name="Cashew Nuts", category="Nuts", created_at=now, price=900.0)

    response = await client.get("/products")
    body = response.json()
    assert response.status_code == 200
    assert body["total"] == 3
    assert [p["name"] for p in body["products"]] == ["Cashew Nuts", "Medjool Dates", "Ajwa Dates"]

    dates = (await client.get("/products", params={"category": "Dates"})).json()
    assert {p["name"] for p in dates["products"]} == {"Ajwa Dates", "Medjool Dates"}

    fresh = (await client.get("/products", params={"is_new": "true"})).json()
    assert [p["name"] for p in fresh["products"]] == ["Medjool Dates"]

    page = (await client.get("/products", params={"limit": 2, "offset": 0})).json()
    assert len(page["products"]) == 2
    assert page["has_more"] is True

    cheapest = (await client.get("/products", params={"sort": "price_asc", "limit": 1})).json()
    assert cheapest["products"][0]["name"] == "Cashew Nuts"


async def test_search_is_case_insensitive_and_limited(client, make_product):
    for i in range(7):
        await make_product(name=f"Khejur Gur {i}", category="Pure Gur")
    await make_product(name="Almonds", category="Nuts")

    assert (await client.get("/products/search", params={"q": "g"})).json() == []

    results = (await client.get("/products/search", params={"q": "KHEJUR"})).json()
    assert len(results) == 5
    assert all("Khejur" in p["name"] for p in results)

    assert [p["name"] for p in (await client.get("/products/search", params={"q": "alm"})).json()] == ["Almonds"]


async def test_search_escapes_regex_characters(client, make_product):
    await make_product(name="Dates (Premium)")
    assert len((await client.get("/products/search", params={"q": "(Premium"})).json()) == 1


async def test_featured_products_are_best_sellers(client, make_product):
    for sales, name in [(5, "A Dates"), (50, "B Dates"), (1, "C Dates"), (30, "D Dates"), (40, "E Dates")]:
        await make_product(name=name, sales=sales)

    featured = (await client.get("/products/featured")).json()
    assert [p["name"] for p in featured] == ["B Dates", "E Dates", "D Dates", "A Dates"]


async def test_get_product_by_id_and_slug(client, make_product):
    product = await make_product(name="Mixed Pickles", category="Pickles", rating=9, reviews=2)

    by_id = await client.get(f"/products/{product['_id']}")
    assert by_id.status_code == 200
    assert by_id.json()["slug"] == "mixed-pickles"
    assert by_id.json()["average_rating"] == 4.5

    by_slug = await client.get("/products/slug/mixed-pickles")
    assert by_slug.json()["id"] == str(product["_id"])

    assert (await client.get("/products/slug/unknown")).status_code == 404
    assert (await client.get(f"/products/{ObjectId()}")).status_code == 404
    assert (await client.get("/products/not-an-id")).status_code == 400


async def test_category_page(client, make_product):
    now = utcnow()
    await make_product(name="Loitta Shutki", category="Shutki", created_at=now - timedelta(hours=1))
    await make_product(name="Churi Shutki", category="Shutki", created_at=now)
    await make_product(name="Walnuts", category="Nuts")

    response = await client.get("/categories/shutki/products")
    assert response.status_code == 200
    body = response.json()
    assert body["category"]["name"] == "Shutki"
    assert [p["name"] for p in body["products"]] == ["Churi Shutki", "Loitta Shutki"]

    assert (await client.get("/categories/honey/products")).status_code == 404


async def test_static_site_content(client):
    categories = (await client.get("/categories")).json()
    assert [c["slug"] for c in categories] == ["dates", "pure-gur", "chia-seeds", "shutki", "pickles", "nuts"]

    site = (await client.get("/site")).json()
    assert site["name"] == "Afrah Organic Mart"
    assert len((await client.get("/testimonials")).json()) == 4


async def test_root_and_health(client):
    root = await client.get("/")
    assert root.json()["status"] == "running"

    health = await client.get("/health")
    assert health.status_code == 200
    assert health.json()["database"] == "disconnected"
