import warnings
from datetime import timedelta

from organic_mart.auth import create_access_token, decode_access_token, is_admin_user, resolve_user_state
from organic_mart.config.settings import get_settings


async def test_signup_creates_profile_and_returns_token(client, db):
    response = await client.post("/auth/signup", json={
        "display_name": "Fazle Rabbi",
        "email": "Fazle@Example.com",
        "password": "secret123",
    })
    assert response.status_code == 201
    body = response.json()
    assert body["token_type"] == "bearer"
    assert body["user"]["email"] == "fazle@example.com"
    assert body["user"]["is_admin"] is False
    assert "password_hash" not in body["user"]

    stored = await db.users.find_one({"email": "fazle@example.com"})
    assert stored["display_name"] == "Fazle Rabbi"
    assert stored["password_hash"] != "secret123"

    me = await client.get("/account/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.status_code == 200
    assert me.json()["id"] == stored["_id"]


async def test_signup_rejects_duplicate_email_and_short_password(client, customer):
    duplicate = await client.post("/auth/signup", json={
        "display_name": "Someone", "email": "customer@example.com", "password": "secret123",
    })
    assert duplicate.status_code == 409

    short = await client.post("/auth/signup", json={
        "display_name": "Someone", "email": "new@example.com", "password": "12345",
    })
    assert short.status_code == 422


async def test_login(client, customer):
    ok = await client.post("/auth/login", json={"email": "customer@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["user"]["id"] == customer

    bad = await client.post("/auth/login", json={"email": "customer@example.com", "password": "wrong"})
    assert bad.status_code == 401

    unknown = await client.post("/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert unknown.status_code == 401


async def test_admin_login_requires_admin_flag(client, customer, admin):
    refused = await client.post("/auth/admin/login", json={"email": "customer@example.com", "password": "secret123"})
    assert refused.status_code == 403

    ok = await client.post("/auth/admin/login", json={"email": "admin@example.com", "password": "secret123"})
    assert ok.status_code == 200
    assert ok.json()["user"]["is_admin"] is True


async def test_protected_routes_reject_missing_bad_and_expired_tokens(client, customer):
    assert (await client.get("/account/me")).status_code == 401
    assert (await client.get("/account/me", headers={"Authorization": "Bearer nonsense"})).status_code == 401

    expired = create_access_token(customer, expires_delta=timedelta(minutes=-5))
    response = await client.get("/account/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Token expired"

    ghost = create_access_token("deleted-user")
    assert (await client.get("/account/me", headers={"Authorization": f"Bearer {ghost}"})).status_code == 401


async def test_admin_flag_must_be_true(db, customer):
    assert await is_admin_user(db, customer) is False

    await db.admins.insert_one({"_id": customer, "is_admin": False})
    assert await is_admin_user(db, customer) is False

    await db.admins.update_one({"_id": customer}, {"$set": {"is_admin": True}})
    state = await resolve_user_state(db, customer)
    assert state.is_admin is True
    assert state.uid == customer


async def test_admin_routes_forbidden_for_customers(client, customer_headers):
    response = await client.get("/admin/dashboard", headers=customer_headers)
    assert response.status_code == 403


def test_default_secret_is_long_enough_for_hs256():
    assert len(get_settings().jwt_secret.encode()) >= 32

    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always")
        token = create_access_token("customer-uid")
        assert decode_access_token(token) == "customer-uid"

    assert not [w for w in caught if "KeyLength" in w.category.__name__]
