"""Shared pytest fixtures: in-memory database, app client and signed-in users."""

import pytest
from httpx import ASGITransport, AsyncClient
from mongomock_motor import AsyncMongoMockClient

from organic_mart.auth import create_access_token, hash_password
from organic_mart.config.database import get_database
from organic_mart.main import create_app
from organic_mart.models import ProductDocument
from organic_mart.utils.serializers import create_slug, utcnow


@pytest.fixture
def db():
    """Fresh mongomock-motor database per test."""
    return AsyncMongoMockClient()["organic_mart_test"]


@pytest.fixture
def app(db):
    app = create_app()
    app.dependency_overrides[get_database] = lambda: db
    return app


@pytest.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


async def _insert_user(db, uid, email, display_name, password="secret123", admin=False):
    await db.users.insert_one({
        "_id": uid,
        "display_name": display_name,
        "email": email,
        "photo_url": None,
        "password_hash": hash_password(password),
        "created_at": utcnow(),
    })
    if admin:
        await db.admins.insert_one({"_id": uid, "is_admin": True})
    return uid


@pytest.fixture
async def customer(db):
    return await _insert_user(db, "customer-uid", "customer@example.com", "Anika Rahman")


@pytest.fixture
async def admin(db):
    return await _insert_user(db, "admin-uid", "admin@example.com", "Store Admin", admin=True)


@pytest.fixture
def customer_headers(customer):
    return {"Authorization": f"Bearer {create_access_token(customer)}"}


@pytest.fixture
def admin_headers(admin):
    return {"Authorization": f"Bearer {create_access_token(admin)}"}


@pytest.fixture
def make_product(db):
    """Insert a product; keyword arguments override the defaults."""

    async def _make(**overrides):
        name = overrides.pop("name", "Ajwa Dates")
        fields = {
            "name": name,
            "slug": create_slug(name),
            "description": "Premium Ajwa dates from Madinah",
            "category": "Dates",
            "images": ["dates-1"],
            "price": 1200.0,
            "stock": 20,
            "created_at": utcnow(),
            "updated_at": utcnow(),
        }
        fields.update(overrides)
        result = await db.products.insert_one(ProductDocument(**fields).to_document())
        return await db.products.find_one({"_id": result.inserted_id})

    return _make


@pytest.fixture
def checkout_form():
    return {
        "name": "Anika Rahman",
        "address": "House 12, Road 5, Dhanmondi, Dhaka",
        "phone": "01712345678",
        "payment_method": "bkash",
    }
