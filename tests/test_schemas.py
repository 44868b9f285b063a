import pytest
from bson import ObjectId
from pydantic import ValidationError

from organic_mart.models import OrderDocument, average_rating
from organic_mart.schemas import CheckoutForm, ContactRequest, ProductForm, ProductResponse
from organic_mart.utils.serializers import create_slug, serialize_doc


@pytest.mark.parametrize("phone", ["01712345678", "01312345678", "01998765432", " 01812345678 "])
def test_checkout_form_accepts_bangladeshi_mobile(phone):
    form = CheckoutForm(name="Karim", address="Mirpur 10, Dhaka 1216", phone=phone)
    assert form.phone == phone.strip()
    assert form.payment_method == "cod"


@pytest.mark.parametrize("phone", ["01212345678", "0171234567", "+8801712345678", "017123456789", "abc"])
def test_checkout_form_rejects_other_numbers(phone):
    with pytest.raises(ValidationError):
        CheckoutForm(name="Karim", address="Mirpur 10, Dhaka 1216", phone=phone)


def test_checkout_form_length_rules():
    with pytest.raises(ValidationError):
        CheckoutForm(name="K", address="Mirpur 10, Dhaka 1216", phone="01712345678")
    with pytest.raises(ValidationError):
        CheckoutForm(name="Karim", address="Dhaka", phone="01712345678")
    with pytest.raises(ValidationError):
        CheckoutForm(name="Karim", address="Mirpur 10, Dhaka 1216", phone="01712345678", payment_method="card")


def test_product_form_splits_images_and_checks_category():
    form = ProductForm(
        name="Sundarban Honey",
        description="Raw honey from the Sundarbans",
        price=850,
        stock=5,
        category="Nuts",
        images="https://cdn.example.com/a.jpg\n\n  https://cdn.example.com/b.jpg  \n",
    )
    assert form.image_list() == ["https://cdn.example.com/a.jpg", "https://cdn.example.com/b.jpg"]
    assert form.is_new is False

    with pytest.raises(ValidationError):
        ProductForm(
            name="Sundarban Honey",
            description="Raw honey from the Sundarbans",
            price=850,
            stock=5,
            category="Honey",
            images="https://cdn.example.com/a.jpg",
        )


def test_product_form_rejects_negative_price_and_short_fields():
    base = dict(name="Chia", description="Organic chia seeds", price=10, stock=1,
                category="Chia Seeds", images="https://x.example/1.png")
    with pytest.raises(ValidationError):
        ProductForm(**{**base, "price": -1})
    with pytest.raises(ValidationError):
        ProductForm(**{**base, "name": "Ch"})
    with pytest.raises(ValidationError):
        ProductForm(**{**base, "images": "x.png"})


@pytest.mark.parametrize("name", ["খেজুর", "খেজুর দানা", "A" * 201])
def test_product_form_rejects_names_without_a_usable_slug(name):
    base = dict(description="Organic chia seeds", price=10, stock=1,
                category="Chia Seeds", images="https://x.example/1.png")
    with pytest.raises(ValidationError):
        ProductForm(name=name, **base)

    assert ProductForm(name="খেজুর Dates", **base).name == "খেজুর Dates"


@pytest.mark.parametrize("name,slug", [
    ("Ajwa Dates", "ajwa-dates"),
    ("  Pure   Gur (1kg) ", "-pure-gur-1kg-"),
    ("Mixed Nuts & Seeds!", "mixed-nuts--seeds"),
    ("Chia_Seeds 500g", "chia_seeds-500g"),
])
def test_create_slug(name, slug):
    assert create_slug(name) == slug


def test_average_rating():
    assert average_rating(0, 0) is None
    assert average_rating(9, 2) == 4.5
    assert average_rating(13, 3) == 4.3


def test_product_response_from_document():
    oid = ObjectId()
    response = ProductResponse.from_document({
        "_id": oid,
        "name": "Ajwa Dates",
        "slug": "ajwa-dates",
        "category": "Dates",
        "price": 1000.0,
        "original_price": 1200.0,
        "rating": 14,
        "reviews": 3,
        "version": 3,
    })
    assert response.id == str(oid)
    assert response.average_rating == 4.7
    assert response.has_discount is True


def test_order_document_defaults_to_pending():
    order = OrderDocument(
        product_name="Ajwa Dates", quantity=2, total_price=2400, customer_name="Anika",
        address="Dhanmondi, Dhaka", phone="01712345678", payment_method="nagad",
    )
    doc = order.to_document()
    assert doc["status"] == "Pending"
    assert doc["payment_method"] == "nagad"
    assert doc["user_id"] is None
    assert "id" not in doc


def test_contact_request_validation():
    ContactRequest(name="Sadia", email="sadia@example.com", subject="Order help", message="Where is my order?")
    with pytest.raises(ValidationError):
        ContactRequest(name="Sadia", email="not-an-email", subject="Order help", message="Where is my order?")
    with pytest.raises(ValidationError):
        ContactRequest(name="Sadia", email="sadia@example.com", subject="Hi", message="Where is my order?")


def test_serialize_doc_renames_id_and_nested_object_ids():
    oid, nested = ObjectId(), ObjectId()
    doc = {"_id": oid, "ref": nested, "items": [{"x": nested}]}
    assert serialize_doc(doc) == {"id": str(oid), "ref": str(nested), "items": [{"x": str(nested)}]}
    assert doc["_id"] is oid
    assert serialize_doc(None) is None
