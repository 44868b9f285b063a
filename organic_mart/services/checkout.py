"""
Order placement: single buy-now orders and whole-cart checkout.

Checkout writes one order per cart line and clears the cart as soon as the
orders are stored, so a rejected write leaves the cart as it was. The product
``sales`` counters are updated afterwards and a failure there is only logged.
"""
import logging
from typing import Any, Dict, List, Optional

from bson import ObjectId
from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import PyMongoError

from ..errors import guarded_write
from ..models.order import OrderDocument
from ..schemas.order import CheckoutForm
from ..utils.dependencies import fetch_products_by_ids, verify_product_exists
from ..utils.serializers import convert_object_ids, utcnow

logger = logging.getLogger(__name__)


def build_order(product: Dict[str, Any], quantity: int, form: CheckoutForm, user_id: Optional[str]) -> OrderDocument:
    now = utcnow()
    return OrderDocument(
        product_id=str(product["_id"]),
        product_name=product["name"],
        quantity=quantity,
        total_price=product["price"] * quantity,
        customer_name=form.name,
        address=form.address,
        phone=form.phone,
        payment_method=form.payment_method,
        user_id=user_id,
        created_at=now,
        updated_at=now,
    )


async def _record_sales(db: AsyncIOMotorDatabase, orders: List[OrderDocument]) -> None:
    for order in orders:
        try:
            await db.products.update_one(
                {"_id": ObjectId(order.product_id)},
                {"$inc": {"sales": order.quantity}},
            )
        except PyMongoError as e:
            logger.warning("Could not add %s to sales of product %s: %s", order.quantity, order.product_id, e)


async def place_order(
    db: AsyncIOMotorDatabase,
    product_id: str,
    quantity: int,
    form: CheckoutForm,
    user_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Store a single order for ``quantity`` units of one product."""
    product = await verify_product_exists(product_id, db)
    order = build_order(product, quantity, form, user_id)
    order_doc = order.to_document()

    async with guarded_write("orders", "create", convert_object_ids(dict(order_doc))):
        result = await db.orders.insert_one(order_doc)

    await _record_sales(db, [order])
    logger.info("Order created: %s for user %s", result.inserted_id, user_id or "guest")
    return await db.orders.find_one({"_id": result.inserted_id})


async def load_cart_lines(db: AsyncIOMotorDatabase, user_id: str) -> List[Dict[str, Any]]:
    """Cart items joined with their products, oldest first.

    Items pointing at deleted products are left out.
    """
    cursor = db.cart_items.find({"user_id": user_id}).sort("added_at", 1)
    cart_items = await cursor.to_list(length=None)
    if not cart_items:
        return []

    products = await fetch_products_by_ids([item["product_id"] for item in cart_items], db)

    lines = []
    for item in cart_items:
        product = products.get(item["product_id"])
        if product is None:
            logger.warning("Skipping cart item %s: product %s no longer exists", item["_id"], item["product_id"])
            continue
        lines.append({"cart_item": item, "product": product, "quantity": item["quantity"]})
    return lines


async def checkout_cart(db: AsyncIOMotorDatabase, user_id: str, form: CheckoutForm) -> List[Dict[str, Any]]:
    """Turn every cart line into an order, then empty the cart."""
    lines = await load_cart_lines(db, user_id)
    if not lines:
        raise HTTPException(status_code=400, detail="Your cart is empty.")

    orders = [build_order(line["product"], line["quantity"], form, user_id) for line in lines]
    order_docs = [order.to_document() for order in orders]

    async with guarded_write("orders", "create", convert_object_ids([dict(doc) for doc in order_docs])):
        result = await db.orders.insert_many(order_docs)

    cart_item_ids = [line["cart_item"]["_id"] for line in lines]
    await db.cart_items.delete_many({"_id": {"$in": cart_item_ids}, "user_id": user_id})

    await _record_sales(db, orders)

    logger.info("Checkout for user %s created %s orders", user_id, len(result.inserted_ids))
    cursor = db.orders.find({"_id": {"$in": result.inserted_ids}}).sort("created_at", 1)
    return await cursor.to_list(length=None)
