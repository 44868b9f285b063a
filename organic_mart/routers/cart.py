"""
Shopping cart and cart checkout.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..auth import UserState, get_current_user
from ..config.database import get_database
from ..models.shop import CartItemDocument
from ..schemas import (
    AddToCartRequest,
    CartItemResponse,
    CartLineResponse,
    CartResponse,
    CheckoutForm,
    CheckoutResponse,
    OrderResponse,
    ProductResponse,
)
from ..services.checkout import checkout_cart, load_cart_lines
from ..utils.dependencies import validate_object_id, verify_product_exists
from ..utils.serializers import serialize_doc, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cart", tags=["Cart"])


@router.get("", response_model=CartResponse)
async def get_cart(
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Cart lines with their products and the cart total"""
    lines = await load_cart_lines(db, state.uid)

    items = [
        CartLineResponse(
            cart_item_id=str(line["cart_item"]["_id"]),
            product=ProductResponse.from_document(line["product"]),
            quantity=line["quantity"],
            line_total=line["product"]["price"] * line["quantity"],
        )
        for line in lines
    ]
    return CartResponse(items=items, total=sum(item.line_total for item in items), count=len(items))


@router.post("", status_code=201, response_model=CartItemResponse)
async def add_to_cart(
    body: AddToCartRequest,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    product = await verify_product_exists(body.product_id, db)

    item = CartItemDocument(
        user_id=state.uid,
        product_id=body.product_id,
        quantity=body.quantity,
        added_at=utcnow(),
    )
    result = await db.cart_items.insert_one(item.to_document())

    logger.info("Added %s x %s to cart of %s", body.quantity, product["name"], state.uid)
    created = await db.cart_items.find_one({"_id": result.inserted_id})
    return serialize_doc(created)


@router.delete("/{cart_item_id}", status_code=204)
async def remove_from_cart(
    cart_item_id: str,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    object_id = validate_object_id(cart_item_id, "cart item")

    result = await db.cart_items.delete_one({"_id": object_id, "user_id": state.uid})
    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Cart item not found")

    logger.info("Cart item removed: %s", cart_item_id)
    return None


@router.post("/checkout", status_code=201, response_model=CheckoutResponse)
async def checkout(
    form: CheckoutForm,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Place one order per cart line and clear the cart"""
    orders = await checkout_cart(db, state.uid, form)
    responses = [OrderResponse.from_document(order) for order in orders]
    return CheckoutResponse(
        message="We've received your orders and will process them shortly.",
        orders=responses,
        total=sum(order.total_price for order in responses),
    )
