"""
Admin back-office: dashboard, orders, products, users and messages.
Every route requires an admin account.
"""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING
from pymongo.errors import DuplicateKeyError

from ..auth import UserState, get_current_admin
from ..config.database import get_database
from ..config.settings import get_settings
from ..errors import PermissionDeniedError, guarded_write
from ..models.order import OrderStatus
from ..models.product import ProductDocument
from ..models.user import AdminFlagDocument
from ..schemas import (
    ContactMessageResponse,
    DashboardResponse,
    OrderResponse,
    OrdersListResponse,
    ProductForm,
    ProductResponse,
    UpdateOrderStatusRequest,
    UserProfileResponse,
)
from ..utils.dependencies import validate_object_id, verify_order_exists, verify_product_exists
from ..utils.serializers import create_slug, serialize_docs, utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])


# Dashboard

@router.get("/dashboard", response_model=DashboardResponse)
async def dashboard(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Order and catalog totals plus the latest orders"""
    orders = await db.orders.find({}).sort("created_at", DESCENDING).to_list(length=None)

    return DashboardResponse(
        total_orders=len(orders),
        pending_orders=sum(1 for o in orders if o.get("status") == OrderStatus.PENDING.value),
        total_revenue=sum(
            o.get("total_price", 0) for o in orders if o.get("status") != OrderStatus.CANCELLED.value
        ),
        total_products=await db.products.count_documents({}),
        total_users=await db.users.count_documents({}),
        recent_orders=[OrderResponse.from_document(o) for o in orders[: get_settings().recent_orders_limit]],
    )


# Orders

@router.get("/orders", response_model=OrdersListResponse)
async def list_orders(
    status: Optional[OrderStatus] = Query(None, description="Filter by order status"),
    limit: int = Query(50, ge=1, le=100, description="Number of orders to return"),
    offset: int = Query(0, ge=0, description="Number of orders to skip"),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    filter_query = {}
    if status:
        filter_query["status"] = status.value

    total_count = await db.orders.count_documents(filter_query)
    cursor = db.orders.find(filter_query).sort("created_at", DESCENDING).skip(offset).limit(limit)
    orders = await cursor.to_list(length=limit)

    return OrdersListResponse(
        orders=[OrderResponse.from_document(o) for o in orders],
        total=total_count,
        limit=limit,
        offset=offset,
        has_more=offset + limit < total_count,
    )


@router.patch("/orders/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
    order_id: str,
    status_update: UpdateOrderStatusRequest,
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Update order status"""
    order = await verify_order_exists(order_id, db)
    status = status_update.status.value

    async with guarded_write(f"orders/{order_id}", "update", {"status": status}):
        await db.orders.update_one(
            {"_id": order["_id"]},
            {"$set": {"status": status, "updated_at": utcnow()}}
        )

    logger.info("Order status updated: %s -> %s", order_id, status)
    return OrderResponse.from_document(await db.orders.find_one({"_id": order["_id"]}))


# Products

@router.get("/products", response_model=List[ProductResponse])
async def list_all_products(db: AsyncIOMotorDatabase = Depends(get_database)):
    products = await db.products.find({}).sort("created_at", DESCENDING).to_list(length=None)
    return [ProductResponse.from_document(p) for p in products]


@router.post("/products", status_code=201, response_model=ProductResponse)
async def create_product(form: ProductForm, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Create a new product"""
    now = utcnow()
    product = ProductDocument(
        name=form.name,
        slug=create_slug(form.name),
        description=form.description,
        category=form.category,
        images=form.image_list(),
        price=form.price,
        original_price=form.original_price,
        stock=form.stock,
        is_new=form.is_new,
        created_at=now,
        updated_at=now,
    )
    product_doc = product.to_document()

    try:
        async with guarded_write("products", "create", form.model_dump()):
            result = await db.products.insert_one(product_doc)
    except PermissionDeniedError as e:
        if isinstance(e.__cause__, DuplicateKeyError):
            raise HTTPException(status_code=400, detail="Product with this name already exists")
        raise

    logger.info("Product created: %s (ID: %s)", product.name, result.inserted_id)
    return ProductResponse.from_document(await db.products.find_one({"_id": result.inserted_id}))


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(product_id: str, form: ProductForm, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Replace the editable fields; rating, reviews and sales are kept"""
    existing = await verify_product_exists(product_id, db)

    update_doc = {
        "name": form.name,
        "slug": create_slug(form.name),
        "description": form.description,
        "category": form.category,
        "images": form.image_list(),
        "price": form.price,
        "original_price": form.original_price,
        "stock": form.stock,
        "is_new": form.is_new,
        "updated_at": utcnow(),
    }

    try:
        async with guarded_write(f"products/{product_id}", "update", form.model_dump()):
            await db.products.update_one({"_id": existing["_id"]}, {"$set": update_doc})
    except PermissionDeniedError as e:
        if isinstance(e.__cause__, DuplicateKeyError):
            raise HTTPException(status_code=400, detail="Product with this name already exists")
        raise

    logger.info("Product updated: %s", product_id)
    return ProductResponse.from_document(await db.products.find_one({"_id": existing["_id"]}))


@router.delete("/products/{product_id}", status_code=204)
async def delete_product(product_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Delete a product"""
    product = await verify_product_exists(product_id, db)

    async with guarded_write(f"products/{product_id}", "delete"):
        await db.products.delete_one({"_id": product["_id"]})

    logger.info("Product deleted: %s", product_id)
    return None


# Users

@router.get("/users", response_model=List[UserProfileResponse])
async def list_users(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Every user profile with its admin flag"""
    users = await db.users.find({}).sort("created_at", DESCENDING).to_list(length=None)
    admin_ids = {flag["_id"] for flag in await db.admins.find({"is_admin": True}).to_list(length=None)}

    return [
        UserProfileResponse(
            id=user["_id"],
            display_name=user.get("display_name"),
            email=user["email"],
            photo_url=user.get("photo_url"),
            is_admin=user["_id"] in admin_ids,
            created_at=user.get("created_at"),
        )
        for user in users
    ]


async def _verify_user_exists(db: AsyncIOMotorDatabase, uid: str) -> dict:
    user = await db.users.find_one({"_id": uid})
    if not user:
        raise HTTPException(status_code=404, detail=f"User {uid} not found")
    return user


@router.put("/users/{uid}/admin", response_model=UserProfileResponse)
async def grant_admin(uid: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    user = await _verify_user_exists(db, uid)
    flag = AdminFlagDocument(_id=uid)

    async with guarded_write(f"admins/{uid}", "write", {"is_admin": True}):
        await db.admins.replace_one({"_id": uid}, flag.to_document(), upsert=True)

    logger.info("Admin granted: %s", uid)
    return UserProfileResponse(
        id=uid, display_name=user.get("display_name"), email=user["email"],
        photo_url=user.get("photo_url"), is_admin=True, created_at=user.get("created_at"),
    )


@router.delete("/users/{uid}/admin", response_model=UserProfileResponse)
async def revoke_admin(
    uid: str,
    admin: UserState = Depends(get_current_admin),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    user = await _verify_user_exists(db, uid)
    if uid == admin.uid:
        raise HTTPException(status_code=400, detail="You cannot remove your own admin access")

    async with guarded_write(f"admins/{uid}", "delete"):
        await db.admins.delete_one({"_id": uid})

    logger.info("Admin revoked: %s", uid)
    return UserProfileResponse(
        id=uid, display_name=user.get("display_name"), email=user["email"],
        photo_url=user.get("photo_url"), is_admin=False, created_at=user.get("created_at"),
    )


# Messages

@router.get("/messages", response_model=List[ContactMessageResponse])
async def list_messages(db: AsyncIOMotorDatabase = Depends(get_database)):
    messages = await db.contacts.find({}).sort("created_at", DESCENDING).to_list(length=None)
    return serialize_docs(messages)


@router.delete("/messages/{message_id}", status_code=204)
async def delete_message(message_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    object_id = validate_object_id(message_id, "message")

    async with guarded_write(f"contacts/{message_id}", "delete"):
        result = await db.contacts.delete_one({"_id": object_id})

    if result.deleted_count == 0:
        raise HTTPException(status_code=404, detail="Message not found")

    logger.info("Contact message deleted: %s", message_id)
    return None
