"""
Per-user wishlist.
"""
import logging

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo.errors import DuplicateKeyError

from ..auth import UserState, get_current_user
from ..config.database import get_database
from ..models.shop import WishlistItemDocument
from ..schemas import ProductResponse, WishlistResponse, WishlistStatusResponse
from ..utils.dependencies import fetch_products_by_ids, verify_product_exists
from ..utils.serializers import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/wishlist", tags=["Wishlist"])


async def _add(db: AsyncIOMotorDatabase, user_id: str, product_id: str) -> None:
    item = WishlistItemDocument(user_id=user_id, product_id=product_id, added_at=utcnow())
    try:
        await db.wishlist_items.update_one(
            {"user_id": user_id, "product_id": product_id},
            {"$setOnInsert": item.to_document()},
            upsert=True,
        )
    except DuplicateKeyError:
        # a concurrent request inserted the same entry first
        logger.debug("Product %s already in wishlist of %s", product_id, user_id)


async def _remove(db: AsyncIOMotorDatabase, user_id: str, product_id: str) -> bool:
    result = await db.wishlist_items.delete_one({"user_id": user_id, "product_id": product_id})
    return result.deleted_count > 0


@router.get("", response_model=WishlistResponse)
async def get_wishlist(
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    cursor = db.wishlist_items.find({"user_id": state.uid}).sort("added_at", -1)
    items = await cursor.to_list(length=None)
    product_ids = [item["product_id"] for item in items]
    products = await fetch_products_by_ids(product_ids, db)

    ordered = [ProductResponse.from_document(products[pid]) for pid in product_ids if pid in products]
    return WishlistResponse(products=ordered, count=len(ordered))


@router.get("/{product_id}", response_model=WishlistStatusResponse)
async def wishlist_status(
    product_id: str,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    item = await db.wishlist_items.find_one({"user_id": state.uid, "product_id": product_id})
    return WishlistStatusResponse(product_id=product_id, in_wishlist=item is not None)


@router.put("/{product_id}", response_model=WishlistStatusResponse)
async def add_to_wishlist(
    product_id: str,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    await verify_product_exists(product_id, db)
    await _add(db, state.uid, product_id)
    logger.info("Added product %s to wishlist of %s", product_id, state.uid)
    return WishlistStatusResponse(product_id=product_id, in_wishlist=True)


@router.delete("/{product_id}", response_model=WishlistStatusResponse)
async def remove_from_wishlist(
    product_id: str,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    await _remove(db, state.uid, product_id)
    return WishlistStatusResponse(product_id=product_id, in_wishlist=False)


@router.post("/{product_id}/toggle", response_model=WishlistStatusResponse)
async def toggle_wishlist(
    product_id: str,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Remove the product if wishlisted, add it otherwise"""
    if await _remove(db, state.uid, product_id):
        return WishlistStatusResponse(product_id=product_id, in_wishlist=False)

    await verify_product_exists(product_id, db)
    await _add(db, state.uid, product_id)
    return WishlistStatusResponse(product_id=product_id, in_wishlist=True)
