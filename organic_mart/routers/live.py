"""
Server-Sent Events streams of live snapshots.

Each stream emits ``snapshot`` events whose data is
``{"data": ..., "loading": bool, "error": str | null}``.
"""
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import StreamingResponse
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from ..auth import UserState, get_current_admin, get_current_user
from ..catalog_data import get_category_by_slug
from ..config.database import get_database
from ..live import sse_events, watch_collection, watch_document, watch_one
from ..utils.dependencies import validate_object_id

router = APIRouter(prefix="/live", tags=["Live"])


def event_stream(snapshots) -> StreamingResponse:
    return StreamingResponse(
        sse_events(snapshots),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "X-Accel-Buffering": "no"},
    )


@router.get("/products")
async def live_products(db: AsyncIOMotorDatabase = Depends(get_database)):
    return event_stream(watch_collection(db.products, sort=[("created_at", DESCENDING)]))


@router.get("/products/{product_id}")
async def live_product(product_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    object_id = validate_object_id(product_id, "product")
    return event_stream(watch_document(db.products, object_id))


@router.get("/categories/{slug}/products")
async def live_category_products(slug: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    category = get_category_by_slug(slug)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Category '{slug}' not found")
    return event_stream(
        watch_collection(db.products, {"category": category["name"]}, sort=[("created_at", DESCENDING)])
    )


@router.get("/wishlist/{product_id}")
async def live_wishlist_status(
    product_id: str,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Wishlist entry for one product; data is null when not wishlisted"""
    return event_stream(watch_one(db.wishlist_items, {"user_id": state.uid, "product_id": product_id}))


@router.get("/orders", dependencies=[Depends(get_current_admin)])
async def live_orders(db: AsyncIOMotorDatabase = Depends(get_database)):
    return event_stream(watch_collection(db.orders, sort=[("created_at", DESCENDING)]))


@router.get("/messages", dependencies=[Depends(get_current_admin)])
async def live_messages(db: AsyncIOMotorDatabase = Depends(get_database)):
    return event_stream(watch_collection(db.contacts, sort=[("created_at", DESCENDING)]))
