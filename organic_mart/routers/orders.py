"""
Buy-now orders and the signed-in customer's account.
"""
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from ..auth import UserState, get_current_user, get_optional_user, profile_payload
from ..config.database import get_database
from ..schemas import (
    BuyNowRequest,
    OrderResponse,
    OrdersListResponse,
    UserProfileResponse,
)
from ..services.checkout import place_order

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Orders"])


@router.post("/orders", status_code=201, response_model=OrderResponse)
async def buy_now(
    body: BuyNowRequest,
    state: Optional[UserState] = Depends(get_optional_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Order one product directly; guests may order without an account"""
    order = await place_order(
        db,
        body.product_id,
        body.quantity,
        body.form,
        user_id=state.uid if state else None,
    )
    return OrderResponse.from_document(order)


@router.get("/account/me", response_model=UserProfileResponse, tags=["Account"])
async def get_me(state: UserState = Depends(get_current_user)):
    return profile_payload(state)


@router.get("/account/orders", response_model=OrdersListResponse, tags=["Account"])
async def get_my_orders(
    limit: int = Query(10, ge=1, le=100, description="Number of orders to return"),
    offset: int = Query(0, ge=0, description="Number of orders to skip"),
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """The signed-in user's orders, newest first"""
    filter_query = {"user_id": state.uid}

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
