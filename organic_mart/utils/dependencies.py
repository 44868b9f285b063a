"""
Lookup helpers shared by the routers: id validation and existence checks
"""
import logging
from typing import Any, Dict, List

from bson import ObjectId
from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase

logger = logging.getLogger(__name__)


def validate_object_id(object_id: str, resource_name: str = "resource") -> ObjectId:
    """
    Validate and convert string to ObjectId

    Args:
        object_id: String representation of ObjectId
        resource_name: Name of the resource for error messages

    Returns:
        Valid ObjectId instance

    Raises:
        HTTPException: If ObjectId format is invalid
    """
    if not ObjectId.is_valid(object_id):
        raise HTTPException(
            status_code=400,
            detail=f"Invalid {resource_name} ID format: {object_id}"
        )
    return ObjectId(object_id)


async def verify_product_exists(product_id: str, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Verify that a product exists in the database

    Args:
        product_id: Product ID to verify
        db: Database instance

    Returns:
        Product document if found

    Raises:
        HTTPException: If product is not found or ID is invalid
    """
    object_id = validate_object_id(product_id, "product")

    product = await db.products.find_one({"_id": object_id})
    if not product:
        raise HTTPException(
            status_code=404,
            detail=f"Product {product_id} not found"
        )

    return product


async def verify_order_exists(order_id: str, db: AsyncIOMotorDatabase) -> Dict[str, Any]:
    """
    Verify that an order exists in the database

    Raises:
        HTTPException: If order is not found or ID is invalid
    """
    object_id = validate_object_id(order_id, "order")

    order = await db.orders.find_one({"_id": object_id})
    if not order:
        raise HTTPException(
            status_code=404,
            detail=f"Order {order_id} not found"
        )

    return order


async def fetch_products_by_ids(product_ids: List[str], db: AsyncIOMotorDatabase) -> Dict[str, Dict[str, Any]]:
    """
    Resolve product references held by cart and wishlist items

    Unlike ``verify_product_exists`` this never raises for missing products:
    references to deleted products are simply absent from the result, and
    malformed ids are ignored.

    Returns:
        Dictionary mapping product_id -> product document
    """
    object_ids = [ObjectId(pid) for pid in set(product_ids) if ObjectId.is_valid(pid)]
    if not object_ids:
        return {}

    cursor = db.products.find({"_id": {"$in": object_ids}})
    found_products = await cursor.to_list(length=None)

    product_map = {str(product["_id"]): product for product in found_products}

    missing_products = set(product_ids) - set(product_map.keys())
    if missing_products:
        logger.warning("Dangling product references: %s", ", ".join(sorted(missing_products)))

    return product_map
