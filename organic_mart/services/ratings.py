"""
Product rating transaction.

``rating`` (sum of scores) and ``reviews`` (count) must move together, so the
update is a read-modify-write guarded by the product's ``version`` field: the
write only applies if nobody else bumped ``version`` since the read.
"""
import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from ..config.settings import get_settings
from ..errors import RatingConflictError
from ..utils.dependencies import validate_object_id
from ..utils.serializers import utcnow

logger = logging.getLogger(__name__)


async def add_rating(
    db: AsyncIOMotorDatabase,
    product_id: str,
    score: int,
    max_retries: Optional[int] = None,
) -> Dict[str, Any]:
    """Add ``score`` to the product's rating aggregate and return the updated product."""
    if max_retries is None:
        max_retries = get_settings().rating_max_retries
    object_id = validate_object_id(product_id, "product")

    for attempt in range(1, max_retries + 1):
        product = await db.products.find_one({"_id": object_id})
        if not product:
            raise HTTPException(status_code=404, detail=f"Product {product_id} not found")

        version = product.get("version", 0)
        version_filter: Dict[str, Any] = {"version": version} if "version" in product else {"version": {"$exists": False}}

        updated = await db.products.find_one_and_update(
            {"_id": object_id, **version_filter},
            {
                "$set": {
                    "rating": (product.get("rating") or 0) + score,
                    "reviews": (product.get("reviews") or 0) + 1,
                    "version": version + 1,
                    "updated_at": utcnow(),
                }
            },
            return_document=ReturnDocument.AFTER,
        )
        if updated is not None:
            logger.info("Product %s rated %s (attempt %s)", product_id, score, attempt)
            return updated

        logger.warning("Rating conflict on product %s, attempt %s of %s", product_id, attempt, max_retries)

    raise RatingConflictError(product_id, max_retries)
