"""
Catalog endpoints: product listing, search, category pages and ratings.
"""
import logging
import re
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ASCENDING, DESCENDING

from ..auth import UserState, get_current_user
from ..catalog_data import CATEGORIES, TESTIMONIALS, SITE_CONFIG, get_category_by_slug
from ..config.database import get_database
from ..config.settings import get_settings
from ..schemas import (
    CategoryProductsResponse,
    CategoryResponse,
    ProductResponse,
    ProductSort,
    ProductsListResponse,
    RatingRequest,
)
from ..services.ratings import add_rating
from ..utils.dependencies import verify_product_exists

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Catalog"])

SORT_FIELDS = {
    ProductSort.NEWEST: [("created_at", DESCENDING)],
    ProductSort.BEST_SELLING: [("sales", DESCENDING)],
    ProductSort.PRICE_ASC: [("price", ASCENDING)],
    ProductSort.PRICE_DESC: [("price", DESCENDING)],
}


def name_contains(text: str) -> dict:
    return {"$regex": re.escape(text), "$options": "i"}


@router.get("/site")
async def get_site_config():
    """Store name, contact details and social links"""
    return SITE_CONFIG


@router.get("/categories", response_model=List[CategoryResponse])
async def list_categories():
    return CATEGORIES


@router.get("/testimonials")
async def list_testimonials():
    return TESTIMONIALS


@router.get("/products", response_model=ProductsListResponse)
async def list_products(
    category: Optional[str] = Query(None, description="Filter by category name"),
    q: Optional[str] = Query(None, description="Case-insensitive name search"),
    is_new: Optional[bool] = Query(None, description="Only new (or only not new) products"),
    sort: ProductSort = Query(ProductSort.NEWEST, description="Sort order"),
    limit: int = Query(10, ge=1, le=100, description="Number of products to return"),
    offset: int = Query(0, ge=0, description="Number of products to skip"),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """List products with optional filtering and pagination"""
    try:
        filter_query = {}

        if category:
            filter_query["category"] = category
        if q:
            filter_query["name"] = name_contains(q)
        if is_new is not None:
            filter_query["is_new"] = is_new

        total_count = await db.products.count_documents(filter_query)

        cursor = db.products.find(filter_query).sort(SORT_FIELDS[sort]).skip(offset).limit(limit)
        products = await cursor.to_list(length=limit)

        return ProductsListResponse(
            products=[ProductResponse.from_document(p) for p in products],
            total=total_count,
            limit=limit,
            offset=offset,
            has_more=offset + limit < total_count,
        )

    except Exception as e:
        logger.error("Failed to fetch products: %s", e)
        raise HTTPException(status_code=500, detail=f"Failed to fetch products: {e}")


@router.get("/products/featured", response_model=List[ProductResponse])
async def featured_products(db: AsyncIOMotorDatabase = Depends(get_database)):
    """Best sellers shown on the homepage"""
    limit = get_settings().featured_product_limit
    cursor = db.products.find({}).sort("sales", DESCENDING).limit(limit)
    products = await cursor.to_list(length=limit)
    return [ProductResponse.from_document(p) for p in products]


@router.get("/products/search", response_model=List[ProductResponse])
async def search_products(
    q: str = Query("", description="Search text"),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Search-as-you-type: short queries return nothing"""
    settings = get_settings()
    q = q.strip()
    if len(q) < settings.search_min_length:
        return []

    cursor = db.products.find({"name": name_contains(q)}).sort("name", ASCENDING).limit(settings.search_result_limit)
    products = await cursor.to_list(length=settings.search_result_limit)
    return [ProductResponse.from_document(p) for p in products]


@router.get("/products/slug/{slug}", response_model=ProductResponse)
async def get_product_by_slug(slug: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    product = await db.products.find_one({"slug": slug})
    if not product:
        raise HTTPException(status_code=404, detail=f"Product '{slug}' not found")
    return ProductResponse.from_document(product)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Get a specific product by ID"""
    product = await verify_product_exists(product_id, db)
    return ProductResponse.from_document(product)


@router.post("/products/{product_id}/ratings", response_model=ProductResponse)
async def rate_product(
    product_id: str,
    rating: RatingRequest,
    state: UserState = Depends(get_current_user),
    db: AsyncIOMotorDatabase = Depends(get_database),
):
    """Add a 1-5 star score to the product's rating"""
    updated = await add_rating(db, product_id, rating.score)
    logger.info("User %s rated product %s", state.uid, product_id)
    return ProductResponse.from_document(updated)


@router.get("/categories/{slug}/products", response_model=CategoryProductsResponse)
async def category_products(slug: str, db: AsyncIOMotorDatabase = Depends(get_database)):
    """Products in a category, newest first"""
    category = get_category_by_slug(slug)
    if category is None:
        raise HTTPException(status_code=404, detail=f"Category '{slug}' not found")

    cursor = db.products.find({"category": category["name"]}).sort("created_at", DESCENDING)
    products = await cursor.to_list(length=None)
    return CategoryProductsResponse(
        category=CategoryResponse(**category),
        products=[ProductResponse.from_document(p) for p in products],
    )
