"""
Product API schemas for request/response validation.
These models define the structure of data sent to and from the API.
"""
from enum import Enum
from typing import List, Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from ..catalog_data import category_names
from ..models.product import average_rating
from ..utils.serializers import create_slug, serialize_doc


# Request Schemas

class ProductForm(BaseModel):
    """Admin product create/update form."""
    name: str = Field(..., min_length=3, max_length=200, description="Product name")
    description: str = Field(..., min_length=10, description="Product description")
    price: float = Field(..., ge=0, description="Selling price")
    original_price: Optional[float] = Field(None, ge=0, description="Price before discount")
    stock: int = Field(..., ge=0, description="Available stock")
    category: str = Field(..., description="Category name")
    images: str = Field(..., min_length=10, description="Image URLs, one per line")
    is_new: bool = Field(False, description="Show the 'new' badge")

    @field_validator("category")
    @classmethod
    def validate_category(cls, v):
        valid_categories = category_names()
        if v not in valid_categories:
            raise ValueError(f"Please select a category. Must be one of: {valid_categories}")
        return v

    @field_validator("name")
    @classmethod
    def validate_name_has_slug(cls, v):
        if not create_slug(v).strip("-_"):
            raise ValueError("Name must contain letters or digits usable in the product URL")
        return v

    def image_list(self) -> List[str]:
        """Split the textarea value into trimmed, non-blank lines."""
        return [line.strip() for line in self.images.split("\n") if line.strip()]


class RatingRequest(BaseModel):
    """Request schema for rating a product."""
    score: int = Field(..., ge=1, le=5, description="Star rating from 1 to 5")


class ProductSort(str, Enum):
    NEWEST = "newest"
    BEST_SELLING = "best_selling"
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"


# Response Schemas

class ProductResponse(BaseModel):
    """Response schema for a single product."""
    id: str = Field(..., description="Product ID")
    name: str = Field(..., description="Product name")
    slug: str = Field(..., description="URL slug")
    description: Optional[str] = Field(None, description="Product description")
    category: str = Field(..., description="Category name")
    images: List[str] = Field(default_factory=list, description="Image ids or URLs")
    price: float = Field(..., description="Selling price")
    original_price: Optional[float] = Field(None, description="Price before discount")
    stock: int = Field(0, description="Available stock")
    is_new: bool = Field(False, description="New product badge")
    rating: float = Field(0, description="Sum of rating scores")
    reviews: int = Field(0, description="Number of ratings")
    sales: int = Field(0, description="Units sold")
    average_rating: Optional[float] = Field(None, description="rating / reviews, None when unrated")
    has_discount: bool = Field(False, description="original_price is above price")
    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "ProductResponse":
        data = serialize_doc(doc)
        data.pop("version", None)
        rating = data.get("rating", 0) or 0
        reviews = data.get("reviews", 0) or 0
        original_price = data.get("original_price")
        return cls(
            **data,
            average_rating=average_rating(rating, reviews),
            has_discount=bool(original_price and original_price > data["price"]),
        )


class ProductsListResponse(BaseModel):
    """Response schema for product list with pagination."""
    products: List[ProductResponse] = Field(..., description="List of products")
    total: int = Field(..., description="Total number of products matching filters")
    limit: int = Field(..., description="Number of products returned")
    offset: int = Field(..., description="Number of products skipped")
    has_more: bool = Field(..., description="Whether there are more products available")


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    image: str


class CategoryProductsResponse(BaseModel):
    category: CategoryResponse
    products: List[ProductResponse]
