"""
Product data models for database documents.
These represent the actual structure of documents stored in MongoDB.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ProductDocument(BaseModel):
    """
    Product document model representing the MongoDB document structure.

    ``rating`` is the running sum of every score submitted and ``reviews`` the
    number of scores, so the displayed average is ``rating / reviews``.
    ``version`` guards the rating read-modify-write transaction.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id", description="Product ID")
    name: str = Field(..., min_length=1, max_length=200, description="Product name")
    slug: str = Field(..., min_length=1, description="URL slug derived from the name")
    description: str = Field("", description="Product description")
    category: str = Field(..., min_length=1, description="Category name")
    images: List[str] = Field(default_factory=list, description="Image ids or URLs")

    price: float = Field(..., ge=0, description="Current selling price")
    original_price: Optional[float] = Field(None, ge=0, description="Price before discount")
    stock: int = Field(0, ge=0, description="Available stock")
    is_new: bool = Field(False, description="Shown with a 'new' badge")

    rating: float = Field(0, ge=0, description="Sum of all rating scores")
    reviews: int = Field(0, ge=0, description="Number of rating scores")
    sales: int = Field(0, ge=0, description="Units sold, used for best-seller ordering")
    version: int = Field(0, ge=0, description="Optimistic concurrency counter")

    created_at: Optional[datetime] = Field(None, description="Creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    def to_document(self) -> dict:
        """Dump to the dict stored in MongoDB (no ``_id``)."""
        return self.model_dump(exclude={"id"})


def average_rating(rating: float, reviews: int) -> Optional[float]:
    """Average score rounded to one decimal, or None when unrated."""
    if reviews <= 0:
        return None
    return round(rating / reviews, 1)
