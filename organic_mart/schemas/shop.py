"""
Cart, wishlist, account and contact schemas.
"""
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field

from .product import ProductResponse


class AddToCartRequest(BaseModel):
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(1, ge=1, le=100, description="Quantity to add")


class CartLineResponse(BaseModel):
    cart_item_id: str = Field(..., description="Cart item ID")
    product: ProductResponse
    quantity: int
    line_total: float = Field(..., description="price * quantity")


class CartResponse(BaseModel):
    items: List[CartLineResponse]
    total: float = Field(..., description="Sum of line totals")
    count: int = Field(..., description="Number of cart lines")


class CartItemResponse(BaseModel):
    id: str
    product_id: str
    quantity: int
    added_at: Optional[datetime] = None


class WishlistResponse(BaseModel):
    products: List[ProductResponse]
    count: int


class WishlistStatusResponse(BaseModel):
    product_id: str
    in_wishlist: bool


class ContactRequest(BaseModel):
    """Contact form."""
    name: str = Field(..., min_length=2, description="Sender name")
    email: EmailStr = Field(..., description="Reply-to email")
    phone: Optional[str] = Field(None, description="Optional phone")
    subject: str = Field(..., min_length=5, description="Message subject")
    message: str = Field(..., min_length=10, description="Message body")


class ContactMessageResponse(BaseModel):
    id: str
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    created_at: Optional[datetime] = None
