"""
Models package for database document structures.
These models represent how data is stored in MongoDB.
"""
from .product import ProductDocument, average_rating
from .order import OrderDocument, OrderStatus, PaymentMethod
from .user import UserProfileDocument, AdminFlagDocument
from .shop import CartItemDocument, WishlistItemDocument, ContactMessageDocument

__all__ = [
    # Product models
    "ProductDocument",
    "average_rating",

    # Order models
    "OrderDocument",
    "OrderStatus",
    "PaymentMethod",

    # User models
    "UserProfileDocument",
    "AdminFlagDocument",

    # Shop models
    "CartItemDocument",
    "WishlistItemDocument",
    "ContactMessageDocument",
]
