"""
Schemas package for API request/response validation.
These models define the structure of data sent to and from the API endpoints.
"""

# Product schemas
from .product import (
    ProductForm,
    RatingRequest,
    ProductSort,
    ProductResponse,
    ProductsListResponse,
    CategoryResponse,
    CategoryProductsResponse
)

# Order schemas
from .order import (
    CheckoutForm,
    BuyNowRequest,
    UpdateOrderStatusRequest,
    OrderResponse,
    OrdersListResponse,
    CheckoutResponse
)

# Shop schemas
from .shop import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    CartItemResponse,
    WishlistResponse,
    WishlistStatusResponse,
    ContactRequest,
    ContactMessageResponse
)

# Auth schemas
from .auth import (
    SignupRequest,
    LoginRequest,
    AdminLoginRequest,
    UserProfileResponse,
    TokenResponse
)

# Admin schemas
from .admin import DashboardResponse

# Common schemas
from .common import (
    HealthCheckResponse,
    RootResponse,
    ErrorResponse
)

__all__ = [
    # Product schemas
    "ProductForm",
    "RatingRequest",
    "ProductSort",
    "ProductResponse",
    "ProductsListResponse",
    "CategoryResponse",
    "CategoryProductsResponse",

    # Order schemas
    "CheckoutForm",
    "BuyNowRequest",
    "UpdateOrderStatusRequest",
    "OrderResponse",
    "OrdersListResponse",
    "CheckoutResponse",

    # Shop schemas
    "AddToCartRequest",
    "CartLineResponse",
    "CartResponse",
    "CartItemResponse",
    "WishlistResponse",
    "WishlistStatusResponse",
    "ContactRequest",
    "ContactMessageResponse",

    # Auth schemas
    "SignupRequest",
    "LoginRequest",
    "AdminLoginRequest",
    "UserProfileResponse",
    "TokenResponse",

    # Admin schemas
    "DashboardResponse",

    # Common schemas
    "HealthCheckResponse",
    "RootResponse",
    "ErrorResponse"
]
