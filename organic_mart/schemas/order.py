"""
Order API schemas for request/response validation.
These models define the structure of data sent to and from the API.
"""
import re
from typing import List, Optional, Dict, Any
from datetime import datetime
from pydantic import BaseModel, Field, field_validator

from ..models.order import OrderStatus, PaymentMethod
from ..utils.serializers import serialize_doc

# Bangladeshi mobile numbers: 01, operator digit 3-9, eight more digits
BD_MOBILE_PATTERN = re.compile(r"^01[3-9]\d{8}$")


# Request Schemas

class CheckoutForm(BaseModel):
    """Delivery details collected for cart checkout and buy-now orders."""
    name: str = Field(..., min_length=2, description="Customer full name")
    address: str = Field(..., min_length=10, description="Delivery address")
    phone: str = Field(..., description="Bangladeshi mobile number")
    payment_method: PaymentMethod = Field(PaymentMethod.COD, description="Payment method")

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v):
        v = v.strip()
        if not BD_MOBILE_PATTERN.match(v):
            raise ValueError("Please enter a valid Bangladeshi mobile number.")
        return v


class BuyNowRequest(BaseModel):
    """Single-product order placed straight from the product page."""
    product_id: str = Field(..., description="Product ID")
    quantity: int = Field(1, ge=1, description="Quantity ordered")
    form: CheckoutForm


class UpdateOrderStatusRequest(BaseModel):
    """Request schema for updating order status."""
    status: OrderStatus = Field(..., description="New order status")


# Response Schemas

class OrderResponse(BaseModel):
    """Response schema for a single order."""
    id: str = Field(..., description="Order ID")
    product_id: Optional[str] = Field(None, description="Product ID")
    product_name: str = Field(..., description="Product name at time of order")
    quantity: int = Field(..., description="Quantity ordered")
    total_price: float = Field(..., description="Order line total")
    customer_name: str = Field(..., description="Customer name")
    address: str = Field(..., description="Delivery address")
    phone: str = Field(..., description="Customer phone")
    payment_method: str = Field(..., description="Payment method")
    status: str = Field(..., description="Order status")
    user_id: Optional[str] = Field(None, description="User ID, None for guest orders")
    created_at: Optional[datetime] = Field(None, description="Order creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "OrderResponse":
        return cls(**serialize_doc(doc))


class OrdersListResponse(BaseModel):
    """Response schema for order list with pagination."""
    orders: List[OrderResponse] = Field(..., description="List of orders")
    total: int = Field(..., description="Total number of orders matching filters")
    limit: int = Field(..., description="Number of orders returned")
    offset: int = Field(..., description="Number of orders skipped")
    has_more: bool = Field(..., description="Whether there are more orders available")


class CheckoutResponse(BaseModel):
    """Orders created from a cart checkout."""
    success: bool = True
    message: str = Field(..., description="Confirmation message for the customer")
    orders: List[OrderResponse]
    total: float = Field(..., description="Sum of all created order totals")
