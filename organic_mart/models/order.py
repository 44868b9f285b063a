"""
Order data models for database documents.
These represent the actual structure of documents stored in MongoDB.
"""
from enum import Enum
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    PENDING = "Pending"
    PROCESSING = "Processing"
    SHIPPED = "Shipped"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


class PaymentMethod(str, Enum):
    COD = "cod"
    BKASH = "bkash"
    NAGAD = "nagad"
    ROCKET = "rocket"


class OrderDocument(BaseModel):
    """
    One order line as stored in MongoDB.

    Checkout writes one document per cart line. ``user_id`` is None for
    guest orders placed from a product page.
    """
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    id: Optional[str] = Field(None, alias="_id", description="Order ID")
    product_id: Optional[str] = Field(None, description="Ordered product reference")
    product_name: str = Field(..., min_length=1, description="Product name at time of order")
    quantity: int = Field(..., gt=0, description="Quantity ordered")
    total_price: float = Field(..., ge=0, description="Price * quantity at time of order")

    customer_name: str = Field(..., description="Customer full name")
    address: str = Field(..., description="Delivery address")
    phone: str = Field(..., description="Customer mobile number")
    payment_method: PaymentMethod = Field(..., description="Payment method")

    status: OrderStatus = Field(default=OrderStatus.PENDING.value, description="Order status")
    user_id: Optional[str] = Field(None, description="Ordering user, None for guests")

    created_at: Optional[datetime] = Field(None, description="Order creation timestamp")
    updated_at: Optional[datetime] = Field(None, description="Last update timestamp")

    def to_document(self) -> dict:
        return self.model_dump(exclude={"id"})
