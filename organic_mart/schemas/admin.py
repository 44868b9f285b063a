"""
Back-office response schemas.
"""
from typing import List
from pydantic import BaseModel, Field

from .order import OrderResponse


class DashboardResponse(BaseModel):
    total_orders: int
    pending_orders: int
    total_revenue: float = Field(..., description="Sum of totals of orders that are not cancelled")
    total_products: int
    total_users: int
    recent_orders: List[OrderResponse]
