"""
Common schemas used across the API.
"""
from typing import Any, Optional
from pydantic import BaseModel, Field


class HealthCheckResponse(BaseModel):
    """Response schema for health check endpoint."""
    status: str = Field(..., description="Application health status")
    database: str = Field(..., description="Database connection status")
    timestamp: str = Field(..., description="Health check timestamp")
    version: str = Field(..., description="Application version")


class RootResponse(BaseModel):
    """Response schema for root endpoint."""
    message: str = Field(..., description="Welcome message")
    version: str = Field(..., description="API version")
    docs: str = Field(..., description="Documentation URL")
    health: str = Field(..., description="Health check URL")
    status: str = Field(..., description="Application status")
    timestamp: str = Field(..., description="Response timestamp")


class ErrorResponse(BaseModel):
    """Generic error response schema."""
    error: str = Field(..., description="Error type")
    message: str = Field(..., description="Human-readable error message")
    detail: Optional[Any] = Field(None, description="Additional error details")
