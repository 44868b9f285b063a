"""
Per-user shopping documents and contact messages.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class CartItemDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    user_id: str
    product_id: str
    quantity: int = Field(1, gt=0)
    added_at: Optional[datetime] = None

    def to_document(self) -> dict:
        return self.model_dump(exclude={"id"})


class WishlistItemDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    user_id: str
    product_id: str
    added_at: Optional[datetime] = None

    def to_document(self) -> dict:
        return self.model_dump(exclude={"id"})


class ContactMessageDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = Field(None, alias="_id")
    name: str
    email: str
    phone: Optional[str] = None
    subject: str
    message: str
    created_at: Optional[datetime] = None

    def to_document(self) -> dict:
        return self.model_dump(exclude={"id"})
