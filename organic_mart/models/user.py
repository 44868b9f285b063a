"""
User profile and admin-flag documents.

Profiles live in ``users`` keyed by the uid string; admin rights are a
separate ``admins/<uid>`` record with ``is_admin: true``.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class UserProfileDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="User uid")
    display_name: Optional[str] = Field(None, description="Display name")
    email: str = Field(..., description="Login email, stored lowercase")
    photo_url: Optional[str] = Field(None, description="Avatar URL")
    password_hash: str = Field(..., description="passlib hash")
    created_at: Optional[datetime] = None

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)


class AdminFlagDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id", description="User uid")
    is_admin: bool = True

    def to_document(self) -> dict:
        return self.model_dump(by_alias=True)
