"""
Authentication and user profile schemas.
"""
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, EmailStr, Field


class SignupRequest(BaseModel):
    display_name: str = Field(..., min_length=2, description="Display name")
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password, at least 6 characters")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1, description="Password")


class AdminLoginRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6, description="Password")


class UserProfileResponse(BaseModel):
    id: str = Field(..., description="User uid")
    display_name: Optional[str] = None
    email: str
    photo_url: Optional[str] = None
    is_admin: bool = False
    created_at: Optional[datetime] = None


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserProfileResponse
