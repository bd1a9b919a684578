"""
Pydantic schemas for User authentication and registration.
"""

from pydantic import BaseModel
from typing import Optional


class UserRegisterRequest(BaseModel):
    """Request schema for user registration."""
    email: Optional[str] = None
    password: Optional[str] = None


class UserLoginRequest(BaseModel):
    """Request schema for user login."""
    email: Optional[str] = None
    password: Optional[str] = None


class TokenResponse(BaseModel):
    """JWT token response."""
    token: str


class UserResponse(BaseModel):
    """User profile response (no sensitive data)."""
    id: int
    email: str

    class Config:
        from_attributes = True
