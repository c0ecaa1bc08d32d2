"""
Shared Pydantic schemas used across the application.
"""

from datetime import datetime

from pydantic import BaseModel, Field, EmailStr


# =============================================================================
# Authentication Schemas
# =============================================================================


class RegisterRequest(BaseModel):
    """Owner sign-up body."""

    email: EmailStr
    password: str = Field(min_length=8, max_length=128)
    full_name: str | None = Field(default=None, max_length=200)


class LoginRequest(BaseModel):
    """Login request body."""

    email: EmailStr
    password: str


class UserInfo(BaseModel):
    """Basic user information included in auth responses."""

    id: str
    email: str
    full_name: str | None = None
    created_at: datetime | None = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """Login response with JWT token."""

    access_token: str
    token_type: str = "Bearer"
    expires_in: int  # seconds
    user: UserInfo

