# src/loop_forum/schemas/user.py
"""User and authentication Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class SignupRequest(BaseModel):
    """Schema for registering a new account."""

    username: str = Field(..., max_length=50, description="Public handle")
    email: EmailStr = Field(..., description="Login email address")
    password: str = Field(..., max_length=128, description="Plain-text password")


class LoginRequest(BaseModel):
    """Schema for exchanging credentials for an access token."""

    email: EmailStr
    password: str


class UserResponse(BaseModel):
    """Public view of a user account."""

    id: int
    username: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AuthResponse(BaseModel):
    """Access token plus the authenticated user."""

    token: str
    token_type: str = "bearer"
    user: UserResponse


class VerifyResponse(BaseModel):
    """Result of validating the caller's token."""

    user: UserResponse
