"""
Admin schemas for request/response validation.

This module defines Pydantic models for the admin identity and for the
two-step (password, then one-time code) login exchange.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class AdminBase(BaseModel):
    """Base admin schema with common fields."""

    email: str = Field(
        ...,
        min_length=3,
        max_length=255,
        description="Admin login e-mail",
        examples=["owner@example.com"]
    )


class AdminCreate(AdminBase):
    """Schema for creating a new admin account."""

    password: str = Field(
        ...,
        min_length=8,
        max_length=100,
        description="Admin password (minimum 8 characters)",
        examples=["SecurePassword123!"]
    )

    is_active: bool = Field(
        default=True,
        description="Whether the admin account should be active"
    )


class AdminRead(AdminBase):
    """Schema for reading admin account information."""

    id: int = Field(..., description="Unique identifier for the admin")
    is_active: bool = Field(..., description="Whether the admin account is active")
    created_at: datetime = Field(..., description="When the admin account was created")

    model_config = ConfigDict(from_attributes=True)


# Login-related schemas
class AdminLogin(BaseModel):
    """Schema for the password step."""

    email: str = Field(
        ...,
        max_length=255,
        description="Admin e-mail",
        examples=["owner@example.com"]
    )

    password: str = Field(
        ...,
        max_length=200,
        description="Admin password",
        examples=["SecurePassword123!"]
    )


class AdminLoginResponse(BaseModel):
    """Password accepted; the caller proceeds to code entry."""

    success: bool = Field(default=True)
    next: str = Field(default="otp", description="Next login step")
    email: str = Field(..., description="Where the code was sent")
    expires_at: datetime = Field(..., description="When the code stops being accepted (UTC)")
    dev_code: Optional[str] = Field(
        default=None,
        description="The code itself; only in development with delivery bypass enabled"
    )


class OtpVerify(BaseModel):
    """Schema for the one-time-code step."""

    code: str = Field(
        ...,
        min_length=1,
        max_length=12,
        description="The 6-digit code received by e-mail",
        examples=["004217"]
    )


class OtpVerifyResponse(BaseModel):
    success: bool = Field(default=True)
    redirect_to: str = Field(..., description="Where to go now that the admin is signed in")
    admin: AdminRead


class LogoutResponse(BaseModel):
    success: bool = Field(default=True)
    redirect_to: str


class SessionStateResponse(BaseModel):
    """Current state of the caller's session."""

    state: str = Field(..., description="anonymous, otp_pending or authenticated")
    email: Optional[str] = Field(default=None, description="Pending or signed-in admin e-mail")
    expires_at: Optional[datetime] = Field(default=None, description="Code expiry while otp_pending")
