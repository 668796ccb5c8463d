"""
Contact message schemas for request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class ContactCreate(BaseModel):
    """Final payload of the public contact wizard."""

    name: str = Field(..., min_length=1, max_length=120)
    email: Optional[str] = Field(default=None, max_length=255, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    country: Optional[str] = Field(default=None, max_length=100)
    company: Optional[str] = Field(default=None, max_length=200)
    message: Optional[str] = Field(default=None, max_length=5000)


class ContactRead(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    country: Optional[str] = None
    company: Optional[str] = None
    message: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ContactListResponse(BaseModel):
    contacts: list[ContactRead]
    total: int
