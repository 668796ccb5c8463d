"""
Testimonial schemas for request/response validation.
"""

from datetime import datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field

ModerationStatus = Literal["pending", "approved", "rejected"]


class TestimonialCreate(BaseModel):
    """Public submission; lands as pending."""

    name: str = Field(..., min_length=1, max_length=120)
    rating: int = Field(default=5, ge=1, le=5)
    comment: str = Field(..., min_length=1, max_length=2000)


class TestimonialRead(BaseModel):
    id: int
    name: str
    rating: int
    comment: Optional[str] = None
    status: ModerationStatus
    created_at: Optional[datetime] = None


class TestimonialStatusUpdate(BaseModel):
    status: ModerationStatus


class TestimonialListResponse(BaseModel):
    testimonials: list[TestimonialRead]
    total: int
