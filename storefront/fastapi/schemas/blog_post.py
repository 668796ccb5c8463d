"""
Blog post schemas for request/response validation.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class BlogPostBase(BaseModel):
    """Base blog post schema with common fields."""

    title: str = Field(..., min_length=1, max_length=250)
    excerpt: Optional[str] = Field(default=None, max_length=500)
    html: Optional[str] = None
    image: Optional[str] = Field(default=None, max_length=500)
    tag_slug: Optional[str] = Field(default=None, max_length=100)
    tag_name: Optional[str] = Field(default=None, max_length=100)
    read_mins: Optional[int] = Field(default=None, ge=0, le=600)
    published_at: Optional[datetime] = Field(
        default=None,
        description="Publication time (UTC); leave empty to keep the post a draft"
    )


class BlogPostCreate(BlogPostBase):
    slug: Optional[str] = Field(default=None, max_length=200, description="Defaults to one derived from the title")


class BlogPostUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=250)
    slug: Optional[str] = Field(None, max_length=200)
    excerpt: Optional[str] = Field(None, max_length=500)
    html: Optional[str] = None
    image: Optional[str] = Field(None, max_length=500)
    tag_slug: Optional[str] = Field(None, max_length=100)
    tag_name: Optional[str] = Field(None, max_length=100)
    read_mins: Optional[int] = Field(None, ge=0, le=600)
    published_at: Optional[datetime] = None


class BlogPostRead(BlogPostBase):
    id: int
    slug: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class BlogPostListResponse(BaseModel):
    posts: list[BlogPostRead]
    total: int
