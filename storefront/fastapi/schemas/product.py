"""
Product schemas for request/response validation.
"""

from datetime import datetime
from typing import Any, Optional, Union
from pydantic import BaseModel, Field, ConfigDict


class ProductBase(BaseModel):
    """Base product schema with common fields."""

    name: str = Field(..., min_length=1, max_length=200, examples=["Sandalwood Incense"])
    category: str = Field(default="Uncategorized", max_length=100)
    short_desc: Optional[str] = Field(default="", max_length=500)
    description: Optional[str] = Field(default="")
    image: Optional[str] = Field(default=None, max_length=500, description="Public image path or URL")
    active: bool = Field(default=True, description="Shown on the public pages")


class ProductCreate(ProductBase):
    """Schema for creating a product. The slug defaults to one derived from the name."""

    slug: Optional[str] = Field(default=None, max_length=200, examples=["sandalwood-incense"])
    specs: Optional[Union[dict, str]] = Field(
        default=None,
        description="JSON object, or one 'key: value' pair per line"
    )


class ProductUpdate(BaseModel):
    """Schema for updating a product; only provided fields change."""

    name: Optional[str] = Field(None, min_length=1, max_length=200)
    slug: Optional[str] = Field(None, max_length=200)
    category: Optional[str] = Field(None, max_length=100)
    short_desc: Optional[str] = Field(None, max_length=500)
    description: Optional[str] = None
    specs: Optional[Union[dict, str]] = None
    image: Optional[str] = Field(None, max_length=500)
    active: Optional[bool] = None


class ProductRead(ProductBase):
    id: int
    slug: str
    specs: Optional[dict[str, Any]] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ProductListResponse(BaseModel):
    products: list[ProductRead]
    total: int
