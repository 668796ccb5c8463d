"""
Recycle bin schemas.
"""

from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict


class RecycleBinEntryRead(BaseModel):
    id: int
    entity_type: str
    original_id: Optional[int] = None
    name: Optional[str] = None
    deleted_by: Optional[str] = None
    deleted_at: datetime

    model_config = ConfigDict(from_attributes=True)


class RecycleBinEntryDetail(RecycleBinEntryRead):
    payload: dict[str, Any] = Field(default_factory=dict)


class RecycleBinListResponse(BaseModel):
    items: list[RecycleBinEntryRead]
    total: int


class SoftDeleteResponse(BaseModel):
    """Result of a soft delete; ``archive_id`` is None when nothing was deleted."""

    success: bool = True
    deleted: bool
    archive_id: Optional[int] = None
    redirect_to: str


class RecycleActionResponse(BaseModel):
    """Result of a restore or purge. Stale ids are a no-op, not an error."""

    success: bool = True
    action: str = Field(..., description="restored, purged or noop")
    archive_id: int
    entity_type: Optional[str] = None
    entity_id: Optional[int] = None
    slug: Optional[str] = None
    redirect_to: str = "/admin/recycle"
