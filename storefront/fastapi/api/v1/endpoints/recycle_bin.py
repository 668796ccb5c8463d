"""
Recycle bin endpoints.

Restore re-creates the archived entity (new id, slug made unique if needed)
and consumes the archive entry; purge drops the entry for good. Both treat an
id that is already gone as a no-op so double submissions are harmless.
"""

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.fastapi.core.config import Settings
from storefront.fastapi.core.exceptions import ArchiveNotFound, EntityNotFound
from storefront.fastapi.crud.recycle_bin import RecycleBinCRUD
from storefront.fastapi.dependencies.database import get_sync_db
from storefront.fastapi.schemas.recycle_bin import (
    RecycleBinEntryRead, RecycleBinEntryDetail, RecycleBinListResponse, RecycleActionResponse
)
from storefront.fastapi.services.restoration import RestorationService, load_payload
from storefront.security.dependencies import RequireAdmin, get_restoration_service, get_settings
from storefront.security.session import AdminIdentityRef

logger = logging.getLogger(__name__)

router = APIRouter(tags=["admin-recycle-bin"])


@router.get("", response_model=RecycleBinListResponse, summary="List Recycle Bin")
async def list_recycle_bin(
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db),
    settings: Settings = Depends(get_settings)
):
    """Most recently deleted first, capped at the configured list limit."""
    crud = RecycleBinCRUD(db)
    entries = crud.list_archive(limit=settings.RECYCLE_LIST_LIMIT)
    return RecycleBinListResponse(
        items=[RecycleBinEntryRead.model_validate(e) for e in entries],
        total=crud.count_archive()
    )


@router.get("/{archive_id}", response_model=RecycleBinEntryDetail, summary="Get Archived Entry")
async def get_recycle_entry(
    archive_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    entry = RecycleBinCRUD(db).find_archive_by_id(archive_id)
    if entry is None:
        raise EntityNotFound("Archive entry not found")
    summary = RecycleBinEntryRead.model_validate(entry)
    return RecycleBinEntryDetail(**summary.model_dump(), payload=load_payload(entry.payload))


@router.post("/{archive_id}/restore", response_model=RecycleActionResponse, summary="Restore Archived Entry")
async def restore_entry(
    archive_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    service: RestorationService = Depends(get_restoration_service)
):
    """
    Restore an archived entity.

    **Returns:**
    - **action**: `restored`, or `noop` when the entry no longer exists
    - **entity_id**: id of the re-created row (not the original id)
    - **slug**: final slug for products and blog posts

    **Errors:**
    - **409**: No free slug could be found
    - **422**: Entry holds an unsupported entity type
    """
    try:
        result = service.restore(archive_id)
    except ArchiveNotFound:
        logger.info("Restore of recycle_bin id=%s skipped: entry already gone", archive_id)
        return RecycleActionResponse(action="noop", archive_id=archive_id)

    logger.info("Admin admin_id=%s restored recycle_bin id=%s", admin.id, archive_id)
    return RecycleActionResponse(
        action="restored",
        archive_id=archive_id,
        entity_type=result.entity_type.value,
        entity_id=result.entity_id,
        slug=result.slug
    )


@router.delete("/{archive_id}", response_model=RecycleActionResponse, summary="Purge Archived Entry")
async def purge_entry(
    archive_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    service: RestorationService = Depends(get_restoration_service)
):
    """Permanently discard an archive entry. Purging a missing id is a no-op."""
    removed = service.purge(archive_id)
    return RecycleActionResponse(action="purged" if removed else "noop", archive_id=archive_id)
