"""
Testimonial endpoints: public submission and display, admin moderation.
"""

from datetime import datetime
from typing import Callable, Literal
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import EntityNotFound
from storefront.fastapi.crud.testimonial import TestimonialCRUD
from storefront.fastapi.dependencies.database import get_sync_db
from storefront.fastapi.models.recycle_bin import EntityType
from storefront.fastapi.schemas.recycle_bin import SoftDeleteResponse
from storefront.fastapi.schemas.testimonial import (
    TestimonialCreate, TestimonialRead, TestimonialStatusUpdate, TestimonialListResponse
)
from storefront.fastapi.services.archival import ArchivalService
from storefront.security.dependencies import RequireAdmin, get_archival_service, get_clock
from storefront.security.session import AdminIdentityRef


router = APIRouter(tags=["testimonials"])
admin_router = APIRouter(tags=["admin-testimonials"])


@router.get("", response_model=TestimonialListResponse, summary="List Approved Testimonials")
async def list_public_testimonials(
    limit: int = Query(50, ge=1, le=200),
    db: Session = Depends(get_sync_db)
):
    crud = TestimonialCRUD(db)
    rows = crud.get_testimonials(status="approved", limit=limit)
    return TestimonialListResponse(
        testimonials=[TestimonialRead(**row) for row in rows],
        total=crud.count_testimonials(status="approved")
    )


@router.post("", response_model=TestimonialRead, status_code=status.HTTP_201_CREATED, summary="Submit Testimonial")
async def submit_testimonial(
    testimonial: TestimonialCreate,
    db: Session = Depends(get_sync_db),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    """Public submission. It is only shown once an admin approves it."""
    row = TestimonialCRUD(db).create_testimonial(
        name=testimonial.name,
        rating=testimonial.rating,
        comment=testimonial.comment,
        now=clock()
    )
    return TestimonialRead(**row)


@admin_router.get("", response_model=TestimonialListResponse, summary="List Testimonials (Admin)")
async def list_testimonials(
    status_filter: Literal["all", "pending", "approved", "rejected"] = Query("all", alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    """
    List testimonials for moderation.

    **Parameters:**
    - **status**: all, pending, approved or rejected. Schemas that moderate
      with a boolean `approved` column have no rejected testimonials.
    """
    crud = TestimonialCRUD(db)
    rows = crud.get_testimonials(status=status_filter, skip=skip, limit=limit)
    return TestimonialListResponse(
        testimonials=[TestimonialRead(**row) for row in rows],
        total=crud.count_testimonials(status=status_filter)
    )


@admin_router.post("/{testimonial_id}/status", response_model=TestimonialRead, summary="Moderate Testimonial")
async def set_testimonial_status(
    testimonial_id: int,
    update: TestimonialStatusUpdate,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    row = TestimonialCRUD(db).set_status(testimonial_id, update.status)
    if row is None:
        raise EntityNotFound("Testimonial not found")
    return TestimonialRead(**row)


@admin_router.delete("/{testimonial_id}", response_model=SoftDeleteResponse, summary="Delete Testimonial")
async def delete_testimonial(
    testimonial_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    archival: ArchivalService = Depends(get_archival_service)
):
    entry = archival.archive_and_delete(EntityType.TESTIMONIALS, testimonial_id, actor_label=admin.email)
    return SoftDeleteResponse(
        deleted=entry is not None,
        archive_id=entry.id if entry else None,
        redirect_to="/admin/testimonials"
    )
