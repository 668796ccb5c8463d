"""
Contact (lead) endpoints.
"""

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import EntityNotFound
from storefront.fastapi.crud.contact import ContactCRUD
from storefront.fastapi.dependencies.database import get_sync_db
from storefront.fastapi.models.recycle_bin import EntityType
from storefront.fastapi.schemas.contact import ContactCreate, ContactRead, ContactListResponse
from storefront.fastapi.schemas.recycle_bin import SoftDeleteResponse
from storefront.fastapi.services.archival import ArchivalService
from storefront.security.dependencies import RequireAdmin, get_archival_service
from storefront.security.session import AdminIdentityRef


router = APIRouter(tags=["contact"])
admin_router = APIRouter(tags=["admin-contacts"])


@router.post("", response_model=ContactRead, status_code=status.HTTP_201_CREATED, summary="Send Contact Message")
async def submit_contact(contact: ContactCreate, db: Session = Depends(get_sync_db)):
    return ContactRead.model_validate(ContactCRUD(db).create_contact(contact))


@admin_router.get("", response_model=ContactListResponse, summary="List Contact Messages")
async def list_contacts(
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    crud = ContactCRUD(db)
    return ContactListResponse(
        contacts=[ContactRead.model_validate(c) for c in crud.get_contacts(skip=skip, limit=limit)],
        total=crud.count_contacts()
    )


@admin_router.get("/{contact_id}", response_model=ContactRead, summary="Get Contact Message")
async def get_contact(
    contact_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    db: Session = Depends(get_sync_db)
):
    contact = ContactCRUD(db).get_contact(contact_id)
    if contact is None:
        raise EntityNotFound("Contact message not found")
    return ContactRead.model_validate(contact)


@admin_router.delete("/{contact_id}", response_model=SoftDeleteResponse, summary="Delete Contact Message")
async def delete_contact(
    contact_id: int,
    admin: AdminIdentityRef = RequireAdmin,
    archival: ArchivalService = Depends(get_archival_service)
):
    entry = archival.archive_and_delete(EntityType.CONTACTS, contact_id, actor_label=admin.email)
    return SoftDeleteResponse(
        deleted=entry is not None,
        archive_id=entry.id if entry else None,
        redirect_to="/admin/contacts"
    )
