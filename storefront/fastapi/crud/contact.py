"""
Contact message CRUD operations.
"""

from typing import List, Optional
from sqlalchemy.orm import Session

from storefront.fastapi.models.contact import ContactMessage
from storefront.fastapi.schemas.contact import ContactCreate


class ContactCRUD:
    """CRUD operations for ContactMessage model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def create_contact(self, contact_data: ContactCreate) -> ContactMessage:
        db_contact = ContactMessage(**contact_data.model_dump())
        self.db.add(db_contact)
        self.db.commit()
        self.db.refresh(db_contact)
        return db_contact

    def get_contact(self, contact_id: int) -> Optional[ContactMessage]:
        return self.db.query(ContactMessage).filter(ContactMessage.id == contact_id).first()

    def get_contacts(self, skip: int = 0, limit: int = 100) -> List[ContactMessage]:
        """Newest leads first."""
        return (
            self.db.query(ContactMessage)
            .order_by(ContactMessage.created_at.desc(), ContactMessage.id.desc())
            .offset(skip)
            .limit(limit)
            .all()
        )

    def count_contacts(self) -> int:
        return self.db.query(ContactMessage).count()
