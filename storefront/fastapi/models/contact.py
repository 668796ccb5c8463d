"""
Contact message (lead) submitted through the public contact wizard.
"""

from sqlalchemy import Column, Integer, String, DateTime, Text

from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.dependencies.database import Base


class ContactMessage(Base):
    """Lead captured by the contact form."""

    __tablename__ = "contacts"

    id = Column(Integer, primary_key=True, autoincrement=True)

    name = Column(String(120), nullable=False)

    email = Column(String(255), nullable=True)

    country = Column(String(100), nullable=True)

    company = Column(String(200), nullable=True)

    message = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<ContactMessage(id={self.id}, name='{self.name}')>"
