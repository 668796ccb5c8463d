"""
Recycle bin model.

Every soft delete snapshots the full entity row into ``payload``; the entry
is consumed exactly once, either by a restore or by a purge.
"""

from enum import Enum
from sqlalchemy import Column, Integer, String, DateTime, JSON

from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.dependencies.database import Base


class EntityType(str, Enum):
    """Entity kinds that can be archived. Values are the table names."""

    PRODUCTS = "products"
    TESTIMONIALS = "testimonials"
    BLOG_POSTS = "blog_posts"
    CONTACTS = "contacts"


class RecycleBinEntry(Base):
    """Archived snapshot of a deleted entity row."""

    __tablename__ = "recycle_bin"

    id = Column(Integer, primary_key=True, autoincrement=True)

    entity_type = Column(
        String(32),
        nullable=False,
        index=True,
        comment="Table the snapshot was taken from"
    )

    original_id = Column(Integer, nullable=True, comment="Primary key of the deleted row")

    name = Column(String(255), nullable=True, comment="Display label")

    payload = Column(JSON, nullable=False, default=dict, comment="Full row snapshot")

    deleted_by = Column(String(255), nullable=True, comment="E-mail of the deleting admin")

    deleted_at = Column(DateTime, default=utcnow, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<RecycleBinEntry(id={self.id}, entity_type='{self.entity_type}', original_id={self.original_id})>"
