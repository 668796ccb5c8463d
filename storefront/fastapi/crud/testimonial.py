"""
Testimonial CRUD operations.

Testimonials are read and written through the reflected table so the same
code serves schemas moderated by a boolean ``approved`` column and schemas
using a ``status`` string. Rows are always returned with a ``status`` key.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import func, insert, select, update
from sqlalchemy.orm import Session

from storefront.fastapi.crud.entity_store import EntityStore
from storefront.fastapi.models.recycle_bin import EntityType

TABLE = EntityType.TESTIMONIALS.value


class TestimonialCRUD:
    """CRUD operations for testimonials, independent of the moderation column."""

    __test__ = False

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db
        self.store = EntityStore(db)

    @property
    def table(self):
        return self.store.table(TABLE)

    @property
    def moderation(self) -> Optional[str]:
        return self.store.capabilities.testimonial_moderation

    def to_read(self, row: Dict[str, Any]) -> Dict[str, Any]:
        """Row as a dict with a ``status`` key whatever the moderation column is."""
        data = dict(row)
        if self.moderation == "approved":
            data["status"] = "approved" if data.pop("approved", False) else "pending"
        data.setdefault("status", "pending")
        return data

    def _status_filter(self, status: str):
        column = self.table.c
        if self.moderation == "approved":
            if status == "approved":
                return column.approved == True
            if status == "pending":
                return column.approved == False
            # No rejected state in boolean schemas
            return column.id.is_(None)
        if self.moderation == "status":
            return column.status == status
        return None

    def get_testimonials(self, status: str = "all", skip: int = 0, limit: int = 100) -> List[Dict[str, Any]]:
        """
        Get testimonials, newest first.

        Args:
            status: all, pending, approved or rejected
            skip: Number of records to skip
            limit: Maximum number of records to return
        """
        table = self.table
        query = select(table)
        if status != "all":
            condition = self._status_filter(status)
            if condition is not None:
                query = query.where(condition)
        query = query.order_by(table.c.created_at.desc(), table.c.id.desc()).offset(skip).limit(limit)
        return [self.to_read(row) for row in self.db.execute(query).mappings().all()]

    def count_testimonials(self, status: str = "all") -> int:
        query = select(func.count()).select_from(self.table)
        if status != "all":
            condition = self._status_filter(status)
            if condition is not None:
                query = query.where(condition)
        return self.db.execute(query).scalar_one()

    def get_testimonial(self, testimonial_id: int) -> Optional[Dict[str, Any]]:
        row = self.store.find_by_id(TABLE, testimonial_id)
        return self.to_read(row) if row is not None else None

    def create_testimonial(self, name: str, rating: int, comment: str, now: datetime) -> Dict[str, Any]:
        """Store a public submission as pending."""
        values = {"name": name.strip(), "rating": rating, "comment": comment.strip(), "created_at": now}
        if self.moderation == "approved":
            values["approved"] = False
        elif self.moderation == "status":
            values["status"] = "pending"

        result = self.db.execute(insert(self.table).values(**self.store.writable(TABLE, values)))
        self.db.commit()
        return self.get_testimonial(result.inserted_primary_key[0])

    def set_status(self, testimonial_id: int, status: str) -> Optional[Dict[str, Any]]:
        """
        Moderate a testimonial.

        Boolean schemas store "approved" as True and everything else as False.

        Returns:
            The updated row, or None if it does not exist
        """
        if self.moderation == "approved":
            values = {"approved": status == "approved"}
        elif self.moderation == "status":
            values = {"status": status}
        else:
            values = {}

        if values:
            table = self.table
            result = self.db.execute(update(table).where(table.c.id == testimonial_id).values(**values))
            self.db.commit()
            if result.rowcount == 0:
                return None
        return self.get_testimonial(testimonial_id)
