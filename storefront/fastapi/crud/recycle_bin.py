"""
Recycle bin CRUD operations.

This module provides database operations for archive entries. Inserts and
deletes do not commit; the archival and restoration services wrap them in
one transaction together with the entity write.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from sqlalchemy import delete
from sqlalchemy.orm import Session

from storefront.fastapi.models.recycle_bin import EntityType, RecycleBinEntry


class RecycleBinCRUD:
    """CRUD operations for RecycleBinEntry model."""

    def __init__(self, db: Session):
        """Initialize with database session."""
        self.db = db

    def insert_archive(
        self,
        entity_type: EntityType,
        original_id: Optional[int],
        name: Optional[str],
        payload: Dict[str, Any],
        deleted_by: Optional[str],
        deleted_at: datetime
    ) -> RecycleBinEntry:
        """
        Stage a new archive entry (flushed, not committed).

        Args:
            entity_type: Kind of the archived entity
            original_id: Primary key the entity had
            name: Display label
            payload: Full JSON-safe row snapshot
            deleted_by: E-mail of the deleting admin
            deleted_at: Deletion time (naive UTC)

        Returns:
            The flushed RecycleBinEntry (id assigned)
        """
        entry = RecycleBinEntry(
            entity_type=entity_type.value,
            original_id=original_id,
            name=(name or None) and str(name)[:255],
            payload=payload,
            deleted_by=deleted_by,
            deleted_at=deleted_at
        )
        self.db.add(entry)
        self.db.flush()
        return entry

    def find_archive_by_id(self, archive_id: int) -> Optional[RecycleBinEntry]:
        return self.db.query(RecycleBinEntry).filter(RecycleBinEntry.id == archive_id).first()

    def delete_archive(self, archive_id: int) -> int:
        """
        Delete an archive entry (not committed).

        Returns:
            Number of rows deleted; 0 when another request consumed it first
        """
        result = self.db.execute(
            delete(RecycleBinEntry)
            .where(RecycleBinEntry.id == archive_id)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def list_archive(self, limit: int = 500) -> List[RecycleBinEntry]:
        """
        Most recently deleted entries first.

        Args:
            limit: Maximum number of entries to return
        """
        return (
            self.db.query(RecycleBinEntry)
            .order_by(RecycleBinEntry.deleted_at.desc(), RecycleBinEntry.id.desc())
            .limit(limit)
            .all()
        )

    def count_archive(self) -> int:
        return self.db.query(RecycleBinEntry).count()
