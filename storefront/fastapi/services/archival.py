"""
Soft delete: snapshot an entity row into the recycle bin, then remove it.

The archive insert and the entity delete share one transaction. The archive
row is flushed before the delete runs, and the delete is checked by row
count, so a row is never removed without its snapshot and two concurrent
deletes of the same row cannot both leave an archive entry.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, Optional, Union

from fastapi.encoders import jsonable_encoder
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import UnsupportedEntityType
from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.crud.entity_store import EntityStore
from storefront.fastapi.crud.recycle_bin import RecycleBinCRUD
from storefront.fastapi.models.recycle_bin import EntityType, RecycleBinEntry

logger = logging.getLogger(__name__)

# Column used as the recycle-bin display label
LABEL_FIELDS = {
    EntityType.PRODUCTS: "name",
    EntityType.TESTIMONIALS: "name",
    EntityType.BLOG_POSTS: "title",
    EntityType.CONTACTS: "name",
}


def resolve_entity_type(value: Union[str, EntityType]) -> EntityType:
    """
    Map a stored or requested entity type onto EntityType.

    Raises:
        UnsupportedEntityType: For anything outside the four archivable kinds
    """
    try:
        return EntityType(value)
    except ValueError:
        raise UnsupportedEntityType(f"Unsupported entity type: {value!r}") from None


def snapshot(row: Dict[str, Any]) -> Dict[str, Any]:
    """JSON-safe copy of a full row (datetimes become ISO strings)."""
    return jsonable_encoder(dict(row))


class ArchivalService:
    """Archives entity rows before they are deleted."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.store = EntityStore(db)
        self.recycle = RecycleBinCRUD(db)
        self.clock = clock

    def archive(self, entity_type: EntityType, row: Dict[str, Any], actor_label: Optional[str]) -> RecycleBinEntry:
        """
        Stage the archive entry for ``row`` (flushed, not committed).

        Args:
            entity_type: Kind of the row
            row: The complete row as read from the entity table
            actor_label: Who is deleting (admin e-mail)

        Returns:
            The staged RecycleBinEntry
        """
        entity_type = resolve_entity_type(entity_type)
        return self.recycle.insert_archive(
            entity_type=entity_type,
            original_id=row.get("id"),
            name=row.get(LABEL_FIELDS[entity_type]),
            payload=snapshot(row),
            deleted_by=actor_label,
            deleted_at=self.clock()
        )

    def archive_and_delete(
        self,
        entity_type: Union[str, EntityType],
        entity_id: int,
        actor_label: Optional[str] = None
    ) -> Optional[RecycleBinEntry]:
        """
        Soft-delete one entity.

        Args:
            entity_type: Kind of entity
            entity_id: Primary key of the row to delete
            actor_label: Who is deleting (admin e-mail)

        Returns:
            The committed archive entry, or None when the row did not exist
            (or vanished concurrently)

        Raises:
            UnsupportedEntityType: Unknown entity type
        """
        entity_type = resolve_entity_type(entity_type)
        table = entity_type.value

        row = self.store.find_by_id(table, entity_id)
        if row is None:
            logger.info("Soft delete skipped: %s id=%s not found", table, entity_id)
            return None

        try:
            entry = self.archive(entity_type, row, actor_label)
            if self.store.delete(table, entity_id) == 0:
                self.db.rollback()
                logger.info("Soft delete skipped: %s id=%s removed concurrently", table, entity_id)
                return None
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Soft deleted %s id=%s into recycle_bin id=%s by %s",
            table, entity_id, entry.id, actor_label or "unknown"
        )
        return entry
