"""
Restore archived entities from the recycle bin, or purge archive entries.

Each entity kind has its own rebuild policy that turns an archived payload
(which may predate the current schema) into a valid row:

* products    - unique slug, name/category defaults, inactive unless archived active
* testimonials - rating clamped to 1..5, moderation written to ``approved``
  or ``status`` depending on the live schema
* blog_posts  - unique slug, title default, drafts stay drafts
* contacts    - name default

The entity insert and the archive delete run in one transaction; the archive
delete is checked by row count so the same entry cannot be restored twice.
"""

import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import ArchiveNotFound, RestoreConflict
from storefront.fastapi.core.utils import coerce_datetime, epoch_millis, parse_specs, utcnow
from storefront.fastapi.crud.entity_store import EntityStore
from storefront.fastapi.crud.recycle_bin import RecycleBinCRUD
from storefront.fastapi.models.recycle_bin import EntityType
from storefront.fastapi.models.testimonial import TESTIMONIAL_STATUSES
from storefront.fastapi.services.archival import resolve_entity_type

logger = logging.getLogger(__name__)

TRUE_STRINGS = {"1", "true", "yes", "on", "y"}


@dataclass
class RestoreResult:
    entity_type: EntityType
    entity_id: int
    slug: Optional[str] = None


def load_payload(raw: Any) -> Dict[str, Any]:
    """Archived payload as a dict; text is parsed as JSON, anything unusable is empty."""
    if isinstance(raw, dict):
        return raw
    if isinstance(raw, (str, bytes)):
        try:
            parsed = json.loads(raw or "{}")
        except ValueError:
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


def as_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in TRUE_STRINGS
    return bool(value)


def clamp_rating(value: Any) -> int:
    """Rating in 1..5; missing, zero, non-numeric or infinite ratings become 5."""
    try:
        rating = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 5
    if rating == 0:
        return 5
    return max(1, min(5, rating))


def is_slug_conflict(exc: IntegrityError) -> bool:
    """True when the integrity failure is a unique violation on a slug column."""
    message = str(exc.orig).lower()
    unique = getattr(exc.orig, "sqlstate", None) == "23505" or "unique" in message
    return unique and "slug" in message


def optional_int(value: Any) -> Optional[int]:
    try:
        return int(value) if value not in (None, "") else None
    except (TypeError, ValueError):
        return None


class RestorationService:
    """Restores or purges recycle-bin entries."""

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.store = EntityStore(db)
        self.recycle = RecycleBinCRUD(db)
        self.clock = clock
        self._rebuilders = {
            EntityType.PRODUCTS: self.rebuild_product,
            EntityType.TESTIMONIALS: self.rebuild_testimonial,
            EntityType.BLOG_POSTS: self.rebuild_blog_post,
            EntityType.CONTACTS: self.rebuild_contact,
        }

    def restore(self, archive_id: int) -> RestoreResult:
        """
        Re-create the archived entity and consume the archive entry.

        Args:
            archive_id: Recycle-bin entry id

        Returns:
            RestoreResult with the new entity id (and slug, where applicable)

        Raises:
            ArchiveNotFound: Entry missing, or consumed by a concurrent request
            UnsupportedEntityType: Entry holds an unknown entity type
            RestoreConflict: No free slug could be found
        """
        entry = self.recycle.find_archive_by_id(archive_id)
        if entry is None:
            raise ArchiveNotFound()

        entity_type = resolve_entity_type(entry.entity_type)
        payload = load_payload(entry.payload)
        now = self.clock()

        try:
            row = self._rebuilders[entity_type](payload, now)
            entity_id = self.store.insert(entity_type.value, row)
            if self.recycle.delete_archive(archive_id) == 0:
                raise ArchiveNotFound()
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if not is_slug_conflict(exc):
                raise
            logger.warning("Restore of recycle_bin id=%s lost its slug to a concurrent write: %s", archive_id, exc.orig)
            raise RestoreConflict() from exc
        except Exception:
            self.db.rollback()
            raise

        logger.info(
            "Restored recycle_bin id=%s as %s id=%s",
            archive_id, entity_type.value, entity_id
        )
        return RestoreResult(entity_type=entity_type, entity_id=entity_id, slug=row.get("slug"))

    def purge(self, archive_id: int) -> bool:
        """
        Permanently discard an archive entry. Purging a missing id is a no-op.

        Returns:
            True if an entry was removed
        """
        removed = self.recycle.delete_archive(archive_id)
        self.db.commit()
        if removed:
            logger.info("Purged recycle_bin id=%s", archive_id)
        return removed > 0

    # Slugs

    def unique_slug(self, table: str, raw_slug: Any, now: datetime) -> str:
        """
        Pick a slug that is free in ``table``.

        Blank slugs become ``restored-<ms>``; a taken slug gets
        ``-restored-<ms>`` appended.

        Raises:
            RestoreConflict: The suffixed slug is taken as well
        """
        stamp = epoch_millis(now)
        slug = str(raw_slug or "").strip() or f"restored-{stamp}"
        if self.store.find_by_slug(table, slug) is None:
            return slug

        candidate = f"{slug}-restored-{stamp}"
        if self.store.find_by_slug(table, candidate) is None:
            return candidate
        raise RestoreConflict()

    # Per-entity rebuild policies

    def rebuild_product(self, payload: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        specs = payload.get("specs")
        return {
            "name": payload.get("name") or "Restored",
            "slug": self.unique_slug(EntityType.PRODUCTS.value, payload.get("slug"), now),
            "category": payload.get("category") or "Uncategorized",
            "short_desc": payload.get("short_desc", ""),
            "description": payload.get("description", ""),
            "specs": specs if isinstance(specs, dict) else parse_specs(specs),
            "image": payload.get("image") or None,
            "active": as_bool(payload.get("active", False)),
            "created_at": coerce_datetime(payload.get("created_at"), fallback_now=True, now=now),
            "updated_at": coerce_datetime(payload.get("updated_at"), fallback_now=True, now=now),
        }

    def rebuild_testimonial(self, payload: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        row = {
            "name": payload.get("name") or "Restored",
            "rating": clamp_rating(payload.get("rating")),
            "comment": payload.get("comment") or "",
            "created_at": coerce_datetime(payload.get("created_at"), fallback_now=True, now=now),
        }

        moderation = self.store.capabilities.testimonial_moderation
        if moderation == "approved":
            row["approved"] = self._approved_flag(payload)
        elif moderation == "status":
            row["status"] = self._status_value(payload)
        return row

    def rebuild_blog_post(self, payload: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        return {
            "slug": self.unique_slug(EntityType.BLOG_POSTS.value, payload.get("slug"), now),
            "title": payload.get("title") or "Restored Post",
            "excerpt": payload.get("excerpt") or None,
            "html": payload.get("html") or None,
            "image": payload.get("image") or None,
            "tag_slug": payload.get("tag_slug") or None,
            "tag_name": payload.get("tag_name") or None,
            "read_mins": optional_int(payload.get("read_mins")),
            # Unpublished or unreadable dates stay drafts
            "published_at": coerce_datetime(payload.get("published_at"), fallback_now=False),
            "created_at": coerce_datetime(payload.get("created_at"), fallback_now=True, now=now),
        }

    def rebuild_contact(self, payload: Dict[str, Any], now: datetime) -> Dict[str, Any]:
        return {
            "name": payload.get("name") or "Restored",
            "email": payload.get("email") or None,
            "country": payload.get("country") or None,
            "company": payload.get("company") or payload.get("Company") or None,
            "message": payload.get("message") or None,
            "created_at": coerce_datetime(payload.get("created_at"), fallback_now=True, now=now),
        }

    @staticmethod
    def _approved_flag(payload: Dict[str, Any]) -> bool:
        if payload.get("approved") is not None:
            return as_bool(payload["approved"])
        return str(payload.get("status") or "").lower() == "approved"

    @staticmethod
    def _status_value(payload: Dict[str, Any]) -> str:
        status = str(payload.get("status") or "").lower()
        if status in TESTIMONIAL_STATUSES:
            return status
        if payload.get("approved") is not None:
            return "approved" if as_bool(payload["approved"]) else "pending"
        return "pending"
