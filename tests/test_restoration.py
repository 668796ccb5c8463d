"""
Tests for restoring and purging recycle-bin entries.
"""

from datetime import datetime
from unittest.mock import patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from storefront.fastapi.core.exceptions import ArchiveNotFound, RestoreConflict, UnsupportedEntityType
from storefront.fastapi.core.utils import epoch_millis
from storefront.fastapi.crud.entity_store import EntityStore
from storefront.fastapi.crud.recycle_bin import RecycleBinCRUD
from storefront.fastapi.crud.testimonial import TestimonialCRUD
from storefront.fastapi.dependencies.database import Base
from storefront.fastapi.models.product import Product
from storefront.fastapi.models.recycle_bin import EntityType, RecycleBinEntry
from storefront.fastapi.services.archival import ArchivalService
from storefront.fastapi.services.restoration import RestorationService, clamp_rating, load_payload

from tests.conftest import make_engine


def stage(db, entity_type, payload, original_id=1, name=None):
    entry = RecycleBinEntry(
        entity_type=entity_type,
        original_id=original_id,
        name=name,
        payload=payload,
        deleted_at=datetime(2026, 3, 1)
    )
    db.add(entry)
    db.commit()
    return entry.id


@pytest.fixture
def restoration(db, clock):
    return RestorationService(db, clock=clock)


class TestProductRestore:
    def test_round_trip_keeps_content(self, db, clock, restoration):
        product = Product(
            name="Rose Oud", slug="rose-oud", category="Oils", short_desc="Floral",
            description="Aged oud.", specs={"volume": "10 ml"}, image="/img/rose.png", active=True,
            created_at=datetime(2025, 6, 1, 12, 0, 0), updated_at=datetime(2025, 6, 2, 12, 0, 0)
        )
        db.add(product)
        db.commit()
        entry = ArchivalService(db, clock=clock).archive_and_delete(EntityType.PRODUCTS, product.id)
        archive_id = entry.id

        result = restoration.restore(archive_id)

        row = EntityStore(db).find_by_id("products", result.entity_id)
        assert result.slug == "rose-oud"
        assert row["name"] == "Rose Oud"
        assert row["category"] == "Oils"
        assert row["specs"] == {"volume": "10 ml"}
        assert row["active"] is True
        assert row["created_at"] == datetime(2025, 6, 1, 12, 0, 0)
        assert RecycleBinCRUD(db).find_archive_by_id(archive_id) is None
        assert restoration.purge(archive_id) is False

    def test_taken_slug_gets_restored_suffix(self, db, clock, restoration):
        db.add(Product(name="Rose Oud v2", slug="rose-oud", category="Oils"))
        db.commit()
        archive_id = stage(db, "products", {"name": "Rose Oud", "slug": "rose-oud"})

        result = restoration.restore(archive_id)

        assert result.slug == f"rose-oud-restored-{epoch_millis(clock.now)}"

    def test_blank_slug(self, db, clock, restoration):
        archive_id = stage(db, "products", {"name": "Nameless", "slug": "  "})

        assert restoration.restore(archive_id).slug == f"restored-{epoch_millis(clock.now)}"

    def test_both_slugs_taken_is_a_conflict(self, db, clock, restoration):
        stamp = epoch_millis(clock.now)
        db.add_all([
            Product(name="A", slug="rose-oud", category="Oils"),
            Product(name="B", slug=f"rose-oud-restored-{stamp}", category="Oils"),
        ])
        db.commit()
        archive_id = stage(db, "products", {"name": "Rose Oud", "slug": "rose-oud"})

        with pytest.raises(RestoreConflict):
            restoration.restore(archive_id)
        assert RecycleBinCRUD(db).find_archive_by_id(archive_id) is not None

    def test_slug_taken_between_check_and_insert(self, db, restoration):
        db.add(Product(name="Rose Oud v2", slug="rose-oud", category="Oils"))
        db.commit()
        archive_id = stage(db, "products", {"name": "Rose Oud", "slug": "rose-oud"})

        with patch.object(EntityStore, "find_by_slug", return_value=None):
            with pytest.raises(RestoreConflict):
                restoration.restore(archive_id)
        assert RecycleBinCRUD(db).find_archive_by_id(archive_id) is not None

    def test_defaults_for_sparse_payload(self, db, clock, restoration):
        archive_id = stage(db, "products", {"slug": "bare", "specs": "Burn: 45 min", "created_at": "garbage"})

        row = EntityStore(db).find_by_id("products", restoration.restore(archive_id).entity_id)

        assert row["name"] == "Restored"
        assert row["category"] == "Uncategorized"
        assert row["active"] is False
        assert row["specs"] == {"Burn": "45 min"}
        assert row["created_at"] == clock.now
        assert row["updated_at"] == clock.now

    def test_string_flags(self, db, restoration):
        archive_id = stage(db, "products", {"name": "Lamp", "slug": "lamp", "active": "yes"})
        row = EntityStore(db).find_by_id("products", restoration.restore(archive_id).entity_id)
        assert row["active"] is True


class TestBlogPostRestore:
    def test_draft_stays_draft(self, db, restoration):
        archive_id = stage(db, "blog_posts", {"slug": "draft", "title": "Draft", "published_at": None})
        row = EntityStore(db).find_by_id("blog_posts", restoration.restore(archive_id).entity_id)
        assert row["published_at"] is None

    def test_unreadable_publication_date_becomes_draft(self, db, restoration):
        archive_id = stage(db, "blog_posts", {"slug": "odd", "title": "Odd", "published_at": "last tuesday"})
        row = EntityStore(db).find_by_id("blog_posts", restoration.restore(archive_id).entity_id)
        assert row["published_at"] is None

    def test_published_date_and_defaults(self, db, restoration):
        archive_id = stage(db, "blog_posts", {
            "slug": "launch", "published_at": "2025-01-15T10:00:00Z", "read_mins": "4"
        })
        row = EntityStore(db).find_by_id("blog_posts", restoration.restore(archive_id).entity_id)
        assert row["title"] == "Restored Post"
        assert row["published_at"] == datetime(2025, 1, 15, 10, 0, 0)
        assert row["read_mins"] == 4


class TestTestimonialRestore:
    @pytest.mark.parametrize("payload, expected", [
        ({"status": "approved"}, "approved"),
        ({"status": "rejected"}, "rejected"),
        ({"approved": True}, "approved"),
        ({"approved": False}, "pending"),
        ({"status": "bogus"}, "pending"),
        ({}, "pending"),
    ])
    def test_status_schema(self, db, restoration, payload, expected):
        archive_id = stage(db, "testimonials", {"name": "Ana", "rating": 4, "comment": "Lovely", **payload})
        result = restoration.restore(archive_id)
        assert TestimonialCRUD(db).get_testimonial(result.entity_id)["status"] == expected

    @pytest.mark.parametrize("rating, expected", [
        (0, 5), (None, 5), ("x", 5), (9, 5), (-3, 1), ("3", 3), (4.7, 4),
        (float("inf"), 5), (float("-inf"), 5), (float("nan"), 5),
    ])
    def test_rating_clamped(self, rating, expected):
        assert clamp_rating(rating) == expected

    def test_infinite_rating_restores_as_five(self, db, restoration):
        archive_id = stage(db, "testimonials", {"name": "Ana", "rating": float("inf"), "comment": "Lovely"})
        row = EntityStore(db).find_by_id("testimonials", restoration.restore(archive_id).entity_id)
        assert row["rating"] == 5


class TestLegacyApprovedSchema:
    """Databases whose testimonials table moderates with a boolean ``approved`` column."""

    @pytest.fixture
    def legacy_db(self, clock):
        engine = make_engine()
        tables = [t for name, t in Base.metadata.tables.items() if name != "testimonials"]
        Base.metadata.create_all(bind=engine, tables=tables)
        with engine.begin() as connection:
            connection.execute(text(
                "CREATE TABLE testimonials ("
                " id INTEGER PRIMARY KEY AUTOINCREMENT,"
                " name VARCHAR(120) NOT NULL,"
                " rating INTEGER NOT NULL,"
                " comment TEXT,"
                " approved BOOLEAN NOT NULL DEFAULT 0,"
                " created_at DATETIME)"
            ))
        session = sessionmaker(bind=engine)()
        yield session
        session.close()
        engine.dispose()

    @pytest.mark.parametrize("payload, approved", [
        ({"status": "approved"}, True),
        ({"status": "pending"}, False),
        ({"approved": 1}, True),
        ({}, False),
    ])
    def test_restore_writes_approved_flag(self, legacy_db, clock, payload, approved):
        archive_id = stage(legacy_db, "testimonials", {"name": "Ana", "rating": 5, **payload})

        result = RestorationService(legacy_db, clock=clock).restore(archive_id)

        row = EntityStore(legacy_db).find_by_id("testimonials", result.entity_id)
        assert bool(row["approved"]) is approved
        assert "status" not in row

    def test_moderation_and_listing(self, legacy_db, clock):
        crud = TestimonialCRUD(legacy_db)
        assert crud.moderation == "approved"

        created = crud.create_testimonial("Ana", 5, "Great", now=clock.now)
        assert created["status"] == "pending"

        assert crud.set_status(created["id"], "approved")["status"] == "approved"
        assert [t["id"] for t in crud.get_testimonials(status="approved")] == [created["id"]]
        assert crud.get_testimonials(status="rejected") == []


class TestSchemaDrift:
    """Live tables with constraints the rebuilt rows know nothing about."""

    @pytest.fixture
    def drifted_db(self):
        engine = make_engine()
        tables = [t for name, t in Base.metadata.tables.items() if name != "products"]
        Base.metadata.create_all(bind=engine, tables=tables)
        with engine.begin() as connection:
            connection.execute(text(
                "CREATE TABLE products ("
                " id INTEGER PRIMARY KEY AUTOINCREMENT,"
                " name VARCHAR(200) NOT NULL,"
                " slug VARCHAR(200) NOT NULL UNIQUE,"
                " sku VARCHAR(40) NOT NULL)"
            ))
        session = sessionmaker(bind=engine)()
        yield session
        session.close()
        engine.dispose()

    def test_not_null_failure_is_not_a_slug_conflict(self, drifted_db, clock):
        archive_id = stage(drifted_db, "products", {"name": "Rose Oud", "slug": "rose-oud"})

        with pytest.raises(IntegrityError):
            RestorationService(drifted_db, clock=clock).restore(archive_id)

        assert RecycleBinCRUD(drifted_db).find_archive_by_id(archive_id) is not None
        assert EntityStore(drifted_db).find_by_slug("products", "rose-oud") is None


class TestRestoreEdgeCases:
    def test_missing_archive(self, restoration):
        with pytest.raises(ArchiveNotFound):
            restoration.restore(12345)

    def test_restore_twice(self, db, restoration):
        archive_id = stage(db, "contacts", {"name": "Lead"})
        restoration.restore(archive_id)
        with pytest.raises(ArchiveNotFound):
            restoration.restore(archive_id)

    def test_unsupported_entity_type(self, db, restoration):
        archive_id = stage(db, "orders", {"id": 1})
        with pytest.raises(UnsupportedEntityType):
            restoration.restore(archive_id)

    def test_contact_company_alias(self, db, restoration):
        archive_id = stage(db, "contacts", {"name": "Lead", "Company": "Acme"})
        row = EntityStore(db).find_by_id("contacts", restoration.restore(archive_id).entity_id)
        assert row["company"] == "Acme"

    def test_payload_stored_as_text(self, db, restoration):
        archive_id = stage(db, "contacts", '{"name": "Text Lead"}')
        row = EntityStore(db).find_by_id("contacts", restoration.restore(archive_id).entity_id)
        assert row["name"] == "Text Lead"

    @pytest.mark.parametrize("raw, expected", [(None, {}), ("", {}), ("[1, 2]", {}), ("{bad", {}), ({"a": 1}, {"a": 1})])
    def test_load_payload(self, raw, expected):
        assert load_payload(raw) == expected


class TestPurge:
    def test_purge_removes_entry(self, db, restoration):
        archive_id = stage(db, "contacts", {"name": "Lead"})
        assert restoration.purge(archive_id) is True
        assert RecycleBinCRUD(db).find_archive_by_id(archive_id) is None

    def test_purge_is_idempotent(self, db, restoration):
        archive_id = stage(db, "contacts", {"name": "Lead"})
        restoration.purge(archive_id)
        assert restoration.purge(archive_id) is False

    def test_purge_after_restore_is_noop(self, db, restoration):
        archive_id = stage(db, "contacts", {"name": "Lead"})
        restoration.restore(archive_id)
        assert restoration.purge(archive_id) is False
