"""
Tests for the schema migrations (run against an in-memory SQLite database).
"""

import importlib.util
from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from tests.conftest import make_engine

MIGRATIONS = Path(__file__).resolve().parent.parent / "migrations"


def load_migration(name):
    spec = importlib.util.spec_from_file_location(f"migration_{name}", MIGRATIONS / f"{name}.py")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def bare_engine():
    engine = make_engine()
    yield engine
    engine.dispose()


def columns(engine, table):
    return {col["name"] for col in inspect(engine).get_columns(table)}


class TestAddAdminLockout:
    @pytest.fixture
    def legacy_admins(self, bare_engine):
        with bare_engine.begin() as connection:
            connection.execute(text(
                "CREATE TABLE admin_users (id INTEGER PRIMARY KEY, email VARCHAR(255), password_hash VARCHAR(255))"
            ))
            connection.execute(text("INSERT INTO admin_users (email, password_hash) VALUES ('a@example.com', 'x')"))
        return bare_engine

    def test_adds_columns_idempotently(self, legacy_admins):
        migration = load_migration("add_admin_lockout")

        migration.run_migration(legacy_admins)
        migration.run_migration(legacy_admins)

        assert {"failed_attempts", "lock_until"} <= columns(legacy_admins, "admin_users")
        with legacy_admins.connect() as connection:
            row = connection.execute(text("SELECT failed_attempts, lock_until FROM admin_users")).one()
        assert row == (0, None)

    def test_rollback(self, legacy_admins):
        migration = load_migration("add_admin_lockout")
        migration.run_migration(legacy_admins)

        migration.rollback_migration(legacy_admins)
        migration.rollback_migration(legacy_admins)

        assert columns(legacy_admins, "admin_users") == {"id", "email", "password_hash"}


class TestAddRecycleBin:
    def test_creates_table_idempotently(self, bare_engine):
        migration = load_migration("add_recycle_bin")

        migration.run_migration(bare_engine)
        migration.run_migration(bare_engine)

        assert {"entity_type", "original_id", "payload", "deleted_at"} <= columns(bare_engine, "recycle_bin")
        deleted_at_indexes = [
            index for index in inspect(bare_engine).get_indexes("recycle_bin")
            if index["column_names"] == ["deleted_at"]
        ]
        assert len(deleted_at_indexes) == 1

    def test_rollback(self, bare_engine):
        migration = load_migration("add_recycle_bin")
        migration.run_migration(bare_engine)

        migration.rollback_migration(bare_engine)
        migration.rollback_migration(bare_engine)

        assert "recycle_bin" not in inspect(bare_engine).get_table_names()
