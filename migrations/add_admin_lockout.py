"""
Migration: Add login lockout tracking to the admin_users table

Adds failed_attempts (consecutive wrong passwords) and lock_until (end of the
temporary lock) so the password step can lock an account for 10 minutes
after 5 failures.

Date: 2026-09-14
"""

import sys
import os
from datetime import datetime, timezone

# Add the project root to Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy import create_engine, text, inspect


def database_url():
    from storefront.fastapi.core.config import get_settings
    return get_settings(os.environ.get("ENV_MODE", "dev")).DB_URL


def admin_columns(engine):
    return {col['name'] for col in inspect(engine).get_columns('admin_users')}


def run_migration(engine=None):
    """Add failed_attempts and lock_until columns to admin_users."""
    print(f"Starting admin lockout migration at {datetime.now(timezone.utc)}")
    engine = engine or create_engine(database_url())

    with engine.connect() as connection:
        columns = admin_columns(engine)

        print("\n=== Processing admin_users table ===")
        if 'failed_attempts' not in columns:
            print("Adding failed_attempts column to admin_users table...")
            connection.execute(text("""
                ALTER TABLE admin_users
                ADD COLUMN failed_attempts INTEGER NOT NULL DEFAULT 0
            """))
            connection.commit()
            print("✓ Added failed_attempts column")
        else:
            print("⊘ failed_attempts column already exists")

        if 'lock_until' not in columns:
            print("Adding lock_until column to admin_users table...")
            connection.execute(text("""
                ALTER TABLE admin_users
                ADD COLUMN lock_until TIMESTAMP DEFAULT NULL
            """))
            connection.commit()
            print("✓ Added lock_until column")
        else:
            print("⊘ lock_until column already exists")

    print("\n" + "="*50)
    print("Migration completed successfully!")
    print("="*50)


def rollback_migration(engine=None):
    """Remove the lockout columns from admin_users."""
    print(f"Starting rollback at {datetime.now(timezone.utc)}")
    engine = engine or create_engine(database_url())

    with engine.connect() as connection:
        columns = admin_columns(engine)

        for column in ('lock_until', 'failed_attempts'):
            if column in columns:
                print(f"Removing {column} column from admin_users table...")
                connection.execute(text(f"ALTER TABLE admin_users DROP COLUMN {column}"))
                connection.commit()
                print(f"✓ Removed {column} column")
            else:
                print(f"⊘ {column} column doesn't exist")

    print("\n" + "="*50)
    print("Rollback completed successfully!")
    print("="*50)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Add admin login lockout migration")
    parser.add_argument(
        "--rollback",
        action="store_true",
        help="Rollback the migration (remove failed_attempts and lock_until)"
    )

    args = parser.parse_args()

    try:
        if args.rollback:
            rollback_migration()
        else:
            run_migration()
    except Exception as e:
        print(f"\n❌ Migration failed: {e}")
        raise
