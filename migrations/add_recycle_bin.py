"""
Migration: Add the recycle_bin table

Deleted products, testimonials, blog posts and contacts are archived here as
a JSON snapshot so an admin can restore or purge them later.

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


def run_migration(engine=None):
    """Create the recycle_bin table (with the model's entity_type and deleted_at indexes)."""
    from storefront.fastapi.models.recycle_bin import RecycleBinEntry

    print(f"Starting recycle bin migration at {datetime.now(timezone.utc)}")
    engine = engine or create_engine(database_url())

    print("\n=== Processing recycle_bin table ===")
    if 'recycle_bin' not in inspect(engine).get_table_names():
        print("Creating recycle_bin table...")
        RecycleBinEntry.__table__.create(bind=engine)
        print("✓ Created recycle_bin table")
    else:
        print("⊘ recycle_bin table already exists")

    print("\n" + "="*50)
    print("Migration completed successfully!")
    print("="*50)


def rollback_migration(engine=None):
    """Drop the recycle_bin table (archived entries are lost)."""
    print(f"Starting rollback at {datetime.now(timezone.utc)}")
    engine = engine or create_engine(database_url())

    with engine.connect() as connection:
        if 'recycle_bin' in inspect(engine).get_table_names():
            print("Dropping recycle_bin table...")
            connection.execute(text("DROP TABLE recycle_bin"))
            connection.commit()
            print("✓ Dropped recycle_bin table")
        else:
            print("⊘ recycle_bin table doesn't exist")

    print("\n" + "="*50)
    print("Rollback completed successfully!")
    print("="*50)


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Add recycle bin migration")
    parser.add_argument(
        "--rollback",
        action="store_true",
        help="Rollback the migration (drop the recycle_bin table)"
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
