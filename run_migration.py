#!/usr/bin/env python3
"""
Migration runner script that ensures proper Python path setup.
Usage: python run_migration.py <migration_name> [--rollback]
"""

import os
import sys
import subprocess

MIGRATIONS_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "migrations")


def available_migrations():
    return sorted(name[:-3] for name in os.listdir(MIGRATIONS_DIR) if name.endswith(".py"))


def run_migration(migration_name, extra_args=()):
    """Run a migration with proper Python path setup; extra_args (e.g. --rollback) are passed through."""
    
    # Get the project root directory
    project_root = os.path.dirname(os.path.abspath(__file__))
    
    # Set PYTHONPATH environment variable
    env = os.environ.copy()
    env['PYTHONPATH'] = project_root
    
    # Migration file path
    migration_path = os.path.join(MIGRATIONS_DIR, f"{migration_name}.py")
    
    if not os.path.exists(migration_path):
        print(f"❌ Migration file not found: {migration_path}")
        return False
    
    # Run the migration
    print(f"🚀 Running migration: {migration_name}")
    result = subprocess.run(
        [sys.executable, migration_path, *extra_args],
        env=env,
        cwd=project_root
    )
    
    return result.returncode == 0

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python run_migration.py <migration_name> [--rollback]")
        print("Example: python run_migration.py add_recycle_bin")
        print("Available migrations: " + ", ".join(available_migrations()))
        sys.exit(1)
    
    migration_name = sys.argv[1]
    success = run_migration(migration_name, sys.argv[2:])
    sys.exit(0 if success else 1)