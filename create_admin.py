"""
Create an admin account.

Usage:
    python create_admin.py --email owner@example.com --password 'S3cure-pass'

The admin signs in with this password and then a one-time code mailed to
the same address.
"""

import argparse
import sys
import os

# Add the project root to the Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from storefront.fastapi.core.exceptions import DuplicateAdminEmail
from storefront.fastapi.dependencies.database import SessionLocal, init_db
from storefront.fastapi.crud.admin import create_admin
from storefront.fastapi.schemas.admin import AdminCreate


def create_admin_account(email: str, password: str, is_active: bool = True):
    """Create the admin and print its details; returns None if the e-mail is taken."""
    admin_data = AdminCreate(email=email, password=password, is_active=is_active)

    init_db()
    db = SessionLocal()

    try:
        admin = create_admin(db, admin_data)
        print(f"✅ Successfully created admin:")
        print(f"   ID: {admin.id}")
        print(f"   Email: {admin.email}")
        print(f"   Active: {admin.is_active}")
        print(f"   Created: {admin.created_at}")
        return admin

    except DuplicateAdminEmail as e:
        print(f"❌ {e}")
        return None

    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create an admin account")
    parser.add_argument("--email", required=True, help="Login e-mail (also receives the one-time codes)")
    parser.add_argument("--password", required=True, help="Password (minimum 8 characters)")
    parser.add_argument("--inactive", action="store_true", help="Create the account deactivated")
    args = parser.parse_args()

    admin = create_admin_account(args.email, args.password, is_active=not args.inactive)
    sys.exit(0 if admin else 1)
