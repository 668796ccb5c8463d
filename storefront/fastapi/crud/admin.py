"""
Admin credential store.

This module provides database operations for admin identities: lookup by
e-mail, the failure counter / lockout bookkeeping used by the login flow,
and account creation for the bootstrap scripts.
"""

from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy import case, update
from sqlalchemy.orm import Session

from storefront.fastapi.core.exceptions import DuplicateAdminEmail
from storefront.fastapi.core.init_settings import global_settings
from storefront.fastapi.models.admin import Admin
from storefront.fastapi.schemas.admin import AdminCreate
from storefront.security.password import hash_password


class AdminCRUD:
    """CRUD operations for Admin model."""

    def __init__(self, db: Session, max_failures: int = None, lock_minutes: int = None):
        """Initialize with database session and lockout policy."""
        self.db = db
        self.max_failures = max_failures or global_settings.LOGIN_MAX_FAILURES
        self.lock_minutes = lock_minutes or global_settings.LOGIN_LOCK_MINUTES

    def create_admin(self, admin_data: AdminCreate) -> Admin:
        """
        Create a new admin identity.

        Args:
            admin_data: Admin creation data with e-mail and password

        Returns:
            Created Admin instance

        Raises:
            DuplicateAdminEmail: If the e-mail already exists
        """
        if self.find_by_email(admin_data.email):
            raise DuplicateAdminEmail()

        db_admin = Admin(
            email=admin_data.email,
            password_hash=hash_password(admin_data.password),
            is_active=admin_data.is_active,
            failed_attempts=0,
            lock_until=None
        )

        self.db.add(db_admin)
        self.db.commit()
        self.db.refresh(db_admin)

        return db_admin

    def get_admin(self, admin_id: int) -> Optional[Admin]:
        """
        Get admin by ID.

        Args:
            admin_id: Admin primary key

        Returns:
            Admin instance or None if not found
        """
        return self.db.query(Admin).filter(Admin.id == admin_id).first()

    def find_by_email(self, email: str) -> Optional[Admin]:
        """
        Get admin by e-mail, compared exactly as stored (no case folding).

        Args:
            email: Login e-mail

        Returns:
            Admin instance or None if not found
        """
        if not email:
            return None
        return self.db.query(Admin).filter(Admin.email == email).first()

    def increment_failure(self, admin_id: int, now: datetime) -> Optional[Admin]:
        """
        Record a wrong password.

        Bumps ``failed_attempts`` and, when the new count reaches the
        threshold, sets ``lock_until`` to ``now`` plus the lock duration, in a
        single UPDATE so concurrent failures cannot skip the threshold.

        Args:
            admin_id: Admin primary key
            now: Time of the failed attempt (naive UTC)

        Returns:
            The refreshed Admin instance, or None if it no longer exists
        """
        lock_at = now + timedelta(minutes=self.lock_minutes)
        self.db.execute(
            update(Admin)
            .where(Admin.id == admin_id)
            .values(
                failed_attempts=Admin.failed_attempts + 1,
                lock_until=case(
                    (Admin.failed_attempts + 1 >= self.max_failures, lock_at),
                    else_=Admin.lock_until
                ),
                updated_at=now
            )
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return self._reload(admin_id)

    def reset_failure(self, admin_id: int, now: datetime) -> Optional[Admin]:
        """
        Clear the failure counter and any lock after a correct password.

        Args:
            admin_id: Admin primary key
            now: Time of the successful attempt (naive UTC)

        Returns:
            The refreshed Admin instance, or None if it no longer exists
        """
        self.db.execute(
            update(Admin)
            .where(Admin.id == admin_id)
            .values(failed_attempts=0, lock_until=None, updated_at=now)
            .execution_options(synchronize_session=False)
        )
        self.db.commit()
        return self._reload(admin_id)

    def count_admins(self, include_inactive: bool = False) -> int:
        """
        Count admin identities.

        Args:
            include_inactive: Whether to include inactive admins

        Returns:
            Total count of admins
        """
        query = self.db.query(Admin)

        if not include_inactive:
            query = query.filter(Admin.is_active == True)

        return query.count()

    def _reload(self, admin_id: int) -> Optional[Admin]:
        admin = self.get_admin(admin_id)
        if admin is not None:
            self.db.refresh(admin)
        return admin


# Convenience functions
def create_admin(db: Session, admin_data: AdminCreate) -> Admin:
    """Create a new admin."""
    return AdminCRUD(db).create_admin(admin_data)


def get_admin_by_email(db: Session, email: str) -> Optional[Admin]:
    """Get admin by e-mail."""
    return AdminCRUD(db).find_by_email(email)


def get_admin_count(db: Session, include_inactive: bool = False) -> int:
    """Get total count of admins."""
    return AdminCRUD(db).count_admins(include_inactive=include_inactive)
