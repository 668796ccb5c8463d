"""
Admin identity model for the back-office login.

This module defines the admin_users table: the e-mail/password identity plus
the failure counter and lock timestamp driving the lockout policy.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Boolean, DateTime

from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.dependencies.database import Base


class Admin(Base):
    """
    Admin identity used by the password + one-time-code login.

    ``failed_attempts`` resets to 0 on every correct password. ``lock_until``
    is only set when the counter reaches the configured threshold and marks
    the instant before which password checks are rejected outright.
    """

    __tablename__ = "admin_users"

    # Primary key
    id = Column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique identifier for the admin"
    )

    # Authentication fields
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
        comment="Login e-mail, matched exactly as stored"
    )

    password_hash = Column(
        String(255),
        nullable=False,
        comment="Bcrypt hashed password"
    )

    # Status field
    is_active = Column(
        Boolean,
        default=True,
        nullable=False,
        comment="Whether the admin account is active"
    )

    # Lockout state
    failed_attempts = Column(
        Integer,
        default=0,
        nullable=False,
        comment="Consecutive wrong passwords since the last success"
    )

    lock_until = Column(
        DateTime,
        nullable=True,
        comment="Password checks are rejected before this instant (UTC)"
    )

    # Timestamps
    created_at = Column(
        DateTime,
        default=utcnow,
        nullable=False,
        comment="When the admin account was created"
    )

    updated_at = Column(
        DateTime,
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
        comment="When the admin account was last updated"
    )

    def is_locked(self, now: datetime) -> bool:
        """Whether password checks must be rejected at ``now``."""
        return self.lock_until is not None and self.lock_until > now

    def __repr__(self) -> str:
        """String representation of the Admin model."""
        return f"<Admin(id={self.id}, email='{self.email}', is_active={self.is_active})>"

    def __str__(self) -> str:
        """Human-readable string representation."""
        return f"Admin: {self.email}"
