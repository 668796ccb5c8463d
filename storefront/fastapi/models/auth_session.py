"""
Server-side session rows.

The browser only holds the random session id (in the signed session cookie);
the authentication state, including any pending one-time code, stays here.
"""

from sqlalchemy import Column, String, DateTime, JSON

from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.dependencies.database import Base


class AuthSessionRecord(Base):
    __tablename__ = "auth_sessions"

    id = Column(String(64), primary_key=True, comment="Random session id")

    state = Column(JSON, nullable=False, default=dict, comment="Serialized session state")

    created_at = Column(DateTime, default=utcnow, nullable=False)

    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)

    expires_at = Column(DateTime, nullable=False, index=True)

    def __repr__(self) -> str:
        return f"<AuthSessionRecord(id='{self.id[:8]}...', expires_at={self.expires_at})>"
