"""
Server-side session store.

Sessions are keyed by a random id carried in the signed session cookie.
Expired rows are treated as absent and a fresh anonymous session is handed
out instead.
"""

import secrets
from datetime import datetime, timedelta
from typing import Optional
from sqlalchemy import delete
from sqlalchemy.orm import Session

from storefront.fastapi.models.auth_session import AuthSessionRecord
from storefront.security.session import AuthSession, Anonymous, dump_state, load_state


def new_session_id() -> str:
    return secrets.token_urlsafe(32)


class AuthSessionStore:
    """Load, persist and destroy AuthSession objects."""

    def __init__(self, db: Session, max_age_seconds: int):
        self.db = db
        self.max_age = timedelta(seconds=max_age_seconds)

    def load(self, sid: Optional[str], now: datetime) -> AuthSession:
        """
        Load the session for ``sid``, or start a new anonymous one.

        Args:
            sid: Session id from the cookie (may be None or unknown)
            now: Current naive UTC time

        Returns:
            AuthSession (new id when nothing live was found)
        """
        if sid:
            record = self.db.get(AuthSessionRecord, sid)
            if record is not None and record.expires_at > now:
                return AuthSession(sid, load_state(record.state))
            if record is not None:
                self.db.delete(record)
                self.db.commit()
        return AuthSession(new_session_id(), Anonymous())

    def persist(self, session: AuthSession, now: datetime):
        """
        Write the session state back, sliding its expiry; destroyed sessions are removed.

        Anonymous sessions without a remembered target are not stored.
        """
        if session.destroyed or self._is_blank(session):
            self.destroy(session.sid)
            return

        record = self.db.get(AuthSessionRecord, session.sid)
        if record is None:
            record = AuthSessionRecord(id=session.sid, created_at=now)
            self.db.add(record)
        record.state = dump_state(session.state)
        record.updated_at = now
        record.expires_at = now + self.max_age
        self.db.commit()

    def destroy(self, sid: str):
        self.db.execute(delete(AuthSessionRecord).where(AuthSessionRecord.id == sid))
        self.db.commit()

    def purge_expired(self, now: datetime) -> int:
        """Remove every expired session row; returns how many were removed."""
        result = self.db.execute(delete(AuthSessionRecord).where(AuthSessionRecord.expires_at <= now))
        self.db.commit()
        return result.rowcount

    @staticmethod
    def _is_blank(session: AuthSession) -> bool:
        return isinstance(session.state, Anonymous) and not session.state.return_to
