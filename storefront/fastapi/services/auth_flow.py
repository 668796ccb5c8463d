"""
Two-step admin login: password, then a mailed one-time code.

State machine (see ``storefront.security.session``)::

    Anonymous --login--> OtpPending --verify_otp--> Authenticated
        ^                    |                          |
        +-- expiry/exhausted-+                          |
        +------------------- logout --------------------+

The lock check runs before the password comparison, so a locked account is
rejected the same way whether or not the password is right. An expired or
exhausted code is never re-issued; the admin starts over at the password.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

from storefront.fastapi.core.config import Settings
from storefront.fastapi.core.exceptions import (
    AccountLocked,
    ChallengeExpired,
    DeliveryFailure,
    InvalidCode,
    InvalidCredentials,
    NoPendingChallenge,
    TooManyAttempts,
)
from storefront.fastapi.core.init_settings import global_settings
from storefront.fastapi.core.utils import utcnow
from storefront.fastapi.crud.admin import AdminCRUD
from storefront.fastapi.services.mail import deliver_with_timeout
from storefront.security import otp
from storefront.security.otp import OtpChallenge, OtpCheckStatus
from storefront.security.password import verify_password
from storefront.security.session import AdminIdentityRef, AuthSession, OtpPending

logger = logging.getLogger(__name__)


class AdminAuthService:
    """Drives an AuthSession through the login, code and logout transitions."""

    def __init__(
        self,
        db: Session,
        mailer,
        settings: Settings = None,
        clock: Callable[[], datetime] = utcnow
    ):
        self.settings = settings or global_settings
        self.credentials = AdminCRUD(
            db,
            max_failures=self.settings.LOGIN_MAX_FAILURES,
            lock_minutes=self.settings.LOGIN_LOCK_MINUTES
        )
        self.mailer = mailer
        self.clock = clock

    async def login(self, session: AuthSession, email: str, password: str) -> OtpChallenge:
        """
        Check the password and, on success, start a one-time-code challenge.

        Args:
            session: The caller's session (moved to OtpPending on success)
            email: Login e-mail, matched exactly
            password: Plaintext password

        Returns:
            The issued challenge

        Raises:
            InvalidCredentials: Unknown e-mail, inactive account or wrong password
            AccountLocked: Lock still in force (checked before the password)
            DeliveryFailure: The code could not be mailed and no bypass applies
        """
        now = self.clock()
        admin = self.credentials.find_by_email(email)
        if admin is None or not admin.is_active:
            logger.info("Admin login rejected: unknown or inactive account")
            raise InvalidCredentials()

        if admin.is_locked(now):
            logger.warning("Admin login rejected: admin_id=%s locked until %s", admin.id, admin.lock_until)
            raise AccountLocked()

        if not verify_password(password, admin.password_hash):
            updated = self.credentials.increment_failure(admin.id, now)
            if updated is not None and updated.is_locked(now):
                logger.warning(
                    "Admin admin_id=%s locked until %s after %s failed passwords",
                    admin.id, updated.lock_until, updated.failed_attempts
                )
            else:
                logger.info("Admin login rejected: wrong password for admin_id=%s", admin.id)
            raise InvalidCredentials()

        self.credentials.reset_failure(admin.id, now)

        identity = AdminIdentityRef(id=admin.id, email=admin.email)
        challenge = otp.issue(now, timedelta(minutes=self.settings.OTP_TTL_MINUTES))
        session.begin_challenge(identity, challenge)

        delivered = await deliver_with_timeout(
            self.mailer,
            identity.email,
            challenge.code,
            self.settings.OTP_TTL_MINUTES,
            self.settings.OTP_MAIL_TIMEOUT_SECONDS
        )
        if not delivered:
            if self.settings.allow_delivery_bypass:
                logger.warning("OTP delivery failed for admin_id=%s; continuing (delivery bypass enabled)", admin.id)
            else:
                session.clear_pending()
                logger.error("OTP delivery failed for admin_id=%s; login aborted", admin.id)
                raise DeliveryFailure()

        logger.info("OTP issued for admin_id=%s, expires %s", admin.id, challenge.expires_at)
        return challenge

    def verify_otp(self, session: AuthSession, submitted_code: str) -> str:
        """
        Check a submitted code and promote the session on a match.

        Args:
            session: The caller's session
            submitted_code: Code typed by the admin

        Returns:
            Post-login redirect target (remembered page or the admin home)

        Raises:
            NoPendingChallenge: Session is not waiting for a code
            ChallengeExpired: Code is past its expiry (pending state cleared)
            TooManyAttempts: Fifth wrong code (pending state cleared)
            InvalidCode: Wrong code, further tries remain
        """
        state = session.state
        if not isinstance(state, OtpPending):
            raise NoPendingChallenge()

        now = self.clock()
        status, challenge = otp.check(state.challenge, submitted_code, now, self.settings.OTP_MAX_TRIES)

        if status is OtpCheckStatus.EXPIRED:
            session.clear_pending()
            logger.info("OTP expired for admin_id=%s", state.pending_admin.id)
            raise ChallengeExpired()

        if status is OtpCheckStatus.EXHAUSTED:
            session.clear_pending()
            logger.warning("OTP attempts exhausted for admin_id=%s", state.pending_admin.id)
            raise TooManyAttempts()

        if status is OtpCheckStatus.MISMATCH:
            session.update_challenge(challenge)
            raise InvalidCode()

        return_to = session.promote()
        logger.info("Admin admin_id=%s signed in", state.pending_admin.id)
        return self.redirect_target(return_to)

    def logout(self, session: AuthSession) -> str:
        """Drop every piece of authentication state. Safe from any state."""
        admin = session.admin
        session.destroy()
        if admin is not None:
            logger.info("Admin admin_id=%s signed out", admin.id)
        return self.settings.ADMIN_LOGIN_PATH

    def redirect_target(self, return_to: Optional[str]) -> str:
        # Local paths only
        if return_to and return_to.startswith("/") and not return_to.startswith("//"):
            return return_to
        return self.settings.ADMIN_HOME_PATH
