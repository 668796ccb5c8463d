"""
Outbound mail for one-time codes.

``deliver_with_timeout`` races the SMTP send against a timer. The send is
never cancelled: if the timer wins, the send keeps running in the background
and its eventual outcome is only logged.
"""

import asyncio
import logging
from email.message import EmailMessage
from typing import Optional, Set

import aiosmtplib

from storefront.fastapi.core.config import Settings

logger = logging.getLogger(__name__)

# Sends that lost the race; referenced here until they finish
_late_sends: Set[asyncio.Task] = set()


class OtpMailer:
    """Sends the login code through SMTP (aiosmtplib)."""

    def __init__(self, settings: Settings):
        self.settings = settings

    @property
    def sender(self) -> Optional[str]:
        return self.settings.MAIL_FROM or self.settings.SMTP_USER

    def build_message(self, email: str, code: str, ttl_minutes: int) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self.sender
        message["To"] = email
        message["Subject"] = f"Your admin login code: {code}"
        message.set_content(
            f"Your one-time login code is {code}.\n\n"
            f"It expires in {ttl_minutes} minutes. If you did not try to sign in, "
            f"change your password."
        )
        message.add_alternative(
            f"<p>Your one-time login code is <strong>{code}</strong>.</p>"
            f"<p>It expires in {ttl_minutes} minutes. If you did not try to sign in, "
            f"change your password.</p>",
            subtype="html"
        )
        return message

    async def send_otp(self, email: str, code: str, ttl_minutes: int):
        """
        Send the code to ``email``.

        Raises:
            ValueError: If recipient or sender is missing
            aiosmtplib.SMTPException: On any SMTP failure
        """
        to = (email or "").strip()
        if not to:
            raise ValueError("send_otp: recipient is required")
        if not self.sender:
            raise ValueError("send_otp: MAIL_FROM/SMTP_USER is not configured")

        await aiosmtplib.send(
            self.build_message(to, code, ttl_minutes),
            hostname=self.settings.SMTP_HOST,
            port=self.settings.SMTP_PORT,
            start_tls=self.settings.SMTP_START_TLS,
            username=self.settings.SMTP_USER,
            password=self.settings.SMTP_PASS,
            timeout=max(self.settings.OTP_MAIL_TIMEOUT_SECONDS * 2, 10),
        )


def _log_late_outcome(task: asyncio.Task):
    _late_sends.discard(task)
    if task.cancelled():
        return
    exc = task.exception()
    if exc is not None:
        logger.error("[MAIL] Late OTP send failed: %s", exc)
    else:
        logger.info("[MAIL] Late OTP send completed after timeout; result ignored")


async def deliver_with_timeout(mailer, email: str, code: str, ttl_minutes: int, timeout_seconds: float) -> bool:
    """
    Send a code, giving up waiting after ``timeout_seconds``.

    Args:
        mailer: Object with an async ``send_otp(email, code, ttl_minutes)``
        email: Recipient
        code: The one-time code
        ttl_minutes: Code lifetime quoted in the message
        timeout_seconds: How long to wait for the send

    Returns:
        True if the send finished successfully in time, False otherwise
    """
    task = asyncio.ensure_future(mailer.send_otp(email, code, ttl_minutes))
    done, _ = await asyncio.wait({task}, timeout=timeout_seconds)

    if task not in done:
        logger.warning("[MAIL] OTP send still pending after %.1fs; not waiting any longer", timeout_seconds)
        _late_sends.add(task)
        task.add_done_callback(_log_late_outcome)
        return False

    exc = task.exception()
    if exc is not None:
        logger.error("[MAIL] OTP send failed: %s", exc)
        return False
    return True
