"""
One-time code challenges for the second login step.

Challenges live inside the server-side session; nothing here touches the
database. Expiry is an absolute UTC instant so a serialized challenge keeps
its deadline.
"""

import secrets
from datetime import datetime, timedelta
from enum import Enum
from typing import Tuple

from pydantic import BaseModel, Field

OTP_DIGITS = 6
OTP_SPACE = 10 ** OTP_DIGITS


class OtpChallenge(BaseModel):
    """A live one-time code and its bookkeeping."""

    code: str = Field(..., min_length=OTP_DIGITS, max_length=OTP_DIGITS)
    expires_at: datetime = Field(..., description="Naive UTC instant after which the code is void")
    tries_used: int = Field(default=0, ge=0)


class OtpCheckStatus(str, Enum):
    MATCH = "match"
    EXPIRED = "expired"
    MISMATCH = "mismatch"
    EXHAUSTED = "exhausted"


def generate_code() -> str:
    """
    Draw a code uniformly from [0, 1,000,000) with a CSPRNG.

    Returns:
        Six ASCII digits, zero-padded (e.g. "004217")
    """
    return f"{secrets.randbelow(OTP_SPACE):0{OTP_DIGITS}d}"


def issue(now: datetime, ttl: timedelta) -> OtpChallenge:
    """Create a fresh challenge valid in [now, now + ttl)."""
    return OtpChallenge(code=generate_code(), expires_at=now + ttl, tries_used=0)


def check(challenge: OtpChallenge, submitted: str, now: datetime, max_tries: int) -> Tuple[OtpCheckStatus, OtpChallenge]:
    """
    Evaluate a submitted code against a challenge.

    Expiry is checked first; a wrong code consumes one try and the challenge
    is exhausted once ``max_tries`` wrong codes have been submitted.

    Args:
        challenge: The live challenge
        submitted: Code typed by the user (surrounding whitespace ignored)
        now: Current naive UTC time
        max_tries: Wrong codes allowed before the challenge is discarded

    Returns:
        (status, challenge) where the challenge carries the updated try count
    """
    if now >= challenge.expires_at:
        return OtpCheckStatus.EXPIRED, challenge

    candidate = (submitted or "").strip()
    if secrets.compare_digest(candidate.encode(), challenge.code.encode()):
        return OtpCheckStatus.MATCH, challenge

    updated = challenge.model_copy(update={"tries_used": challenge.tries_used + 1})
    if updated.tries_used >= max_tries:
        return OtpCheckStatus.EXHAUSTED, updated
    return OtpCheckStatus.MISMATCH, updated
