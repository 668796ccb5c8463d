"""
Utility functions for data normalization and formatting.

This module provides reusable helpers for slugs, free-form product specs,
timestamps and the lenient date coercion used when restoring archived rows.
"""

import json
import re
import unicodedata
from datetime import date, datetime, timezone
from typing import Any, Optional


def utcnow() -> datetime:
    """Current UTC time as a naive datetime (the form stored in the database)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def epoch_millis(moment: datetime) -> int:
    """
    Milliseconds since the epoch for a naive UTC datetime.

    Used as the uniqueness suffix for restored slugs.
    """
    return int(moment.replace(tzinfo=timezone.utc).timestamp() * 1000)


def normalize_slug(value: Optional[str]) -> str:
    """
    Normalize a slug by:
    1. Removing accents/diacritics (é -> e, ñ -> n)
    2. Converting to lowercase
    3. Replacing every run of characters outside [a-z0-9-] with a hyphen
    4. Trimming leading and trailing hyphens

    Examples:
        "Incense A" -> "incense-a"
        "  Rosé Oud!! " -> "rose-oud"
        "--already-ok--" -> "already-ok"

    Args:
        value: Raw slug or title

    Returns:
        Normalized slug (possibly empty)
    """
    if not value:
        return ""

    normalized = unicodedata.normalize('NFD', str(value))
    without_accents = ''.join(
        char for char in normalized
        if unicodedata.category(char) != 'Mn'
    )

    slug = re.sub(r'[^a-z0-9-]+', '-', without_accents.strip().lower())
    return slug.strip('-')


def parse_specs(raw: Any) -> Optional[dict]:
    """
    Parse product specs entered either as a JSON object or as "key: value" lines.

    Args:
        raw: dict, JSON text, line-based text or None

    Returns:
        Dict of specs, or None when nothing usable was given
    """
    if raw is None:
        return None
    if isinstance(raw, dict):
        return raw or None

    text = str(raw).strip()
    if not text:
        return None

    try:
        parsed = json.loads(text)
        if isinstance(parsed, dict):
            return parsed
    except ValueError:
        pass

    specs = {}
    for line in text.splitlines():
        key, sep, val = line.partition(':')
        if sep and key.strip():
            specs[key.strip()] = val.strip()
    return specs or None


def _parse_datetime(value: Any) -> Optional[datetime]:
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        # Numeric timestamps are epoch milliseconds
        try:
            parsed = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def coerce_datetime(value: Any, fallback_now: bool = False, now: Optional[datetime] = None) -> Optional[datetime]:
    """
    Coerce a loosely-typed date value into a naive UTC datetime.

    Accepts datetime/date objects, ISO-8601 strings (with or without offset)
    and epoch milliseconds. Missing or unparseable values resolve to ``now``
    when ``fallback_now`` is set, otherwise to None.

    Args:
        value: Value taken from an archived payload
        fallback_now: Whether missing/invalid values become the current time
        now: Current time override (defaults to utcnow())

    Returns:
        Parsed datetime, the fallback time, or None
    """
    parsed = None
    if value not in (None, ""):
        parsed = _parse_datetime(value)

    if parsed is None and fallback_now:
        return now or utcnow()
    return parsed
