"""Shared utilities used across the seat booking package."""

import random
import string
import time
from datetime import date, datetime, timezone
from typing import Optional

DATE_FORMAT = "%Y-%m-%d"
BOOKING_ID_PREFIX = "BOOK"
_ID_ALPHABET = string.digits + string.ascii_lowercase


def today_iso() -> str:
    """Return today's calendar date as YYYY-MM-DD (local time)."""
    return date.today().strftime(DATE_FORMAT)


def now_iso() -> str:
    """Return the current instant as an ISO 8601 UTC timestamp."""
    return datetime.now(timezone.utc).isoformat()


def is_iso_date(value: str) -> bool:
    """Check that a string is a calendar date in YYYY-MM-DD format."""
    try:
        datetime.strptime(value, DATE_FORMAT)
    except (ValueError, TypeError):
        return False
    return len(value) == 10


def generate_booking_id() -> str:
    """Generate a booking id from the current epoch millis and a random suffix.

    Examples:
        >>> generate_booking_id()  # doctest: +SKIP
        'BOOK_1760860800000_K3F9ZQ'
    """
    millis = int(time.time() * 1000)
    suffix = "".join(random.choices(_ID_ALPHABET, k=6))
    return f"{BOOKING_ID_PREFIX}_{millis}_{suffix}".upper()


def normalize_user_id(value: str) -> str:
    """Normalize a free-text user identifier by trimming surrounding whitespace.

    Examples:
        >>> normalize_user_id("  alice ")
        'alice'
    """
    return value.strip()


def validate_user_id(value: str, min_length: int) -> Optional[str]:
    """Return an error message for an unusable identifier, or None when it is fine."""
    cleaned = normalize_user_id(value)
    if not cleaned:
        return "Please enter a user ID."
    if len(cleaned) < min_length:
        return f"User ID must be at least {min_length} characters long."
    return None
