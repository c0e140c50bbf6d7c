"""
Date Utilities for Courtfile.

Consistent UTC handling plus lenient parsing of the date strings people
type into court forms.
"""

from datetime import date, datetime, timezone
from typing import Any, Optional


# Formats accepted for user-entered dates, tried in order
DATE_FORMATS = [
    "%Y-%m-%d",    # 2025-01-15
    "%m/%d/%Y",    # 01/15/2025
    "%m-%d-%Y",    # 01-15-2025
    "%B %d, %Y",   # January 15, 2025
    "%b %d, %Y",   # Jan 15, 2025
    "%d %B %Y",    # 15 January 2025
]


def utc_now() -> datetime:
    """
    Get current UTC time as timezone-aware datetime.

    Example:
        from courtfile.core.dates import utc_now

        created_at = utc_now()  # 2025-12-08 03:00:00+00:00
    """
    return datetime.now(timezone.utc)


def utc_now_iso() -> str:
    """
    Get current UTC time as ISO 8601 string with Z suffix.

    Returns format: "2025-12-08T03:00:00.123456Z"
    """
    return utc_now().isoformat().replace("+00:00", "Z")


def utc_today() -> date:
    """Today's calendar date in UTC."""
    return utc_now().date()


def parse_date_flexible(value: Any) -> Optional[date]:
    """
    Parse a user-supplied date. Return None if unparseable.

    Handles:
    - date / datetime objects
    - "2025-12-08T03:00:00Z" and other ISO 8601 strings
    - the common US formats in DATE_FORMATS
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    cleaned = value.strip()
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date()
        except ValueError:
            continue

    try:
        return datetime.fromisoformat(cleaned.replace("Z", "+00:00")).date()
    except ValueError:
        return None
