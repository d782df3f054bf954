# File: utils/dt_utils.py
"""Calendar date utilities for Housework Queue.

Pure Python date functions with ZERO Home Assistant dependencies.
All functions here can be unit tested without Home Assistant mocking.

⚠️ UTILS PURITY: NO `homeassistant.*` imports allowed in this module.

Dates travel through the integration as ISO strings ("YYYY-MM-DD"); there
is no time-of-day or timezone arithmetic beyond resolving "today" in the
caller's timezone.

Functions:
    - dt_today_local: Get today's date in a timezone
    - dt_today_iso: Get today's date as ISO string
    - dt_now_iso: Get current datetime as ISO string
    - dt_parse_date: Strict ISO date parsing
    - dt_parse_flexible_date: ISO or US-style (M/D/YYYY) date parsing
    - dt_add_days: Add a signed number of days to an ISO date
    - dt_days_between: Signed whole-day difference between ISO dates
    - dt_format_due_label: Human readable due/overdue label
"""

from __future__ import annotations

from datetime import UTC, date, datetime, timedelta
import logging
import re
from zoneinfo import ZoneInfo

# Module-level logger (no HA dependency)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants
# ==============================================================================

ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")
US_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")

LABEL_DUE_TODAY = "Due today"
LABEL_OVERDUE_FMT = "Overdue by {}d"
LABEL_DUE_IN_FMT = "Due in {}d"


# ==============================================================================
# Current Date/Time Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in the given timezone (UTC if not provided).

    Example:
        datetime.date(2025, 4, 7)
    """
    return datetime.now(tz or UTC).date()


def dt_today_iso(tz: ZoneInfo | None = None) -> str:
    """Return today's date as ISO string (YYYY-MM-DD).

    Example:
        "2025-04-07"
    """
    return dt_today_local(tz).isoformat()


def dt_now_iso(tz: ZoneInfo | None = None) -> str:
    """Return the current datetime as an ISO 8601 string.

    Example:
        "2025-04-07T14:30:00-05:00"
    """
    return datetime.now(tz or UTC).isoformat()


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(date_str: str | None) -> date | None:
    """Parse a strict "YYYY-MM-DD" string into a `datetime.date`.

    Returns None for any other shape, and for impossible dates such as
    "2024-02-30".
    """
    if not date_str or not isinstance(date_str, str):
        return None

    match = ISO_DATE_RE.match(date_str.strip())
    if not match:
        return None

    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError:
        return None


def dt_parse_flexible_date(text: str | None) -> str | None:
    """Parse "YYYY-MM-DD", "M/D/YYYY" or "MM/DD/YYYY" into an ISO date string.

    Any other input yields None; it is up to the caller to decide whether
    that is an error.

    Examples:
        dt_parse_flexible_date("1/5/2024") → "2024-01-05"
        dt_parse_flexible_date(" 2024-01-05 ") → "2024-01-05"
        dt_parse_flexible_date("Jan 5") → None
    """
    if text is None:
        return None
    cleaned = str(text).strip()
    if not cleaned:
        return None

    parsed = dt_parse_date(cleaned)
    if parsed is not None:
        return parsed.isoformat()

    match = US_DATE_RE.match(cleaned)
    if not match:
        return None

    month, day, year = (int(part) for part in match.groups())
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        _LOGGER.debug("Rejected impossible date: %s", cleaned)
        return None


# ==============================================================================
# Arithmetic
# ==============================================================================


def dt_add_days(iso_date: str, days: int) -> str:
    """Return the ISO date `days` after `iso_date` (negative goes back)."""
    return (date.fromisoformat(iso_date) + timedelta(days=days)).isoformat()


def dt_days_between(start_iso: str, end_iso: str) -> int:
    """Return `end - start` in whole calendar days (signed)."""
    return (date.fromisoformat(end_iso) - date.fromisoformat(start_iso)).days


def dt_format_due_label(due_iso: str, today_iso: str) -> str:
    """Format a due date relative to today.

    Examples:
        "Overdue by 3d", "Due today", "Due in 2d"
    """
    delta = dt_days_between(due_iso, today_iso)
    if delta > 0:
        return LABEL_OVERDUE_FMT.format(delta)
    if delta == 0:
        return LABEL_DUE_TODAY
    return LABEL_DUE_IN_FMT.format(abs(delta))
