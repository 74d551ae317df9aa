"""Timezone helpers."""

from __future__ import annotations

import datetime as dt
import logging
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from bettermail.config import settings

logger = logging.getLogger(__name__)

DEFAULT_TIMEZONE = "America/Los_Angeles"

# 3:04pm
DISPLAY_DATE_FORMAT = "%-I:%M%p"
# Monday, January 2, 2006 at 3:04:05pm PST
DISPLAY_DATE_FULL_FORMAT = "%A, %B %-d, %Y at %-I:%M:%S%p %Z"


def load_timezone(name: str, fallback: str = DEFAULT_TIMEZONE) -> tuple[ZoneInfo, str]:
    """Return a ``ZoneInfo`` instance and its canonical name with a fallback."""

    try:
        return ZoneInfo(name), name
    except (ZoneInfoNotFoundError, ValueError):
        return ZoneInfo(fallback), fallback


TZ, TZ_NAME = load_timezone(settings.timezone or DEFAULT_TIMEZONE)


def _strftime(value: dt.datetime, fmt: str) -> str:
    """``strftime`` plus unpadded ``%-I`` / ``%-d`` on every platform."""
    fmt = fmt.replace("%-I", str(value.hour % 12 or 12)).replace("%-d", str(value.day))
    return value.strftime(fmt)


def safe_format_date(
    value: dt.datetime | None,
    fmt: str,
    tz: dt.tzinfo | None = None,
) -> str:
    """
    Format ``value`` in ``tz`` (the configured zone by default).

    Never raises: a missing value or any formatting failure yields ``""``.
    """
    if value is None:
        return ""
    try:
        local = value.astimezone(tz or TZ)
        return _strftime(local, fmt).replace("AM", "am").replace("PM", "pm")
    except Exception:  # never fail a notification over a date
        logger.warning("Could not format date %r with %r", value, fmt, exc_info=True)
        return ""
