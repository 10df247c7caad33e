"""Timezone helpers for resolving the athlete's local calendar.

Session instants are logged by a person in their own timezone, so dates are
always taken from local time. "Local" is the configured TRAINLOG_TIMEZONE when
set, otherwise the host's local timezone.
"""

from datetime import date, datetime, tzinfo
from functools import cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from loguru import logger

from trainlog.core.settings import settings


def get_local_timezone(name: str | None = None) -> tzinfo | None:
    """Resolve a timezone name to a ZoneInfo.

    Args:
        name: IANA timezone name. Defaults to settings.timezone.

    Returns:
        ZoneInfo for the name, or None meaning the host's local timezone
        (also used when the name is unknown).
    """
    tz_name = settings.timezone if name is None else name
    if not tz_name:
        return None
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{tz_name}', falling back to host local time")
        return None


@cache
def configured_timezone() -> tzinfo | None:
    """Resolve settings.timezone once per process."""
    return get_local_timezone()


def today_local(tz: tzinfo | None = None) -> date:
    """Get today's date in the given timezone (host local time when None)."""
    if tz is None:
        return datetime.now().astimezone().date()
    return datetime.now(tz).date()
