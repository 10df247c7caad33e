"""Conversion of session instants into local calendar dates."""

from __future__ import annotations

import math
from datetime import date, datetime, timedelta, timezone, tzinfo

from trainlog.heatmap.errors import InvalidTimestampError

NANOS_PER_MILLISECOND = 1_000_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def _to_milliseconds(instant: int | float) -> int:
    if isinstance(instant, bool) or not isinstance(instant, (int, float)):
        raise InvalidTimestampError(instant, "not a number")
    if isinstance(instant, float):
        if math.isnan(instant):
            raise InvalidTimestampError(instant, "NaN")
        if math.isinf(instant):
            raise InvalidTimestampError(instant, "infinite")
        if not instant.is_integer():
            raise InvalidTimestampError(instant, "not an integral number of nanoseconds")
        instant = int(instant)
    return instant // NANOS_PER_MILLISECOND


def to_local_datetime(instant: int | float, tz: tzinfo | None = None) -> datetime:
    """Convert a nanosecond instant into an aware datetime in local time.

    Args:
        instant: Nanoseconds since the Unix epoch
        tz: Target timezone. None means the host's local timezone.

    Raises:
        InvalidTimestampError: If the instant is not a finite integral number or
            falls outside years 1..9999 once converted.
    """
    milliseconds = _to_milliseconds(instant)
    try:
        utc = _EPOCH + timedelta(milliseconds=milliseconds)
        return utc.astimezone(tz)
    except (OverflowError, ValueError, OSError) as e:
        raise InvalidTimestampError(instant, f"outside representable date range ({e})") from e


def to_calendar_date(instant: int | float, tz: tzinfo | None = None) -> date:
    """Truncate a nanosecond instant to its local calendar date.

    Local rather than UTC: a session logged at 23:30 local time belongs to that
    local day even when UTC has already rolled over.

    Example:
        >>> from zoneinfo import ZoneInfo
        >>> to_calendar_date(1_709_280_000_000_000_000, ZoneInfo("UTC"))
        datetime.date(2024, 3, 1)
    """
    return to_local_datetime(instant, tz).date()


def to_instant(local: datetime) -> int:
    """Convert an aware (or host-local naive) datetime into nanoseconds since epoch."""
    if local.tzinfo is None:
        local = local.astimezone()
    delta = local - _EPOCH
    return (delta.days * 86_400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1_000
