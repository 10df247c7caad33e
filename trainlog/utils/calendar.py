"""Calendar arithmetic for the heat-map grid and month labels.

Weekdays are ISO-ordered: Monday=0 .. Sunday=6.
"""

import calendar
from datetime import date


def iso_weekday(d: date) -> int:
    """Return the weekday of d with Monday=0 and Sunday=6."""
    return d.weekday()


def iso_weekday_from_sunday_first(native_weekday: int) -> int:
    """Convert a Sunday=0 weekday index (JS getDay, cron) to Monday=0."""
    return (native_weekday + 6) % 7


def is_leap_year(year: int) -> bool:
    return calendar.isleap(year)


def days_in_year(year: int) -> int:
    """Return 365 or 366 for the given Gregorian year."""
    jan1 = date(year, 1, 1)
    return (date(year, 12, 31) - jan1).days + 1


def last_day_of_month(year: int, month: int) -> date:
    return date(year, month, calendar.monthrange(year, month)[1])
