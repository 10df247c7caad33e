"""Per-year totals shown above the heat map."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from trainlog.heatmap.schemas import DailyHoursMap


@dataclass(frozen=True)
class YearSummary:
    year: int
    total_hours: float
    active_days: int


def hours_on(daily_hours: DailyHoursMap, d: date) -> float:
    """Hours logged on d, 0.0 when nothing was logged."""
    return daily_hours.get(d, 0.0)


def hours_for_year(daily_hours: DailyHoursMap, year: int) -> DailyHoursMap:
    """Restrict a DailyHoursMap to the dates of one year."""
    return {d: hours for d, hours in daily_hours.items() if d.year == year}


def summarize_year(daily_hours: DailyHoursMap, year: int) -> YearSummary:
    """Total hours (rounded to 0.1) and number of days with training in year.

    A date whose override was set to 0 hours does not count as active.
    """
    year_hours = hours_for_year(daily_hours, year)
    total = sum(year_hours[d] for d in sorted(year_hours))
    active_days = sum(1 for hours in year_hours.values() if hours > 0)
    return YearSummary(year=year, total_hours=round(total, 1), active_days=active_days)
