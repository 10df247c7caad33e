"""Year selection and navigation for the heat map."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from typing import Literal

from trainlog.heatmap.grid import validate_year


def available_years(session_dates: Iterable[date], current_year: int, displayed_year: int) -> list[int]:
    """Years offered in the year picker, newest first.

    The set is every year with at least one session, plus the current year and
    the year on display. Navigating back to a year without data adds it. A
    displayed year after current_year is clamped to current_year.

    Raises:
        InvalidYearError: If displayed_year is outside 1..9999
    """
    validate_year(displayed_year)
    years = {d.year for d in session_dates}
    years.add(current_year)
    years.add(min(displayed_year, current_year))
    return sorted(years, reverse=True)


def can_navigate_forward(displayed_year: int, current_year: int) -> bool:
    return displayed_year < current_year


def navigate_year(displayed_year: int, direction: Literal["prev", "next"], current_year: int) -> int:
    """Step the displayed year.

    Forward navigation stops at current_year. Backward navigation is only
    bounded by the representable calendar.

    Raises:
        InvalidYearError: If stepping back would leave the representable range
        ValueError: If direction is not "prev" or "next"
    """
    if direction == "prev":
        return validate_year(displayed_year - 1)
    if direction == "next":
        if can_navigate_forward(displayed_year, current_year):
            return displayed_year + 1
        return displayed_year
    raise ValueError(f"Unknown navigation direction: {direction}")


def default_selected_date(year: int, today: date) -> date | None:
    """Today's date when viewing today's year, otherwise nothing is selected."""
    if year == today.year:
        return today
    return None
