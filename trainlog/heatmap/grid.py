"""Year grid construction for the calendar heat map.

The grid has one column per week and one row per ISO weekday (Monday=0 ..
Sunday=6). Cells before Jan 1 and after Dec 31 of the target year are None.
A date's row is never looked up separately: it follows from the offset
arithmetic in build_year_grid, and verify_year_grid checks it afterwards.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from dataclasses import dataclass
from datetime import MAXYEAR, MINYEAR, date, timedelta

from loguru import logger

from trainlog.heatmap.errors import GridInvariantError, InvalidYearError
from trainlog.utils.calendar import days_in_year, iso_weekday

DAYS_PER_WEEK = 7

Week = tuple[date | None, ...]


@dataclass(frozen=True)
class YearGrid:
    """Immutable week x weekday layout of a calendar year.

    Attributes:
        year: Target year
        weeks: Week columns in order, each holding 7 cells (Monday first)
        iso_weekday_of_jan1: Number of leading padding cells in the first week
    """

    year: int
    weeks: tuple[Week, ...]
    iso_weekday_of_jan1: int

    def __len__(self) -> int:
        return len(self.weeks)

    def cells(self) -> Iterator[tuple[int, int, date]]:
        """Yield (column, row, date) for every non-padding cell."""
        for column, week in enumerate(self.weeks):
            for row, cell in enumerate(week):
                if cell is not None:
                    yield column, row, cell

    def column_of(self, d: date) -> int | None:
        """Return the week column holding d, or None if d is outside the year."""
        if d.year != self.year:
            return None
        return (self.iso_weekday_of_jan1 + (d - date(self.year, 1, 1)).days) // DAYS_PER_WEEK


def validate_year(year: object) -> int:
    """Return year if it can produce a full grid, else raise InvalidYearError."""
    if isinstance(year, bool) or not isinstance(year, int):
        raise InvalidYearError(year)
    if year < MINYEAR or year > MAXYEAR:
        raise InvalidYearError(year)
    return year


def build_year_grid(year: int) -> YearGrid:
    """Build the dense week x weekday grid for a full calendar year.

    Algorithm:
        - offset of cell (week, day) = week * 7 + day - iso_weekday(Jan 1)
        - offsets in [0, days_in_year) hold Jan 1 + offset, others are None
        - total weeks = ceil((iso_weekday(Jan 1) + days_in_year) / 7)

    Args:
        year: Target year (1..9999)

    Returns:
        YearGrid that has passed verify_year_grid

    Raises:
        InvalidYearError: If year is not an integer in 1..9999
    """
    validate_year(year)

    jan1 = date(year, 1, 1)
    jan1_weekday = iso_weekday(jan1)
    total_days = days_in_year(year)
    total_weeks = math.ceil((jan1_weekday + total_days) / DAYS_PER_WEEK)

    weeks: list[Week] = []
    for week_index in range(total_weeks):
        week: list[date | None] = []
        for day_index in range(DAYS_PER_WEEK):
            day_offset = week_index * DAYS_PER_WEEK + day_index - jan1_weekday
            if 0 <= day_offset < total_days:
                week.append(jan1 + timedelta(days=day_offset))
            else:
                week.append(None)
        weeks.append(tuple(week))

    grid = YearGrid(year=year, weeks=tuple(weeks), iso_weekday_of_jan1=jan1_weekday)
    verify_year_grid(grid)
    logger.debug(f"[HEATMAP] Built grid for {year}: {total_weeks} weeks, Jan 1 in row {jan1_weekday}")
    return grid


def verify_year_grid(grid: YearGrid) -> None:
    """Check the placement invariants of a year grid.

    Invariants:
    - every week has exactly 7 cells
    - week count = ceil((iso_weekday(Jan 1) + days_in_year) / 7)
    - every date of the year appears exactly once
    - each date sits in the row of its own ISO weekday

    Raises:
        GridInvariantError: On the first violated invariant
    """
    total_days = days_in_year(grid.year)

    bad_weeks = [f"week {i} has {len(week)} cells" for i, week in enumerate(grid.weeks) if len(week) != DAYS_PER_WEEK]
    if bad_weeks:
        raise GridInvariantError("WEEK_LENGTH_MISMATCH", bad_weeks)

    expected_weeks = math.ceil((grid.iso_weekday_of_jan1 + total_days) / DAYS_PER_WEEK)
    if len(grid.weeks) != expected_weeks:
        raise GridInvariantError("WEEK_COUNT_MISMATCH", [f"expected {expected_weeks} weeks, got {len(grid.weeks)}"])

    seen: set[date] = set()
    misplaced: list[str] = []
    for column, row, cell in grid.cells():
        if cell.year != grid.year or cell in seen:
            raise GridInvariantError("DUPLICATE_OR_FOREIGN_DATE", [f"{cell.isoformat()} at column {column}"])
        seen.add(cell)
        if iso_weekday(cell) != row:
            misplaced.append(f"{cell.isoformat()} in row {row}, weekday {iso_weekday(cell)}")

    if misplaced:
        raise GridInvariantError("WEEKDAY_ROW_MISMATCH", misplaced)
    if len(seen) != total_days:
        raise GridInvariantError("DAY_COUNT_MISMATCH", [f"expected {total_days} dates, got {len(seen)}"])
