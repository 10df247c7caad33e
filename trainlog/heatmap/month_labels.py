"""Month header placement for the heat-map grid."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from loguru import logger

from trainlog.heatmap.grid import YearGrid
from trainlog.utils.calendar import last_day_of_month

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


@dataclass(frozen=True)
class MonthLabel:
    """Header label for one month.

    Attributes:
        name: Short English month name
        start_column: Week column containing the 1st of the month
        column_span: Number of week columns the month touches (>= 1)
    """

    name: str
    start_column: int
    column_span: int


def _find_column(grid: YearGrid, target: date, start: int = 0) -> int | None:
    for column in range(start, len(grid.weeks)):
        if target in grid.weeks[column]:
            return column
    return None


def place_month_labels(grid: YearGrid) -> list[MonthLabel]:
    """Compute the label column and span of every month in the grid.

    The start column is the first week containing the 1st of the month; the
    end column is the first week, searching forward from the start, that
    contains the last day of the month.

    Args:
        grid: Year grid produced by build_year_grid

    Returns:
        Labels in calendar order (all 12 for a full-year grid)
    """
    labels: list[MonthLabel] = []
    for month, name in enumerate(MONTH_NAMES, start=1):
        first_of_month = date(grid.year, month, 1)
        last_of_month = last_day_of_month(grid.year, month)

        start_column = _find_column(grid, first_of_month)
        if start_column is None:
            logger.debug(f"[HEATMAP] {name} {grid.year} not present in grid, skipping label")
            continue

        end_column = _find_column(grid, last_of_month, start_column)
        if end_column is None:
            end_column = start_column

        labels.append(MonthLabel(name=name, start_column=start_column, column_span=end_column - start_column + 1))
    return labels
