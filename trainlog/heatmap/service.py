"""Heat-map view assembly.

Composes the pure pipeline for one request:

    sessions + overrides -> DailyHoursMap
    year                 -> YearGrid -> MonthLabels
    theme                -> ColorBucketer

Nothing is cached here; callers that want memoization key it on
(sessions, overrides, year, theme).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from datetime import date, tzinfo

from loguru import logger

from trainlog.heatmap.aggregation import aggregate_daily_hours
from trainlog.heatmap.colors import ColorBucketer, LegendEntry, legend
from trainlog.heatmap.errors import InvalidTimestampError
from trainlog.heatmap.grid import YearGrid, build_year_grid
from trainlog.heatmap.month_labels import MonthLabel, place_month_labels
from trainlog.heatmap.schemas import DailyHoursMap, ManualHoursOverride, Theme, TrainingSession
from trainlog.heatmap.summary import YearSummary, hours_for_year, hours_on, summarize_year
from trainlog.heatmap.timestamps import to_calendar_date
from trainlog.heatmap.years import available_years, can_navigate_forward, default_selected_date
from trainlog.utils.timezone import today_local


@dataclass(frozen=True)
class HeatMapView:
    """Everything a renderer needs to draw one year of the heat map."""

    year: int
    theme: Theme
    daily_hours: DailyHoursMap
    grid: YearGrid
    month_labels: list[MonthLabel]
    available_years: list[int]
    summary: YearSummary
    legend: list[LegendEntry]
    selected_date: date | None
    can_navigate_forward: bool
    color_for: ColorBucketer

    def hours_on(self, d: date) -> float:
        return hours_on(self.daily_hours, d)

    def cell_color(self, d: date) -> str:
        return self.color_for(self.hours_on(d))

    def colored_weeks(self) -> Iterator[list[tuple[date, float, str] | None]]:
        """Yield each week as 7 (date, hours, color) cells, None for padding."""
        for week in self.grid.weeks:
            yield [None if cell is None else (cell, self.hours_on(cell), self.cell_color(cell)) for cell in week]


def session_dates(sessions: Iterable[TrainingSession], tz: tzinfo | None = None) -> list[date]:
    """Local dates of all sessions with a valid timestamp."""
    dates: list[date] = []
    for session in sessions:
        try:
            dates.append(to_calendar_date(session.date, tz))
        except InvalidTimestampError:
            continue
    return dates


def build_heat_map(
    sessions: Iterable[TrainingSession],
    overrides: Iterable[ManualHoursOverride],
    year: int,
    theme: Theme = Theme.LIGHT,
    *,
    today: date | None = None,
    tz: tzinfo | None = None,
    theme_version: int = 0,
) -> HeatMapView:
    """Run the aggregation and grid pipeline for one year.

    Args:
        sessions: Logged sessions (instants in nanoseconds since epoch)
        overrides: Manual per-date hours
        year: Year to display
        theme: Color theme
        today: Reference date for the current year and default selection
            (defaults to today in tz)
        tz: Timezone for local dates (None = host local time)
        theme_version: Opaque cache token forwarded to the ColorBucketer

    Returns:
        HeatMapView for the year

    Raises:
        InvalidYearError: If year cannot produce a full grid
    """
    sessions = list(sessions)
    grid = build_year_grid(year)
    today = today or today_local(tz)

    daily_hours = hours_for_year(aggregate_daily_hours(sessions, overrides, tz), year)

    view = HeatMapView(
        year=year,
        theme=theme,
        daily_hours=daily_hours,
        grid=grid,
        month_labels=place_month_labels(grid),
        available_years=available_years(session_dates(sessions, tz), today.year, year),
        summary=summarize_year(daily_hours, year),
        legend=legend(theme),
        selected_date=default_selected_date(year, today),
        can_navigate_forward=can_navigate_forward(year, today.year),
        color_for=ColorBucketer(theme=theme, theme_version=theme_version),
    )
    logger.debug(
        f"[HEATMAP] View for {year} ({theme}): {view.summary.total_hours}h over {view.summary.active_days} day(s)"
    )
    return view
