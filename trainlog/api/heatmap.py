"""Heat-map endpoints.

Every request rebuilds the view from the current store snapshot; nothing is
cached between requests.
"""

from __future__ import annotations

from datetime import date, tzinfo
from typing import Literal

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from trainlog.api.dependencies import get_store, get_timezone, get_today
from trainlog.api.schemas import (
    AvailableYearsResponse,
    HeatMapCellOut,
    HeatMapResponse,
    LegendEntryOut,
    MonthLabelOut,
    NavigateResponse,
    YearSummaryOut,
)
from trainlog.heatmap.errors import InvalidYearError
from trainlog.heatmap.grid import validate_year
from trainlog.heatmap.schemas import Theme
from trainlog.heatmap.service import build_heat_map, session_dates
from trainlog.heatmap.years import available_years, can_navigate_forward, navigate_year
from trainlog.store.memory import TrainingLogStore

router = APIRouter(prefix="/heatmap", tags=["heatmap"])


@router.get("/years", response_model=AvailableYearsResponse)
def get_available_years(
    displayed: int | None = None,
    store: TrainingLogStore = Depends(get_store),
    tz: tzinfo | None = Depends(get_timezone),
    today: date = Depends(get_today),
) -> AvailableYearsResponse:
    """Years offered for navigation, newest first.

    Raises:
        HTTPException: 422 if the displayed year is outside 1..9999
    """
    displayed_year = displayed if displayed is not None else today.year
    try:
        years = available_years(session_dates(store.list_sessions(), tz), today.year, displayed_year)
    except InvalidYearError as e:
        logger.warning(f"Rejected available years request: {e}")
        raise HTTPException(status_code=422, detail=e.message) from e
    return AvailableYearsResponse(years=years, current_year=today.year)


@router.get("/{year}/navigate", response_model=NavigateResponse)
def navigate(
    year: int,
    direction: Literal["prev", "next"],
    today: date = Depends(get_today),
) -> NavigateResponse:
    """Step from the displayed year; "next" never passes the current year."""
    try:
        validate_year(year)
        target = navigate_year(year, direction, today.year)
    except InvalidYearError as e:
        logger.warning(f"Rejected navigation from {year} ({direction}): {e}")
        raise HTTPException(status_code=422, detail=e.message) from e
    return NavigateResponse(year=target, can_navigate_forward=can_navigate_forward(target, today.year))


@router.get("/{year}", response_model=HeatMapResponse)
def get_heat_map(
    year: int,
    theme: Theme = Theme.LIGHT,
    store: TrainingLogStore = Depends(get_store),
    tz: tzinfo | None = Depends(get_timezone),
    today: date = Depends(get_today),
) -> HeatMapResponse:
    """Get the heat-map grid for a year.

    Args:
        year: Year to display
        theme: Color theme (light or dark)

    Returns:
        Grid weeks with per-cell hours and colors, month labels, available
        years, summary and legend

    Raises:
        HTTPException: 422 if the year cannot be laid out
    """
    logger.info(f"Heat map requested for year={year}, theme={theme}")
    try:
        view = build_heat_map(store.list_sessions(), store.list_overrides(), year, theme, today=today, tz=tz)
    except InvalidYearError as e:
        logger.warning(f"Rejected heat map request: {e}")
        raise HTTPException(status_code=422, detail=e.message) from e

    weeks = [
        [None if cell is None else HeatMapCellOut(date=cell[0], hours=cell[1], color=cell[2]) for cell in week]
        for week in view.colored_weeks()
    ]
    return HeatMapResponse(
        year=view.year,
        theme=view.theme,
        iso_weekday_of_jan1=view.grid.iso_weekday_of_jan1,
        weeks=weeks,
        month_labels=[
            MonthLabelOut(name=label.name, start_column=label.start_column, column_span=label.column_span)
            for label in view.month_labels
        ],
        available_years=view.available_years,
        summary=YearSummaryOut(total_hours=view.summary.total_hours, active_days=view.summary.active_days),
        legend=[LegendEntryOut(hours=entry.hours, color=entry.color, label=entry.label) for entry in view.legend],
        selected_date=view.selected_date,
        can_navigate_forward=view.can_navigate_forward,
    )
