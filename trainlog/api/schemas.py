"""Request and response models for the heat-map API."""

from datetime import date

from pydantic import BaseModel, Field

from trainlog.heatmap.schemas import Theme


class HeatMapCellOut(BaseModel):
    date: date
    hours: float
    color: str


class MonthLabelOut(BaseModel):
    name: str
    start_column: int
    column_span: int


class LegendEntryOut(BaseModel):
    hours: float
    color: str
    label: str


class YearSummaryOut(BaseModel):
    total_hours: float
    active_days: int


class HeatMapResponse(BaseModel):
    year: int
    theme: Theme
    iso_weekday_of_jan1: int
    weeks: list[list[HeatMapCellOut | None]] = Field(description="Week columns of 7 cells, Monday first")
    month_labels: list[MonthLabelOut]
    available_years: list[int]
    summary: YearSummaryOut
    legend: list[LegendEntryOut]
    selected_date: date | None
    can_navigate_forward: bool


class AvailableYearsResponse(BaseModel):
    years: list[int]
    current_year: int


class SetTrainingHoursRequest(BaseModel):
    hours: float = Field(ge=0, le=24, description="Training hours for the date")


class TrainingHoursOut(BaseModel):
    date: date
    hours: float


class SessionIn(BaseModel):
    id: str = ""
    date: int = Field(description="Nanoseconds since the Unix epoch")
    duration_minutes: int = Field(ge=0)


class SessionOut(BaseModel):
    id: str
    date: int
    duration_minutes: int


class NavigateResponse(BaseModel):
    year: int
    can_navigate_forward: bool
