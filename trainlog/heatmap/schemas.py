"""Input records consumed by the heat-map engine."""

from datetime import date as date_type
from enum import StrEnum

from pydantic import BaseModel, Field

# Date-key -> training hours. Values are never negative.
DailyHoursMap = dict[date_type, float]


class Theme(StrEnum):
    LIGHT = "light"
    DARK = "dark"


class TrainingSession(BaseModel):
    """A logged training session as handed over by the session log.

    `date` is an instant in nanoseconds since the Unix epoch. It is kept loosely
    typed so that a malformed value reaches the normalizer and gets dropped there
    instead of failing the whole batch.
    """

    id: str = ""
    date: int | float
    duration_minutes: int = Field(description="Session length in minutes; negative values count as 0")


class ManualHoursOverride(BaseModel):
    """Manually entered hours that replace session-derived hours for one date."""

    date: date_type
    hours: float
