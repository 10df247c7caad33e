"""Daily hours aggregation from training sessions and manual overrides.

Session hours are summed per local calendar date. Manual overrides then
replace the session-derived value for their date; they are never added to
it. The merged map is rebuilt from scratch on every call, so adding a
session after an override was entered can never turn the override into an
additive value.

Rules:
- hours = duration_minutes / 60, negative durations count as 0
- sessions with an invalid timestamp are dropped individually
- negative override hours clamp to 0, non-finite override hours are dropped
- duplicate overrides for one date: the last one wins
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date, tzinfo

from loguru import logger

from trainlog.heatmap.errors import InvalidTimestampError
from trainlog.heatmap.schemas import DailyHoursMap, ManualHoursOverride, TrainingSession
from trainlog.heatmap.timestamps import to_calendar_date

MINUTES_PER_HOUR = 60


@dataclass(frozen=True)
class TrainingEvent:
    """A session reduced to its local date and non-negative hours."""

    date_key: date
    hours: float


def to_training_event(session: TrainingSession, tz: tzinfo | None = None) -> TrainingEvent:
    """Normalize a session into a TrainingEvent.

    Raises:
        InvalidTimestampError: If the session instant cannot be converted
    """
    date_key = to_calendar_date(session.date, tz)
    hours = max(0, session.duration_minutes) / MINUTES_PER_HOUR
    return TrainingEvent(date_key=date_key, hours=hours)


def aggregate_session_hours(sessions: Iterable[TrainingSession], tz: tzinfo | None = None) -> DailyHoursMap:
    """Sum session hours per local calendar date, skipping invalid sessions."""
    session_hours: DailyHoursMap = {}
    dropped = 0
    for session in sessions:
        try:
            event = to_training_event(session, tz)
        except InvalidTimestampError as e:
            dropped += 1
            logger.warning(f"[HEATMAP] Dropping session id={session.id or '?'}: {e}")
            continue
        session_hours[event.date_key] = session_hours.get(event.date_key, 0.0) + event.hours

    if dropped:
        logger.warning(f"[HEATMAP] Dropped {dropped} session(s) with invalid timestamps")
    return session_hours


def normalize_overrides(overrides: Iterable[ManualHoursOverride]) -> DailyHoursMap:
    """Collapse overrides into a date -> hours map (last write wins, clamped at 0)."""
    override_hours: DailyHoursMap = {}
    for override in overrides:
        if not math.isfinite(override.hours):
            logger.warning(f"[HEATMAP] Ignoring override for {override.date.isoformat()}: hours={override.hours}")
            continue
        override_hours[override.date] = max(0.0, override.hours)
    return override_hours


def merge_hours(session_hours: DailyHoursMap, override_hours: DailyHoursMap) -> DailyHoursMap:
    """Return a new map where override values replace session values per date."""
    merged = dict(session_hours)
    for date_key, hours in override_hours.items():
        merged[date_key] = hours
    return merged


def aggregate_daily_hours(
    sessions: Iterable[TrainingSession],
    overrides: Iterable[ManualHoursOverride],
    tz: tzinfo | None = None,
) -> DailyHoursMap:
    """Build the canonical date -> hours map.

    Args:
        sessions: Logged training sessions (instants in nanoseconds)
        overrides: Manually entered per-date hours
        tz: Timezone used for local dates (None = host local time)

    Returns:
        Fresh DailyHoursMap; inputs are not modified.
    """
    session_hours = aggregate_session_hours(sessions, tz)
    override_hours = normalize_overrides(overrides)
    merged = merge_hours(session_hours, override_hours)
    logger.debug(
        f"[HEATMAP] Aggregated {len(session_hours)} session day(s) and "
        f"{len(override_hours)} override(s) into {len(merged)} day(s)"
    )
    return merged
