"""In-memory training log store.

Holds logged sessions and manual hour overrides for the API. Override
operations are idempotent and last-write-wins; the heat-map pipeline only
ever receives snapshots from list_sessions / list_overrides.
"""

from __future__ import annotations

import math
import threading
import uuid
from collections.abc import Iterable
from datetime import date

from loguru import logger

from trainlog.heatmap.schemas import ManualHoursOverride, TrainingSession

MAX_HOURS_PER_DAY = 24.0
HOURS_STEP = 0.25


def round_to_quarter(hours: float) -> float:
    """Round hours to the nearest quarter hour."""
    return round(hours / HOURS_STEP) * HOURS_STEP


def validate_override_hours(hours: float) -> float:
    """Validate manually entered hours.

    Raises:
        ValueError: If hours is not finite or outside 0..24
    """
    if not math.isfinite(hours):
        raise ValueError(f"Training hours must be a finite number, got {hours}")
    if hours < 0 or hours > MAX_HOURS_PER_DAY:
        raise ValueError(f"Training hours must be between 0 and {MAX_HOURS_PER_DAY:g}, got {hours}")
    return float(hours)


class TrainingLogStore:
    """Thread-safe in-memory store for sessions and manual overrides."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._sessions: dict[str, TrainingSession] = {}
        self._overrides: dict[date, float] = {}

    def add_session(self, session: TrainingSession) -> TrainingSession:
        """Store a session, assigning an id when it has none. Same id replaces."""
        if not session.id:
            session = session.model_copy(update={"id": str(uuid.uuid4())})
        with self._lock:
            self._sessions[session.id] = session
        logger.debug(f"[STORE] Stored session id={session.id}")
        return session

    def list_sessions(self) -> list[TrainingSession]:
        with self._lock:
            return list(self._sessions.values())

    def set_override(self, day: date, hours: float) -> ManualHoursOverride:
        hours = validate_override_hours(hours)
        with self._lock:
            self._overrides[day] = hours
        logger.info(f"[OVERRIDES] Set {hours:g}h on {day.isoformat()}")
        return ManualHoursOverride(date=day, hours=hours)

    def batch_set_overrides(self, overrides: Iterable[ManualHoursOverride]) -> int:
        """Set several overrides at once; later entries for a date win.

        All hours are validated before anything is written.
        """
        validated = [(override.date, validate_override_hours(override.hours)) for override in overrides]
        with self._lock:
            for day, hours in validated:
                self._overrides[day] = hours
        logger.info(f"[OVERRIDES] Batch set {len(validated)} override(s)")
        return len(validated)

    def get_override(self, day: date) -> ManualHoursOverride | None:
        with self._lock:
            hours = self._overrides.get(day)
        return None if hours is None else ManualHoursOverride(date=day, hours=hours)

    def clear_override(self, day: date) -> bool:
        """Remove the override for day. Returns whether one existed."""
        with self._lock:
            existed = self._overrides.pop(day, None) is not None
        if existed:
            logger.info(f"[OVERRIDES] Cleared override on {day.isoformat()}")
        return existed

    def clear_all_overrides(self) -> int:
        with self._lock:
            count = len(self._overrides)
            self._overrides.clear()
        logger.info(f"[OVERRIDES] Cleared {count} override(s)")
        return count

    def list_overrides(self) -> list[ManualHoursOverride]:
        """All overrides sorted by date."""
        with self._lock:
            items = sorted(self._overrides.items())
        return [ManualHoursOverride(date=day, hours=hours) for day, hours in items]

    def list_overrides_range(self, start: date, end: date) -> list[ManualHoursOverride]:
        """Overrides with start <= date <= end, sorted by date."""
        return [override for override in self.list_overrides() if start <= override.date <= end]

    def override_count(self) -> int:
        with self._lock:
            return len(self._overrides)
