"""Tests for session/override aggregation into a DailyHoursMap."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

from trainlog.heatmap.aggregation import (
    aggregate_daily_hours,
    aggregate_session_hours,
    merge_hours,
    normalize_overrides,
    to_training_event,
)
from trainlog.heatmap.schemas import ManualHoursOverride, TrainingSession
from trainlog.heatmap.timestamps import to_instant

UTC = ZoneInfo("UTC")
MARCH_1 = date(2024, 3, 1)


def _session(day: date, minutes: int, hour: int = 12, session_id: str = "") -> TrainingSession:
    instant = to_instant(datetime(day.year, day.month, day.day, hour, tzinfo=UTC))
    return TrainingSession(id=session_id, date=instant, duration_minutes=minutes)


def test_training_event_hours():
    event = to_training_event(_session(MARCH_1, 45), UTC)
    assert event.date_key == MARCH_1
    assert event.hours == 0.75


def test_sessions_on_same_day_are_summed():
    sessions = [_session(MARCH_1, 90, hour=7), _session(MARCH_1, 30, hour=19)]
    daily = aggregate_daily_hours(sessions, [], UTC)
    assert daily == {MARCH_1: 2.0}


def test_override_replaces_session_hours():
    sessions = [_session(MARCH_1, 90), _session(MARCH_1, 30)]
    overrides = [ManualHoursOverride(date=MARCH_1, hours=5.0)]
    daily = aggregate_daily_hours(sessions, overrides, UTC)
    assert daily[MARCH_1] == 5.0


def test_override_on_day_without_sessions_is_a_fresh_entry():
    daily = aggregate_daily_hours([_session(MARCH_1, 60)], [ManualHoursOverride(date=date(2024, 3, 2), hours=1.5)], UTC)
    assert daily == {MARCH_1: 1.0, date(2024, 3, 2): 1.5}


def test_zero_override_hides_session_hours():
    daily = aggregate_daily_hours([_session(MARCH_1, 60)], [ManualHoursOverride(date=MARCH_1, hours=0)], UTC)
    assert daily == {MARCH_1: 0.0}


def test_adding_session_after_override_keeps_replacement():
    overrides = [ManualHoursOverride(date=MARCH_1, hours=5.0)]
    first = aggregate_daily_hours([_session(MARCH_1, 60)], overrides, UTC)
    second = aggregate_daily_hours([_session(MARCH_1, 60), _session(MARCH_1, 120)], overrides, UTC)
    assert first[MARCH_1] == 5.0
    assert second[MARCH_1] == 5.0


def test_negative_values_are_clamped():
    sessions = [_session(MARCH_1, -30), _session(MARCH_1, 60)]
    overrides = [ManualHoursOverride(date=date(2024, 3, 2), hours=-2.0)]
    daily = aggregate_daily_hours(sessions, overrides, UTC)
    assert daily == {MARCH_1: 1.0, date(2024, 3, 2): 0.0}
    assert all(hours >= 0 for hours in daily.values())


def test_invalid_timestamp_drops_only_that_session():
    sessions = [
        _session(MARCH_1, 60, session_id="good"),
        TrainingSession(id="nan", date=float("nan"), duration_minutes=600),
        TrainingSession.model_construct(id="huge", date=10**30, duration_minutes=600),
    ]
    assert aggregate_session_hours(sessions, UTC) == {MARCH_1: 1.0}


def test_last_override_for_a_date_wins():
    overrides = [
        ManualHoursOverride(date=MARCH_1, hours=2.0),
        ManualHoursOverride(date=MARCH_1, hours=3.5),
    ]
    assert normalize_overrides(overrides) == {MARCH_1: 3.5}


def test_non_finite_override_is_ignored():
    overrides = [ManualHoursOverride(date=MARCH_1, hours=float("nan"))]
    assert normalize_overrides(overrides) == {}


def test_merge_does_not_mutate_inputs():
    session_hours = {MARCH_1: 2.0}
    override_hours = {MARCH_1: 5.0}
    merged = merge_hours(session_hours, override_hours)
    assert merged == {MARCH_1: 5.0}
    assert session_hours == {MARCH_1: 2.0}


def test_aggregation_is_idempotent():
    sessions = [_session(MARCH_1, 90), _session(date(2024, 3, 5), 45)]
    overrides = [ManualHoursOverride(date=date(2024, 3, 5), hours=1.25)]
    assert aggregate_daily_hours(sessions, overrides, UTC) == aggregate_daily_hours(sessions, overrides, UTC)


def test_sessions_near_midnight_use_local_date():
    new_york = ZoneInfo("America/New_York")
    late = TrainingSession(date=to_instant(datetime(2024, 3, 1, 23, 30, tzinfo=new_york)), duration_minutes=60)
    assert aggregate_session_hours([late], new_york) == {MARCH_1: 1.0}
