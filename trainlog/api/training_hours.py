"""Manual training hours and session log endpoints."""

from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, HTTPException
from loguru import logger

from trainlog.api.dependencies import get_store
from trainlog.api.schemas import SessionIn, SessionOut, SetTrainingHoursRequest, TrainingHoursOut
from trainlog.heatmap.schemas import TrainingSession
from trainlog.store.memory import TrainingLogStore, round_to_quarter

router = APIRouter(tags=["training-hours"])


@router.get("/training-hours", response_model=list[TrainingHoursOut])
def list_training_hours(
    start: date | None = None,
    end: date | None = None,
    store: TrainingLogStore = Depends(get_store),
) -> list[TrainingHoursOut]:
    """List manual hour overrides, optionally limited to [start, end]."""
    if start is not None or end is not None:
        overrides = store.list_overrides_range(start or date.min, end or date.max)
    else:
        overrides = store.list_overrides()
    return [TrainingHoursOut(date=o.date, hours=o.hours) for o in overrides]


@router.get("/training-hours/{day}", response_model=TrainingHoursOut)
def get_training_hours(day: date, store: TrainingLogStore = Depends(get_store)) -> TrainingHoursOut:
    override = store.get_override(day)
    if override is None:
        raise HTTPException(status_code=404, detail=f"No manual training hours for {day.isoformat()}")
    return TrainingHoursOut(date=override.date, hours=override.hours)


@router.put("/training-hours/{day}", response_model=TrainingHoursOut)
def set_training_hours(
    day: date,
    body: SetTrainingHoursRequest,
    store: TrainingLogStore = Depends(get_store),
) -> TrainingHoursOut:
    """Set manual training hours for a date, replacing session-derived hours.

    Hours are snapped to the nearest quarter hour before they are stored.
    """
    try:
        override = store.set_override(day, round_to_quarter(body.hours))
    except ValueError as e:
        logger.warning(f"Rejected training hours for {day.isoformat()}: {e}")
        raise HTTPException(status_code=422, detail=str(e)) from e
    return TrainingHoursOut(date=override.date, hours=override.hours)


@router.delete("/training-hours/{day}", status_code=204)
def clear_training_hours(day: date, store: TrainingLogStore = Depends(get_store)) -> None:
    """Clear the manual override for a date. Clearing a missing override is a no-op."""
    store.clear_override(day)


@router.delete("/training-hours", status_code=204)
def clear_all_training_hours(store: TrainingLogStore = Depends(get_store)) -> None:
    store.clear_all_overrides()


@router.post("/sessions", response_model=SessionOut, status_code=201)
def add_session(body: SessionIn, store: TrainingLogStore = Depends(get_store)) -> SessionOut:
    session = store.add_session(TrainingSession(id=body.id, date=body.date, duration_minutes=body.duration_minutes))
    return SessionOut(id=session.id, date=int(session.date), duration_minutes=session.duration_minutes)


@router.get("/sessions", response_model=list[SessionOut])
def list_sessions(store: TrainingLogStore = Depends(get_store)) -> list[SessionOut]:
    return [
        SessionOut(id=s.id, date=int(s.date), duration_minutes=s.duration_minutes)
        for s in store.list_sessions()
    ]
