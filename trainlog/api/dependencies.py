from datetime import date, tzinfo

from trainlog.store.memory import TrainingLogStore
from trainlog.utils.timezone import configured_timezone, today_local

_store = TrainingLogStore()


def get_store() -> TrainingLogStore:
    """Process-wide training log store (overridden in tests)."""
    return _store


def get_timezone() -> tzinfo | None:
    return configured_timezone()


def get_today() -> date:
    return today_local(configured_timezone())
