"""Shared fixtures for heat-map tests."""

from datetime import date
from zoneinfo import ZoneInfo

import pytest
from fastapi.testclient import TestClient

from trainlog.api.dependencies import get_store, get_timezone, get_today
from trainlog.main import app
from trainlog.store.memory import TrainingLogStore


@pytest.fixture
def store():
    return TrainingLogStore()


@pytest.fixture
def today():
    return date(2024, 6, 15)


@pytest.fixture
def client(store, today):
    """TestClient bound to a fresh store, UTC dates and a fixed 'today'."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_timezone] = lambda: ZoneInfo("UTC")
    app.dependency_overrides[get_today] = lambda: today
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
