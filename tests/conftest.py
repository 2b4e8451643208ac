from datetime import datetime
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from fieldforce.main import create_app
from fieldforce.storage.sql_provider import SqlStorage


@pytest.fixture
def storage(tmp_path) -> SqlStorage:
    """A fresh SQLite file database per test."""
    store = SqlStorage.from_url(f"sqlite:///{tmp_path / 'fieldforce.db'}")
    store.create_schema()
    return store


@pytest.fixture
def client(storage) -> Iterator[TestClient]:
    app = create_app(storage)
    yield TestClient(app)


@pytest.fixture
def employee(storage):
    return storage.add_employee(
        name="Tina Technician",
        email="tina.tech@example.com",
        password_hash=None,
        hourly_rate=20,
    )


@pytest.fixture
def add_fix(storage):
    """Insert a location fix for an employee at a given time."""

    def _add(employee_id, lat: float, lng: float, ts: datetime):
        return storage.add_location(employee_id=employee_id, latitude=lat, longitude=lng, timestamp=ts)

    return _add
