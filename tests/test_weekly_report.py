"""Tests for :mod:`fieldforce.services.weekly_report`."""

from datetime import datetime

import pytest

from fieldforce.errors import StorageError, ValidationError
from fieldforce.services.weekly_report import build_weekly_report
from fieldforce.storage.provider import Storage


class RecordingStorage(Storage):
    """Returns empty collections and remembers the window it was queried with."""

    def __init__(self):
        self.windows = []

    def _record(self, start, end):
        self.windows.append((start, end))
        return []

    def tasks_in_window(self, start, end):
        return self._record(start, end)

    def locations_in_window(self, start, end):
        return self._record(start, end)

    def logs_in_window(self, start, end):
        return self._record(start, end)

    def emergencies_in_window(self, start, end):
        return self._record(start, end)

    def active_employees(self):
        return []


def test_window_end_covers_whole_last_day() -> None:
    store = RecordingStorage()

    build_weekly_report(store, "2024-01-01", "2024-01-07")

    assert len(store.windows) == 4
    assert set(store.windows) == {(datetime(2024, 1, 1), datetime(2024, 1, 7, 23, 59, 59, 999000))}


def test_empty_week() -> None:
    report = build_weekly_report(RecordingStorage(), "2024-01-01", "2024-01-07")

    assert report.summary["week_number"] == "Week-01-2024"
    assert report.summary["total_tasks"] == 0
    assert report.summary["total_mileage"] == "0.00"
    assert set(report.files) == {"tasks", "locations", "logs", "employees", "emergencies", "summary"}
    for name in ("tasks", "locations", "logs", "employees", "emergencies"):
        assert "\n" not in report.files[name]
    assert len(report.files["summary"].split("\n")) == 2


def test_missing_bound() -> None:
    with pytest.raises(ValidationError):
        build_weekly_report(RecordingStorage(), "2024-01-01", None)


def test_failed_read_fails_report() -> None:
    class BrokenLogs(RecordingStorage):
        def logs_in_window(self, start, end):
            raise StorageError("logs unavailable")

    with pytest.raises(StorageError):
        build_weekly_report(BrokenLogs(), "2024-01-01", "2024-01-07")


def test_unexpected_read_error_is_wrapped() -> None:
    class BrokenEmployees(RecordingStorage):
        def active_employees(self):
            raise RuntimeError("connection reset")

    with pytest.raises(StorageError) as exc:
        build_weekly_report(BrokenEmployees(), "2024-01-01", "2024-01-07")

    assert "employees" in exc.value.message


def test_report_over_stored_data(storage, employee, add_fix) -> None:
    other = storage.add_employee(name="Sam", email="sam@example.com", hourly_rate=30)
    storage.add_employee(name="Gone", email="gone@example.com", is_active=False)
    storage.add_task(employee_id=employee.id, title="Done", status="completed",
                     actual_hours=2, created_at=datetime(2024, 1, 3, 9))
    storage.add_task(employee_id=employee.id, title="Open", created_at=datetime(2024, 1, 7, 18))
    storage.add_task(employee_id=employee.id, title="Next week", created_at=datetime(2024, 1, 8, 1))
    add_fix(employee.id, 49.2827, -123.1207, datetime(2024, 1, 2, 9, 0))
    add_fix(other.id, 49.2870, -123.1090, datetime(2024, 1, 2, 9, 5))
    add_fix(employee.id, 49.2765, -123.0954, datetime(2024, 1, 7, 23, 0))
    storage.add_emergency(employee_id=employee.id, emergency_type="injury", created_at=datetime(2024, 1, 4))

    report = build_weekly_report(storage, "2024-01-01", "2024-01-07")
    summary = report.summary

    assert summary["total_employees"] == 2
    assert summary["total_tasks"] == 2
    assert summary["completed_tasks"] == 1
    assert summary["total_locations"] == 3
    assert summary["emergencies"] == 1
    # Consecutive fixes across employees, in timestamp order
    assert float(summary["total_mileage"]) > 0
    assert len(report.files["tasks"].split("\n")) == 3
    assert len(report.files["employees"].split("\n")) == 3
