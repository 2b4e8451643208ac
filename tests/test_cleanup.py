"""Tests for :mod:`fieldforce.services.cleanup`."""

from datetime import datetime

import pytest

from fieldforce.errors import PreconditionError, StorageError
from fieldforce.services.cleanup import cleanup_week
from fieldforce.storage.sql_provider import SqlStorage


@pytest.fixture
def week_data(storage, employee, add_fix):
    """Rows inside and outside the week of 2024-01-01..2024-01-07."""

    storage.add_task(employee_id=employee.id, title="Done", status="completed", created_at=datetime(2024, 1, 3))
    storage.add_task(employee_id=employee.id, title="Open", status="pending", created_at=datetime(2024, 1, 3))
    storage.add_task(employee_id=employee.id, title="Old", status="completed", created_at=datetime(2023, 12, 31, 23))
    add_fix(employee.id, 49.28, -123.12, datetime(2024, 1, 2, 9))
    add_fix(employee.id, 49.29, -123.11, datetime(2024, 1, 7, 22))
    add_fix(employee.id, 49.30, -123.10, datetime(2024, 1, 8, 0, 0, 1))
    storage.add_log(action_type="task_created", description="x", timestamp=datetime(2024, 1, 5))
    storage.add_emergency(employee_id=employee.id, emergency_type="injury", created_at=datetime(2024, 1, 4))
    return employee


@pytest.mark.parametrize("confirmed", [None, False, "true", 1, "yes"])
def test_requires_literal_confirmation(storage, week_data, confirmed) -> None:
    with pytest.raises(PreconditionError) as exc:
        cleanup_week(storage, "2024-01-01", "2024-01-07", confirmed)

    assert exc.value.message == "Backup confirmation required"
    assert len(storage.tasks_in_window(datetime(2023, 1, 1), datetime(2025, 1, 1))) == 3
    assert len(storage.locations_in_window(datetime(2023, 1, 1), datetime(2025, 1, 1))) == 3


def test_confirmation_checked_before_dates(storage) -> None:
    with pytest.raises(PreconditionError):
        cleanup_week(storage, None, None, False)


def test_deletes_only_the_week(storage, week_data) -> None:
    result = cleanup_week(storage, "2024-01-01", "2024-01-07", True)

    assert result.deleted == {"tasks": 1, "locations": 2, "logs": 1}
    remaining = storage.tasks_in_window(datetime(2023, 1, 1), datetime(2025, 1, 1))
    assert sorted(t.title for t in remaining) == ["Old", "Open"]
    assert len(storage.locations_in_window(datetime(2023, 1, 1), datetime(2025, 1, 1))) == 1
    # Employees and emergencies are never purged
    assert storage.get_employee(week_data.id) is not None
    assert len(storage.emergencies_in_window(datetime(2024, 1, 1), datetime(2024, 1, 8))) == 1


def test_partial_failure_reports_completed_and_failed(storage, week_data) -> None:
    class FlakyStorage(SqlStorage):
        def delete_locations(self, start, end):
            raise StorageError("disk full")

    flaky = FlakyStorage(storage.session_factory)

    with pytest.raises(StorageError) as exc:
        cleanup_week(flaky, "2024-01-01", "2024-01-07", True)

    assert exc.value.failed == ["locations"]
    assert exc.value.completed == {"tasks": 1, "logs": 1}
    # No rollback of the deletes that succeeded
    assert len(storage.logs_in_window(datetime(2024, 1, 1), datetime(2024, 1, 8))) == 0
    assert len(storage.locations_in_window(datetime(2024, 1, 1), datetime(2024, 1, 8))) == 2
