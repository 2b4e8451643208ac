"""Tests for :mod:`fieldforce.services.export`."""

import csv
import io
import uuid
from datetime import datetime
from types import SimpleNamespace

import pytest

from fieldforce.errors import ValidationError
from fieldforce.services.export import EXPORT_FIELDS, to_csv


def parse(text: str):
    return list(csv.reader(io.StringIO(text)))


@pytest.mark.parametrize("record_type", sorted(EXPORT_FIELDS))
def test_empty_collection_is_header_only(record_type) -> None:
    out = to_csv([], record_type)

    assert "\n" not in out
    assert parse(out) == [EXPORT_FIELDS[record_type]]


def test_rows_have_no_trailing_newline() -> None:
    fixes = [
        SimpleNamespace(id=uuid.uuid4(), employee_id=None, latitude=49.28, longitude=-123.12,
                        timestamp=datetime(2024, 1, 2, 9, 30)),
        SimpleNamespace(id=uuid.uuid4(), employee_id=None, latitude=49.29, longitude=-123.11,
                        timestamp=datetime(2024, 1, 2, 9, 45)),
    ]

    out = to_csv(fixes, "locations")

    assert not out.endswith("\n")
    assert len(out.split("\n")) == 3


def test_values_are_projected_and_rendered() -> None:
    fix_id = uuid.uuid4()
    fix = SimpleNamespace(id=fix_id, employee_id=None, latitude=49.28, longitude=-123.12,
                          timestamp=datetime(2024, 1, 2, 9, 30), accuracy=5.0)

    rows = parse(to_csv([fix], "locations"))

    assert rows[1] == [str(fix_id), "", "49.28", "-123.12", "2024-01-02T09:30:00"]


def test_employee_headers_read_stored_attributes() -> None:
    emp = SimpleNamespace(id="e1", name="Tina", email="tina@example.com", role="employee",
                          hourly_rate=30.0, created_at=datetime(2024, 1, 1))

    rows = parse(to_csv([emp], "employees"))

    assert rows[0] == ["id", "name", "email", "role", "hourlyRate", "createdAt"]
    assert rows[1] == ["e1", "Tina", "tina@example.com", "employee", "30.0", "2024-01-01T00:00:00"]


def test_summary_dict_records() -> None:
    summary = {"week_number": "Week-01-2024", "total_employees": 3, "total_tasks": 2,
               "completed_tasks": 1, "total_locations": 0, "total_logs": 4,
               "emergencies": 0, "total_mileage": "0.00", "generated_at": "ignored"}

    rows = parse(to_csv([summary], "weekly_summary"))

    assert rows[1] == ["Week-01-2024", "3", "2", "1", "0", "4", "0", "0.00"]


def test_strings_with_commas_and_quotes_survive() -> None:
    log = SimpleNamespace(id="l1", employee_name="O'Neil, Pat", action_type="task_created",
                          description='Task created: "Fix sink"', timestamp=None, ip_address=None)

    rows = parse(to_csv([log], "logs"))

    assert rows[1][1] == "O'Neil, Pat"
    assert rows[1][3] == 'Task created: "Fix sink"'


def test_unknown_record_type() -> None:
    with pytest.raises(ValidationError):
        to_csv([], "invoices")
