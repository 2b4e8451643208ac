"""
Exchange-format serializer.
Projects records onto a fixed field list per record type and renders CSV text.
"""
import csv
import io
import uuid
from datetime import date, datetime
from typing import Any, Dict, Iterable, List

from ..errors import ValidationError


EXPORT_FIELDS: Dict[str, List[str]] = {
    "tasks": [
        "id", "title", "customer_name", "customer_phone", "address", "priority",
        "due_date", "status", "estimated_hours", "actual_hours", "created_at",
    ],
    "locations": ["id", "employee_id", "latitude", "longitude", "timestamp"],
    "logs": ["id", "employee_name", "action_type", "description", "timestamp", "ip_address"],
    "employees": ["id", "name", "email", "role", "hourlyRate", "createdAt"],
    "emergencies": ["id", "employee_name", "emergency_type", "message", "status", "created_at"],
    "weekly_summary": [
        "week_number", "total_employees", "total_tasks", "completed_tasks",
        "total_locations", "total_logs", "emergencies", "total_mileage",
    ],
}

# Exported header -> attribute on the stored record
_SOURCE_ATTR = {
    "hourlyRate": "hourly_rate",
    "createdAt": "created_at",
}


def _read(record: Any, field: str) -> Any:
    attr = _SOURCE_ATTR.get(field, field)
    if isinstance(record, dict):
        if field in record:
            return record[field]
        return record.get(attr)
    return getattr(record, attr, None)


def _cell(value: Any) -> Any:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, uuid.UUID):
        return str(value)
    if isinstance(value, bool):
        return str(value).lower()
    return value


def to_csv(records: Iterable[Any], record_type: str) -> str:
    """
    Render records as CSV using the fixed projection of ``record_type``.

    The first row is the header; rows are separated by ``\\n`` with no trailing
    newline, so an empty collection renders as the header line alone.

    Raises:
        ValidationError: for an unknown record type
    """
    fields = EXPORT_FIELDS.get(record_type)
    if fields is None:
        raise ValidationError(f"Unknown record type: {record_type}", field="record_type")

    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")
    writer.writerow(fields)
    for record in records:
        writer.writerow([_cell(_read(record, f)) for f in fields])
    return buf.getvalue().rstrip("\n")
