"""
Date window rules.
Parses caller-supplied range bounds into naive UTC datetimes and renders periods.
"""
from datetime import date, datetime, time
from typing import Tuple, Union
import pytz

from ..errors import ValidationError

END_OF_DAY = time(23, 59, 59, 999000)

Bound = Union[str, date, datetime, None]


def to_utc_naive(dt: datetime) -> datetime:
    """
    Convert a datetime to naive UTC, the form every timestamp is stored in.

    Naive inputs are assumed to already be UTC.
    """
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(pytz.UTC).replace(tzinfo=None)


def parse_bound(value: Bound, field: str) -> datetime:
    """
    Parse one bound of a date window.

    Accepts ISO dates ("2024-01-01"), ISO datetimes with or without offset
    (a trailing "Z" means UTC) and date/datetime objects. A bare date means
    midnight UTC of that day.

    Raises:
        ValidationError: if the value is missing or unparseable
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        raise ValidationError(f"{field} is required", field=field)
    if isinstance(value, datetime):
        return to_utc_naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min)
    text = value.strip()
    if text.endswith("Z") or text.endswith("z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f"Invalid {field}: {value!r}. Use YYYY-MM-DD or an ISO 8601 datetime", field=field)
    return to_utc_naive(parsed)


def end_of_day(dt: datetime) -> datetime:
    """Move a datetime to the last millisecond of its day (23:59:59.999)."""
    return datetime.combine(dt.date(), END_OF_DAY)


def parse_window(
    start: Bound,
    end: Bound,
    *,
    start_field: str = "startDate",
    end_field: str = "endDate",
    inclusive_end_day: bool = False,
) -> Tuple[datetime, datetime]:
    """
    Parse a [start, end] window.

    With ``inclusive_end_day`` the end bound is lifted to the end of its day so
    the window covers the whole last date. The start bound is never floored.
    """
    start_dt = parse_bound(start, start_field)
    end_dt = parse_bound(end, end_field)
    if inclusive_end_day:
        end_dt = end_of_day(end_dt)
    return start_dt, end_dt


def format_day(dt: datetime) -> str:
    return f"{dt.month}/{dt.day}/{dt.year}"


def format_period(start: datetime, end: datetime) -> str:
    """Render a window as ``M/D/YYYY to M/D/YYYY``."""
    return f"{format_day(start)} to {format_day(end)}"


def week_label(start: datetime) -> str:
    """``Week-WW-YYYY`` using the ISO week number and the calendar year of ``start``."""
    return f"Week-{start.isocalendar()[1]:02d}-{start.year}"


def utc_now() -> datetime:
    return datetime.utcnow()
