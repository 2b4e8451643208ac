from dataclasses import dataclass
from typing import Iterable

# A task without an estimate is assumed to be budgeted at one hour
DEFAULT_ESTIMATED_HOURS = 1


@dataclass(frozen=True)
class TimeSavings:
    estimated_hours: float
    actual_hours: float
    time_saved: float
    efficiency_percent: float


def estimate_time_savings(completed_tasks: Iterable) -> TimeSavings:
    """
    Compare estimated and actual hours of completed tasks.

    Overruns are clamped to zero savings. Efficiency is estimated/actual as a
    percentage, and 0 when no actual hours were recorded.
    """
    estimated = 0.0
    actual = 0.0
    for task in completed_tasks:
        estimated += task.estimated_hours or DEFAULT_ESTIMATED_HOURS
        actual += task.actual_hours or 0

    efficiency = (estimated / actual) * 100 if actual > 0 else 0
    return TimeSavings(
        estimated_hours=estimated,
        actual_hours=actual,
        time_saved=max(0, estimated - actual),
        efficiency_percent=efficiency,
    )
