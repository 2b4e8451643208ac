from dataclasses import dataclass
from typing import Iterable, Optional

from ..config import settings


@dataclass(frozen=True)
class Timesheet:
    total_hours: float
    regular_hours: float
    overtime: float
    regular_pay: float
    overtime_pay: float

    @property
    def total_pay(self) -> float:
        return self.regular_pay + self.overtime_pay


def calculate_timesheet(
    completed_tasks: Iterable,
    hourly_rate: float,
    overtime_threshold: Optional[float] = None,
    overtime_multiplier: Optional[float] = None,
) -> Timesheet:
    """
    Split the hours of already-filtered completed tasks into regular and overtime pay.

    Missing ``actual_hours`` count as zero. No tasks gives an all-zero timesheet.
    """
    if overtime_threshold is None:
        overtime_threshold = settings.overtime_threshold_hours
    if overtime_multiplier is None:
        overtime_multiplier = settings.overtime_multiplier

    total_hours = sum((task.actual_hours or 0) for task in completed_tasks)
    regular_hours = min(total_hours, overtime_threshold)
    overtime = max(0, total_hours - overtime_threshold)

    return Timesheet(
        total_hours=total_hours,
        regular_hours=regular_hours,
        overtime=overtime,
        regular_pay=regular_hours * hourly_rate,
        overtime_pay=overtime * hourly_rate * overtime_multiplier,
    )
