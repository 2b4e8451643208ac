"""
Mileage reimbursement.
Folds an ascending sequence of GPS fixes into a travelled distance and its payout.
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

from ..config import settings
from .geo import distance_miles
from .windows import format_period


@dataclass(frozen=True)
class MileageSummary:
    total_miles: float
    reimbursement: float
    period: str


def format_money(amount: float) -> str:
    return f"${amount:.2f}"


def total_distance_miles(fixes: Iterable) -> float:
    """
    Sum the distance between every consecutive pair of fixes.

    Fixes must already be in ascending timestamp order; they are not re-sorted.
    Anything with ``latitude``/``longitude`` attributes works.
    """
    total = 0.0
    previous = None
    for fix in fixes:
        if previous is not None:
            total += distance_miles(
                (previous.latitude, previous.longitude),
                (fix.latitude, fix.longitude),
            )
        previous = fix
    return total


def aggregate_mileage(
    fixes: Iterable,
    start: datetime,
    end: datetime,
    rate_per_mile: Optional[float] = None,
) -> MileageSummary:
    """
    Compute the mileage reimbursement for one employee's fixes within [start, end].

    Args:
        fixes: Fixes for a single employee and window, ascending by timestamp
        start: Window start (only used to render the period)
        end: Window end (only used to render the period)
        rate_per_mile: Payout per mile (default from settings)

    Returns:
        MileageSummary; an empty or single-fix sequence yields zero miles
    """
    if rate_per_mile is None:
        rate_per_mile = settings.mileage_rate
    total = total_distance_miles(fixes)
    return MileageSummary(
        total_miles=total,
        reimbursement=total * rate_per_mile,
        period=format_period(start, end),
    )
