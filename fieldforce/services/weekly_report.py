"""
Weekly report builder.
Reads the five collections for a window concurrently, derives the summary and
renders every collection in the exchange format.
"""
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

import structlog

from ..config import settings
from ..errors import FieldForceError, StorageError
from ..storage.provider import Storage
from .export import to_csv
from .mileage import total_distance_miles
from .windows import Bound, parse_window, utc_now, week_label


logger = structlog.get_logger(__name__)


@dataclass
class WeeklyReport:
    summary: Dict[str, Any]
    files: Dict[str, str] = field(default_factory=dict)


def run_concurrently(jobs: Dict[str, Callable[[], Any]], max_workers: Optional[int] = None) -> Dict[str, Any]:
    """
    Run independent storage calls on a thread pool and collect their results by name.

    Stops waiting at the first failure and raises it; calls still queued are
    cancelled. Non-application errors are wrapped in StorageError.
    """
    executor = ThreadPoolExecutor(max_workers=max_workers or settings.report_max_workers)
    try:
        futures = {name: executor.submit(job) for name, job in jobs.items()}
        wait(list(futures.values()), return_when=FIRST_EXCEPTION)
        for name, future in futures.items():
            if future.done() and future.exception() is not None:
                err = future.exception()
                if isinstance(err, FieldForceError):
                    raise err
                raise StorageError(f"Failed to read {name}: {err}") from err
        return {name: future.result() for name, future in futures.items()}
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def build_weekly_report(storage: Storage, week_start: Bound, week_end: Bound) -> WeeklyReport:
    """
    Build the weekly summary and CSV exports for [week_start, end of week_end's day].

    The start bound is used as given; only the end bound is lifted to 23:59:59.999.

    Raises:
        ValidationError: if either bound is missing or unparseable
        StorageError: if any of the reads fails
    """
    start, end = parse_window(
        week_start, week_end,
        start_field="week_start", end_field="week_end",
        inclusive_end_day=True,
    )

    data = run_concurrently({
        "tasks": lambda: storage.tasks_in_window(start, end),
        "locations": lambda: storage.locations_in_window(start, end),
        "logs": lambda: storage.logs_in_window(start, end),
        "employees": storage.active_employees,
        "emergencies": lambda: storage.emergencies_in_window(start, end),
    })

    tasks = data["tasks"]
    locations = data["locations"]

    # Mileage over the whole location set, across employees, in timestamp order
    summary = {
        "week_number": week_label(start),
        "week_start": start.isoformat(),
        "week_end": end.isoformat(),
        "total_employees": len(data["employees"]),
        "total_tasks": len(tasks),
        "completed_tasks": sum(1 for t in tasks if t.status == "completed"),
        "total_locations": len(locations),
        "total_logs": len(data["logs"]),
        "emergencies": len(data["emergencies"]),
        "total_mileage": f"{total_distance_miles(locations):.2f}",
        "generated_at": utc_now().isoformat(),
    }

    files = {
        "tasks": to_csv(tasks, "tasks"),
        "locations": to_csv(locations, "locations"),
        "logs": to_csv(data["logs"], "logs"),
        "employees": to_csv(data["employees"], "employees"),
        "emergencies": to_csv(data["emergencies"], "emergencies"),
        "summary": to_csv([summary], "weekly_summary"),
    }

    logger.info(
        "weekly_report_built",
        week_number=summary["week_number"],
        tasks=summary["total_tasks"],
        locations=summary["total_locations"],
        logs=summary["total_logs"],
    )
    return WeeklyReport(summary=summary, files=files)
