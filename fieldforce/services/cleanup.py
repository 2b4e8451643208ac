"""
Weekly data cleanup.
Deletes a window's completed tasks, location fixes and activity logs once the
caller confirms a backup was taken.
"""
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Dict, List

import structlog

from ..config import settings
from ..errors import PreconditionError, StorageError
from ..storage.provider import Storage
from .windows import Bound, parse_window


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CleanupResult:
    deleted: Dict[str, int]


def cleanup_week(storage: Storage, week_start: Bound, week_end: Bound, backup_confirmed: Any) -> CleanupResult:
    """
    Purge the window [week_start, end of week_end's day].

    Employees and emergencies are never touched. The three deletes run
    concurrently and are not rolled back on partial failure.

    Raises:
        PreconditionError: unless ``backup_confirmed`` is exactly True (nothing is deleted)
        ValidationError: if either bound is missing or unparseable
        StorageError: if any delete fails, listing the completed and failed ones
    """
    if backup_confirmed is not True:
        raise PreconditionError("Backup confirmation required", field="backup_confirmed")

    start, end = parse_window(
        week_start, week_end,
        start_field="week_start", end_field="week_end",
        inclusive_end_day=True,
    )

    deletes = {
        "tasks": storage.delete_completed_tasks,
        "locations": storage.delete_locations,
        "logs": storage.delete_logs,
    }
    completed: Dict[str, int] = {}
    failed: List[str] = []
    errors: Dict[str, str] = {}

    with ThreadPoolExecutor(max_workers=min(len(deletes), settings.report_max_workers)) as executor:
        futures = {name: executor.submit(fn, start, end) for name, fn in deletes.items()}
        for name, future in futures.items():
            try:
                completed[name] = future.result()
            except Exception as e:
                failed.append(name)
                errors[name] = str(e)

    if failed:
        logger.error(
            "weekly_cleanup_partial_failure",
            week_start=start.isoformat(),
            week_end=end.isoformat(),
            completed=completed,
            failed=failed,
            errors=errors,
        )
        raise StorageError(
            f"Weekly cleanup failed for: {', '.join(failed)}",
            completed=completed,
            failed=failed,
        )

    logger.info("weekly_cleanup_completed", week_start=start.isoformat(), week_end=end.isoformat(), **completed)
    return CleanupResult(deleted=completed)
