from datetime import datetime
from typing import Any, List, Optional, Tuple

from starlette.requests import Request


class Storage:
    """Persistence collaborator threaded into every service and route."""

    # Range reads
    def tasks_in_window(self, start: datetime, end: datetime) -> List[Any]:
        raise NotImplementedError

    def locations_in_window(self, start: datetime, end: datetime) -> List[Any]:
        """Fixes with timestamp in [start, end], ascending by timestamp."""
        raise NotImplementedError

    def logs_in_window(self, start: datetime, end: datetime) -> List[Any]:
        raise NotImplementedError

    def emergencies_in_window(self, start: datetime, end: datetime) -> List[Any]:
        raise NotImplementedError

    def active_employees(self) -> List[Any]:
        raise NotImplementedError

    # Per-employee reads
    def get_employee(self, employee_id: str) -> Optional[Any]:
        raise NotImplementedError

    def find_employee_by_email(self, email: str) -> Optional[Any]:
        raise NotImplementedError

    def employee_locations(self, employee_id: str, start: datetime, end: datetime) -> List[Any]:
        """One employee's fixes in [start, end], ascending by timestamp."""
        raise NotImplementedError

    def recent_locations(self, employee_id: str, limit: int) -> List[Any]:
        raise NotImplementedError

    def completed_tasks(
        self, employee_id: str, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Any]:
        raise NotImplementedError

    def tasks_for_employee(self, employee_id: str) -> List[Any]:
        raise NotImplementedError

    def pending_tasks(self, employee_id: str) -> List[Any]:
        raise NotImplementedError

    def get_task(self, task_id: str) -> Optional[Any]:
        raise NotImplementedError

    def list_logs(
        self,
        page: int,
        limit: int,
        employee_id: Optional[str] = None,
        action_type: Optional[str] = None,
    ) -> Tuple[List[Any], int]:
        raise NotImplementedError

    # Range deletes
    def delete_completed_tasks(self, start: datetime, end: datetime) -> int:
        raise NotImplementedError

    def delete_locations(self, start: datetime, end: datetime) -> int:
        raise NotImplementedError

    def delete_logs(self, start: datetime, end: datetime) -> int:
        raise NotImplementedError

    # Writes
    def add_employee(self, **fields: Any) -> Any:
        raise NotImplementedError

    def add_task(self, **fields: Any) -> Any:
        raise NotImplementedError

    def update_task_progress(self, task_id: str, status: str, actual_hours: float) -> Any:
        raise NotImplementedError

    def add_location(self, **fields: Any) -> Any:
        raise NotImplementedError

    def add_emergency(self, **fields: Any) -> Any:
        raise NotImplementedError

    def add_log(self, **fields: Any) -> Any:
        raise NotImplementedError


def get_storage(request: Request) -> Storage:
    return request.app.state.storage
