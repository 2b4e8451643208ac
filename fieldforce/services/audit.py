"""
Activity logging service.
Append-only trail of the mutating requests, written after each one succeeds.
"""
from typing import Any, Dict, Optional, Tuple

import structlog

from ..errors import FieldForceError
from ..storage.provider import Storage


logger = structlog.get_logger(__name__)

USER_LOGIN = "user_login"
EMPLOYEE_REGISTERED = "employee_registered"
TASK_CREATED = "task_created"
TASK_UPDATED = "task_updated"
LOCATION_LOGGED = "location_logged"
EMERGENCY_TRIGGERED = "emergency_triggered"
DATA_CLEANUP = "data_cleanup"


def record_activity(
    storage: Storage,
    action_type: str,
    description: str,
    employee_id: Optional[str] = None,
    employee_name: Optional[str] = None,
    task_id: Optional[str] = None,
    ip_address: Optional[str] = None,
    device_info: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    location: Optional[Tuple[float, float]] = None,
):
    """
    Append an activity log entry.

    Args:
        storage: Storage handle
        action_type: One of the module-level action constants
        description: Human-readable summary
        employee_id: Acting employee; their name is looked up when not given
        employee_name: Overrides the looked-up name
        task_id: Related task; its title is copied onto the entry
        ip_address: Client address
        device_info: User agent
        details: Request payload snapshot
        location: (latitude, longitude) of the action

    Returns:
        Created ActivityLog, or None when the entry could not be written.
        A failed write is logged and never fails the request that triggered it.
    """
    try:
        if employee_name is None:
            employee_name = "Unknown"
            if employee_id:
                employee = storage.get_employee(employee_id)
                if employee:
                    employee_name = employee.name

        task_title = None
        if task_id:
            task = storage.get_task(task_id)
            task_title = task.title if task else None

        lat, lng = location if location else (None, None)

        return storage.add_log(
            employee_id=employee_id,
            employee_name=employee_name,
            action_type=action_type,
            description=description,
            task_id=task_id,
            task_title=task_title,
            location_lat=lat,
            location_lng=lng,
            ip_address=ip_address,
            device_info=device_info or "Unknown",
            details=details,
        )
    except FieldForceError as e:
        logger.warning("activity_log_failed", action_type=action_type, error=e.message)
        return None


def client_info(request) -> Tuple[Optional[str], Optional[str]]:
    """(ip_address, user agent) of a Starlette request."""
    ip = request.client.host if request.client else None
    return ip, request.headers.get("user-agent")
