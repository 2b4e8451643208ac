import math
from typing import Optional

from fastapi import APIRouter, Depends, Query

from ..models.models import ActivityLog
from ..storage.provider import Storage, get_storage


router = APIRouter(prefix="/api", tags=["logs"])


def _serialize_log(log: ActivityLog) -> dict:
    return {
        "id": str(log.id),
        "employee_id": str(log.employee_id) if log.employee_id else None,
        "employee_name": log.employee_name,
        "action_type": log.action_type,
        "description": log.description,
        "task_id": str(log.task_id) if log.task_id else None,
        "task_title": log.task_title,
        "location": {"lat": log.location_lat, "lng": log.location_lng} if log.location_lat is not None else None,
        "timestamp": log.timestamp.isoformat() if log.timestamp else None,
        "ip_address": log.ip_address,
        "device_info": log.device_info,
        "details": log.details,
    }


@router.get("/logs")
def list_logs(
    page: int = Query(1, ge=1),
    limit: int = Query(100, ge=1, le=1000),
    employee_id: Optional[str] = None,
    action_type: Optional[str] = None,
    storage: Storage = Depends(get_storage),
):
    logs, total = storage.list_logs(page, limit, employee_id=employee_id, action_type=action_type)
    return {
        "logs": [_serialize_log(l) for l in logs],
        "totalPages": math.ceil(total / limit),
        "currentPage": page,
        "total": total,
    }
