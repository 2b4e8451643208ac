from typing import Optional

from fastapi import APIRouter, Depends, Request

from ..schemas.reports import CleanupRequest
from ..services import audit
from ..services.cleanup import cleanup_week
from ..services.weekly_report import build_weekly_report
from ..storage.provider import Storage, get_storage


router = APIRouter(prefix="/api", tags=["reports"])


@router.get("/export/weekly-report")
def export_weekly_report(
    week_start: Optional[str] = None,
    week_end: Optional[str] = None,
    storage: Storage = Depends(get_storage),
):
    report = build_weekly_report(storage, week_start, week_end)
    return {
        "weekly_report": report.summary,
        "files": report.files,
        "message": "Weekly report generated successfully",
    }


@router.post("/cleanup/weekly-data")
def cleanup_weekly_data(body: CleanupRequest, request: Request, storage: Storage = Depends(get_storage)):
    result = cleanup_week(storage, body.week_start, body.week_end, body.backup_confirmed)
    ip, agent = audit.client_info(request)
    audit.record_activity(
        storage,
        audit.DATA_CLEANUP,
        f"Weekly cleanup {body.week_start} to {body.week_end}: "
        f"{result.deleted['tasks']} tasks, {result.deleted['locations']} locations, {result.deleted['logs']} logs",
        ip_address=ip,
        device_info=agent,
        details={"week_start": body.week_start, "week_end": body.week_end, "deleted": result.deleted},
    )
    return {"message": "Weekly data cleanup completed", "deleted": result.deleted}
