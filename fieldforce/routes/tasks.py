from fastapi import APIRouter, Depends, Request

from ..models.models import Task
from ..schemas.tasks import TaskCreate, TaskProgress
from ..services import audit
from ..services.priority import prioritize_tasks
from ..services.windows import to_utc_naive
from ..storage.provider import Storage, get_storage


router = APIRouter(prefix="/api", tags=["tasks"])


def _serialize_task(task: Task) -> dict:
    return {
        "id": str(task.id),
        "employee_id": str(task.employee_id) if task.employee_id else None,
        "title": task.title,
        "description": task.description,
        "customer_name": task.customer_name,
        "customer_phone": task.customer_phone,
        "address": task.address,
        "priority": task.priority,
        "due_date": task.due_date.isoformat() if task.due_date else None,
        "status": task.status,
        "estimated_hours": task.estimated_hours,
        "actual_hours": task.actual_hours,
        "created_at": task.created_at.isoformat() if task.created_at else None,
    }


@router.post("/tasks")
def create_task(body: TaskCreate, request: Request, storage: Storage = Depends(get_storage)):
    fields = body.model_dump(exclude_none=True)
    if body.due_date is not None:
        fields["due_date"] = to_utc_naive(body.due_date)
    task = storage.add_task(**fields)

    ip, agent = audit.client_info(request)
    audit.record_activity(
        storage,
        audit.TASK_CREATED,
        f"Task created: {task.title}",
        employee_id=body.employee_id,
        ip_address=ip,
        device_info=agent,
        details=body.model_dump(mode="json"),
    )
    return {"id": str(task.id), "message": "Task created successfully"}


@router.get("/tasks/{employee_id}")
def list_tasks(employee_id: str, storage: Storage = Depends(get_storage)):
    return [_serialize_task(t) for t in storage.tasks_for_employee(employee_id)]


@router.get("/prioritized-tasks/{employee_id}")
def prioritized_tasks(employee_id: str, storage: Storage = Depends(get_storage)):
    ranked = prioritize_tasks(storage.pending_tasks(employee_id))
    out = []
    for item in ranked:
        data = _serialize_task(item["task"])
        data["ai_score"] = item["ai_score"]
        data["days_until_due"] = item["days_until_due"]
        data["score_label"] = item["score_label"]
        out.append(data)
    return out


@router.post("/task-progress")
def task_progress(body: TaskProgress, request: Request, storage: Storage = Depends(get_storage)):
    task = storage.update_task_progress(body.task_id, body.action.value, body.actual_hours or 0)

    location = None
    if body.location_lat is not None and body.location_lng is not None:
        location = (body.location_lat, body.location_lng)
    ip, agent = audit.client_info(request)
    audit.record_activity(
        storage,
        audit.TASK_UPDATED,
        f"Task {body.action.value}: {task.id}",
        employee_id=body.employee_id,
        task_id=str(task.id),
        ip_address=ip,
        device_info=agent,
        details=body.model_dump(mode="json"),
        location=location,
    )
    return {"message": "Task progress updated successfully"}
