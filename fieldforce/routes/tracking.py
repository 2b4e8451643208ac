from fastapi import APIRouter, Depends, Request

from ..config import settings
from ..models.models import Emergency, LocationFix
from ..schemas.tracking import EmergencyCreate, LocationCreate
from ..services import audit
from ..services.windows import to_utc_naive
from ..storage.provider import Storage, get_storage


router = APIRouter(prefix="/api", tags=["tracking"])

EMERGENCY_CONTACTS = [
    {"name": "Safety Manager", "phone": "+1234567890", "role": "Primary Safety Contact"},
    {"name": "Medical Emergency", "phone": "911", "role": "Emergency Services"},
    {"name": "Team Lead", "phone": "+1234567891", "role": "Immediate Supervisor"},
    {"name": "HR Department", "phone": "+1234567892", "role": "Human Resources"},
]


def _serialize_location(fix: LocationFix) -> dict:
    return {
        "id": str(fix.id),
        "employee_id": str(fix.employee_id) if fix.employee_id else None,
        "latitude": fix.latitude,
        "longitude": fix.longitude,
        "accuracy": fix.accuracy,
        "battery_level": fix.battery_level,
        "timestamp": fix.timestamp.isoformat() if fix.timestamp else None,
    }


def _serialize_emergency(em: Emergency) -> dict:
    return {
        "id": str(em.id),
        "employee_id": str(em.employee_id) if em.employee_id else None,
        "employee_name": em.employee_name,
        "emergency_type": em.emergency_type,
        "location": {"lat": em.location_lat, "lng": em.location_lng},
        "message": em.message,
        "status": em.status,
        "created_at": em.created_at.isoformat() if em.created_at else None,
    }


@router.post("/location")
def log_location(body: LocationCreate, request: Request, storage: Storage = Depends(get_storage)):
    fix = storage.add_location(
        employee_id=body.employee_id,
        latitude=body.latitude,
        longitude=body.longitude,
        accuracy=body.accuracy,
        battery_level=body.battery_level,
        timestamp=to_utc_naive(body.timestamp) if body.timestamp else None,
    )

    ip, agent = audit.client_info(request)
    audit.record_activity(
        storage,
        audit.LOCATION_LOGGED,
        f"Location updated: {body.latitude}, {body.longitude}",
        employee_id=body.employee_id,
        ip_address=ip,
        device_info=agent,
        details=body.model_dump(mode="json"),
        location=(body.latitude, body.longitude),
    )
    return {"id": str(fix.id), "message": "Location logged successfully"}


@router.get("/location/{employee_id}")
def recent_locations(employee_id: str, storage: Storage = Depends(get_storage)):
    fixes = storage.recent_locations(employee_id, settings.location_history_limit)
    return [_serialize_location(f) for f in fixes]


@router.post("/emergency")
def trigger_emergency(body: EmergencyCreate, request: Request, storage: Storage = Depends(get_storage)):
    employee_name = body.employee_name
    if employee_name is None and body.employee_id:
        employee = storage.get_employee(body.employee_id)
        employee_name = employee.name if employee else None

    emergency = storage.add_emergency(
        employee_id=body.employee_id,
        employee_name=employee_name,
        emergency_type=body.emergency_type,
        location_lat=body.latitude,
        location_lng=body.longitude,
        message=body.message,
    )

    location = None
    if body.latitude is not None and body.longitude is not None:
        location = (body.latitude, body.longitude)
    ip, agent = audit.client_info(request)
    audit.record_activity(
        storage,
        audit.EMERGENCY_TRIGGERED,
        f"EMERGENCY: {body.emergency_type} - {body.message}",
        employee_id=body.employee_id,
        employee_name=employee_name,
        ip_address=ip,
        device_info=agent,
        details=body.model_dump(mode="json"),
        location=location,
    )
    return {
        "success": True,
        "message": "Emergency alert sent! Help is on the way.",
        "emergency": _serialize_emergency(emergency),
    }


@router.get("/emergency-contacts")
def emergency_contacts():
    return EMERGENCY_CONTACTS
