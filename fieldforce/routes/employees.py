from fastapi import APIRouter, Depends, Request

from ..auth.security import create_access_token, get_password_hash, verify_password
from ..config import settings
from ..errors import AuthenticationError, ConflictError
from ..models.models import Employee
from ..schemas.employees import LoginRequest, RegisterRequest
from ..services import audit
from ..storage.provider import Storage, get_storage


router = APIRouter(prefix="/api", tags=["employees"])


def _serialize_employee(emp: Employee) -> dict:
    return {
        "id": str(emp.id),
        "name": emp.name,
        "email": emp.email,
        "role": emp.role,
        "hourlyRate": emp.hourly_rate,
        "isActive": emp.is_active,
        "createdAt": emp.created_at.isoformat() if emp.created_at else None,
    }


@router.post("/register")
def register(body: RegisterRequest, request: Request, storage: Storage = Depends(get_storage)):
    email = body.email.strip().lower()
    if storage.find_employee_by_email(email):
        raise ConflictError("Email already registered", field="email")

    employee = storage.add_employee(
        name=body.name.strip(),
        email=email,
        password_hash=get_password_hash(body.password),
        role=body.role or "employee",
        hourly_rate=body.hourly_rate if body.hourly_rate is not None else settings.default_hourly_rate,
    )

    ip, agent = audit.client_info(request)
    audit.record_activity(
        storage,
        audit.EMPLOYEE_REGISTERED,
        f"New employee registered: {employee.name}",
        employee_id=str(employee.id),
        employee_name=employee.name,
        ip_address=ip,
        device_info=agent,
        details=body.model_dump(mode="json", exclude={"password"}),
    )
    return {"id": str(employee.id), "message": "Employee registered successfully"}


@router.post("/login")
def login(body: LoginRequest, request: Request, storage: Storage = Depends(get_storage)):
    employee = storage.find_employee_by_email(body.email)
    if not employee or not employee.is_active or not verify_password(body.password, employee.password_hash):
        raise AuthenticationError("Invalid credentials or inactive account")

    ip, agent = audit.client_info(request)
    audit.record_activity(
        storage,
        audit.USER_LOGIN,
        f"User logged in: {employee.email}",
        employee_id=str(employee.id),
        employee_name=employee.name,
        ip_address=ip,
        device_info=agent,
        details={"email": employee.email},
    )
    data = _serialize_employee(employee)
    data["access_token"] = create_access_token(str(employee.id), employee.role)
    data["token_type"] = "bearer"
    return data
