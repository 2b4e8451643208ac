"""
Seed the local database with sample field employees, tasks and GPS fixes.

Usage:
  python scripts/seed_test_data.py

This script is idempotent: employees are upserted by email, tasks by
(employee, title), and a route of fixes is only added to an employee who has none.
"""
import os
import sys
from datetime import datetime, timedelta

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from fieldforce.auth.security import get_password_hash
from fieldforce.config import settings
from fieldforce.db import Base, build_engine, build_session_factory
from fieldforce.models.models import Employee, LocationFix, Task


# A short drive through downtown Vancouver
SAMPLE_ROUTE = [
    (49.2827, -123.1207),
    (49.2849, -123.1148),
    (49.2870, -123.1090),
    (49.2812, -123.1003),
    (49.2765, -123.0954),
]


def ensure_employee(session, name: str, email: str, password: str, role: str = "employee", hourly_rate: float = 25) -> Employee:
    emp = session.query(Employee).filter(Employee.email == email).first()
    if emp:
        emp.name = name
        emp.role = role
        emp.hourly_rate = hourly_rate
        # Keep an existing password
        if not emp.password_hash:
            emp.password_hash = get_password_hash(password)
        session.add(emp)
        session.flush()
        return emp
    emp = Employee(
        name=name,
        email=email,
        password_hash=get_password_hash(password),
        role=role,
        hourly_rate=hourly_rate,
        is_active=True,
    )
    session.add(emp)
    session.flush()
    return emp


def ensure_task(session, employee: Employee, title: str, **kwargs) -> Task:
    task = (
        session.query(Task)
        .filter(Task.employee_id == employee.id, Task.title == title)
        .first()
    )
    if task:
        for k, v in kwargs.items():
            if hasattr(task, k):
                setattr(task, k, v)
        session.add(task)
        session.flush()
        return task
    task = Task(employee_id=employee.id, title=title, **{k: v for k, v in kwargs.items() if hasattr(Task, k)})
    session.add(task)
    session.flush()
    return task


def ensure_route(session, employee: Employee, start: datetime) -> int:
    existing = session.query(LocationFix).filter(LocationFix.employee_id == employee.id).count()
    if existing:
        return 0
    for i, (lat, lng) in enumerate(SAMPLE_ROUTE):
        session.add(LocationFix(
            employee_id=employee.id,
            latitude=lat,
            longitude=lng,
            accuracy=5.0,
            battery_level=90 - i,
            timestamp=start + timedelta(minutes=15 * i),
        ))
    session.flush()
    return len(SAMPLE_ROUTE)


def main() -> None:
    if settings.database_url.startswith("sqlite:///./"):
        os.makedirs("var", exist_ok=True)
    engine = build_engine(settings.database_url)
    # Ensure tables exist (safe for SQLite dev)
    Base.metadata.create_all(bind=engine)

    session = build_session_factory(engine)()
    try:
        now = datetime.utcnow().replace(microsecond=0)

        admin = ensure_employee(session, "Admin User", "admin@example.com", "TestAdmin123!", role="admin", hourly_rate=40)
        tech = ensure_employee(session, "Tina Technician", "tina.tech@example.com", "TestUser123!", hourly_rate=30)
        ensure_employee(session, "Sam Supervisor", "sam.supervisor@example.com", "TestUser123!", role="supervisor", hourly_rate=35)

        ensure_task(
            session, tech, "Replace HVAC filter",
            customer_name="ACME Corp", customer_phone="604-555-1000", address="100 Main St",
            priority=3, due_date=now + timedelta(hours=6), status="pending", estimated_hours=2,
        )
        ensure_task(
            session, tech, "Inspect rooftop unit",
            customer_name="Globex Residential", address="200 Oak Ave",
            priority=2, due_date=now + timedelta(days=3), status="pending", estimated_hours=3,
        )
        ensure_task(
            session, tech, "Thermostat install",
            customer_name="Initech", address="300 Pine Rd",
            priority=1, due_date=now - timedelta(days=1), status="completed",
            estimated_hours=4, actual_hours=3,
        )
        ensure_task(
            session, admin, "Quarterly safety audit",
            priority=2, due_date=now + timedelta(days=7), status="pending",
        )

        added = ensure_route(session, tech, now - timedelta(hours=2))

        session.commit()
        print(f"Seed completed: employees and tasks upserted, {added} location fixes added.")
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


if __name__ == "__main__":
    main()
