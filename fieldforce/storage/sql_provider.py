import uuid
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Iterator, List, Optional, Tuple

import structlog
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from ..db import Base, build_engine, build_session_factory
from ..errors import ConflictError, NotFoundError, StorageError, ValidationError
from ..models.models import ActivityLog, Emergency, Employee, LocationFix, Task
from .provider import Storage


logger = structlog.get_logger(__name__)


def parse_id(value: Any, field: str = "id") -> uuid.UUID:
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {field}: {value!r}", field=field)


class SqlStorage(Storage):
    """SQLAlchemy-backed storage. Every call opens and closes its own session."""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    @classmethod
    def from_url(cls, database_url: str) -> "SqlStorage":
        return cls(build_session_factory(build_engine(database_url)))

    @property
    def engine(self):
        return self.session_factory.kw["bind"]

    def create_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self.session_factory()
        try:
            yield db
        except IntegrityError as e:
            db.rollback()
            raise ConflictError(f"Constraint violation: {e.orig}")
        except SQLAlchemyError as e:
            db.rollback()
            logger.error("storage_error", error=str(e))
            raise StorageError(f"Storage operation failed: {e}")
        finally:
            db.close()

    def _insert(self, obj):
        with self._session() as db:
            db.add(obj)
            db.commit()
            db.refresh(obj)
            return obj

    # Range reads

    def tasks_in_window(self, start: datetime, end: datetime) -> List[Task]:
        with self._session() as db:
            return (
                db.query(Task)
                .filter(Task.created_at >= start, Task.created_at <= end)
                .order_by(Task.created_at.asc())
                .all()
            )

    def locations_in_window(self, start: datetime, end: datetime) -> List[LocationFix]:
        with self._session() as db:
            return (
                db.query(LocationFix)
                .filter(LocationFix.timestamp >= start, LocationFix.timestamp <= end)
                .order_by(LocationFix.timestamp.asc())
                .all()
            )

    def logs_in_window(self, start: datetime, end: datetime) -> List[ActivityLog]:
        with self._session() as db:
            return (
                db.query(ActivityLog)
                .filter(ActivityLog.timestamp >= start, ActivityLog.timestamp <= end)
                .order_by(ActivityLog.timestamp.asc())
                .all()
            )

    def emergencies_in_window(self, start: datetime, end: datetime) -> List[Emergency]:
        with self._session() as db:
            return (
                db.query(Emergency)
                .filter(Emergency.created_at >= start, Emergency.created_at <= end)
                .order_by(Emergency.created_at.asc())
                .all()
            )

    def active_employees(self) -> List[Employee]:
        with self._session() as db:
            return db.query(Employee).filter(Employee.is_active == True).order_by(Employee.name.asc()).all()  # noqa: E712

    # Per-employee reads

    def get_employee(self, employee_id) -> Optional[Employee]:
        emp_id = parse_id(employee_id, "employee_id")
        with self._session() as db:
            return db.query(Employee).filter(Employee.id == emp_id).first()

    def find_employee_by_email(self, email: str) -> Optional[Employee]:
        with self._session() as db:
            return db.query(Employee).filter(Employee.email == email.strip().lower()).first()

    def employee_locations(self, employee_id, start: datetime, end: datetime) -> List[LocationFix]:
        emp_id = parse_id(employee_id, "employee_id")
        with self._session() as db:
            return (
                db.query(LocationFix)
                .filter(
                    LocationFix.employee_id == emp_id,
                    LocationFix.timestamp >= start,
                    LocationFix.timestamp <= end,
                )
                .order_by(LocationFix.timestamp.asc())
                .all()
            )

    def recent_locations(self, employee_id, limit: int) -> List[LocationFix]:
        emp_id = parse_id(employee_id, "employee_id")
        with self._session() as db:
            return (
                db.query(LocationFix)
                .filter(LocationFix.employee_id == emp_id)
                .order_by(LocationFix.timestamp.desc())
                .limit(limit)
                .all()
            )

    def completed_tasks(
        self, employee_id, start: Optional[datetime] = None, end: Optional[datetime] = None
    ) -> List[Task]:
        emp_id = parse_id(employee_id, "employee_id")
        with self._session() as db:
            query = db.query(Task).filter(Task.employee_id == emp_id, Task.status == "completed")
            if start is not None:
                query = query.filter(Task.created_at >= start)
            if end is not None:
                query = query.filter(Task.created_at <= end)
            return query.order_by(Task.created_at.asc()).all()

    def tasks_for_employee(self, employee_id) -> List[Task]:
        emp_id = parse_id(employee_id, "employee_id")
        with self._session() as db:
            return (
                db.query(Task)
                .filter(Task.employee_id == emp_id)
                .order_by(Task.priority.desc(), Task.due_date.asc())
                .all()
            )

    def pending_tasks(self, employee_id) -> List[Task]:
        emp_id = parse_id(employee_id, "employee_id")
        with self._session() as db:
            return db.query(Task).filter(Task.employee_id == emp_id, Task.status == "pending").all()

    def get_task(self, task_id) -> Optional[Task]:
        tid = parse_id(task_id, "task_id")
        with self._session() as db:
            return db.query(Task).filter(Task.id == tid).first()

    def list_logs(
        self,
        page: int,
        limit: int,
        employee_id=None,
        action_type: Optional[str] = None,
    ) -> Tuple[List[ActivityLog], int]:
        with self._session() as db:
            query = db.query(ActivityLog)
            if employee_id:
                query = query.filter(ActivityLog.employee_id == parse_id(employee_id, "employee_id"))
            if action_type:
                query = query.filter(ActivityLog.action_type == action_type)
            total = query.count()
            rows = (
                query.order_by(ActivityLog.timestamp.desc())
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
            return rows, total

    # Range deletes

    def delete_completed_tasks(self, start: datetime, end: datetime) -> int:
        with self._session() as db:
            count = (
                db.query(Task)
                .filter(Task.status == "completed", Task.created_at >= start, Task.created_at <= end)
                .delete(synchronize_session=False)
            )
            db.commit()
            return count

    def delete_locations(self, start: datetime, end: datetime) -> int:
        with self._session() as db:
            count = (
                db.query(LocationFix)
                .filter(LocationFix.timestamp >= start, LocationFix.timestamp <= end)
                .delete(synchronize_session=False)
            )
            db.commit()
            return count

    def delete_logs(self, start: datetime, end: datetime) -> int:
        with self._session() as db:
            count = (
                db.query(ActivityLog)
                .filter(ActivityLog.timestamp >= start, ActivityLog.timestamp <= end)
                .delete(synchronize_session=False)
            )
            db.commit()
            return count

    # Writes

    def add_employee(self, **fields: Any) -> Employee:
        return self._insert(Employee(**fields))

    def add_task(self, **fields: Any) -> Task:
        if fields.get("employee_id") is not None:
            fields["employee_id"] = parse_id(fields["employee_id"], "employee_id")
        return self._insert(Task(**fields))

    def update_task_progress(self, task_id, status: str, actual_hours: float) -> Task:
        tid = parse_id(task_id, "task_id")
        with self._session() as db:
            task = db.query(Task).filter(Task.id == tid).first()
            if not task:
                raise NotFoundError("Task", str(task_id))
            task.status = status
            task.actual_hours = actual_hours
            db.commit()
            db.refresh(task)
            return task

    def add_location(self, **fields: Any) -> LocationFix:
        fields["employee_id"] = parse_id(fields.get("employee_id"), "employee_id")
        if fields.get("timestamp") is None:
            fields.pop("timestamp", None)
        return self._insert(LocationFix(**fields))

    def add_emergency(self, **fields: Any) -> Emergency:
        if fields.get("employee_id") is not None:
            fields["employee_id"] = parse_id(fields["employee_id"], "employee_id")
        return self._insert(Emergency(**fields))

    def add_log(self, **fields: Any) -> ActivityLog:
        for key in ("employee_id", "task_id"):
            if fields.get(key) is not None:
                fields[key] = parse_id(fields[key], key)
        return self._insert(ActivityLog(**fields))
