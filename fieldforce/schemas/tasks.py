from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class TaskStatus(str, Enum):
    pending = "pending"
    in_progress = "in_progress"
    completed = "completed"


class TaskCreate(BaseModel):
    employee_id: str
    title: str = Field(min_length=1)
    description: Optional[str] = None
    customer_name: Optional[str] = None
    customer_phone: Optional[str] = None
    address: Optional[str] = None
    priority: int = Field(default=1, ge=1, le=3)  # 1=low|2=medium|3=high
    due_date: Optional[datetime] = None
    estimated_hours: Optional[float] = Field(default=None, ge=0)


class TaskProgress(BaseModel):
    task_id: str
    employee_id: Optional[str] = None
    action: TaskStatus
    notes: Optional[str] = None
    location_lat: Optional[float] = None
    location_lng: Optional[float] = None
    actual_hours: Optional[float] = Field(default=None, ge=0)
