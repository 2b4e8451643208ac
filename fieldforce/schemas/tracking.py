from datetime import datetime
from typing import Optional

from pydantic import BaseModel


class LocationCreate(BaseModel):
    employee_id: str
    latitude: float
    longitude: float
    accuracy: Optional[float] = None
    battery_level: Optional[float] = None
    timestamp: Optional[datetime] = None


class EmergencyCreate(BaseModel):
    employee_id: Optional[str] = None
    employee_name: Optional[str] = None
    emergency_type: str
    message: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
