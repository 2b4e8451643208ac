from typing import Optional

from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    name: str = Field(min_length=1)
    email: EmailStr
    password: str = Field(min_length=6)
    role: Optional[str] = "employee"  # employee|supervisor|admin
    hourly_rate: Optional[float] = Field(default=None, ge=0)


class LoginRequest(BaseModel):
    email: str
    password: str
