from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from vacay.models.user import UserRole


class UserCreate(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None
    employee_code: Optional[str] = None


class UserUpdate(BaseModel):
    """
    Partial update. None means "leave unchanged"; an empty password string
    also means "leave unchanged". Role is deliberately not updatable.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    employee_code: str
    created_at: datetime


class UserCreated(BaseModel):
    id: int
    employee_code: str
