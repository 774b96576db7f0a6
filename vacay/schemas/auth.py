from pydantic import BaseModel, ConfigDict
from typing import Optional
from vacay.models.user import UserRole


# Request bodies keep plain strings: field rules live in the services so that
# failures come back as 400 {"error": ...} with a specific message.
class LoginRequest(BaseModel):
    email: Optional[str] = None
    password: Optional[str] = None


class RegisterRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class SessionUser(BaseModel):
    """The user as seen by the session endpoints (/login, /me)."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: UserRole
    employee_code: str


class RegisterResponse(BaseModel):
    ok: bool = True
    employee_code: str


class OkResponse(BaseModel):
    ok: bool = True
