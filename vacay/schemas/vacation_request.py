from pydantic import BaseModel, ConfigDict
from datetime import datetime
from typing import Optional

from vacay.models.vacation_request import RequestStatus, VacationRequest


class VacationRequestCreate(BaseModel):
    date_from: Optional[str] = None
    date_to: Optional[str] = None
    reason: Optional[str] = None


class VacationRequestResponse(BaseModel):
    id: int
    user_id: int
    reason: str
    status: RequestStatus
    date_from: str
    date_to: str
    submitted_at: datetime
    decided_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class ManagedVacationRequest(VacationRequestResponse):
    """A request as listed on the manager dashboard, with its owner's identity."""
    user_name: str
    email: str

    @classmethod
    def from_request(cls, request: VacationRequest) -> "ManagedVacationRequest":
        base = VacationRequestResponse.model_validate(request).model_dump()
        return cls(**base, user_name=request.owner.name, email=request.owner.email)


class VacationRequestCreated(BaseModel):
    id: int
