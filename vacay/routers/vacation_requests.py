from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from vacay.database import get_db
from vacay.models.user import User
from vacay.routers.auth_deps import get_current_user
from vacay.schemas.vacation_request import (
    VacationRequestCreate,
    VacationRequestCreated,
    VacationRequestResponse,
)
from vacay.services.request_ledger import RequestLedger

# Self-service: the owner is always the session user, never part of the payload
router = APIRouter(prefix="/me/requests", tags=["vacation-requests"])


@router.get("", response_model=List[VacationRequestResponse])
def list_my_requests(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return RequestLedger(db).list_mine(current_user.id)


@router.post("", response_model=VacationRequestCreated, status_code=status.HTTP_201_CREATED)
def submit_request(
    data: VacationRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    request = RequestLedger(db).create(current_user.id, data.date_from, data.date_to, data.reason)
    return VacationRequestCreated(id=request.id)
