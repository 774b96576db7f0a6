from typing import List, Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session
import logging

from vacay.core.exceptions import ForbiddenError
from vacay.database import get_db
from vacay.models.user import User
from vacay.models.vacation_request import RequestStatus
from vacay.routers.auth_deps import require_manager
from vacay.schemas.auth import OkResponse
from vacay.schemas.user import UserCreate, UserCreated, UserResponse, UserUpdate
from vacay.schemas.vacation_request import ManagedVacationRequest
from vacay.services.request_ledger import RequestLedger
from vacay.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/admin",
    tags=["admin"],
    dependencies=[Depends(require_manager)]
)


# ---------------------------------------------------------------------------
# Users
# ---------------------------------------------------------------------------
@router.get("/users", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return UserDirectory(db).list_users()


@router.post("/users", response_model=UserCreated, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    user = UserDirectory(db).create_user(
        data.name, data.email, data.password,
        role=data.role,
        employee_code=data.employee_code,
    )
    return UserCreated(id=user.id, employee_code=user.employee_code)


@router.put("/users/{user_id}", response_model=OkResponse)
def update_user(user_id: int, changes: Optional[UserUpdate] = None, db: Session = Depends(get_db)):
    # No body at all is an empty change set
    UserDirectory(db).update_user(user_id, changes or UserUpdate())
    return OkResponse()


@router.delete("/users/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    if user_id == current_user.id:
        raise ForbiddenError("You can't delete your own account.")
    UserDirectory(db).delete_user(user_id)
    logger.info(f"Manager {current_user.id} deleted user {user_id}")
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ---------------------------------------------------------------------------
# Vacation request moderation
# ---------------------------------------------------------------------------
@router.get("/requests", response_model=List[ManagedVacationRequest])
def list_all_requests(db: Session = Depends(get_db)):
    return [ManagedVacationRequest.from_request(r) for r in RequestLedger(db).list_all()]


def _decide(db: Session, request_id: int, decision: RequestStatus, manager: User) -> OkResponse:
    RequestLedger(db).set_status(request_id, decision)
    logger.info(f"Manager {manager.id} set request {request_id} to {decision.value}")
    return OkResponse()


@router.post("/requests/{request_id}/approve", response_model=OkResponse)
def approve_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    return _decide(db, request_id, RequestStatus.APPROVED, current_user)


@router.post("/requests/{request_id}/reject", response_model=OkResponse)
def reject_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager)
):
    return _decide(db, request_id, RequestStatus.REJECTED, current_user)
