from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
import logging

from vacay.core.limiter import limiter, credential_limit
from vacay.database import get_db
from vacay.models.user import User
from vacay.routers.auth_deps import SESSION_USER_KEY, get_current_user
from vacay.schemas.auth import LoginRequest, OkResponse, RegisterRequest, RegisterResponse, SessionUser
from vacay.services.user_directory import UserDirectory

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=SessionUser)
@limiter.limit(credential_limit)
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    user = UserDirectory(db).authenticate(login_data.email, login_data.password)

    # Fresh session on every login
    request.session.clear()
    request.session[SESSION_USER_KEY] = user.id
    logger.info(f"User {user.id} logged in")
    return user


@router.post("/logout", response_model=OkResponse)
def logout(request: Request):
    request.session.clear()
    return OkResponse()


@router.get("/me", response_model=SessionUser)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(credential_limit)
def register(request: Request, data: RegisterRequest, db: Session = Depends(get_db)):
    """Public sign-up; always creates an employee account."""
    code = UserDirectory(db).register(data.name, data.email, data.password)
    return RegisterResponse(employee_code=code)
