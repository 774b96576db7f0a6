"""
Access policy dependencies.

The session cookie carries only the authenticated user's id; every handler
receives the resolved user explicitly through one of these dependencies.
"""
import logging

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from vacay.core.exceptions import ForbiddenError, UnauthorizedError
from vacay.database import get_db
from vacay.models.user import User, UserRole

logger = logging.getLogger(__name__)

SESSION_USER_KEY = "uid"


def get_current_user(request: Request, db: Session = Depends(get_db)) -> User:
    """Resolve the session's user or fail with 401."""
    user_id = request.session.get(SESSION_USER_KEY)
    if not user_id:
        raise UnauthorizedError()

    user = db.get(User, user_id)
    if user is None:
        # Account was deleted while the cookie was still alive
        logger.info(f"Dropping session for missing user {user_id}")
        request.session.clear()
        raise UnauthorizedError()
    return user


def require_manager(current_user: User = Depends(get_current_user)) -> User:
    """Authenticated and role == manager, otherwise 403."""
    if current_user.role != UserRole.MANAGER:
        logger.warning(f"User {current_user.id} denied manager-only operation")
        raise ForbiddenError()
    return current_user
