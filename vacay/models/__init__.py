# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, vacation_request

# Explicit class exports for cleaner imports
from .user import User, UserRole
from .vacation_request import VacationRequest, RequestStatus

__all__ = [
    "User",
    "UserRole",
    "VacationRequest",
    "RequestStatus",
]
