"""
User accounts. Every user is either a self-service employee or a manager.
"""
from sqlalchemy import Column, Integer, String, Enum, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from vacay.database import Base


class UserRole(str, enum.Enum):
    """
    - MANAGER: administers users and moderates vacation requests
    - EMPLOYEE: self-service access to their own requests
    """
    EMPLOYEE = "employee"
    MANAGER = "manager"


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    employee_code = Column(String, unique=True, index=True, nullable=False)

    # Stored as the lowercase value to match the `role IN ('manager','employee')` check
    role = Column(
        Enum(UserRole, name="user_role", values_callable=lambda roles: [r.value for r in roles]),
        default=UserRole.EMPLOYEE,
        nullable=False,
    )
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    vacation_requests = relationship(
        "VacationRequest",
        back_populates="owner",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<User {self.email} ({self.role.value})>"

    @property
    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER
