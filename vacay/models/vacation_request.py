from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from vacay.database import Base
import enum


class RequestStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class VacationRequest(Base):
    __tablename__ = "vacation_requests"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    # Kept as the submitted YYYY-MM-DD text; only the shape is validated
    date_from = Column(String(10), nullable=False)
    date_to = Column(String(10), nullable=False)
    reason = Column(String, nullable=False)
    status = Column(String, default=RequestStatus.PENDING.value, nullable=False)
    submitted_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    decided_at = Column(DateTime(timezone=True), nullable=True)

    owner = relationship("User", back_populates="vacation_requests")
