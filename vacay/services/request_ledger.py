import re
from typing import List, Optional

from sqlalchemy.orm import joinedload

from vacay.core.exceptions import ValidationError
from vacay.models.vacation_request import RequestStatus, VacationRequest
from vacay.services.base import BaseService

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")

DECISIONS = (RequestStatus.APPROVED, RequestStatus.REJECTED)


class RequestLedger(BaseService):
    """
    Vacation request storage and the pending -> approved/rejected decision.
    """

    def create(
        self,
        user_id: int,
        date_from: Optional[str],
        date_to: Optional[str],
        reason: Optional[str],
    ) -> VacationRequest:
        """
        Submit a new request for `user_id`. Dates must look like YYYY-MM-DD;
        their order is not checked.
        """
        date_from = (date_from or "").strip()
        date_to = (date_to or "").strip()
        reason = (reason or "").strip()
        if (
            not DATE_PATTERN.fullmatch(date_from)
            or not DATE_PATTERN.fullmatch(date_to)
            or reason == ""
        ):
            raise ValidationError("Invalid input")

        request = VacationRequest(
            user_id=user_id,
            date_from=date_from,
            date_to=date_to,
            reason=reason,
            status=RequestStatus.PENDING.value,
        )
        self.db.add(request)
        self._commit()
        self.db.refresh(request)
        self._logger.info(f"User {user_id} submitted vacation request {request.id}")
        return request

    def list_mine(self, user_id: int) -> List[VacationRequest]:
        return (
            self.db.query(VacationRequest)
            .filter(VacationRequest.user_id == user_id)
            .order_by(VacationRequest.id.desc())
            .all()
        )

    def list_all(self) -> List[VacationRequest]:
        return (
            self.db.query(VacationRequest)
            .options(joinedload(VacationRequest.owner))
            .order_by(VacationRequest.id.desc())
            .all()
        )

    def set_status(self, request_id: int, status: RequestStatus) -> int:
        """
        Overwrite the status of a request with a single UPDATE.

        The current status is not checked and an unknown id updates nothing;
        both cases still count as success. Returns the number of rows touched.
        """
        if status not in DECISIONS:
            raise ValidationError("Invalid status")

        updated = (
            self.db.query(VacationRequest)
            .filter(VacationRequest.id == request_id)
            .update({VacationRequest.status: status.value}, synchronize_session=False)
        )
        self._commit()
        if updated == 0:
            self.log_warning(f"Status change for unknown vacation request {request_id}", request_id=request_id)
        else:
            self._logger.info(f"Vacation request {request_id} marked {status.value}")
        return updated
