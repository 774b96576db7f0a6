import logging

from sqlalchemy.orm import Session


class BaseService:
    """Holds the request-scoped DB session and a per-service logger."""

    def __init__(self, db: Session):
        self.db = db
        self._logger = logging.getLogger(self.__class__.__module__)

    def _commit(self):
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

    def log_warning(self, message: str, **extra):
        self._logger.warning(message, extra=extra or None)
