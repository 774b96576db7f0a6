"""
User Directory: account storage, credential checks and employee codes.

Uniqueness of email and employee_code is owned by the database's unique
constraints. The lookups done before inserting only give a friendlier error
earlier; a constraint violation at commit time is still reported as a conflict.
"""
import secrets
from typing import List, Optional

from email_validator import EmailNotValidError, validate_email
from sqlalchemy.exc import IntegrityError

from vacay.core.config import settings
from vacay.core.exceptions import (
    ConflictError,
    InternalError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from vacay.models.user import User, UserRole
from vacay.schemas.user import UserUpdate
from vacay.services import auth as auth_service
from vacay.services.base import BaseService

MIN_PASSWORD_LENGTH = 6


def normalize_email(raw: Optional[str]) -> str:
    return (raw or "").strip().lower()


def is_valid_email(email: str) -> bool:
    if not email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def _draw_employee_code() -> str:
    return "{:03d}-{:03d}-{:03d}".format(
        100 + secrets.randbelow(900),
        100 + secrets.randbelow(900),
        secrets.randbelow(1000),
    )


class UserDirectory(BaseService):

    def __init__(self, db, max_code_attempts: Optional[int] = None):
        super().__init__(db)
        self.max_code_attempts = max_code_attempts or settings.employee_code_max_attempts

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def get(self, user_id: int) -> Optional[User]:
        return self.db.get(User, user_id)

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.id.desc()).all()

    def _email_taken(self, email: str, exclude_id: Optional[int] = None) -> bool:
        query = self.db.query(User.id).filter(User.email == email)
        if exclude_id is not None:
            query = query.filter(User.id != exclude_id)
        return query.first() is not None

    def _code_taken(self, code: str) -> bool:
        return self.db.query(User.id).filter(User.employee_code == code).first() is not None

    # ------------------------------------------------------------------
    # Credentials
    # ------------------------------------------------------------------
    def authenticate(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Resolve a user from login credentials.

        Every failure (malformed email, missing password, unknown user, wrong
        password) raises the same InvalidCredentialsError.
        """
        email = normalize_email(email)
        if not password or not is_valid_email(email):
            raise InvalidCredentialsError()

        user = self.db.query(User).filter(User.email == email).first()
        if user is None or not auth_service.verify_password(password, user.password_hash):
            self._logger.info("Failed login attempt", extra={"email": email})
            raise InvalidCredentialsError()
        return user

    # ------------------------------------------------------------------
    # Employee codes
    # ------------------------------------------------------------------
    def generate_employee_code(self) -> str:
        """Draw NNN-NNN-NNN codes until one is unused, giving up after max_code_attempts."""
        for attempt in range(1, self.max_code_attempts + 1):
            code = _draw_employee_code()
            if not self._code_taken(code):
                return code
            self._logger.warning(f"Employee code collision on attempt {attempt}: {code}")
        self._logger.error(f"No free employee code after {self.max_code_attempts} attempts")
        raise InternalError(
            "Could not allocate a unique employee code",
            details={"attempts": self.max_code_attempts},
        )

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def _validate_new_account(self, name: Optional[str], email: Optional[str], password: Optional[str]):
        name = (name or "").strip()
        email = normalize_email(email)
        password = password or ""
        if name == "":
            raise ValidationError("Name required")
        if not is_valid_email(email):
            raise ValidationError("Invalid email")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
        return name, email, password

    def _commit_unique(self):
        try:
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            if "employee_code" in str(exc.orig):
                raise ConflictError("Employee code already in use", details={"field": "employee_code"}) from exc
            raise ConflictError("Email already in use", details={"field": "email"}) from exc

    def _insert(self, name: str, email: str, password: str, role: UserRole, employee_code: str) -> User:
        user = User(
            name=name,
            email=email,
            employee_code=employee_code,
            role=role,
            password_hash=auth_service.get_password_hash(password),
        )
        self.db.add(user)
        self._commit_unique()
        self.db.refresh(user)
        self._logger.info(f"Created {role.value} account {user.id} ({employee_code})")
        return user

    def register(self, name: Optional[str], email: Optional[str], password: Optional[str]) -> str:
        """Public self sign-up. Always creates an employee and returns the new employee code."""
        name, email, password = self._validate_new_account(name, email, password)
        if self._email_taken(email):
            raise ConflictError("Email already in use")

        # A concurrent sign-up can take the drawn code between lookup and commit
        for attempt in range(1, self.max_code_attempts + 1):
            try:
                user = self._insert(name, email, password, UserRole.EMPLOYEE, self.generate_employee_code())
            except ConflictError as exc:
                if (exc.details or {}).get("field") != "employee_code":
                    raise
                self._logger.warning(f"Employee code taken at commit on attempt {attempt}, drawing again")
                continue
            return user.employee_code
        raise InternalError(
            "Could not allocate a unique employee code",
            details={"attempts": self.max_code_attempts},
        )

    def create_user(
        self,
        name: Optional[str],
        email: Optional[str],
        password: Optional[str],
        role: Optional[str] = None,
        employee_code: Optional[str] = None,
    ) -> User:
        """Manager-side account creation; may create managers and pin an employee code."""
        name, email, password = self._validate_new_account(name, email, password)
        user_role = UserRole.MANAGER if role == UserRole.MANAGER.value else UserRole.EMPLOYEE
        if self._email_taken(email):
            raise ConflictError("Email already in use")

        code = (employee_code or "").strip()
        if code == "":
            code = self.generate_employee_code()
        elif self._code_taken(code):
            raise ConflictError("Employee code already in use")
        return self._insert(name, email, password, user_role, code)

    def update_user(self, user_id: int, changes: UserUpdate) -> User:
        name = changes.name.strip() if changes.name is not None else None
        email = normalize_email(changes.email) if changes.email is not None else None
        password = changes.password

        if name is not None and name == "":
            raise ValidationError("Name required")
        if email is not None and not is_valid_email(email):
            raise ValidationError("Invalid email")
        # An empty password means "keep the current one"
        if password and len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError("Password too short")

        user = self.get(user_id)
        if user is None:
            raise NotFoundError("User not found")
        if email is not None and self._email_taken(email, exclude_id=user_id):
            raise ConflictError("Email already in use")

        if name is not None:
            user.name = name
        if email is not None:
            user.email = email
        if password:
            user.password_hash = auth_service.get_password_hash(password)

        self._commit_unique()
        self.db.refresh(user)
        return user

    def delete_user(self, user_id: int) -> None:
        """Delete a user; the database cascades the delete to their vacation requests."""
        user = self.get(user_id)
        if user is None:
            raise NotFoundError("Not found")
        self.db.delete(user)
        self._commit()
        self._logger.info(f"Deleted user {user_id}")
