import logging
from typing import Optional

from vacay.core.config import settings
from vacay.database import SessionLocal
from vacay.models.user import User, UserRole
from vacay.services import auth as auth_service
from vacay.services.user_directory import UserDirectory, normalize_email

logger = logging.getLogger(__name__)


def seed_manager_if_empty(db) -> Optional[User]:
    """
    Insert the default manager when the users table has no rows.
    Returns the created manager, or None when users already exist.

    The seed password bypasses the sign-up length rule on purpose so the
    out-of-the-box login stays `manager@example.com` / `pass`.
    """
    count = db.query(User).count()
    if count:
        logger.info(f"System initialization check: {count} user(s) found, no seed needed.")
        return None

    directory = UserDirectory(db)
    manager = User(
        name=settings.seed.name,
        email=normalize_email(settings.seed.email),
        employee_code=directory.generate_employee_code(),
        role=UserRole.MANAGER,
        password_hash=auth_service.get_password_hash(settings.seed.password),
    )
    db.add(manager)
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
    db.refresh(manager)
    logger.info(f"✓ Seeded manager: {manager.email} (employee_code={manager.employee_code}) — change the password")
    return manager


def init_system_data():
    """Startup hook: seed the default manager unless disabled via SEED_MANAGER."""
    if not settings.seed.enabled:
        logger.info("Manager seeding disabled")
        return
    db = SessionLocal()
    try:
        seed_manager_if_empty(db)
    finally:
        db.close()
