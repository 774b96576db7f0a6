"""
One-shot migration + seed.

Creates the schema on DATABASE_URL and inserts the default manager when the
users table is empty.

Usage:
    python scripts/migrate.py
"""
import sys
import os
import logging

# Ensure we can import vacay modules
sys.path.append(os.getcwd())

from vacay.database import SessionLocal, init_db
from vacay.core.init_system import seed_manager_if_empty

# Configure logging
logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def migrate() -> int:
    db = SessionLocal()
    try:
        logger.info("Applying schema…")
        init_db()
        logger.info("Schema applied.")

        logger.info("Seeding default manager (if needed)…")
        manager = seed_manager_if_empty(db)
        if manager is not None:
            logger.info(f"Seeded manager: {manager.email} (employee_code={manager.employee_code})")
        else:
            logger.info("DB already has users; no seed needed.")
        logger.info("Migration done.")
        return 0
    except Exception as e:
        logger.error(f"Migration failed: {e}")
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(migrate())
