"""
Application startup initialization.

Creates missing tables and seeds default payroll settings before the API
serves requests.
"""

import logging
from sqlalchemy import text

from core.database import Base, SessionLocal, engine
from modules.appointments.models import appointment_models  # noqa: F401
from modules.payroll.models import payroll_configuration, payroll_models  # noqa: F401
from modules.payroll.repositories.settings_repository import SqlAlchemySettingsRepository
from modules.staff.models import staff_models  # noqa: F401

logger = logging.getLogger(__name__)


def check_database_connection() -> None:
    with engine.connect() as conn:
        conn.execute(text("SELECT 1")).fetchone()
    logger.info("Database connection successful")


def run_startup_checks() -> None:
    check_database_connection()
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        SqlAlchemySettingsRepository(db).ensure_defaults()
    finally:
        db.close()
