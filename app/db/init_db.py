"""Database bootstrapping utilities."""

from __future__ import annotations

from sqlalchemy.orm import Session

import app.models  # noqa: F401 - register every mapped table on Base.metadata
from app.core.config import get_settings
from app.core.constants import DEFAULT_COORDINATOR_NAME, DEFAULT_COORDINATOR_SURNAME
from app.core.enums import RoleEnum
from app.core.logger import logger
from app.core.security import get_password_hash
from app.crud.users import user_crud
from app.db import session as db_session
from app.models.base import Base


def init_db() -> None:
    """Create all database tables if they do not exist and seed baseline data."""
    Base.metadata.create_all(bind=db_session.engine)

    session = db_session.SessionLocal()
    try:
        _seed_default_coordinator(session)
        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to seed default data during database initialization")
        raise
    finally:
        session.close()


def _seed_default_coordinator(db: Session) -> None:
    """Ensure a coordinator account exists so that roles can be granted at all."""
    settings = get_settings()
    existing = user_crud.get_by_email(db, settings.default_coordinator_email)
    if existing is not None:
        if existing.role != RoleEnum.COORDINATOR.value:
            user_crud.update(db, existing, {"role": RoleEnum.COORDINATOR.value}, auto_commit=False)
        return

    user_crud.create(
        db,
        {
            "name": DEFAULT_COORDINATOR_NAME,
            "surname": DEFAULT_COORDINATOR_SURNAME,
            "email": settings.default_coordinator_email,
            "phone": settings.default_coordinator_phone,
            "password": get_password_hash(settings.default_coordinator_password),
            "role": RoleEnum.COORDINATOR.value,
        },
        auto_commit=False,
    )
    logger.info("Seeded default coordinator %s", settings.default_coordinator_email)
