"""
Application wiring: settings -> logging -> database -> service.

Whatever transport sits in front of the service calls startup() once and opens one service per request.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional

from sqlalchemy.orm import Session

from chess_arbiter.core.config import Settings, get_settings
from chess_arbiter.core.logging_config import configure_logging
from chess_arbiter.db.database import SessionLocal, init_db
from chess_arbiter.db.sql_repository import SQLSessionRepository
from chess_arbiter.services.arbiter_service import ArbiterService

logger = logging.getLogger(__name__)


def startup() -> Settings:
    """The engine in db.database is built from these same settings."""
    settings = get_settings()
    configure_logging(settings.log_level, echo_sql=settings.echo_sql)
    init_db()
    logger.info("Record store ready (program_id=%s)", settings.program_id)
    return settings


def build_service(
    db_session: Session, settings: Optional[Settings] = None
) -> ArbiterService:
    return ArbiterService(SQLSessionRepository(db_session, settings))


@contextmanager
def open_service(settings: Optional[Settings] = None) -> Iterator[ArbiterService]:
    """Service on a fresh database session, closed again when the request is done."""
    db = SessionLocal()
    try:
        yield build_service(db, settings)
    finally:
        db.close()
