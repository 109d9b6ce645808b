"""Engine and database session factory"""

from typing import Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import sessionmaker

from chess_arbiter.core.config import Settings, get_settings
from chess_arbiter.db.schema import Base


def build_engine(settings: Optional[Settings] = None) -> Engine:
    settings = settings or get_settings()
    connect_args = (
        {"check_same_thread": False}
        if settings.database_url.startswith("sqlite")
        else {}
    )
    return create_engine(
        settings.database_url, echo=settings.echo_sql, connect_args=connect_args
    )


engine = build_engine()
SessionLocal = sessionmaker(bind=engine)


def init_db(bind: Engine = engine) -> None:
    """Ensure all tables are created"""
    Base.metadata.create_all(bind=bind)
