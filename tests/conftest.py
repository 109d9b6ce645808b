"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

import logging
from typing import Generator

import pytest
from sqlalchemy import StaticPool, create_engine
from sqlalchemy.orm import Session, sessionmaker

from chess_arbiter.core.config import Settings
from chess_arbiter.db.schema import Base

# Setup an in-memory SQLite database for testing
DATABASE_URL = "sqlite:///:memory:"
engine = create_engine(
    DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)

TestingSessionLocal = sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def db_session_repo() -> Generator[Session, None, None]:
    """Connection to a test database. Tables are removed at teardown to make unit tests of repository independent of each other."""
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def test_settings() -> Settings:
    """Settings independent of the environment the tests happen to run in."""
    return Settings(
        _env_file=None,
        database_url=DATABASE_URL,
        position_max_length=100,
        program_id="chess-arbiter-test",
    )


@pytest.fixture
def restore_root_logger() -> Generator[None, None, None]:
    """Tests that call configure_logging() must not leak their handlers into other tests."""
    root_logger = logging.getLogger()
    handlers, level = root_logger.handlers[:], root_logger.level
    try:
        yield
    finally:
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)


@pytest.fixture
def testing_session_factory(
    db_session_repo: Session,
) -> sessionmaker[Session]:
    """Session factory on the (freshly created) test database, in place of the application's SessionLocal."""
    return TestingSessionLocal
