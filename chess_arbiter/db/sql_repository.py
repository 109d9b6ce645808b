"""Implementation of (Session)Repository using SQLAlchemy"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import select
from sqlalchemy.orm import Session

from chess_arbiter.core.config import Settings, get_settings
from chess_arbiter.core.exceptions import RepositoryError
from chess_arbiter.core.models import SessionModel
from chess_arbiter.core.shared_types import Status
from chess_arbiter.db.locks import RecordLocks
from chess_arbiter.db.schema import DBGameSession

logger = logging.getLogger(__name__)

# Shared by every repository instance in this process (one DB session per request, same records underneath)
RECORD_LOCKS = RecordLocks()


class SQLSessionRepository:
    """Data stored using SQL / methods implemented using SQLAlchemy"""

    def __init__(
        self,
        db_session: Session,
        settings: Optional[Settings] = None,
        record_locks: RecordLocks = RECORD_LOCKS,
    ) -> None:
        self.db = db_session
        self.settings = settings or get_settings()
        self._record_locks = record_locks

    def get_session(self, session_id: UUID) -> SessionModel | None:
        """Get session by ID, if record exists."""
        session_db = self._fetch_session(session_id)
        if session_db:
            return self._to_model(session_db)
        return None

    def create_session(self, session: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new session and return the stored data + newly created session ID."""
        self._check_position_budget(session)

        new_id = uuid4()
        session_db = DBGameSession(
            id=new_id,
            program_id=self.settings.program_id,
            authority=session.authority,
            player_white=session.player_white,
            player_black=session.player_black,
            position=session.position,
            turn=session.turn,
            status=session.status.value,
            winner=session.winner,
        )
        self.db.add(session_db)
        self.db.commit()
        self.db.refresh(session_db)
        logger.debug("Created session record %s", new_id)
        return self._to_model(session_db), new_id

    def update_session(
        self, session_id: UUID, session: SessionModel
    ) -> SessionModel | None:
        """Overwrite an existing record. All fields are committed together."""
        self._check_position_budget(session)

        session_db = self._fetch_session(session_id)
        if not session_db:
            return None
        session_db.position = session.position
        session_db.turn = session.turn
        session_db.status = session.status.value
        session_db.winner = session.winner
        self.db.commit()
        self.db.refresh(session_db)
        return self._to_model(session_db)

    @contextmanager
    def locked(self, session_id: UUID) -> Iterator[None]:
        """
        In-process lock on the ID + row lock (SELECT ... FOR UPDATE) for backends that support it.
        The row lock is released by the commit in update_session, or by the rollback if the block is left any other
        way than normally (including KeyboardInterrupt / SystemExit).
        """
        with self._record_locks.hold(session_id):
            committed = False
            try:
                self.db.execute(
                    select(DBGameSession.id)
                    .where(DBGameSession.id == session_id)
                    .with_for_update()
                )
                yield
                self.db.commit()
                committed = True
            finally:
                if not committed:
                    self.db.rollback()

    def _fetch_session(self, session_id: UUID) -> DBGameSession | None:
        query = select(DBGameSession).where(DBGameSession.id == session_id)
        return self.db.scalar(query)

    def _check_position_budget(self, session: SessionModel) -> None:
        if len(session.position) > self.settings.position_max_length:
            raise RepositoryError(
                f"Position {session.position!r} exceeds the storage budget of {self.settings.position_max_length} characters."
            )

    def _to_model(self, session_db: DBGameSession) -> SessionModel:
        """Convert SQLAlchemy model to data transfer model."""
        try:
            status = Status(session_db.status)
        except ValueError as exc:
            raise RepositoryError(
                f"Stored session {session_db.id} has an unknown status {session_db.status!r}."
            ) from exc

        return SessionModel(
            authority=session_db.authority,
            player_white=session_db.player_white,
            player_black=session_db.player_black,
            position=session_db.position,
            turn=session_db.turn,
            status=status,
        )
