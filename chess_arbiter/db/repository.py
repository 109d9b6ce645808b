"""Protocol repository (implemented with SQLAlchemy in sql_repository.py, and as a dict in the tests)"""

from contextlib import AbstractContextManager
from typing import Protocol
from uuid import UUID

from chess_arbiter.core.models import SessionModel


class SessionRepository(Protocol):
    """Persistence layer orchestration"""

    def get_session(self, session_id: UUID) -> SessionModel | None:
        """Get session by ID, if record exists."""
        ...

    def create_session(self, session: SessionModel) -> tuple[SessionModel, UUID]:
        """Store new session and return the stored data + newly created session ID."""
        ...

    def update_session(
        self, session_id: UUID, session: SessionModel
    ) -> SessionModel | None:
        """Overwrite an existing record."""
        ...

    def locked(self, session_id: UUID) -> AbstractContextManager[None]:
        """
        Exclusive access to one record for a whole read-modify-write sequence.
        Concurrent callers on the same ID are serialized; if the block raises, nothing from it is persisted.
        """
        ...
