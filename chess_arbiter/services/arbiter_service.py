"""
Orchestration of communication from the caller to business logic and persistence layers (and the reverse direction).

The caller's identity is verified upstream and handed to every call that needs it.
"""

import logging
from uuid import UUID

from chess_arbiter.api.models import (
    CancelGameRequest,
    GetSessionRequest,
    InitializeGameRequest,
    MoveRequest,
    SessionResponse,
)
from chess_arbiter.core.exceptions import RepositoryError
from chess_arbiter.core.models import SessionModel
from chess_arbiter.core.shared_types import Identity
from chess_arbiter.db.repository import SessionRepository
from chess_arbiter.game.session import GameSession

logger = logging.getLogger(__name__)


class ArbiterService:
    """Orchestration of layers for an arbitrated chess game."""

    def __init__(self, repository: SessionRepository) -> None:
        self.repo = repository

    # -- Caller-facing operations ---
    def initialize_game(
        self, request: InitializeGameRequest, caller: Identity
    ) -> SessionResponse:
        """The caller creates a new session and becomes its authority."""
        new_session = GameSession.new_session(
            authority=caller,
            player_white=request.player_white,
            player_black=request.player_black,
        )
        stored_session, session_id = self.repo.create_session(new_session.to_model())
        logger.info("Initialized session %s", session_id)
        return SessionResponse.from_model(session_id, stored_session)

    def make_move(self, request: MoveRequest, caller: Identity) -> SessionResponse:
        """
        Submit a move for the player whose turn it is.
        ----
        Load, validate/apply, save happen while holding the record, so two calls on the same session cannot interleave.
        Any error propagates before the save: the stored session stays untouched.
        """
        with self.repo.locked(request.session_id):
            stored_model = self._fetch_session(request.session_id)

            game = GameSession.from_model(stored_model)
            game.make_move(
                caller,
                from_square=request.from_square,
                to_square=request.to_square,
                promotion=request.promote_to,
            )

            after_move = game.to_model()
            self._save_session(request.session_id, after_move)

        return SessionResponse.from_model(request.session_id, after_move)

    # -- Administrative operations ---
    def get_session(self, request: GetSessionRequest) -> SessionResponse:
        """Current state of the session (no history is kept)."""
        model = self._fetch_session(request.session_id)
        return SessionResponse.from_model(request.session_id, model)

    def cancel_game(
        self, request: CancelGameRequest, caller: Identity
    ) -> SessionResponse:
        """The authority aborts an ongoing game."""
        with self.repo.locked(request.session_id):
            stored_model = self._fetch_session(request.session_id)

            game = GameSession.from_model(stored_model)
            game.cancel(caller)

            canceled = game.to_model()
            self._save_session(request.session_id, canceled)

        return SessionResponse.from_model(request.session_id, canceled)

    # -- Internal helpers --
    def _fetch_session(self, session_id: UUID) -> SessionModel:
        """Attempt to find the session in the repository and raise error if it fails."""
        model = self.repo.get_session(session_id)
        if model is None:
            raise RepositoryError(f"Session with {session_id=} not found.")
        return model

    def _save_session(self, session_id: UUID, model: SessionModel) -> None:
        if self.repo.update_session(session_id, model) is None:
            raise RepositoryError(f"Session with {session_id=} could not be updated.")
