"""
The GameSession class is the entrypoint into the domain layer for the service layer.
It owns the session state machine: it decides whether a submitted move is acceptable, applies it through the
move-legality oracle and derives the resulting session status.

    ONGOING --move--> ONGOING | DRAW | WHITE_WON | BLACK_WON
    ONGOING --cancel--> CANCELED

All statuses other than ONGOING are terminal.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Self

from chess_arbiter.core.exceptions import (
    GameFinishedError,
    GameStateError,
    InvalidFENError,
    InvalidMoveError,
    InvalidSquareError,
    UnauthorizedError,
)
from chess_arbiter.core.models import SessionModel
from chess_arbiter.core.shared_types import Color, Identity, PromotionPiece, Status
from chess_arbiter.rules import oracle
from chess_arbiter.rules.oracle import Outcome

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    authority: Identity
    player_white: Identity
    player_black: Identity
    position: str  # FEN string
    turn: Identity
    status: Status

    @classmethod
    def new_session(
        cls, authority: Identity, player_white: Identity, player_black: Identity
    ) -> Self:
        """
        Start a new game: standard starting layout, white to move.

        No constraint between the identities is enforced (the same identity may play both colors).
        """
        session = cls(
            authority=authority,
            player_white=player_white,
            player_black=player_black,
            position=oracle.STARTING_POSITION,
            turn=player_white,
            status=Status.ONGOING,
        )
        logger.info(
            "New session: authority=%s white=%s black=%s",
            authority,
            player_white,
            player_black,
        )
        return session

    @classmethod
    def from_model(cls, model: SessionModel) -> Self:
        """Define how to construct a GameSession from the information the Service layer actually has"""
        try:
            status = Status(model.status)
        except ValueError as exc:
            raise GameStateError(
                f"Invalid status: {model.status!r}. \nPick one from {','.join(status.value for status in Status)}"
            ) from exc

        return cls(
            authority=model.authority,
            player_white=model.player_white,
            player_black=model.player_black,
            position=model.position,
            turn=model.turn,
            status=status,
        )

    def to_model(self) -> SessionModel:
        """Encode back into a format the Service layer uses"""
        return SessionModel(
            authority=self.authority,
            player_white=self.player_white,
            player_black=self.player_black,
            position=self.position,
            turn=self.turn,
            status=self.status,
        )

    @property
    def winner(self) -> Optional[Identity]:
        if self.status == Status.WHITE_WON:
            return self.player_white
        if self.status == Status.BLACK_WON:
            return self.player_black
        return None

    def make_move(
        self,
        caller: Identity,
        from_square: str,
        to_square: str,
        promotion: Optional[PromotionPiece] = None,
    ) -> None:
        """
        Attempt a move on behalf of the player whose turn it is.
        -----

        1. the game must still be ongoing
        2. only the authority may submit moves (it is NOT checked which player the caller represents)
        3. resolve the color of the player to move
        4. parse the stored position
        5. parse the squares
        6. the move must be in the oracle's set of legal moves (without a promotion piece, promotions are never legal)
        7. apply the move
        8. classify the new position and update status / turn

        Steps 1-6 only read. Every field written in 7-8 is assigned at the very end, so a rejected move leaves the
        session exactly as it was.
        """
        try:
            mover_color, new_position, outcome = self._resolve_move(
                caller, from_square, to_square, promotion
            )
        except (GameFinishedError, UnauthorizedError, InvalidMoveError) as exc:
            logger.warning(
                "Rejected move %s%s by %s: %s (%s)",
                from_square,
                to_square,
                caller,
                type(exc).__name__,
                exc,
            )
            raise

        new_status, new_turn = self._next_state(mover_color, outcome)

        self.position = new_position
        self.status = new_status
        self.turn = new_turn

        logger.info(
            "Accepted move %s%s for %s. status=%s",
            from_square,
            to_square,
            mover_color,
            self.status,
        )
        if self.status.is_terminal:
            logger.info("Game finished: %s (winner=%s)", self.status, self.winner)

    def cancel(self, caller: Identity) -> None:
        """Administrative path into CANCELED. Only the authority may cancel, and only an ongoing game."""
        self._assert_ongoing()
        self._assert_authority(caller)
        self.status = Status.CANCELED
        logger.info("Session canceled by %s", caller)

    # -- PRIVATE HELPERS ---
    def _resolve_move(
        self,
        caller: Identity,
        from_square: str,
        to_square: str,
        promotion: Optional[PromotionPiece],
    ) -> tuple[Color, str, Outcome]:
        """Validate the move and compute the successor position without touching the session."""
        self._assert_ongoing()
        self._assert_authority(caller)
        mover_color = self._turn_color()

        try:
            board = oracle.parse_position(self.position)
        except InvalidFENError as exc:
            raise InvalidMoveError(f"Stored position is corrupted: {exc}") from exc

        try:
            move = oracle.build_move(
                oracle.parse_square(from_square),
                oracle.parse_square(to_square),
                promotion,
            )
        except InvalidSquareError as exc:
            raise InvalidMoveError(str(exc)) from exc

        logger.debug("Candidate move %s for %s", move.uci(), mover_color)
        if move not in oracle.enumerate_legal_moves(board):
            raise InvalidMoveError(f"Move not allowed: {move.uci()}")

        successor = oracle.apply(board, move)
        return mover_color, oracle.serialize_position(successor), oracle.classify(successor)

    def _next_state(self, mover_color: Color, outcome: Outcome) -> tuple[Status, Identity]:
        """Status and turn after the move. On checkmate / stalemate the turn is left as-is."""
        if outcome == Outcome.CHECKMATE:
            winning_status = (
                Status.WHITE_WON if mover_color == Color.WHITE else Status.BLACK_WON
            )
            return winning_status, self.turn

        if outcome == Outcome.STALEMATE:
            return Status.DRAW, self.turn

        next_turn = self.player_black if mover_color == Color.WHITE else self.player_white
        return Status.ONGOING, next_turn

    def _assert_ongoing(self) -> None:
        if self.status != Status.ONGOING:
            raise GameFinishedError(f"The game is already finished. status: {self.status}")

    def _assert_authority(self, caller: Identity) -> None:
        if caller != self.authority:
            raise UnauthorizedError("Only the authority of this session can act on it.")

    def _turn_color(self) -> Color:
        """
        The color to move follows from comparing `turn` with the player identities.
        If both players share one identity, white is picked.
        """
        if self.turn == self.player_white:
            return Color.WHITE
        if self.turn == self.player_black:
            return Color.BLACK
        raise InvalidMoveError(
            f"Turn is assigned to {self.turn!r}, who is not a player in this session."
        )
