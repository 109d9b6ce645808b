"""Requests and Response models"""

from typing import Optional, Self
from uuid import UUID

from pydantic import BaseModel, field_validator

from chess_arbiter.core.exceptions import InvalidRequestError
from chess_arbiter.core.models import SessionModel
from chess_arbiter.core.shared_types import Identity, PromotionPiece, Status


# --- REQUEST MODELS ---
class InitializeGameRequest(BaseModel):
    player_white: Identity
    player_black: Identity

    @field_validator(*["player_white", "player_black"])
    @classmethod
    def validate_identity(cls, value: str) -> str:
        """Identities are compared as-is, so they are never rewritten: padded values are rejected."""
        if not value.strip():
            raise InvalidRequestError("Player identity cannot be blank.")
        if value != value.strip():
            raise InvalidRequestError(
                f"Player identity {value!r} has leading or trailing whitespace."
            )
        return value


class MoveRequest(BaseModel):
    """
    Squares are passed through as-is: malformed squares are rejected by the game session as an invalid move.
    """

    session_id: UUID
    from_square: str
    to_square: str
    promote_to: Optional[PromotionPiece] = None


class GetSessionRequest(BaseModel):
    session_id: UUID


class CancelGameRequest(BaseModel):
    session_id: UUID


# --- RESPONSE MODELS ---
class SessionResponse(BaseModel):
    session_id: UUID
    authority: Identity
    player_white: Identity
    player_black: Identity
    position: str
    turn: Identity
    status: Status
    winner: Optional[Identity]

    @classmethod
    def from_model(cls, session_id: UUID, model: SessionModel) -> Self:
        return cls(
            session_id=session_id,
            authority=model.authority,
            player_white=model.player_white,
            player_black=model.player_black,
            position=model.position,
            turn=model.turn,
            status=model.status,
            winner=model.winner,
        )
