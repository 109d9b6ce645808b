"""
Boundary layer data model(s).

These objects are used to communicate with the Service.
Both the API layer (higher) and domain/db layers (lower) use the model defined here to send to/receive from the Service
(decouples the data model specific to the DB layer, API layer, or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass
from typing import Optional

from chess_arbiter.core.shared_types import Identity, Status


@dataclass
class SessionModel:
    """Transport-safe representation of one game session used between API, Service, DB, and Game layers."""

    authority: Identity
    player_white: Identity
    player_black: Identity
    position: str  # FEN string
    turn: Identity
    status: Status

    @property
    def winner(self) -> Optional[Identity]:
        """Derived from the status, so a winner exists if and only if the outcome is decisive."""
        if self.status == Status.WHITE_WON:
            return self.player_white
        if self.status == Status.BLACK_WON:
            return self.player_black
        return None
