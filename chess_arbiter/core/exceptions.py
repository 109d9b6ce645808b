"""
Custom exceptions shared by all layers.

Everything derives from GameError, so the outer layers can catch a single top-level type.
Errors are raised to the caller as-is: nothing is retried or recovered inside the core.
"""


class GameError(Exception):
    """Top-level exception for anything that goes wrong while handling a game session."""


# --- Move submission ---
class GameFinishedError(GameError):
    """A move (or cancellation) was submitted against a session that already reached a terminal status."""


class UnauthorizedError(GameError):
    """The caller is not the session's designated authority."""


class InvalidMoveError(GameError):
    """Corrupted stored position, malformed square, or a move that is not legal in the current position."""


# --- Oracle / parsing ---
class InvalidFENError(GameError):
    """Text cannot be interpreted as a FEN position."""


class InvalidSquareError(GameError):
    """Text cannot be interpreted as a square in algebraic notation."""


# --- Session state / persistence / requests ---
class GameStateError(GameError):
    """Stored session data that cannot be turned into a valid game session."""


class RepositoryError(GameError):
    """Record could not be found or stored."""


class InvalidRequestError(GameError):
    """Request data that fails boundary validation."""
