"""
Type definitions used across layers
"""

from enum import StrEnum

# A verified caller / player identity, as supplied by the identity layer.
Identity = str


class Status(StrEnum):
    ONGOING = "ongoing"
    DRAW = "draw"
    WHITE_WON = "white won"
    BLACK_WON = "black won"
    CANCELED = "canceled"

    @property
    def is_terminal(self) -> bool:
        """Any status other than ONGOING is absorbing: no move is ever applied again."""
        return self != Status.ONGOING

    @property
    def is_decisive(self) -> bool:
        return self in (Status.WHITE_WON, Status.BLACK_WON)


class Color(StrEnum):
    WHITE = "white"
    BLACK = "black"


class PromotionPiece(StrEnum):
    """Piece types a pawn may promote into."""

    KNIGHT = "knight"
    BISHOP = "bishop"
    ROOK = "rook"
    QUEEN = "queen"
