"""
Move-legality oracle.

Thin, stateless layer over python-chess. The game session trusts these functions completely for chess rules:
it never generates, validates or applies a move by itself.

Positions are exchanged as FEN strings; the full FEN (including side to move, castling rights, en passant square
and move counters) is what gets stored, so parse_position(serialize_position(board)) reproduces the same position.
"""

from enum import StrEnum
from typing import Optional

import chess

from chess_arbiter.core.exceptions import InvalidFENError, InvalidSquareError
from chess_arbiter.core.shared_types import PromotionPiece

STARTING_POSITION = chess.STARTING_FEN

PROMOTION_TO_PIECE_TYPE: dict[PromotionPiece, chess.PieceType] = {
    PromotionPiece.KNIGHT: chess.KNIGHT,
    PromotionPiece.BISHOP: chess.BISHOP,
    PromotionPiece.ROOK: chess.ROOK,
    PromotionPiece.QUEEN: chess.QUEEN,
}


class Outcome(StrEnum):
    NORMAL = "normal"
    CHECKMATE = "checkmate"
    STALEMATE = "stalemate"


def parse_position(text: str) -> chess.Board:
    """FEN string -> board. Syntactically broken or impossible positions are rejected."""
    try:
        board = chess.Board(text)
    except ValueError as exc:
        raise InvalidFENError(f"Cannot interpret {text!r} as a FEN position: {exc}") from exc

    if not board.is_valid():
        raise InvalidFENError(
            f"FEN {text!r} does not describe a valid position: {board.status()!r}"
        )
    return board


def serialize_position(board: chess.Board) -> str:
    return board.fen()


def parse_square(text: str) -> chess.Square:
    """Algebraic notation: 'a1' - 'h8' (lower case)"""
    try:
        return chess.parse_square(text)
    except ValueError as exc:
        raise InvalidSquareError(
            f"Cannot interpret {text!r} as a valid square name."
        ) from exc


def build_move(
    from_square: chess.Square,
    to_square: chess.Square,
    promotion: Optional[PromotionPiece] = None,
) -> chess.Move:
    promotion_type = PROMOTION_TO_PIECE_TYPE[promotion] if promotion else None
    return chess.Move(from_square, to_square, promotion=promotion_type)


def enumerate_legal_moves(board: chess.Board) -> list[chess.Move]:
    return list(board.legal_moves)


def apply(board: chess.Board, move: chess.Move) -> chess.Board:
    """Successor position. The board passed in is left untouched."""
    successor = board.copy(stack=False)
    successor.push(move)
    return successor


def classify(board: chess.Board) -> Outcome:
    """Only checkmate and stalemate end the game; every other position is NORMAL."""
    if board.is_checkmate():
        return Outcome.CHECKMATE
    if board.is_stalemate():
        return Outcome.STALEMATE
    return Outcome.NORMAL
