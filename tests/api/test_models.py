from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from chess_arbiter.api.models import (
    InitializeGameRequest,
    MoveRequest,
    SessionResponse,
)
from chess_arbiter.core.exceptions import InvalidRequestError
from chess_arbiter.core.models import SessionModel
from chess_arbiter.core.shared_types import PromotionPiece, Status

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"


@pytest.fixture
def mock_id() -> UUID:
    return uuid4()


# -- Validation - InitializeGameRequest --
def test_player_identities_are_kept_verbatim() -> None:
    request = InitializeGameRequest(player_white="white-1", player_black="Black Player")
    assert request.player_white == "white-1"
    assert request.player_black == "Black Player"


@pytest.mark.parametrize(
    "white, black",
    [
        ("  white ", "black"),
        ("white", "black\n"),
        ("\twhite", "black"),
    ],
)
def test_padded_identity_is_rejected_not_rewritten(white: str, black: str) -> None:
    """A stored player identity must equal the one the identity layer supplied."""
    with pytest.raises(InvalidRequestError):
        _ = InitializeGameRequest(player_white=white, player_black=black)


def test_same_player_on_both_sides_is_allowed() -> None:
    request = InitializeGameRequest(player_white="solo", player_black="solo")
    assert request.player_white == request.player_black


@pytest.mark.parametrize(
    "white, black",
    [
        ("", "black"),
        ("white", "   "),
    ],
)
def test_blank_identity(white: str, black: str) -> None:
    with pytest.raises(InvalidRequestError):
        _ = InitializeGameRequest(player_white=white, player_black=black)


# -- Validation - MoveRequest --
def test_squares_are_passed_through(mock_id: UUID) -> None:
    """Square validation belongs to the game session (it reports an invalid move)."""
    request = MoveRequest(session_id=mock_id, from_square="e2", to_square="x9")
    assert request.from_square == "e2"
    assert request.to_square == "x9"
    assert request.promote_to is None


def test_promotion_piece(mock_id: UUID) -> None:
    request = MoveRequest(
        session_id=mock_id, from_square="a7", to_square="a8", promote_to="queen"
    )
    assert request.promote_to == PromotionPiece.QUEEN


@pytest.mark.parametrize("piece", ["king", "pawn", "q"])
def test_invalid_promotion_piece(mock_id: UUID, piece: str) -> None:
    with pytest.raises(ValidationError):
        _ = MoveRequest(
            session_id=mock_id, from_square="a7", to_square="a8", promote_to=piece
        )


# -- SessionResponse --
@pytest.mark.parametrize(
    "status, expected_winner",
    [
        (Status.ONGOING, None),
        (Status.DRAW, None),
        (Status.CANCELED, None),
        (Status.WHITE_WON, "white"),
        (Status.BLACK_WON, "black"),
    ],
)
def test_response_from_model(
    mock_id: UUID, status: Status, expected_winner: str | None
) -> None:
    model = SessionModel(
        authority="admin",
        player_white="white",
        player_black="black",
        position=STARTING_FEN,
        turn="white",
        status=status,
    )
    response = SessionResponse.from_model(mock_id, model)
    assert response.session_id == mock_id
    assert response.authority == "admin"
    assert response.position == STARTING_FEN
    assert response.status == status
    assert response.winner == expected_winner
