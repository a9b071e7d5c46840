"""Requests and Response models"""

from typing import Optional

from pydantic import BaseModel, field_validator

from src.chess.fen import is_valid_square
from src.core.exceptions import InvalidRequestError
from src.core.shared_types import Color, Status

PieceColor = str
ImageName = str


def _validate_square_name(value: str) -> str:
    """Squares travel as algebraic names ('e2'). Anything that is not a square on the board gets refused."""
    if not is_valid_square(value):
        raise InvalidRequestError(
            f"Cannot interpret {value!r} as a valid square name."
        )
    return value


# --- REQUEST MODELS ---
class SelectRequest(BaseModel):
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class LegalMovesRequest(BaseModel):
    square: str

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


class MoveRequest(BaseModel):
    from_square: str
    to_square: str

    @field_validator(*["from_square", "to_square"])
    @classmethod
    def validate_square(cls, value: str) -> str:
        return _validate_square_name(value)


# --- RESPONSE MODELS ---
class GameResponse(BaseModel):
    position: str
    moved_squares: list[str]
    side_to_move: Color
    last_move: Optional[str]
    move_history: list[str]
    captures: dict[PieceColor, list[ImageName]]
    status: Status
    winner: Optional[Color]
    reset_pending: bool = False


class LegalMovesResponse(BaseModel):
    square: str
    color: Optional[Color]
    legal_moves: list[str]


class MoveResponse(BaseModel):
    accepted: bool
    rejection_reason: Optional[str] = None
    captured_piece: Optional[ImageName] = None
    game: GameResponse
