"""Helpers for implementing Castling rules. Need to be imported by both the king's move generator and its mover"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from src.chess.pieces import Color
from src.chess.square import BOARD_DIMENSIONS, Square

# Home rank: the row the back-rank pieces start on (White at the bottom of the board)
HOME_ROW: dict[Color, int] = {
    Color.WHITE: BOARD_DIMENSIONS[0] - 1,
    Color.BLACK: 0,
}

# The king always jumps two squares towards the rook it castles with
KING_CASTLING_STEP = 2


class CastlingDirection(Enum):
    """The two castling directions. Values represent the column the rook has to start from."""

    KING_SIDE = BOARD_DIMENSIONS[1] - 1
    QUEEN_SIDE = 0

    @property
    def step(self) -> int:
        """Column direction the king walks in"""
        return 1 if self == CastlingDirection.KING_SIDE else -1

    @classmethod
    def from_king_move(cls, from_col: int, to_col: int) -> Self:
        return cls.KING_SIDE if to_col > from_col else cls.QUEEN_SIDE


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.

    NOTE: The king's destination is relative to where the king stands, the rook always comes from the corner.
    The rook lands next to the king, on the side the king came from.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def for_king(cls, king_square: Square, direction: CastlingDirection) -> Self:
        king_to = king_square.offset(0, KING_CASTLING_STEP * direction.step)
        rook_from = Square(king_square.row, direction.value)
        rook_to = king_to.offset(0, -direction.step)
        return cls(king_square, king_to, rook_from, rook_to)

    def squares_between(self) -> list[Square]:
        """The squares strictly between king and rook. All of them have to be empty to castle."""
        return squares_between_on_row(self.king_from, self.rook_from)


def squares_between_on_row(from_square: Square, to_square: Square) -> list[Square]:
    """
    Find the squares in between the two squares specified that are on the same row
    """
    if from_square.row != to_square.row:
        raise ValueError(
            f"squares_between_on_row requires both squares to lie on the same row. \n from: {from_square}\n to:{to_square}"
        )

    low, high = sorted((from_square.col, to_square.col))
    return [Square(from_square.row, col) for col in range(low + 1, high)]
