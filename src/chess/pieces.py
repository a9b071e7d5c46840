"""Defines the types of chess pieces"""

from dataclasses import dataclass, replace
from typing import Self

from src.core.shared_types import Color, PieceType

FEN_TO_PIECE: dict[str, PieceType] = {
    "p": PieceType.PAWN,
    "n": PieceType.KNIGHT,
    "b": PieceType.BISHOP,
    "r": PieceType.ROOK,
    "q": PieceType.QUEEN,
    "k": PieceType.KING,
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}


@dataclass(frozen=True)
class Piece:
    """
    A piece is a value. Identity comes from the square it stands on, not from the object.

    Moving a piece never mutates it: the board receives a new value with `has_moved` set (see `moved()`).
    """

    type: PieceType
    color: Color
    has_moved: bool = False

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def moved(self) -> Self:
        """Copy of this piece that has moved at least once. The flag never goes back to False."""
        return replace(self, has_moved=True)

    @property
    def image_name(self) -> str:
        """Visual identity of the piece, as used by the frontend assets: <color>/<type>.svg"""
        return f"{self.color}/{self.type}.svg"

    def __str__(self) -> str:
        return f"{self.color} {self.type}"


def promoted_queen(color: Color) -> Piece:
    """Pawns that reach the far end of the board automatically become a (fresh) queen."""
    return Piece(PieceType.QUEEN, color)
