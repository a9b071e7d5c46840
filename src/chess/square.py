"""
A square on the board

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase, digits

from src.core.exceptions import InvalidSquareError

# Chess board is always 8x8. (rows, columns)
BOARD_DIMENSIONS = (8, 8)


@dataclass(frozen=True)
class Square:
    """
    Row-major coordinates with White at the bottom.

    row 0 is Black's home rank (the 8th rank), row 7 is White's home rank (the 1st rank).
    col 0 is the a-file, col 7 the h-file.
    """

    row: int
    col: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a8' maps to (0, 0), 'h1' maps to (7, 7)"""
        if len(sq) != 2 or sq[0] not in ascii_lowercase or sq[1] not in digits:
            raise InvalidSquareError(f"Cannot interpret {sq!r} as a square name.")

        col = ord(sq[0]) - ord("a")
        row = BOARD_DIMENSIONS[0] - int(sq[1])
        square = cls(row, col)
        if not square.is_on_board():
            raise InvalidSquareError(f"Square {sq!r} is not on the board.")
        return square

    def to_algebraic(self) -> str:
        return f"{chr(self.col + ord('a'))}{BOARD_DIMENSIONS[0] - self.row}"

    def is_on_board(self) -> bool:
        return (0 <= self.row < BOARD_DIMENSIONS[0]) and (
            0 <= self.col < BOARD_DIMENSIONS[1]
        )

    def offset(self, d_row: int, d_col: int) -> Square:
        """The square reached by stepping along a vector. Might end up off the board."""
        return Square(self.row + d_row, self.col + d_col)

    def __str__(self) -> str:
        return self.to_algebraic() if self.is_on_board() else f"({self.row}, {self.col})"


def all_squares() -> list[Square]:
    """Every square of the board, in reading order (a8, b8, ..., h1)"""
    return [
        Square(row, col)
        for row in range(BOARD_DIMENSIONS[0])
        for col in range(BOARD_DIMENSIONS[1])
    ]
