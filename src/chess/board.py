"""
The Board is a persistent value: a flat tuple of 64 slots (row-major), each holding a Piece or None.

Nothing ever mutates a Board. Every transition (`with_piece_moved`, `with_piece`) hands back a new one,
so "board before" and "board after" a move can be inspected side by side without aliasing issues.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Optional, Self

from src.chess.fen import EMPTY_POSITION, STARTING_POSITION, is_valid_position
from src.chess.pieces import Piece
from src.chess.square import BOARD_DIMENSIONS, Square, all_squares
from src.core.exceptions import InvalidFENError

NUM_SQUARES = BOARD_DIMENSIONS[0] * BOARD_DIMENSIONS[1]


def _index(square: Square) -> int:
    return square.row * BOARD_DIMENSIONS[1] + square.col


@dataclass(frozen=True)
class Board:
    squares: tuple[Optional[Piece], ...]

    def __post_init__(self) -> None:
        if len(self.squares) != NUM_SQUARES:
            raise ValueError(
                f"A board holds exactly {NUM_SQUARES} squares, got {len(self.squares)}."
            )

    # -- CREATION LOGIC ---
    @classmethod
    def empty(cls) -> Self:
        return cls.from_fen(EMPTY_POSITION)

    @classmethod
    def initial(cls) -> Self:
        """The standard starting position. Nothing has moved yet."""
        return cls.from_fen(STARTING_POSITION)

    @classmethod
    def from_fen(cls, fen_str: str, moved: Iterable[Square] = ()) -> Self:
        """Construct a board using a given FEN string.

        That is, we supply the first part of the FEN string that denotes the board position
        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank (row 0), starting with the rook on a8
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank (row 7) are the white pieces

        FEN has no notion of pieces having moved. Pass the squares of pieces that should count as moved in `moved`.
        """
        if not is_valid_position(fen_str):
            raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen_str}")

        moved_squares = set(moved)
        slots: list[Optional[Piece]] = []
        # FEN string is read from top rank (8th) to bottom rank (1st), which matches our row order
        for row, fen_one_rank in enumerate(fen_str.split("/")):
            for character in fen_one_rank:
                if character.isalpha():
                    # simple case: a letter directly denotes the piece that should be created
                    piece = Piece.from_fen(character)
                    if Square(row, len(slots) % BOARD_DIMENSIONS[1]) in moved_squares:
                        piece = piece.moved()
                    slots.append(piece)
                else:
                    # A number denotes the amount of empty squares after each other
                    slots.extend([None] * int(character))
        return cls(tuple(slots))

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(self._rank_to_fen(row) for row in range(BOARD_DIMENSIONS[0]))

    def _rank_to_fen(self, row: int) -> str:
        """FEN string of a single rank"""
        fen_characters: list[str] = []
        empty_count = 0
        for col in range(BOARD_DIMENSIONS[1]):
            piece = self.piece(Square(row, col))

            if piece is not None:
                if empty_count > 0:
                    fen_characters.append(str(empty_count))
                    empty_count = 0
                fen_characters.append(piece.to_fen())
            else:
                empty_count += 1

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    # -- QUERIES ---
    def piece(self, square: Square) -> Optional[Piece]:
        """The piece on the square, or None for an empty square (or a square that is not on the board)."""
        if not square.is_on_board():
            return None
        return self.squares[_index(square)]

    def is_empty(self, square: Square) -> bool:
        return self.piece(square) is None

    def occupied(self) -> list[tuple[Square, Piece]]:
        """All (square, piece) pairs in reading order"""
        pairs: list[tuple[Square, Piece]] = []
        for square in all_squares():
            piece = self.squares[_index(square)]
            if piece is not None:
                pairs.append((square, piece))
        return pairs

    def moved_squares(self) -> list[Square]:
        """Squares holding a piece that has moved. Together with `to_fen()` this fully describes the board."""
        return [square for square, piece in self.occupied() if piece.has_moved]

    # -- TRANSITIONS ---
    def with_piece(self, square: Square, piece: Optional[Piece]) -> Self:
        """New board with the square set to the given piece (None clears the square)."""
        slots = list(self.squares)
        slots[_index(square)] = piece
        return type(self)(tuple(slots))

    def with_piece_moved(self, from_square: Square, to_square: Square) -> Self:
        """
        The generic move: clear `from_square`, put the moving piece on `to_square` (marked as moved).
        Whatever stood on `to_square` is gone (a capture).
        """
        moving_piece = self.piece(from_square)
        if moving_piece is None:
            return self
        slots = list(self.squares)
        slots[_index(from_square)] = None
        slots[_index(to_square)] = moving_piece.moved()
        return type(self)(tuple(slots))

    def __str__(self) -> str:
        rows = []
        for row in range(BOARD_DIMENSIONS[0]):
            characters = []
            for col in range(BOARD_DIMENSIONS[1]):
                piece = self.piece(Square(row, col))
                characters.append(piece.to_fen() if piece else ".")
            rows.append(" ".join(characters))
        return "\n".join(rows)


def initial_board() -> Board:
    """The board every game starts from (and returns to on reset)."""
    return Board.initial()
