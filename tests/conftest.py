"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures/variables required for testing multiple layers.
"""

from typing import Callable

import pytest

from src.chess.board import Board
from src.chess.pieces import Piece
from src.chess.square import Square

EMPTY_FEN = "/".join(["8"] * 8)

BoardBuilder = Callable[..., Board]


@pytest.fixture
def board_with() -> BoardBuilder:
    """
    Call the inner function with pieces by square name, ex. board_with(e1="K", e8="k").
    Pass the square names of pieces that should count as moved in `moved`.
    """

    def _create_board(moved: tuple[str, ...] = (), **pieces: str) -> Board:
        board = Board.from_fen(EMPTY_FEN)
        for square_name, fen_char in pieces.items():
            piece = Piece.from_fen(fen_char)
            if square_name in moved:
                piece = piece.moved()
            board = board.with_piece(Square.from_algebraic(square_name), piece)
        return board

    return _create_board
