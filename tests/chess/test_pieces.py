"""Unit tests for /src/chess/pieces.py"""

from dataclasses import FrozenInstanceError

import pytest

from src.chess.pieces import (
    FEN_TO_PIECE,
    PIECE_TO_FEN,
    Color,
    Piece,
    PieceType,
    promoted_queen,
)


@pytest.mark.parametrize("char", [char.upper() for char in FEN_TO_PIECE.keys()])
def test_creating_white_piece_from_fen(char: str) -> None:
    """Capital letters are used for white pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.WHITE
    assert not piece.has_moved


@pytest.mark.parametrize("char", [char.lower() for char in FEN_TO_PIECE.keys()])
def test_creating_black_piece_from_fen(char: str) -> None:
    """Lower case letters are used for black pieces"""
    piece = Piece.from_fen(char)
    assert piece.type == FEN_TO_PIECE[char.lower()]
    assert piece.color == Color.BLACK


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_pieces_to_fen(piece_type: PieceType) -> None:
    assert Piece(piece_type, Color.WHITE).to_fen() == PIECE_TO_FEN[piece_type].upper()
    assert Piece(piece_type, Color.BLACK).to_fen() == PIECE_TO_FEN[piece_type].lower()


def test_moved_returns_a_new_value() -> None:
    """Pieces are values: moving one must not change the original"""
    piece = Piece(PieceType.ROOK, Color.WHITE)
    moved = piece.moved()
    assert moved.has_moved
    assert not piece.has_moved
    assert moved.type == piece.type and moved.color == piece.color


def test_moved_flag_never_reverts() -> None:
    piece = Piece(PieceType.KNIGHT, Color.BLACK).moved().moved()
    assert piece.has_moved


def test_piece_is_immutable() -> None:
    piece = Piece(PieceType.PAWN, Color.WHITE)
    with pytest.raises(FrozenInstanceError):
        piece.has_moved = True  # type: ignore[misc]


@pytest.mark.parametrize("color", list(Color))
def test_promoted_queen(color: Color) -> None:
    queen = promoted_queen(color)
    assert queen == Piece(PieceType.QUEEN, color)


def test_image_name() -> None:
    assert Piece(PieceType.KNIGHT, Color.BLACK).image_name == "black/knight.svg"
    assert Piece(PieceType.PAWN, Color.WHITE).image_name == "white/pawn.svg"


def test_opponent_color() -> None:
    assert Color.WHITE.opponent == Color.BLACK
    assert Color.BLACK.opponent == Color.WHITE
