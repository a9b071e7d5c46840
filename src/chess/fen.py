"""
Validation of the piece placement part of a FEN string.

FEN, or Forsyth-Edwards Notation, is a standard notation for describing a chess position.
Only its first field (the board position) is used here: the casual rules keep no castling rights,
en passant square or move counters. Everything the rules need besides the board lives in the
`has_moved` flag of each piece and the last committed move.

ex) the standard starting position:
rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
"""

from string import ascii_lowercase, digits

from src.chess.pieces import FEN_TO_PIECE
from src.chess.square import BOARD_DIMENSIONS

STARTING_POSITION = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
EMPTY_POSITION = "/".join(["8"] * BOARD_DIMENSIONS[0])


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_ranks, num_files = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character in digits:
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True


def is_valid_square(square: str) -> bool:
    """Valid square should be a letter for the file + a number for the rank"""
    num_ranks, num_files = BOARD_DIMENSIONS

    if len(square) != 2:
        return False

    file_char, rank_char = square[0], square[1]
    allowed_file_names = ascii_lowercase[:num_files]
    if file_char not in allowed_file_names:
        return False

    if rank_char not in digits:
        return False

    if not (1 <= int(rank_char) <= num_ranks):
        return False

    return True
