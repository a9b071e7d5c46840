"""
Geometry/Base movement rules and the side effects of making a move.

Key idea: Use strategy pattern to define, for each piece type, two pure functions:
* a move generator: (board, square, last move) -> candidate destination squares
* a mover: (board, from square, to square, last move) -> the board after the move

Neither of them ever raises. "No moves from here" is an empty list.
Whether it is your turn / whether you are capturing a king is decided later by the Game.
"""

from typing import Callable, Optional

from src.chess.board import Board
from src.chess.castling import (
    HOME_ROW,
    KING_CASTLING_STEP,
    CastlingDirection,
    CastlingSquares,
)
from src.chess.history import MoveRecord
from src.chess.pieces import Color, PieceType, promoted_queen
from src.chess.square import BOARD_DIMENSIONS, Square

Vector = tuple[int, int]
LastMove = Optional[MoveRecord]

# White moves UP the board (row decreases), Black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: -1, Color.BLACK: 1}
PAWN_START_ROW: dict[Color, int] = {
    Color.WHITE: BOARD_DIMENSIONS[0] - 2,
    Color.BLACK: 1,
}
PROMOTION_ROW: dict[Color, int] = {
    Color.WHITE: 0,
    Color.BLACK: BOARD_DIMENSIONS[0] - 1,
}

KNIGHT_DELTAS: list[Vector] = [
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
]
KING_DELTAS: list[Vector] = [
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
]
DIAGONALS: list[Vector] = [(-1, -1), (-1, 1), (1, -1), (1, 1)]
STRAIGHTS: list[Vector] = [(0, -1), (0, 1), (-1, 0), (1, 0)]


def is_available(board: Board, square: Square, color: Color) -> bool:
    """A square you can land on: on the board and not taken by one of your own pieces."""
    if not square.is_on_board():
        return False
    occupant = board.piece(square)
    return occupant is None or occupant.color != color


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, board: Board, directions: list[Vector]
) -> list[Square]:
    """
    Raycasting algorithm
    -----

    ---
    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    piece = board.piece(square)
    if piece is None:
        return []

    moves: list[Square] = []
    for d_row, d_col in directions:
        target_square = square.offset(d_row, d_col)
        while target_square.is_on_board():
            occupant = board.piece(target_square)
            if occupant is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if occupant.color != piece.color:
                    moves.append(target_square)
                break

            moves.append(target_square)
            target_square = target_square.offset(d_row, d_col)
    return moves


def single_step_move(square: Square, board: Board, deltas: list[Vector]) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    piece = board.piece(square)
    if piece is None:
        return []

    moves: list[Square] = []
    for d_row, d_col in deltas:
        target_square = square.offset(d_row, d_col)
        if is_available(board, target_square, piece.color):
            moves.append(target_square)
    return moves


def en_passant_target(board: Board, square: Square, last_move: LastMove) -> Optional[Square]:
    """
    The square the pawn on `square` could capture en passant on, if any.

    Only possible right after an opponent's pawn advanced two rows and landed next to our pawn (same row, adjacent column).
    We then move diagonally forward into the column of that pawn.
    """
    pawn = board.piece(square)
    if pawn is None or pawn.type != PieceType.PAWN or last_move is None:
        return None

    if not last_move.is_double_pawn_push() or last_move.piece.color == pawn.color:
        return None

    landed_on = last_move.to_square
    if landed_on.row != square.row or abs(landed_on.col - square.col) != 1:
        return None

    return Square(square.row + PAWN_DIRECTION[pawn.color], landed_on.col)


def candidate_pawn_moves(board: Board, square: Square, last_move: LastMove) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward (only onto an empty square).
    - It can move by two in their first move (so when on their starting row), if both squares are empty
    - takes diagonally
    - takes en passant
    """
    pawn = board.piece(square)
    if pawn is None:
        return []

    moves: list[Square] = []
    direction = PAWN_DIRECTION[pawn.color]

    # Pawn pushes
    one_step = square.offset(direction, 0)
    if one_step.is_on_board() and board.is_empty(one_step):
        moves.append(one_step)

        two_steps = square.offset(2 * direction, 0)
        is_first_move = (not pawn.has_moved) and square.row == PAWN_START_ROW[pawn.color]
        if is_first_move and two_steps.is_on_board() and board.is_empty(two_steps):
            moves.append(two_steps)

    # pawns take diagonally:
    for d_col in (-1, 1):
        target_square = square.offset(direction, d_col)
        occupant = board.piece(target_square)
        if occupant is not None and occupant.color != pawn.color:
            moves.append(target_square)

    en_passant_square = en_passant_target(board, square, last_move)
    if en_passant_square is not None and is_available(board, en_passant_square, pawn.color):
        if en_passant_square not in moves:
            moves.append(en_passant_square)

    return moves


def candidate_knight_moves(board: Board, square: Square, last_move: LastMove) -> list[Square]:
    """Knights always move such that |delta_row| + |delta_col| = 3. They jump, so nothing can block them."""
    return single_step_move(square, board, KNIGHT_DELTAS)


def candidate_bishop_moves(board: Board, square: Square, last_move: LastMove) -> list[Square]:
    """Bishops move diagonally: |delta_row| = |delta_col|"""
    return raycasting_move(square, board, DIAGONALS)


def candidate_rook_moves(board: Board, square: Square, last_move: LastMove) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, board, STRAIGHTS)


def candidate_queen_moves(board: Board, square: Square, last_move: LastMove) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    diagonal_moves = candidate_bishop_moves(board, square, last_move)
    horizontal_and_vertical_moves = candidate_rook_moves(board, square, last_move)
    return diagonal_moves + horizontal_and_vertical_moves


def candidate_king_moves(board: Board, square: Square, last_move: LastMove) -> list[Square]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (two squares towards the rook).
    """
    return single_step_move(square, board, KING_DELTAS) + castling_moves(board, square)


def castling_moves(board: Board, square: Square) -> list[Square]:
    """
    **you are allowed to castle if**

    * Your king has not moved and stands on its home row.
    * Your rook (of the chosen side) is still in its corner and has not moved.
    * Every square in between the two pieces is empty.

    NOTE: Nobody checks whether the king passes through an attacked square. (There is no notion of check at all.)
    """
    king = board.piece(square)
    if king is None or king.has_moved or square.row != HOME_ROW[king.color]:
        return []

    moves: list[Square] = []
    for direction in CastlingDirection:
        squares = CastlingSquares.for_king(square, direction)
        rook = board.piece(squares.rook_from)
        if (
            rook is None
            or rook.type != PieceType.ROOK
            or rook.color != king.color
            or rook.has_moved
        ):
            continue

        if not all(board.is_empty(between) for between in squares.squares_between()):
            continue

        if not is_available(board, squares.king_to, king.color):
            continue

        moves.append(squares.king_to)
    return moves


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Board, Square, LastMove], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


def legal_destinations(board: Board, square: Square, last_move: LastMove = None) -> list[Square]:
    """
    All squares the piece on `square` may move to. Empty list for an empty square.

    NOTE: Does not care whose turn it is. That is up to the Game.
    """
    piece = board.piece(square)
    if piece is None:
        return []
    movement_rule = MOVEMENT_RULES[piece.type]
    # keep the generator's (deterministic) order, but never report a square twice
    return list(dict.fromkeys(movement_rule(board, square, last_move)))


# --- MOVERS ---
def move_piece(board: Board, from_square: Square, to_square: Square, last_move: LastMove) -> Board:
    """Knights, bishops, rooks and queens have no side effects: just relocate them."""
    return board.with_piece_moved(from_square, to_square)


def move_king(board: Board, from_square: Square, to_square: Square, last_move: LastMove) -> Board:
    """A king jumping two columns is castling: bring the rook along to the square next to the king."""
    new_board = board.with_piece_moved(from_square, to_square)
    if abs(to_square.col - from_square.col) != KING_CASTLING_STEP:
        return new_board

    direction = CastlingDirection.from_king_move(from_square.col, to_square.col)
    squares = CastlingSquares.for_king(from_square, direction)
    rook = new_board.piece(squares.rook_from)
    if rook is None or rook.type != PieceType.ROOK:
        return new_board
    return new_board.with_piece_moved(squares.rook_from, squares.rook_to)


def move_pawn(board: Board, from_square: Square, to_square: Square, last_move: LastMove) -> Board:
    """
    Update the board after a pawn move.
    ---

    1. En passant? Remove the opponent's pawn. NOTE it stands where the last move ended, not on our destination square.
    2. Move the pawn
    3. Reached the far end of the board? Replace the pawn by a new queen.
    """
    pawn = board.piece(from_square)
    if pawn is None:
        return board

    new_board = board
    if last_move is not None and is_en_passant_capture(board, from_square, to_square, last_move):
        new_board = new_board.with_piece(last_move.to_square, None)

    new_board = new_board.with_piece_moved(from_square, to_square)

    if to_square.row == PROMOTION_ROW[pawn.color]:
        new_board = new_board.with_piece(to_square, promoted_queen(pawn.color))
    return new_board


def is_en_passant_capture(
    board: Board, from_square: Square, to_square: Square, last_move: LastMove
) -> bool:
    return en_passant_target(board, from_square, last_move) == to_square


# -- STRATEGY PATTERN: MOVERS ---
MoverFn = Callable[[Board, Square, Square, LastMove], Board]
MOVERS: dict[PieceType, MoverFn] = {
    PieceType.PAWN: move_pawn,
    PieceType.KNIGHT: move_piece,
    PieceType.BISHOP: move_piece,
    PieceType.ROOK: move_piece,
    PieceType.QUEEN: move_piece,
    PieceType.KING: move_king,
}


def apply_move(board: Board, from_square: Square, to_square: Square, last_move: LastMove) -> Board:
    """
    Let the moving piece's mover compute the next board.

    NOTE: The destination is expected to come out of `legal_destinations()`. Nothing gets validated here.
    """
    piece = board.piece(from_square)
    if piece is None:
        return board
    return MOVERS[piece.type](board, from_square, to_square, last_move)
