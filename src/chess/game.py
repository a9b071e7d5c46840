"""
The Game class is the entrypoint into the domain layer for the service layer.
It is responsible for orchestrating all the business logic required to play a turn:
checking whose turn it is, asking the piece catalog for legal destinations, spotting a king capture,
applying the mover, flipping the side to move and updating the ledger and the captures.

An illegal attempt is NOT an error here. It is a normal outcome, returned as a `MoveRejected`.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional, Self

from src.chess.board import Board, initial_board
from src.chess.history import MoveLedger, MoveRecord
from src.chess.moves import apply_move, is_en_passant_capture, legal_destinations
from src.chess.outcome import CaptureTracker, Outcome
from src.chess.pieces import Color, Piece, PieceType
from src.chess.square import Square
from src.core.models import GameModel

logger = logging.getLogger(__name__)


class TurnPhase(Enum):
    AWAITING_SELECTION = auto()
    MOVE_OFFERED = auto()
    COMMITTED = auto()


class RejectionReason(Enum):
    OFF_BOARD = auto()
    EMPTY_SQUARE = auto()
    NOT_YOUR_TURN = auto()
    OWN_PIECE = auto()
    NOT_A_CANDIDATE = auto()
    NOTHING_SELECTED = auto()
    GAME_OVER = auto()


@dataclass(frozen=True)
class MoveResult:
    """
    A move that went through.

    NOTE: when a king got captured, `board` is the board from before the move (the mover never runs)
    and there is no ledger entry: the game is over and about to be reset.
    """

    board: Board
    ledger_entry: Optional[MoveRecord]
    captured_piece: Optional[Piece]
    outcome: Outcome

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True)
class MoveRejected:
    reason: RejectionReason

    @property
    def accepted(self) -> bool:
        return False


AttemptResult = MoveResult | MoveRejected


def attempt_move(
    board: Board,
    from_square: Square,
    to_square: Square,
    last_move: Optional[MoveRecord],
    side_to_move: Color,
) -> AttemptResult:
    """
    Play one move on the given board (pure: nothing passed in gets modified)
    -----

    1. Both squares on the board?
    2. Is there a piece, and is it yours?
    3. Is the destination not occupied by your own piece, and one of the piece's candidate destinations?
    4. Landing on the enemy king? You won. The mover is not invoked.
    5. Otherwise let the piece's mover compute the next board.
    """
    if not (from_square.is_on_board() and to_square.is_on_board()):
        return MoveRejected(RejectionReason.OFF_BOARD)

    moving_piece = board.piece(from_square)
    if moving_piece is None:
        return MoveRejected(RejectionReason.EMPTY_SQUARE)

    if moving_piece.color != side_to_move:
        return MoveRejected(RejectionReason.NOT_YOUR_TURN)

    occupant = board.piece(to_square)
    if occupant is not None and occupant.color == moving_piece.color:
        return MoveRejected(RejectionReason.OWN_PIECE)

    if to_square not in legal_destinations(board, from_square, last_move):
        return MoveRejected(RejectionReason.NOT_A_CANDIDATE)

    if occupant is not None and occupant.type == PieceType.KING:
        return MoveResult(
            board=board,
            ledger_entry=None,
            captured_piece=occupant,
            outcome=Outcome.won(moving_piece.color),
        )

    captured_piece = occupant
    if (
        moving_piece.type == PieceType.PAWN
        and last_move is not None
        and is_en_passant_capture(board, from_square, to_square, last_move)
    ):
        captured_piece = board.piece(last_move.to_square)

    new_board = apply_move(board, from_square, to_square, last_move)
    return MoveResult(
        board=new_board,
        ledger_entry=MoveRecord(moving_piece, from_square, to_square),
        captured_piece=captured_piece,
        outcome=Outcome.in_progress(),
    )


@dataclass
class Game:
    # --- DOMAIN LAYER API CALLED BY SERVICE---

    board: Board = field(default_factory=initial_board)
    side_to_move: Color = Color.WHITE
    ledger: MoveLedger = field(default_factory=MoveLedger)
    tracker: CaptureTracker = field(default_factory=CaptureTracker)
    phase: TurnPhase = TurnPhase.AWAITING_SELECTION
    selected: Optional[Square] = None
    candidates: list[Square] = field(default_factory=list)

    @classmethod
    def new_game(cls) -> Self:
        """Standard starting position, White to move."""
        return cls()

    @property
    def last_move(self) -> Optional[MoveRecord]:
        return self.ledger.last_move

    @property
    def outcome(self) -> Outcome:
        return self.tracker.outcome

    @property
    def is_over(self) -> bool:
        return self.outcome.is_over

    def legal_destinations(self, square: Square) -> list[Square]:
        """Read-only. Used to highlight squares, does not check whose turn it is."""
        if not square.is_on_board():
            return []
        return legal_destinations(self.board, square, self.last_move)

    def select(self, square: Square) -> list[Square]:
        """
        The player picks up a piece.
        ----

        Rejected (returns an empty list, nothing changes) if the game is over, the square is empty/off the board,
        or the piece is not of the color to move. Otherwise the candidate destinations are offered.
        """
        reason = self._selection_rejection(square)
        if reason is not None:
            logger.debug("selection of %s rejected: %s", square, reason.name)
            return []

        self.selected = square
        self.candidates = legal_destinations(self.board, square, self.last_move)
        self._change_phase(TurnPhase.MOVE_OFFERED)
        return list(self.candidates)

    def drop(self, square: Square) -> AttemptResult:
        """
        The player puts the selected piece down on a square
        -----

        1. validate the move (see `attempt_move()`)
        2. king captured? record the win and stop
        3. update the board
        4. record the captured piece (if any)
        5. update the ledger
        6. pass the turn to the opponent
        """
        if self.is_over:
            self._clear_selection()
            return MoveRejected(RejectionReason.GAME_OVER)

        if self.phase != TurnPhase.MOVE_OFFERED or self.selected is None:
            return MoveRejected(RejectionReason.NOTHING_SELECTED)

        from_square = self.selected
        result = attempt_move(
            self.board, from_square, square, self.last_move, self.side_to_move
        )
        if isinstance(result, MoveRejected):
            logger.debug("move %s -> %s rejected: %s", from_square, square, result.reason.name)
            self._clear_selection()
            return result

        if result.outcome.is_over:
            # NOTE the winner is recorded, but the board stays as it is until someone calls reset()
            assert result.outcome.winner is not None
            self.tracker.record_win(result.outcome.winner)
            self._clear_selection()
            return result

        # for the typechecker: a move that does not end the game always carries a ledger entry
        assert result.ledger_entry is not None
        self.board = result.board
        self.tracker.record_capture(self.side_to_move, result.captured_piece)
        self.ledger.commit(result.ledger_entry)
        logger.info("%s played %s", self.side_to_move, result.ledger_entry.to_coordinates())
        self._change_phase(TurnPhase.COMMITTED)

        self.side_to_move = self.side_to_move.opponent
        self._clear_selection()
        return result

    def attempt_move(self, from_square: Square, to_square: Square) -> AttemptResult:
        """Convenience method: pick up the piece and drop it in one go."""
        if self.is_over:
            return MoveRejected(RejectionReason.GAME_OVER)

        reason = self._selection_rejection(from_square)
        if reason is not None:
            logger.debug("selection of %s rejected: %s", from_square, reason.name)
            return MoveRejected(reason)

        self.select(from_square)
        return self.drop(to_square)

    def reset(self) -> None:
        """Back to the starting position with White to move. Safe to call any number of times."""
        self.board = initial_board()
        self.side_to_move = Color.WHITE
        self.ledger.reset()
        self.tracker.reset()
        self._clear_selection()
        logger.info("game reset")

    def to_model(self) -> GameModel:
        """Encode into a format the Service layer uses"""
        return GameModel(
            position=self.board.to_fen(),
            moved_squares=[square.to_algebraic() for square in self.board.moved_squares()],
            side_to_move=str(self.side_to_move),
            last_move=self.last_move.to_coordinates() if self.last_move else None,
            move_history=list(self.ledger.entries),
            status=str(self.outcome.status),
            winner=str(self.outcome.winner) if self.outcome.winner else None,
            captures={
                str(color): self.tracker.captured_images(color) for color in Color
            },
        )

    # -- PRIVATE HELPERS ---
    def _selection_rejection(self, square: Square) -> Optional[RejectionReason]:
        if self.is_over:
            return RejectionReason.GAME_OVER
        if not square.is_on_board():
            return RejectionReason.OFF_BOARD
        piece = self.board.piece(square)
        if piece is None:
            return RejectionReason.EMPTY_SQUARE
        if piece.color != self.side_to_move:
            return RejectionReason.NOT_YOUR_TURN
        return None

    def _clear_selection(self) -> None:
        self.selected = None
        self.candidates = []
        self._change_phase(TurnPhase.AWAITING_SELECTION)

    def _change_phase(self, new_phase: TurnPhase) -> None:
        self.phase = new_phase
