"""Orchestration of communication from the presentation layer to the rules core (and the reverse direction)."""

import logging
import time
from typing import Any, Callable, Optional

from pydantic import ValidationError

from src.api.models import (
    GameResponse,
    LegalMovesRequest,
    LegalMovesResponse,
    MoveRequest,
    MoveResponse,
    SelectRequest,
)
from src.chess.game import Game, MoveRejected
from src.chess.square import Square
from src.core.config import Settings, setup_logging
from src.core.exceptions import InvalidRequestError
from src.core.models import GameModel
from src.core.shared_types import Color, Status

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


class ChessService:
    """
    Orchestration of layers for a single, in-memory chess session.

    After a king gets captured, the finished board stays visible for `settings.reset_delay_seconds`.
    The reset is not run in the background: it is due at a deadline and gets applied at the start of the next call
    that comes in after it. Starting a new game cancels it.
    """

    def __init__(self, settings: Optional[Settings] = None, clock: Clock = time.monotonic) -> None:
        self.settings = settings or Settings.from_env()
        setup_logging(self.settings)
        self.clock = clock
        self.game = Game.new_game()
        self._reset_due_at: Optional[float] = None

    # -- presentation layer logic ---
    def new_game(self) -> GameResponse:
        """Throw away whatever is going on and start from the initial position."""
        self._reset_due_at = None
        self.game.reset()
        return self._create_game_response(self.game.to_model())

    def get_game_state(self) -> GameResponse:
        self._apply_due_reset()
        return self._create_game_response(self.game.to_model())

    def legal_moves(self, request: LegalMovesRequest) -> LegalMovesResponse:
        """Read-only: the squares the piece on the requested square could go to."""
        self._apply_due_reset()
        square = Square.from_algebraic(request.square)
        piece = self.game.board.piece(square)
        return LegalMovesResponse(
            square=request.square,
            color=piece.color if piece else None,
            legal_moves=[
                destination.to_algebraic()
                for destination in self.game.legal_destinations(square)
            ],
        )

    def select_piece(self, request: SelectRequest) -> LegalMovesResponse:
        """The player picked up a piece. Offers the candidate squares (none if it is not their turn)."""
        self._apply_due_reset()
        square = Square.from_algebraic(request.square)
        piece = self.game.board.piece(square)
        candidates = self.game.select(square)
        return LegalMovesResponse(
            square=request.square,
            color=piece.color if piece else None,
            legal_moves=[destination.to_algebraic() for destination in candidates],
        )

    def make_move(self, request: MoveRequest) -> MoveResponse:
        """Make a move attempt."""
        self._apply_due_reset()
        result = self.game.attempt_move(
            Square.from_algebraic(request.from_square),
            Square.from_algebraic(request.to_square),
        )

        if isinstance(result, MoveRejected):
            return MoveResponse(
                accepted=False,
                rejection_reason=result.reason.name.lower(),
                game=self._create_game_response(self.game.to_model()),
            )

        if result.outcome.is_over:
            self._schedule_reset()

        return MoveResponse(
            accepted=True,
            captured_piece=result.captured_piece.image_name if result.captured_piece else None,
            game=self._create_game_response(self.game.to_model()),
        )

    def handle_drop(self, from_square: Any, to_square: Any) -> MoveResponse:
        """
        Raw picks straight from the board widget.
        ----
        Picks that do not name a square on the board (or are not even strings) are ignored: the move is rejected and nothing changes.
        """
        try:
            request = MoveRequest(from_square=from_square, to_square=to_square)
        except (InvalidRequestError, ValidationError) as e:
            logger.warning("ignoring drop %r -> %r: %s", from_square, to_square, e)
            self._apply_due_reset()
            return MoveResponse(
                accepted=False,
                rejection_reason="off_board",
                game=self._create_game_response(self.game.to_model()),
            )
        return self.make_move(request)

    def reset(self) -> GameResponse:
        """Reset now (ex. the presentation layer finished its victory animation early)."""
        return self.new_game()

    # -- Internal helpers --
    def _schedule_reset(self) -> None:
        self._reset_due_at = self.clock() + self.settings.reset_delay_seconds
        logger.debug("reset scheduled in %.1f seconds", self.settings.reset_delay_seconds)

    def _apply_due_reset(self) -> None:
        if self._reset_due_at is None or self.clock() < self._reset_due_at:
            return
        self._reset_due_at = None
        self.game.reset()

    def _create_game_response(self, model: GameModel) -> GameResponse:
        """Convert info in GameModel to a GameResponse."""
        return GameResponse(
            position=model.position,
            moved_squares=model.moved_squares,
            side_to_move=Color(model.side_to_move),
            last_move=model.last_move,
            move_history=model.move_history,
            captures=model.captures,
            status=Status(model.status),
            winner=Color(model.winner) if model.winner else None,
            reset_pending=self._reset_due_at is not None,
        )
