"""
Capture/Outcome Tracker

Keeps the pieces each side captured (for the captured-pieces gallery) and whether somebody won.
Both are fed by the same event (a capture), but a captured king only ends the game. It never shows up in the gallery.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional, Self

from src.chess.pieces import Color, Piece, PieceType
from src.core.shared_types import Status

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Outcome:
    status: Status
    winner: Optional[Color] = None

    @classmethod
    def in_progress(cls) -> Self:
        return cls(Status.IN_PROGRESS)

    @classmethod
    def won(cls, color: Color) -> Self:
        return cls(Status.WON, color)

    @property
    def is_over(self) -> bool:
        return self.status == Status.WON


def _no_captures() -> dict[Color, list[Piece]]:
    return {color: [] for color in Color}


@dataclass
class CaptureTracker:
    captures: dict[Color, list[Piece]] = field(default_factory=_no_captures)
    outcome: Outcome = field(default_factory=Outcome.in_progress)

    def record_capture(self, by_color: Color, piece: Optional[Piece]) -> None:
        """Add the captured piece to the capturing side's list. Kings (and 'no capture') are ignored."""
        if piece is None or piece.type == PieceType.KING:
            return
        self.captures[by_color].append(piece)
        logger.info("%s captured a %s", by_color, piece.type)

    def record_win(self, color: Color) -> None:
        self.outcome = Outcome.won(color)
        logger.info("%s wins by capturing the king", color)

    def captured_images(self, by_color: Color) -> list[str]:
        """What the gallery shows: the visual identity of every piece captured by the given side."""
        return [piece.image_name for piece in self.captures[by_color]]

    def reset(self) -> None:
        self.captures = _no_captures()
        self.outcome = Outcome.in_progress()
