"""
Move History Ledger

The rules only ever look back a single move (to decide on en passant), so the ledger keeps one live MoveRecord
that gets overwritten on every committed move. Next to it, a plain textual log of the moves is kept for display.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from src.chess.pieces import Piece, PieceType
from src.chess.square import Square

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MoveRecord:
    """The move that was committed last: which piece went from where to where."""

    piece: Piece
    from_square: Square
    to_square: Square

    def to_coordinates(self) -> str:
        """Raw coordinate string, ex. 'e2e4'"""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}"

    def is_double_pawn_push(self) -> bool:
        """A pawn that just advanced two rows. The only kind of move that opens up en passant."""
        return (
            self.piece.type == PieceType.PAWN
            and abs(self.from_square.row - self.to_square.row) == 2
        )


@dataclass
class MoveLedger:
    last_move: Optional[MoveRecord] = None
    entries: list[str] = field(default_factory=list)

    def commit(self, record: MoveRecord) -> None:
        """Only moves that were actually played end up here (never candidate moves)."""
        self.last_move = record
        self.entries.append(record.to_coordinates())
        logger.debug("ledger now holds %d moves, last: %s", len(self.entries), self.entries[-1])

    def reset(self) -> None:
        self.last_move = None
        self.entries.clear()
