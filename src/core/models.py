"""
Boundary layer data model(s).

These objects can be used to communicate with the Service.
Both the API layer (higher) and the domain layer (lower) use the model defined here to send to/receive from the Service
(Decouples the data model specific to the API layer or domain layer from the information needed to send across boundaries)
"""

from dataclasses import dataclass, field
from typing import Optional

# Type aliases to make GameModel easier to read
PieceColor = str
ImageName = str


@dataclass
class GameModel:
    """Transport-safe representation of a chess game used between API, Service and Game layers."""

    position: str  # piece placement, first field of a FEN string
    moved_squares: list[str]  # FEN cannot express `has_moved`, so list those squares separately
    side_to_move: PieceColor
    last_move: Optional[str]
    move_history: list[str]
    status: str
    winner: Optional[PieceColor] = None
    captures: dict[PieceColor, list[ImageName]] = field(default_factory=dict)
