"""
Exceptions raised at the boundaries of the application.

NOTE: An illegal move is NOT an exception. The rules core reports it as a rejection (see src/chess/game.py).
These errors are only for input that cannot even be interpreted (malformed squares, broken FEN strings, etc.)
"""


class GameError(Exception):
    """Base class for everything this application raises on purpose."""


class InvalidRequestError(GameError):
    """A request coming from the presentation layer could not be validated."""


class InvalidFENError(GameError):
    """The supplied string is not a valid piece placement (first field of a FEN string)."""


class InvalidSquareError(GameError):
    """The supplied name does not denote a square on the board."""
