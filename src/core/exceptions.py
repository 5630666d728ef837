"""
Exceptions raised by the engine.

GameError and its subclasses are recoverable: bad input or a move the caller should not have submitted.
EngineInvariantError signals a bug (the invariants of a reachable position were broken) and is kept outside
of the GameError tree on purpose, so it does not get caught together with ordinary game errors.
"""


class GameError(Exception):
    """Base class for errors a caller is expected to handle."""


class MalformedSquareError(GameError, ValueError):
    """String cannot be read as a square on the board (expects 'a1' - 'h8')."""


class InvalidFENError(GameError, ValueError):
    """String cannot be read as the board part of a FEN string."""


class MalformedMoveError(GameError, ValueError):
    """String cannot be read as a move in UCI notation (expects e.g. 'e2e4' or 'e7e8q')."""


class MoveNotAvailableError(GameError):
    """The submitted move is not among the moves available to the side to move."""


class GameStateError(GameError):
    """A saved game state could not be restored."""


class EngineInvariantError(RuntimeError):
    """Should never happen: e.g. a king went missing from a position."""
