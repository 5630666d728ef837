"""
Contract for the callers of the engine (UI, persistence, ...).

Read-only snapshot of a game, recomputed completely after every move.
"""

from dataclasses import dataclass
from typing import Mapping, Optional

from src.chess.moves import Move
from src.chess.pieces import PieceType
from src.chess.position import Position
from src.chess.square import Square
from src.core.shared_types import Color, Status


@dataclass(frozen=True)
class GameState:
    """
    `available_moves` only contains squares from which at least one legal move can be made.
    An empty mapping means the game is over: checkmate if `is_check`, stalemate otherwise.
    """

    side_to_move: Color
    available_moves: Mapping[Square, tuple[Move, ...]]
    position: Position
    moves: tuple[Move, ...]
    is_check: bool
    status: Status

    @property
    def last_move(self) -> Optional[Move]:
        return self.moves[-1] if self.moves else None

    @property
    def ply(self) -> int:
        return len(self.moves)

    @property
    def winner(self) -> Optional[Color]:
        """None while the game goes on, and after a stalemate"""
        return self.side_to_move.opponent if self.status == Status.CHECKMATE else None

    def moves_from(self, square: Square) -> tuple[Move, ...]:
        return self.available_moves.get(square, ())

    def all_moves(self) -> list[Move]:
        return [move for moves in self.available_moves.values() for move in moves]

    def find_move(
        self,
        from_square: Square,
        to_square: Square,
        promote_to: Optional[PieceType] = None,
    ) -> Optional[Move]:
        return next(
            (
                move
                for move in self.moves_from(from_square)
                if move.key == (from_square, to_square, promote_to)
            ),
            None,
        )
