"""Helpers for implementing Castling rules. Need to be imported by multiple sources"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Self

from src.chess.square import Square, difference
from src.core.shared_types import Color


class CastlingSide(Enum):
    """Values are the notation used for the castling move."""

    KING_SIDE = "0-0"
    QUEEN_SIDE = "0-0-0"


class CastlingRights(Enum):
    """
    Rights of a single player.
    ---

    Rights only ever narrow: BOTH -> one side -> NONE (or BOTH -> NONE directly).
    Use `revoke()` / `revoke_all()` to move between them, never assign a wider value.
    """

    BOTH = "both"
    KING_SIDE_ONLY = "king side"
    QUEEN_SIDE_ONLY = "queen side"
    NONE = "none"

    def sides(self) -> tuple[CastlingSide, ...]:
        return _SIDES_ALLOWED[self]

    def allows(self, side: CastlingSide) -> bool:
        return side in self.sides()

    def revoke(self, side: CastlingSide) -> CastlingRights:
        remaining = tuple(s for s in self.sides() if s != side)
        return _RIGHTS_FROM_SIDES[remaining]

    def revoke_all(self) -> CastlingRights:
        return CastlingRights.NONE


_SIDES_ALLOWED: dict[CastlingRights, tuple[CastlingSide, ...]] = {
    CastlingRights.BOTH: (CastlingSide.KING_SIDE, CastlingSide.QUEEN_SIDE),
    CastlingRights.KING_SIDE_ONLY: (CastlingSide.KING_SIDE,),
    CastlingRights.QUEEN_SIDE_ONLY: (CastlingSide.QUEEN_SIDE,),
    CastlingRights.NONE: (),
}
_RIGHTS_FROM_SIDES: dict[tuple[CastlingSide, ...], CastlingRights] = {
    sides: rights for rights, sides in _SIDES_ALLOWED.items()
}


@dataclass(frozen=True)
class CastlingSquares:
    """
    Store the squares where king/rook start from/end up in by castling.
    NOTE: If castling rights have not been revoked, we already know the king / rook are still at their starting squares.
    """

    king_from: Square
    king_to: Square
    rook_from: Square
    rook_to: Square

    @classmethod
    def from_algebraic(cls, k_from: str, k_to: str, r_from: str, r_to: str) -> Self:
        """Convenience method: to make mapping shown below more readable"""
        king_from = Square.from_algebraic(k_from)
        king_to = Square.from_algebraic(k_to)
        rook_from = Square.from_algebraic(r_from)
        rook_to = Square.from_algebraic(r_to)
        return cls(king_from, king_to, rook_from, rook_to)

    def king_path(self) -> list[Square]:
        """Squares the king steps onto: the one it passes over and the one it lands on."""
        file_delta, _ = difference(self.king_to, self.king_from)
        step = 1 if file_delta > 0 else -1
        return [
            Square(self.king_from.file + step * n, self.king_from.rank)
            for n in range(1, abs(file_delta) + 1)
        ]

    def squares_between(self) -> list[Square]:
        """Squares between king and rook. All of them must be empty to castle."""
        low, high = sorted((self.king_from.file, self.rook_from.file))
        return [Square(file, self.king_from.rank) for file in range(low + 1, high)]


# The moves (in classical chess) made when castling
CASTLING_RULES: dict[tuple[Color, CastlingSide], CastlingSquares] = {
    (Color.WHITE, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e1", "g1", "h1", "f1"
    ),
    (Color.WHITE, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e1", "c1", "a1", "d1"
    ),
    (Color.BLACK, CastlingSide.KING_SIDE): CastlingSquares.from_algebraic(
        "e8", "g8", "h8", "f8"
    ),
    (Color.BLACK, CastlingSide.QUEEN_SIDE): CastlingSquares.from_algebraic(
        "e8", "c8", "a8", "d8"
    ),
}

INITIAL_CASTLING_RIGHTS: dict[Color, CastlingRights] = {
    Color.WHITE: CastlingRights.BOTH,
    Color.BLACK: CastlingRights.BOTH,
}


def castling_side_of(from_square: Square, to_square: Square) -> Optional[CastlingSide]:
    """A king move spanning two files is a castling move. Anything else is not."""
    file_delta, rank_delta = difference(to_square, from_square)
    if rank_delta != 0 or abs(file_delta) != 2:
        return None
    return CastlingSide.KING_SIDE if file_delta > 0 else CastlingSide.QUEEN_SIDE


def home_rook_side(color: Color, square: Square) -> Optional[CastlingSide]:
    """Which castling side the rook standing on its home square belongs to (None if not a rook home square)."""
    for side in CastlingSide:
        if CASTLING_RULES[(color, side)].rook_from == square:
            return side
    return None
