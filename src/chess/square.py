"""
A square on the board + the directions pieces travel along

(placed in its own module as multiple other modules need to import it)
"""

from __future__ import annotations

from dataclasses import dataclass
from string import ascii_lowercase
from typing import Optional

from src.core.exceptions import MalformedSquareError

# Chess board is always 8x8. Just in case we want to try some funky stuff, make it adjustable
BOARD_DIMENSIONS = (8, 8)
FILE_NAMES = ascii_lowercase[: BOARD_DIMENSIONS[0]]
RANK_NAMES = "".join(str(rank + 1) for rank in range(BOARD_DIMENSIONS[1]))

# (delta file, delta rank)
Vector = tuple[int, int]

DIAGONALS: tuple[Vector, ...] = ((1, 1), (-1, 1), (1, -1), (-1, -1))
STRAIGHTS: tuple[Vector, ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
KNIGHT_DELTAS: tuple[Vector, ...] = (
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
    (1, 2),
    (1, -2),
    (-1, 2),
    (-1, -2),
)
KING_DELTAS: tuple[Vector, ...] = STRAIGHTS + DIAGONALS


@dataclass(frozen=True)
class Square:
    """Zero-based: file 0 is the a-file, rank 0 is the 1st rank."""

    file: int
    rank: int

    @classmethod
    def from_algebraic(cls, sq: str) -> Square:
        """Algebraic notation: 'a1' - 'h8' get converted to (0,0) - (7,7)"""
        if len(sq) != 2 or sq[0] not in FILE_NAMES or sq[1] not in RANK_NAMES:
            raise MalformedSquareError(f"Cannot interpret {sq!r} as a square.")

        square = cls(FILE_NAMES.index(sq[0]), int(sq[1]) - 1)
        if not square.is_within_bounds():
            raise MalformedSquareError(f"Square {sq!r} is not on the board.")
        return square

    @classmethod
    def from_file_rank(cls, file: int, rank: int) -> Optional[Square]:
        """Off the board is not an error: ray casting relies on getting None to know where to stop."""
        square = cls(file, rank)
        return square if square.is_within_bounds() else None

    def to_algebraic(self) -> str:
        return f"{FILE_NAMES[self.file]}{self.rank + 1}"

    def is_within_bounds(self) -> bool:
        return (0 <= self.file < BOARD_DIMENSIONS[0]) and (
            0 <= self.rank < BOARD_DIMENSIONS[1]
        )

    def shifted(self, file_delta: int, rank_delta: int) -> Optional[Square]:
        return Square.from_file_rank(self.file + file_delta, self.rank + rank_delta)

    def difference(self, other: Square) -> Vector:
        return difference(self, other)

    @property
    def file_name(self) -> str:
        return FILE_NAMES[self.file]

    @property
    def rank_name(self) -> str:
        return str(self.rank + 1)

    def __str__(self) -> str:
        return self.to_algebraic()


def difference(a: Square, b: Square) -> Vector:
    """(file delta, rank delta) going from b to a"""
    return a.file - b.file, a.rank - b.rank
