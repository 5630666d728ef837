"""Defines the types of chess pieces"""

from dataclasses import dataclass
from enum import Enum
from typing import Self

from src.core.shared_types import Color


class PieceType(Enum):
    """Values are the letters used in algebraic notation."""

    KING = "K"
    QUEEN = "Q"
    ROOK = "R"
    BISHOP = "B"
    KNIGHT = "N"
    PAWN = "P"

    @property
    def letter(self) -> str:
        return self.value


FEN_TO_PIECE: dict[str, PieceType] = {
    piece_type.value.lower(): piece_type for piece_type in PieceType
}

PIECE_TO_FEN: dict[PieceType, str] = {value: key for key, value in FEN_TO_PIECE.items()}

# Order in which promotion choices are offered
PROMOTION_OPTIONS: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


@dataclass(frozen=True)
class Piece:
    type: PieceType
    color: Color

    @classmethod
    def from_fen(cls, character: str) -> Self:
        # lower case: Black pieces, upper case: White pieces
        color = Color.WHITE if character.isupper() else Color.BLACK
        piece_type = FEN_TO_PIECE[character.lower()]
        return cls(piece_type, color)

    def to_fen(self) -> str:
        return (
            PIECE_TO_FEN[self.type].upper()
            if self.color == Color.WHITE
            else PIECE_TO_FEN[self.type].lower()
        )

    def promote_to(self, new_type: PieceType) -> Self:
        """Pieces are values: promoting gives a new piece of the same color."""
        return type(self)(new_type, self.color)
