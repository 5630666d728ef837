"""
Boundary layer data model(s).

The record a storage collaborator persists, and hands back to restore a game:
{"position": {"e4": "P", ...}, "moves": [...], "lastMove": {...}}
(Decouples whatever the storage / UI layers do from the engine's own Move / Position types.)
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

from src.chess.pieces import FEN_TO_PIECE, PROMOTION_OPTIONS
from src.chess.square import Square

PIECE_LETTERS = {letter.upper() for letter in FEN_TO_PIECE}
PROMOTION_LETTERS = {piece_type.letter for piece_type in PROMOTION_OPTIONS}


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MoveRecord(_CamelModel):
    """Transport-safe representation of a single move."""

    piece: str
    starting_square: str
    destination_square: str
    promotion: Optional[str] = None
    notation: Optional[str] = None
    is_capture: bool = False
    is_check: bool = False

    @field_validator("starting_square", "destination_square")
    @classmethod
    def validate_square(cls, value: str) -> str:
        # MalformedSquareError is a ValueError, so pydantic reports it as a ValidationError
        Square.from_algebraic(value)
        return value

    @field_validator("piece")
    @classmethod
    def validate_piece(cls, value: str) -> str:
        if value not in PIECE_LETTERS:
            raise ValueError(
                f"Unknown piece {value!r}. Pick one from {','.join(sorted(PIECE_LETTERS))}"
            )
        return value

    @field_validator("promotion")
    @classmethod
    def validate_promotion(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in PROMOTION_LETTERS:
            raise ValueError(
                f"Cannot promote to {value!r}. Pick one from {','.join(sorted(PROMOTION_LETTERS))}"
            )
        return value


class SavedGameState(_CamelModel):
    """Transport-safe representation of a game: final position + every move played to get there."""

    position: dict[str, str]
    moves: list[MoveRecord] = []
    last_move: Optional[MoveRecord] = None

    @field_validator("position")
    @classmethod
    def validate_position(cls, value: dict[str, str]) -> dict[str, str]:
        for square, letter in value.items():
            Square.from_algebraic(square)
            if letter.upper() not in PIECE_LETTERS:
                raise ValueError(f"Unknown piece {letter!r} on {square}")
        return value
