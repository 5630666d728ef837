"""
Representation of a single position on the board: which piece stands on which square.

One Position exists per ply. Positions are never changed in place; applying a move derives a new one.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Optional, Self

from src.chess.castling import CASTLING_RULES, castling_side_of
from src.chess.pieces import FEN_TO_PIECE, Piece, PieceType
from src.chess.square import BOARD_DIMENSIONS, Square
from src.core.exceptions import EngineInvariantError, InvalidFENError
from src.core.shared_types import Color

if TYPE_CHECKING:
    from src.chess.moves import Move

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
# runs of empty squares, ascii only (str.isdigit also accepts other scripts)
FEN_DIGITS = "12345678"


def is_valid_position(position: str) -> bool:
    """Only check the part of the FEN encoding for the board position."""
    num_files, num_ranks = BOARD_DIMENSIONS
    rank_fens = position.split("/")
    if len(rank_fens) != num_ranks:
        return False

    for rank_fen in rank_fens:
        file_count = 0
        for character in rank_fen:
            # make sure every character is valid
            if character in FEN_DIGITS:
                file_count += int(character)
            elif character.lower() in FEN_TO_PIECE:
                file_count += 1
            else:
                # immediately invalidate if the character is anything else
                return False

        # make sure you are creating a correctly sized board
        if file_count != num_files:
            return False
    return True


@dataclass(frozen=True)
class Position:
    """Sparse: unoccupied squares are simply absent from `pieces`."""

    pieces: Mapping[Square, Piece]

    def __post_init__(self) -> None:
        # take a private, read-only copy so that nobody can mutate the position behind our back
        object.__setattr__(self, "pieces", MappingProxyType(dict(self.pieces)))

    @classmethod
    def starting(cls) -> Self:
        return cls.from_fen(STARTING_FEN)

    @classmethod
    def from_fen(cls, fen_str: str) -> Self:
        """Construct a position using the first part of a FEN string (the part that denotes the board position)

        ex. standard starting position:
        rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR
        means:
        * black pieces are on the 8th rank, starting with rook on a8, knight on b8, etc.
        * pawns cover 7th rank entirely
        * ranks 6 through 3 have 8 consecutive empty squares
        * rank 2 are the white pawns (capital letters)
        * 1st rank are the white pieces. Again, left-to-right reads a1-h1.
        """
        if not is_valid_position(fen_str):
            raise InvalidFENError(f"Cannot interpret supplied string as FEN: {fen_str}")

        pieces: dict[Square, Piece] = {}
        for rank_idx, fen_one_rank in enumerate(fen_str.split("/")):
            # FEN string is read from top rank (8th) to bottom rank (1st)
            rank = BOARD_DIMENSIONS[1] - 1 - rank_idx
            file = 0
            for character in fen_one_rank:
                if character.isalpha():
                    pieces[Square(file, rank)] = Piece.from_fen(character)
                    file += 1
                else:
                    # A number denotes the amount of empty squares after each other
                    file += int(character)
        return cls(pieces)

    def to_fen(self) -> str:
        """Ranks are separated by slashes in FEN string."""
        return "/".join(
            self._rank_to_fen(rank) for rank in range(BOARD_DIMENSIONS[1] - 1, -1, -1)
        )

    def _rank_to_fen(self, rank: int) -> str:
        fen_characters: list[str] = []
        empty_count = 0
        for file in range(BOARD_DIMENSIONS[0]):
            piece = self.piece(Square(file, rank))
            if piece is None:
                empty_count += 1
                continue

            if empty_count > 0:
                fen_characters.append(str(empty_count))
                empty_count = 0
            fen_characters.append(piece.to_fen())

        # if the entire rank is empty, then we still place this number in the string
        if empty_count > 0:
            fen_characters.append(str(empty_count))
        return "".join(fen_characters)

    @classmethod
    def from_dict(cls, encoded: Mapping[str, str]) -> Self:
        """Reference encoding: {"e1": "K", "e8": "k", ...}"""
        try:
            return cls(
                {
                    Square.from_algebraic(square): Piece.from_fen(letter)
                    for square, letter in encoded.items()
                }
            )
        except KeyError as e:
            raise InvalidFENError(f"Unknown piece letter: {e}") from e

    def to_dict(self) -> dict[str, str]:
        return {
            square.to_algebraic(): piece.to_fen()
            for square, piece in sorted(
                self.pieces.items(), key=lambda item: (item[0].rank, item[0].file)
            )
        }

    def piece(self, square: Square) -> Optional[Piece]:
        return self.pieces.get(square)

    def is_empty(self, square: Square) -> bool:
        return square not in self.pieces

    def is_color(self, square: Square, color: Color) -> bool:
        piece = self.piece(square)
        return piece is not None and piece.color == color

    def squares_of(self, color: Color) -> list[Square]:
        """Squares occupied by the given player, in board order (a1, b1, ..., h8)"""
        return sorted(
            (square for square, piece in self.pieces.items() if piece.color == color),
            key=lambda square: (square.rank, square.file),
        )

    def king_square(self, color: Color) -> Square:
        king = Piece(PieceType.KING, color)
        for square, piece in self.pieces.items():
            if piece == king:
                return square
        raise EngineInvariantError(f"No {color} king on the board: {self.to_fen()}")

    def updated(
        self,
        remove: Iterable[Square] = (),
        place: Optional[Mapping[Square, Piece]] = None,
    ) -> Position:
        """New position: first clear the squares in `remove`, then put down the pieces in `place`."""
        pieces = dict(self.pieces)
        for square in remove:
            pieces.pop(square, None)
        pieces.update(place or {})
        return Position(pieces)

    def apply_move(self, move: Move) -> Position:
        """
        Derive the position after the move
        ----

        1. en passant: pawn moving diagonally onto an empty square removes the pawn next to it
        2. castling: king moving two files also relocates the rook of that side
        3. clear the starting square
        4. place the moved (or promoted) piece on the destination

        NOTE the move is trusted to have been generated from this position.
        """
        mover = self.piece(move.from_square)
        if mover is None:
            raise EngineInvariantError(
                f"No piece on {move.from_square} to make move {move.to_uci()}"
            )

        remove: list[Square] = []
        place: dict[Square, Piece] = {}

        if move.piece == PieceType.PAWN:
            file_delta = move.to_square.file - move.from_square.file
            if file_delta != 0 and self.is_empty(move.to_square):
                remove.append(Square(move.to_square.file, move.from_square.rank))

        if move.piece == PieceType.KING:
            side = castling_side_of(move.from_square, move.to_square)
            if side is not None:
                rule = CASTLING_RULES[(mover.color, side)]
                remove.append(rule.rook_from)
                place[rule.rook_to] = Piece(PieceType.ROOK, mover.color)

        remove.append(move.from_square)
        place[move.to_square] = Piece(move.promote_to or move.piece, mover.color)
        return self.updated(remove=remove, place=place)
