"""
Algebraic notation for moves: 'Nf3', 'exd5', 'e8=Q+', '0-0', ...

Disambiguation only depends on the set of moves available at the same time, so notation gets assigned
to the complete list of legal moves in one go (see `with_notation()`).
"""

from collections import defaultdict
from dataclasses import replace
from enum import Enum, auto
from typing import Iterable, Optional

from src.chess.moves import Move
from src.chess.pieces import PieceType
from src.chess.square import Square


class Qualifier(Enum):
    """Which part of the starting square to add to the notation"""

    FILE = auto()
    RANK = auto()


def move_notation(move: Move, qualifiers: Iterable[Qualifier] = ()) -> str:
    """
    <piece letter><disambiguation><x if capture><destination><=promotion><+ if check>
    ----

    * Pawns have no letter, but when capturing always show the file they start from.
    * Castling is written as 0-0 (king side) or 0-0-0 (queen side).
    """
    castling_side = move.castling_side
    if castling_side is not None:
        return castling_side.value

    qualifiers = set(qualifiers)
    piece_letter = move.piece.letter
    promotion = ""
    if move.piece == PieceType.PAWN:
        piece_letter = ""
        if move.is_capture:
            qualifiers.add(Qualifier.FILE)
        if move.promote_to is not None:
            promotion = f"={move.promote_to.letter}"

    starting = ""
    if Qualifier.FILE in qualifiers:
        starting += move.from_square.file_name
    if Qualifier.RANK in qualifiers:
        starting += move.from_square.rank_name

    capture = "x" if move.is_capture else ""
    check = "+" if move.is_check else ""
    return f"{piece_letter}{starting}{capture}{move.to_square}{promotion}{check}"


def needs_disambiguation(move: Move) -> bool:
    """Only one king per side, and pawn captures are always qualified by file anyway."""
    return move.piece not in (PieceType.KING, PieceType.PAWN)


def disambiguation_qualifiers(group: list[Move]) -> set[Qualifier]:
    """
    Moves of the same piece type going to the same square:
    * just one: nothing to add
    * two: the file if they start on different files, otherwise the rank
    * three or more: both
    """
    if len(group) == 1:
        return set()
    if len(group) == 2:
        file_delta, _ = group[0].from_square.difference(group[1].from_square)
        return {Qualifier.FILE} if file_delta != 0 else {Qualifier.RANK}
    return {Qualifier.FILE, Qualifier.RANK}


def with_notation(moves: list[Move]) -> list[Move]:
    """Copies of the moves (same order) with the final, disambiguated notation filled in."""
    groups: dict[tuple[PieceType, Square, Optional[PieceType]], list[Move]] = defaultdict(list)
    for move in moves:
        if needs_disambiguation(move):
            groups[(move.piece, move.to_square, move.promote_to)].append(move)

    annotated: list[Move] = []
    for move in moves:
        qualifiers: set[Qualifier] = set()
        if needs_disambiguation(move):
            qualifiers = disambiguation_qualifiers(
                groups[(move.piece, move.to_square, move.promote_to)]
            )
        annotated.append(replace(move, notation=move_notation(move, qualifiers)))
    return annotated
