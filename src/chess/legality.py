"""
Legality filter
----

A candidate (pseudo-legal) move is legal if it does not leave the mover's own king in check.
No clever pin detection: every candidate gets played out on a copy of the position and checked.
"""

from dataclasses import replace
from typing import Optional

from src.chess.attacks import is_in_check
from src.chess.castling import CastlingRights
from src.chess.moves import Move, pseudo_legal_moves
from src.chess.notation import with_notation
from src.chess.position import Position
from src.core.shared_types import Color


def is_legal(position: Position, move: Move, color: Color) -> bool:
    return not is_in_check(position.apply_move(move), color)


def gives_check(position: Position, move: Move, color: Color) -> bool:
    """Would the move (made by `color`) put the opponent's king in check?"""
    return is_in_check(position.apply_move(move), color.opponent)


def legal_moves(
    position: Position,
    color: Color,
    last_move: Optional[Move],
    castling_rights: CastlingRights,
) -> list[Move]:
    """
    List of legal moves for the player with the 'color' pieces
    ----

    1. generate candidate moves, using the movement rules for all pieces (incl. castling / en passant / promotions)
    2. remove illegal options --> a move that would put you in check or you are in check and the move does not get you out of it.
    3. flag the moves that give check
    4. write down the notation (needs the full list for disambiguation)
    """
    candidate_moves = pseudo_legal_moves(position, color, last_move, castling_rights)

    moves = [
        replace(move, is_check=gives_check(position, move, color))
        for move in candidate_moves
        if is_legal(position, move, color)
    ]
    return with_notation(moves)
