"""
Capturing rules / attacking rules
----

Where the movement rules answer _"Where can the piece on this square go?"_,
the attacking rules answer _"Is this square in the line-of-sight of a piece of the given color?"_

Used for checks, for the legality filter and for the castling path.
"""

from typing import Callable, Iterable

from src.chess.pieces import Piece, PieceType
from src.chess.position import Position
from src.chess.square import DIAGONALS, KING_DELTAS, KNIGHT_DELTAS, STRAIGHTS, Square, Vector
from src.core.shared_types import Color


def raycasting_attack(
    square: Square,
    by_color: Color,
    by_piece_types: Iterable[PieceType],
    position: Position,
    directions: Iterable[Vector],
) -> bool:
    """
    Raycasting algorithm for attacks.
    ---

    Walk away from the square along every direction. Only the first occupied square found matters:
    if it holds one of the attacking piece types of the given color, the square is under attack.
    """
    attackers = {Piece(piece_type, by_color) for piece_type in by_piece_types}
    for df, dr in directions:
        target_square = square.shifted(df, dr)
        while target_square is not None:
            piece_found = position.piece(target_square)
            if piece_found is not None:
                if piece_found in attackers:
                    return True
                break
            target_square = target_square.shifted(df, dr)
    return False


def single_step_attack(
    square: Square,
    by_color: Color,
    by_piece_type: PieceType,
    position: Position,
    deltas: Iterable[Vector],
) -> bool:
    """
    Raycasting is for sliding pieces. This is the equivalent for pawns, kings, and knights that can only step a single
    time along a direction.
    """
    attacker = Piece(by_piece_type, by_color)
    for df, dr in deltas:
        target_square = square.shifted(df, dr)
        if target_square is not None and position.piece(target_square) == attacker:
            return True
    return False


def is_attacked_by_pawn(square: Square, by_color: Color, position: Position) -> bool:
    """
    Pawns take diagonally
    ----

    NOTE: Pawn moves are not symmetric, so to check IF a white pawn could take on your square -->
    Must look one rank DOWN the board. The vectors are exactly opposite to the ones a pawn uses to capture.
    """
    inverse_pawn_take_deltas: list[Vector] = (
        [(1, -1), (-1, -1)] if by_color == Color.WHITE else [(1, 1), (-1, 1)]
    )
    return single_step_attack(
        square, by_color, PieceType.PAWN, position, inverse_pawn_take_deltas
    )


def is_attacked_by_knight(square: Square, by_color: Color, position: Position) -> bool:
    return single_step_attack(square, by_color, PieceType.KNIGHT, position, KNIGHT_DELTAS)


def is_attacked_on_diagonal(square: Square, by_color: Color, position: Position) -> bool:
    """Bishops and the Queen"""
    return raycasting_attack(
        square, by_color, (PieceType.BISHOP, PieceType.QUEEN), position, DIAGONALS
    )


def is_attacked_on_straight(square: Square, by_color: Color, position: Position) -> bool:
    """Rooks and the Queen"""
    return raycasting_attack(
        square, by_color, (PieceType.ROOK, PieceType.QUEEN), position, STRAIGHTS
    )


def is_attacked_by_king(square: Square, by_color: Color, position: Position) -> bool:
    """Keeps the two kings from ever standing next to each other."""
    return single_step_attack(square, by_color, PieceType.KING, position, KING_DELTAS)


# --- STRATEGY PATTERN: ATTACKING RULES ---
IsAttackedFn = Callable[[Square, Color, Position], bool]
ATTACK_RULES: tuple[IsAttackedFn, ...] = (
    is_attacked_by_pawn,
    is_attacked_by_knight,
    is_attacked_on_diagonal,
    is_attacked_on_straight,
    is_attacked_by_king,
)


def is_square_attacked(square: Square, by_color: Color, position: Position) -> bool:
    return any(rule(square, by_color, position) for rule in ATTACK_RULES)


def is_in_check(position: Position, color: Color) -> bool:
    """Is the king of `color` attacked by any of the opponent's pieces?"""
    king_square = position.king_square(color)
    return is_square_attacked(king_square, color.opponent, position)
