"""
Geometry/Base movement rules

Key idea: Use strategy pattern to define the pseudo-legal destinations for each piece type.
Special moves (en passant, castling, promotion) get their own helpers.

Legality (not leaving your own king in check) is checked later, see legality.py
"""

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from src.chess.attacks import is_in_check
from src.chess.castling import CASTLING_RULES, CastlingRights, CastlingSide, castling_side_of
from src.chess.pieces import FEN_TO_PIECE, PIECE_TO_FEN, PROMOTION_OPTIONS, Piece, PieceType
from src.chess.position import Position
from src.chess.square import (
    BOARD_DIMENSIONS,
    DIAGONALS,
    KING_DELTAS,
    KNIGHT_DELTAS,
    STRAIGHTS,
    Square,
    Vector,
)
from src.core.exceptions import MalformedMoveError
from src.core.shared_types import Color

# White moves UP the board, black moves DOWN
PAWN_DIRECTION: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: -1}
PAWN_START_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: BOARD_DIMENSIONS[1] - 2}
PROMOTION_RANK: dict[Color, int] = {Color.WHITE: BOARD_DIMENSIONS[1] - 1, Color.BLACK: 0}


@dataclass(frozen=True)
class Move:
    """
    A move is a value: together with the position it was generated from, it fully determines the next position.

    `is_capture`, `is_check` and `notation` are derived when the move is generated.
    """

    piece: PieceType
    from_square: Square
    to_square: Square
    promote_to: Optional[PieceType] = None
    is_capture: bool = False
    is_check: bool = False
    notation: str = ""

    @property
    def key(self) -> tuple[Square, Square, Optional[PieceType]]:
        """What identifies the move on the board, regardless of the derived flags."""
        return self.from_square, self.to_square, self.promote_to

    @property
    def castling_side(self) -> Optional[CastlingSide]:
        if self.piece != PieceType.KING:
            return None
        return castling_side_of(self.from_square, self.to_square)

    @property
    def is_castling(self) -> bool:
        return self.castling_side is not None

    @property
    def is_double_pawn_push(self) -> bool:
        return (
            self.piece == PieceType.PAWN
            and abs(self.to_square.rank - self.from_square.rank) == 2
        )

    def to_uci(self) -> str:
        """Convert into UCI notation"""
        piece_char = PIECE_TO_FEN[self.promote_to] if self.promote_to else ""
        return f"{self.from_square.to_algebraic()}{self.to_square.to_algebraic()}{piece_char}"


def parse_uci(uci: str) -> tuple[Square, Square, Optional[PieceType]]:
    """
    Universal Chess Interface:
    ---
    One of the standard chess notations for moves

    examples:
    * "e2e4": move the piece that was on e2 to e4
    * "e7e8q" : (pawn) moves from e7 to e8 and promotes to a queen (the q)
    * "e1g1": the king castles short
    """
    if len(uci) not in (4, 5):
        raise MalformedMoveError(f"Cannot interpret {uci!r} as a UCI move.")

    from_sq = Square.from_algebraic(uci[:2])
    to_sq = Square.from_algebraic(uci[2:4])
    promote_to: Optional[PieceType] = None
    if len(uci) == 5:
        promote_to = FEN_TO_PIECE.get(uci[4].lower())
        if promote_to not in PROMOTION_OPTIONS:
            raise MalformedMoveError(f"Cannot promote to {uci[4]!r} in {uci!r}.")
    return from_sq, to_sq, promote_to


# --- MOVEMENT RULES ---
def raycasting_move(
    square: Square, position: Position, directions: Iterable[Vector]
) -> list[Square]:
    """
    Raycasting algorithm
    -----

    The main trick we use to check the 'line of sight of a piece'.
    We define move directions and move along them until we hit another piece or
    the edge of the board.
    """
    player_color = position.piece(square).color

    destinations: list[Square] = []
    for df, dr in directions:
        target_square = square.shifted(df, dr)
        while target_square is not None:
            piece_found = position.piece(target_square)
            if piece_found is not None:
                # only need to add the first occupied square found if it is the opponent's: then it can be captured.
                if piece_found.color != player_color:
                    destinations.append(target_square)
                break

            destinations.append(target_square)
            target_square = target_square.shifted(df, dr)
    return destinations


def single_step_move(
    square: Square, position: Position, deltas: Iterable[Vector]
) -> list[Square]:
    """Raycasting is for sliding pieces. This is the equivalent for kings and knights that just can move a single step along a direction"""
    player_color = position.piece(square).color
    destinations: list[Square] = []
    for df, dr in deltas:
        target_square = square.shifted(df, dr)
        if target_square is None:
            continue

        if not position.is_color(target_square, player_color):
            destinations.append(target_square)
    return destinations


def candidate_pawn_moves(square: Square, position: Position) -> list[Square]:
    """
    A pawn:
    - moves by a single square forward (only onto an empty square).
    - It can move by two in their first move (so when on their starting rank), both squares must be empty
    - takes diagonally

    NOTE: En passant is handled by `en_passant_destinations()`
    """
    player_color = position.piece(square).color
    forward = PAWN_DIRECTION[player_color]

    destinations: list[Square] = []
    one_step = square.shifted(0, forward)
    if one_step is not None and position.is_empty(one_step):
        destinations.append(one_step)
        two_steps = one_step.shifted(0, forward)
        on_start_rank = square.rank == PAWN_START_RANK[player_color]
        if on_start_rank and two_steps is not None and position.is_empty(two_steps):
            destinations.append(two_steps)

    # pawns take diagonally:
    for df in (-1, 1):
        target_square = square.shifted(df, forward)
        if target_square is not None and position.is_color(
            target_square, player_color.opponent
        ):
            destinations.append(target_square)
    return destinations


def candidate_knight_moves(square: Square, position: Position) -> list[Square]:
    """Knights always move such that |delta_rank| + |delta_file| = 3"""
    return single_step_move(square, position, KNIGHT_DELTAS)


def candidate_bishop_moves(square: Square, position: Position) -> list[Square]:
    """Bishops move diagonally: |delta_rank| = |delta_file|"""
    return raycasting_move(square, position, DIAGONALS)


def candidate_rook_moves(square: Square, position: Position) -> list[Square]:
    """Rooks move either horizontally or vertically"""
    return raycasting_move(square, position, STRAIGHTS)


def candidate_queen_moves(square: Square, position: Position) -> list[Square]:
    """
    The Queen combines the rook moves (horizontal + vertical movements) and bishop moves (diagonal movement)
    """
    return raycasting_move(square, position, STRAIGHTS + DIAGONALS)


def candidate_king_moves(square: Square, position: Position) -> list[Square]:
    """
    The king can move by a single square at the time.

    Castling is modelled as a special king move (handled by `castling_destinations()`).
    """
    return single_step_move(square, position, KING_DELTAS)


# -- STRATEGY PATTERN: MOVEMENT RULES ---
CandidateMovesFn = Callable[[Square, Position], list[Square]]
MOVEMENT_RULES: dict[PieceType, CandidateMovesFn] = {
    PieceType.PAWN: candidate_pawn_moves,
    PieceType.KNIGHT: candidate_knight_moves,
    PieceType.BISHOP: candidate_bishop_moves,
    PieceType.ROOK: candidate_rook_moves,
    PieceType.QUEEN: candidate_queen_moves,
    PieceType.KING: candidate_king_moves,
}


# -- EN PASSANT MOVES ---
def en_passant_destinations(
    square: Square, position: Position, last_move: Optional[Move]
) -> list[Square]:
    """
    Only right after the opponent pushed a pawn by two squares, landing right next to our pawn.
    We then take it as if it had moved by one: the destination is the square it skipped.
    """
    if last_move is None or not last_move.is_double_pawn_push:
        return []

    player_color = position.piece(square).color
    opponent_pawn = Piece(PieceType.PAWN, player_color.opponent)
    if position.piece(last_move.to_square) != opponent_pawn:
        return []

    file_delta, rank_delta = last_move.to_square.difference(square)
    if rank_delta != 0 or abs(file_delta) != 1:
        return []

    skipped_rank = (last_move.from_square.rank + last_move.to_square.rank) // 2
    return [Square(last_move.to_square.file, skipped_rank)]


# -- CASTLING MOVES ---
def castling_destinations(
    square: Square, position: Position, castling_rights: CastlingRights
) -> list[Square]:
    """
    You are allowed to castle if
    ---

    * Castling rights for that side are not yet revoked (and king / rook are on their home squares).
    * You are not currently in check (you cannot castle out of check).
    * Every square in between the king and the rook is empty.
    * The king does not pass over or land on an attacked square.
    """
    king = position.piece(square)
    if castling_rights == CastlingRights.NONE or is_in_check(position, king.color):
        return []

    destinations: list[Square] = []
    for side in castling_rights.sides():
        rule = CASTLING_RULES[(king.color, side)]
        if square != rule.king_from:
            continue

        if position.piece(rule.rook_from) != Piece(PieceType.ROOK, king.color):
            continue

        if not all(position.is_empty(s) for s in rule.squares_between()):
            continue

        # put the king on each square along the way, and see if it would be in check there
        without_king = position.updated(remove=[square])
        if any(
            is_in_check(without_king.updated(place={step: king}), king.color)
            for step in rule.king_path()
        ):
            continue

        destinations.append(rule.king_to)
    return destinations


# -- PAWN PROMOTION MOVES --
def is_promotion_square(square: Square, color: Color) -> bool:
    return square.rank == PROMOTION_RANK[color]


def with_promotions(pawn_move: Move) -> list[Move]:
    """Return multiple copies of the pawn move with the piece type to promote into filled in."""
    return [
        Move(
            piece=pawn_move.piece,
            from_square=pawn_move.from_square,
            to_square=pawn_move.to_square,
            promote_to=piece_type,
            is_capture=pawn_move.is_capture,
        )
        for piece_type in PROMOTION_OPTIONS
    ]


def pseudo_legal_moves(
    position: Position,
    color: Color,
    last_move: Optional[Move],
    castling_rights: CastlingRights,
) -> list[Move]:
    """
    Before knowing the set of legal moves, we use the movement rules to find candidate moves,
    which will later be tested for legality (making sure it does not put yourself in check.)
    """
    candidate_moves: list[Move] = []
    for starting_square in position.squares_of(color):
        piece_type = position.piece(starting_square).type
        movement_rule: CandidateMovesFn = MOVEMENT_RULES[piece_type]
        destinations = movement_rule(starting_square, position)

        if piece_type == PieceType.PAWN:
            destinations += en_passant_destinations(starting_square, position, last_move)
        if piece_type == PieceType.KING:
            destinations += castling_destinations(starting_square, position, castling_rights)

        for destination in destinations:
            move = Move(
                piece=piece_type,
                from_square=starting_square,
                to_square=destination,
                is_capture=_is_capture(position, piece_type, starting_square, destination),
            )
            if piece_type == PieceType.PAWN and is_promotion_square(destination, color):
                candidate_moves.extend(with_promotions(move))
            else:
                candidate_moves.append(move)
    return candidate_moves


def _is_capture(
    position: Position, piece_type: PieceType, from_square: Square, to_square: Square
) -> bool:
    """An occupied destination is always an opponent's piece here. A pawn moving sideways onto an empty square takes en passant."""
    if not position.is_empty(to_square):
        return True
    return piece_type == PieceType.PAWN and from_square.file != to_square.file
