"""
The ChessGame class is the entrypoint into the engine for its callers (UI, persistence, ...).
It is responsible for orchestrating everything required to play a move -->
keeps the history of positions / moves / castling rights, and hands out a fresh GameState after every move.
"""

import logging
from types import MappingProxyType
from typing import NoReturn, Optional, Self, Sequence

from src.chess.attacks import is_in_check
from src.chess.castling import (
    INITIAL_CASTLING_RIGHTS,
    CastlingRights,
    home_rook_side,
)
from src.chess.game_state import GameState
from src.chess.legality import legal_moves
from src.chess.moves import Move, parse_uci
from src.chess.pieces import Piece, PieceType
from src.chess.position import Position
from src.chess.square import Square
from src.core.exceptions import (
    EngineInvariantError,
    GameStateError,
    InvalidFENError,
    MoveNotAvailableError,
)
from src.core.models import MoveRecord, SavedGameState
from src.core.shared_types import Color, Status

logger = logging.getLogger(__name__)


def side_to_move(ply: int) -> Color:
    """White moves on even plies, Black on odd ones."""
    return Color.WHITE if ply % 2 == 0 else Color.BLACK


def compute_game_state(
    positions: Sequence[Position],
    moves: Sequence[Move],
    castling_rights: dict[Color, CastlingRights],
) -> GameState:
    """
    Everything a caller wants to know about the game, derived from the history alone.
    ----

    NOTE: no caching anywhere. Called again after every move.
    """
    if len(positions) != len(moves) + 1:
        raise EngineInvariantError(
            f"History out of sync: {len(positions)} positions for {len(moves)} moves."
        )

    position = positions[-1]
    color = side_to_move(len(moves))
    last_move = moves[-1] if moves else None

    available: dict[Square, list[Move]] = {}
    for move in legal_moves(position, color, last_move, castling_rights[color]):
        available.setdefault(move.from_square, []).append(move)

    in_check = is_in_check(position, color)
    status = Status.IN_PROGRESS
    if not available:
        status = Status.CHECKMATE if in_check else Status.STALEMATE

    return GameState(
        side_to_move=color,
        available_moves=MappingProxyType(
            {square: tuple(square_moves) for square, square_moves in available.items()}
        ),
        position=position,
        moves=tuple(moves),
        is_check=in_check,
        status=status,
    )


def revoke_castling_rights(
    castling_rights: dict[Color, CastlingRights],
    move: Move,
    color: Color,
    position: Position,
) -> dict[Color, CastlingRights]:
    """
    Checks which rights should get revoked (`position` is the one BEFORE the move)
    ----

    1. If you are moving your king (castling included) --> revoke both
    2. If you are moving a rook away from its home square --> revoke the right for that side
    3. If you take your opponent's rook on its home square --> revoke your opponent's right for that side
    """
    updated = dict(castling_rights)

    # 1: Revoke all your rights if you move your king.
    if move.piece == PieceType.KING:
        updated[color] = updated[color].revoke_all()

    # 2: A rook leaving its home square
    if move.piece == PieceType.ROOK:
        side = home_rook_side(color, move.from_square)
        if side is not None:
            updated[color] = updated[color].revoke(side)

    # 3: Capturing the opponent's rook before it ever moved
    opponent = color.opponent
    if position.piece(move.to_square) == Piece(PieceType.ROOK, opponent):
        side = home_rook_side(opponent, move.to_square)
        if side is not None:
            updated[opponent] = updated[opponent].revoke(side)

    return updated


class ChessGame:
    """
    One engine instance per game. Not meant to be shared between threads: callers serialize access.
    """

    def __init__(self, saved_state: Optional[SavedGameState] = None) -> None:
        self._positions: list[Position] = [Position.starting()]
        self._moves: list[Move] = []
        self._castling_rights: dict[Color, CastlingRights] = dict(INITIAL_CASTLING_RIGHTS)
        self._state = self._compute_state()

        if saved_state is not None:
            self._restore(saved_state)

    @classmethod
    def from_json(cls, data: str) -> Self:
        return cls(SavedGameState.model_validate_json(data))

    # --- READ-ONLY VIEWS ---
    @property
    def game_state(self) -> GameState:
        return self._state

    @property
    def position(self) -> Position:
        return self._positions[-1]

    @property
    def positions(self) -> tuple[Position, ...]:
        """Every position of the game. Index 0 is the starting position."""
        return tuple(self._positions)

    @property
    def moves(self) -> tuple[Move, ...]:
        return tuple(self._moves)

    @property
    def castling_rights(self) -> dict[Color, CastlingRights]:
        return dict(self._castling_rights)

    def is_in_check(self, color: Optional[Color] = None) -> bool:
        """Defaults to the side to move."""
        return is_in_check(self.position, color or self._state.side_to_move)

    # --- PLAYING MOVES ---
    def make_move(self, move: Move) -> GameState:
        """
        Play a move picked from `game_state.available_moves`
        -----

        Only the squares and the promotion piece of the submitted move are looked at. The move that gets
        recorded is the engine's own copy (with capture/check flags and notation filled in).
        """
        available_move = self._state.find_move(*move.key)
        if available_move is None:
            self._reject(move.to_uci())
        return self._apply(available_move)

    def make_uci_move(self, uci: str) -> GameState:
        """Convenience method: same as `make_move()` for a move written in UCI notation ('e2e4', 'e7e8q')"""
        available_move = self._state.find_move(*parse_uci(uci))
        if available_move is None:
            self._reject(uci)
        return self._apply(available_move)

    # --- SAVING / RESTORING ---
    def to_saved_state(self) -> SavedGameState:
        """Encode into the format the storage layer uses"""
        last_move = self._state.last_move
        return SavedGameState(
            position=self.position.to_dict(),
            moves=[_to_record(move) for move in self._moves],
            last_move=_to_record(last_move) if last_move else None,
        )

    def to_json(self) -> str:
        return self.to_saved_state().model_dump_json(by_alias=True)

    # -- PRIVATE HELPERS ---
    def _compute_state(self) -> GameState:
        return compute_game_state(self._positions, self._moves, self._castling_rights)

    def _reject(self, uci: str) -> NoReturn:
        color = self._state.side_to_move
        logger.warning("Rejected move %s: not available to %s", uci, color)
        raise MoveNotAvailableError(f"Move not available to {color}: {uci}")

    def _apply(self, move: Move) -> GameState:
        """
        1. update the castling rights (needs the position before the move)
        2. derive the next position
        3. update the history of positions and moves
        4. recompute the game state for the next player
        """
        color = self._state.side_to_move
        position = self.position

        self._castling_rights = revoke_castling_rights(
            self._castling_rights, move, color, position
        )
        self._positions.append(position.apply_move(move))
        self._moves.append(move)
        self._state = self._compute_state()

        logger.debug("ply %d: %s played %s", len(self._moves), color, move.notation)
        if self._state.status != Status.IN_PROGRESS:
            logger.info(
                "Game over after %d plies: %s (%s to move)",
                len(self._moves),
                self._state.status,
                self._state.side_to_move,
            )
        return self._state

    def _restore(self, saved_state: SavedGameState) -> None:
        """
        Replay every saved move from the starting position
        ---

        Replaying (instead of adopting the saved position as is) re-derives the castling rights and the
        position history. The saved position and last move are then only used to double-check the result.
        """
        logger.info("Restoring game from %d saved moves", len(saved_state.moves))
        for ply, record in enumerate(saved_state.moves):
            from_square, to_square, promote_to = _record_key(record)
            move = self._state.find_move(from_square, to_square, promote_to)
            if move is None:
                raise GameStateError(
                    f"Saved move {ply + 1} ({from_square}{to_square}) is not a legal move in the replayed game."
                )
            if move.piece.letter != record.piece:
                raise GameStateError(
                    f"Saved move {ply + 1} ({from_square}{to_square}) is recorded for {record.piece}, "
                    f"but {move.piece.letter} stands on {from_square}."
                )
            self._apply(move)

        try:
            saved_position = Position.from_dict(saved_state.position)
        except InvalidFENError as e:
            raise GameStateError(f"Cannot read saved position: {e}") from e

        if saved_position != self.position:
            raise GameStateError(
                f"Saved position does not match the replayed moves: {saved_position.to_fen()} != {self.position.to_fen()}"
            )

        if saved_state.last_move is not None:
            last_move = self._state.last_move
            if last_move is None or last_move.key != _record_key(saved_state.last_move):
                raise GameStateError("Saved last move does not match the saved move list.")


def _to_record(move: Move) -> MoveRecord:
    return MoveRecord(
        piece=move.piece.letter,
        starting_square=move.from_square.to_algebraic(),
        destination_square=move.to_square.to_algebraic(),
        promotion=move.promote_to.letter if move.promote_to else None,
        notation=move.notation,
        is_capture=move.is_capture,
        is_check=move.is_check,
    )


def _record_key(record: MoveRecord) -> tuple[Square, Square, Optional[PieceType]]:
    return (
        Square.from_algebraic(record.starting_square),
        Square.from_algebraic(record.destination_square),
        PieceType(record.promotion) if record.promotion else None,
    )
