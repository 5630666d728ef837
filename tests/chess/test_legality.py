"""Unit tests for /src/chess/legality.py"""

import pytest

from src.chess.attacks import is_in_check
from src.chess.castling import CastlingRights
from src.chess.legality import gives_check, is_legal, legal_moves
from src.chess.moves import Move
from src.chess.pieces import PieceType
from src.chess.position import Position
from src.chess.square import Square
from src.core.shared_types import Color


def sq(name: str) -> Square:
    return Square.from_algebraic(name)


def test_starting_position() -> None:
    moves = legal_moves(Position.starting(), Color.WHITE, None, CastlingRights.BOTH)
    assert len(moves) == 20
    notations = {move.notation for move in moves}
    assert {"e4", "e3", "Nf3", "Nc3", "Na3", "Nh3"} <= notations


def test_pinned_piece_cannot_move() -> None:
    """Knight on e2 is pinned by the rook on e7: moving it would expose the king"""
    position = Position.from_fen("4k3/4r3/8/8/8/8/4N3/4K3")
    moves = legal_moves(position, Color.WHITE, None, CastlingRights.NONE)
    assert not any(move.from_square == sq("e2") for move in moves)
    assert not is_legal(position, Move(PieceType.KNIGHT, sq("e2"), sq("c3")), Color.WHITE)


def test_must_get_out_of_check() -> None:
    """The rook on a1 cannot block the e-file, so only king moves are left (and not along the e-file)"""
    position = Position.from_fen("4k3/4r3/8/8/8/8/8/R3K3")
    moves = legal_moves(position, Color.WHITE, None, CastlingRights.BOTH)
    assert {move.to_uci() for move in moves} == {"e1d1", "e1d2", "e1f1", "e1f2"}


def test_king_cannot_step_next_to_the_other_king() -> None:
    position = Position.from_fen("8/8/8/4k3/8/4K3/8/8")
    moves = legal_moves(position, Color.WHITE, None, CastlingRights.NONE)
    destinations = {move.to_square.to_algebraic() for move in moves}
    assert destinations == {"d2", "e2", "f2", "d3", "f3"}


def test_no_move_leaves_own_king_in_check() -> None:
    """Closure: after any legal move, the mover is never in check"""
    position = Position.from_fen("r3k2r/ppp2ppp/2n1bn2/3qp3/1b1P4/2N1BN2/PPPQ1PPP/R3KB1R")
    for color in Color:
        for move in legal_moves(position, color, None, CastlingRights.BOTH):
            assert not is_in_check(position.apply_move(move), color)


def test_check_flag() -> None:
    position = Position.from_fen("4k3/8/8/8/8/8/8/R3K3")
    moves = {move.to_uci(): move for move in legal_moves(position, Color.WHITE, None, CastlingRights.NONE)}
    assert moves["a1a8"].is_check
    assert moves["a1a8"].notation == "Ra8+"
    assert not moves["a1a7"].is_check


def test_discovered_check_is_flagged() -> None:
    """The bishop does not give check itself, but moving it away opens up the e-file for the rook"""
    position = Position.from_fen("4k3/8/8/8/8/8/4B3/4R2K")
    bishop_moves = [
        move
        for move in legal_moves(position, Color.WHITE, None, CastlingRights.NONE)
        if move.piece == PieceType.BISHOP
    ]
    assert bishop_moves
    assert all(move.is_check for move in bishop_moves)
    assert all(move.notation.endswith("+") for move in bishop_moves)


@pytest.mark.parametrize(
    "fen, uci, expected",
    [
        ("4k3/8/8/8/8/8/8/R3K3", "a1a8", True),
        ("4k3/8/8/8/8/8/8/R3K3", "a1a7", False),
        ("4k3/8/8/8/8/8/4B3/4R2K", "e2d3", True),
    ],
)
def test_gives_check(fen: str, uci: str, expected: bool) -> None:
    position = Position.from_fen(fen)
    mover = position.piece(sq(uci[:2]))
    move = Move(mover.type, sq(uci[:2]), sq(uci[2:]))
    assert gives_check(position, move, Color.WHITE) == expected


def test_disambiguation_of_legal_moves() -> None:
    """Knights on b1, f1 and f3 can all reach d2. Only the ones on f1 / f3 reach h2"""
    position = Position.from_fen("7k/8/8/8/8/5N2/8/1N3N1K")
    moves = legal_moves(position, Color.WHITE, None, CastlingRights.NONE)
    notations = {move.notation for move in moves}
    assert {"Nb1d2", "Nf1d2", "Nf3d2"} <= notations
    assert {"N1h2", "N3h2"} <= notations
    assert "Ng3" in notations


def test_notation_is_unique() -> None:
    position = Position.from_fen("7k/8/8/8/8/5N2/8/1N3N1K")
    moves = legal_moves(position, Color.WHITE, None, CastlingRights.NONE)
    notations = [move.notation for move in moves]
    assert len(notations) == len(set(notations))


def test_black_promotes_on_the_first_rank() -> None:
    """Queen and rook on e1 check the king on a1 along the first rank, bishop and knight do not"""
    position = Position.from_fen("k7/8/8/8/8/8/4p3/K7")
    moves = legal_moves(position, Color.BLACK, None, CastlingRights.NONE)
    promotions = [move for move in moves if move.from_square == sq("e2")]
    assert [move.promote_to for move in promotions] == [
        PieceType.QUEEN,
        PieceType.ROOK,
        PieceType.BISHOP,
        PieceType.KNIGHT,
    ]
    assert {move.notation for move in promotions} == {"e1=Q+", "e1=R+", "e1=B", "e1=N"}
