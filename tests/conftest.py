"""
Pytest will auto-discover / import this file called 'conftest.py'.
This file defines fixtures required for testing multiple modules.
"""

import pytest

from src.chess.game import ChessGame

# 1.e4 e5 2.Nf3 Nc6 3.Bc4 Nf6: both sides are one move away from castling short
ITALIAN_GAME_UCI = ["e2e4", "e7e5", "g1f3", "b8c6", "f1c4", "g8f6"]

# 1.e4 e5 2.Bc4 Nc6 3.Qh5 Nf6 4.Qxf7#
SCHOLARS_MATE_UCI = ["e2e4", "e7e5", "f1c4", "b8c6", "d1h5", "g8f6", "h5f7"]


def play(game: ChessGame, moves_uci: list[str]) -> ChessGame:
    """Convenience: play a list of UCI moves on the game."""
    for uci in moves_uci:
        game.make_uci_move(uci)
    return game


@pytest.fixture
def new_game() -> ChessGame:
    return ChessGame()


@pytest.fixture
def italian_game() -> ChessGame:
    return play(ChessGame(), ITALIAN_GAME_UCI)
