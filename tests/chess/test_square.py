"""Unit tests for /src/chess/square.py"""

from string import ascii_lowercase

import pytest

from src.chess.square import BOARD_DIMENSIONS, Square, difference
from src.core.exceptions import MalformedSquareError


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_creating_from_algebraic(file: int, rank: int, notation: str) -> None:
    """Simply checks if the notation for 'a1' indeed maps to file 0, rank 0, etc."""
    square = Square.from_algebraic(notation)
    assert square.file == file
    assert square.rank == rank


@pytest.mark.parametrize(
    "file, rank, notation",
    [
        (file, rank, f"{ascii_lowercase[file]}{rank + 1}")
        for file in range(8)
        for rank in range(8)
    ],
)
def test_to_algebraic_notation(file: int, rank: int, notation: str) -> None:
    """Test the reverse, so the square on the 1st file and 1st rank should be denoted as a1"""
    square = Square(file, rank)
    assert square.to_algebraic() == notation
    assert str(square) == notation


@pytest.mark.parametrize("notation", ["", "e", "i1", "a0", "a9", "e44", "E4", "4e", "ee", "a²", "e٣"])
def test_malformed_square(notation: str) -> None:
    with pytest.raises(MalformedSquareError):
        Square.from_algebraic(notation)


def test_malformed_square_is_a_value_error() -> None:
    """Lets callers (and pydantic validators) treat it as plain bad input."""
    with pytest.raises(ValueError):
        Square.from_algebraic("z1")


def test_square_within_bounds() -> None:
    """happy case: squares within the dimensions of the board"""
    for file in range(BOARD_DIMENSIONS[0]):
        for rank in range(BOARD_DIMENSIONS[1]):
            square = Square(file, rank)
            assert square.is_within_bounds()


def test_square_out_of_bounds() -> None:
    square = Square(BOARD_DIMENSIONS[0], BOARD_DIMENSIONS[1])
    assert not square.is_within_bounds()

    square = Square(-1, -1)
    assert not square.is_within_bounds()


@pytest.mark.parametrize("file, rank", [(8, 0), (0, 8), (-1, 3), (3, -1), (42, 42)])
def test_from_file_rank_off_the_board(file: int, rank: int) -> None:
    """Off the board is no error, just 'no square'"""
    assert Square.from_file_rank(file, rank) is None


def test_from_file_rank_on_the_board() -> None:
    assert Square.from_file_rank(4, 3) == Square.from_algebraic("e4")


@pytest.mark.parametrize(
    "start, file_delta, rank_delta, expected",
    [
        ("e4", 1, 1, "f5"),
        ("e4", -4, -3, "a1"),
        ("b1", 1, 2, "c3"),
        ("h8", 1, 0, None),
        ("a1", -1, -1, None),
        ("a1", 0, 8, None),
    ],
)
def test_shifted(start: str, file_delta: int, rank_delta: int, expected: str | None) -> None:
    shifted = Square.from_algebraic(start).shifted(file_delta, rank_delta)
    if expected is None:
        assert shifted is None
    else:
        assert shifted == Square.from_algebraic(expected)


def test_difference() -> None:
    """a - b: how many files/ranks to go from b to a"""
    e4 = Square.from_algebraic("e4")
    c3 = Square.from_algebraic("c3")
    assert difference(e4, c3) == (2, 1)
    assert c3.difference(e4) == (-2, -1)
    assert e4.difference(e4) == (0, 0)


def test_square_is_immutable_value() -> None:
    """Squares are used as dictionary keys. Two squares with the same coordinates are the same square."""
    assert Square(4, 3) == Square.from_algebraic("e4")
    assert len({Square(4, 3), Square.from_algebraic("e4")}) == 1
