"""Square value and coordinate helpers.

Board layout (row-major, from black's side):
    a8=(0, 0), b8=(0, 1), ..., h8=(0, 7)
    ...
    a1=(7, 0), b1=(7, 1), ..., h1=(7, 7)
"""

from __future__ import annotations

from typing import NamedTuple

from rookery.core.errors import ParseError

_FILES = "abcdefgh"
_RANKS = "12345678"


class Square(NamedTuple):
    """A (row, col) board coordinate; row 0 is rank 8."""

    row: int
    col: int

    @property
    def flat(self) -> int:
        """Flat 0–63 index used by :class:`~rookery.core.board.Board`."""
        return self.row * 8 + self.col

    @property
    def name(self) -> str:
        return square_name(self)

    @property
    def is_valid(self) -> bool:
        """Both coordinates lie in 0..7."""
        return is_on_board(self.row, self.col)

    def offset(self, d_row: int, d_col: int) -> Square | None:
        """Square shifted by the given deltas, or ``None`` off the board."""
        row = self.row + d_row
        col = self.col + d_col
        if is_on_board(row, col):
            return Square(row, col)
        return None

    def __str__(self) -> str:
        return square_name(self)


def is_on_board(row: int, col: int) -> bool:
    return 0 <= row < 8 and 0 <= col < 8


def square_name(sq: Square) -> str:
    """Algebraic name, e.g. (6, 4) → 'e2'; raises ``ParseError`` off the board."""
    if not is_on_board(sq.row, sq.col):
        raise ParseError(f"Square off the board: ({sq.row}, {sq.col})")
    return _FILES[sq.col] + str(8 - sq.row)


def parse_square(name: str) -> Square:
    """Parse an algebraic square name, e.g. 'e4' → (4, 4)."""
    if len(name) != 2:
        raise ParseError(f"Invalid square name: {name!r}")
    file_char = name[0].lower()
    rank_char = name[1]
    if file_char not in _FILES or rank_char not in _RANKS:
        raise ParseError(f"Invalid square name: {name!r}")
    return Square(8 - int(rank_char), _FILES.index(file_char))


def square_at(index: int) -> Square:
    """Inverse of :attr:`Square.flat`."""
    return Square(index >> 3, index & 7)


ALL_SQUARES: tuple[Square, ...] = tuple(square_at(i) for i in range(64))

# ── Named square constants ──────────────────────────────────────────────────

A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[0:8]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[8:16]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[16:24]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[24:32]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[32:40]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[40:48]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[48:56]
A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[56:64]
