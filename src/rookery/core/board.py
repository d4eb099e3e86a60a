"""Board - immutable piece placement on an 8x8 grid."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

from rookery.core.enums import Color, PieceType
from rookery.core.errors import NoKingError, ParseError
from rookery.core.piece import Piece
from rookery.core.types import ALL_SQUARES, Square, is_on_board

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


def _index(sq: Square) -> int:
    row, col = sq
    if not is_on_board(row, col):
        raise ParseError(f"Square off the board: ({row}, {col})")
    return row * 8 + col


class Board:
    """Immutable 64-square board indexed by :class:`Square`.

    Every edit goes through :meth:`updated`, which returns a new board, so
    scratch boards built during look-ahead never alias the game's board.
    """

    __slots__ = ("_squares", "_hash")

    def __init__(self, squares: tuple[Piece | None, ...] | None = None) -> None:
        if squares is None:
            squares = (None,) * 64
        elif len(squares) != 64:
            raise ValueError(f"Board needs 64 squares, got {len(squares)}")
        self._squares: tuple[Piece | None, ...] = tuple(squares)
        self._hash: int | None = None

    # -- Element access -----------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        return self._squares[_index(sq)]

    def is_empty(self, sq: Square) -> bool:
        return self._squares[_index(sq)] is None

    # -- Query helpers ------------------------------------------------------

    def occupied(self, color: Color | None = None) -> Iterator[tuple[Square, Piece]]:
        """(square, piece) pairs in row-major order, optionally for one color."""
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece is None:
                continue
            if color is None or piece.color == color:
                yield sq, piece

    def pieces(self, color: Color, kind: PieceType) -> list[Square]:
        """Squares occupied by *color*'s pieces of *kind*."""
        target = Piece(color, kind)
        return [sq for sq, piece in zip(ALL_SQUARES, self._squares) if piece == target]

    def king_square(self, color: Color) -> Square:
        """Return the king square for *color*."""
        king = Piece(color, PieceType.KING)
        for sq, piece in zip(ALL_SQUARES, self._squares):
            if piece == king:
                return sq
        raise NoKingError(f"No {color.name} king on board")

    # -- Derivation ---------------------------------------------------------

    def updated(self, changes: Mapping[Square, Piece | None]) -> Board:
        """New board with *changes* applied; ``None`` empties a square."""
        squares = list(self._squares)
        for sq, piece in changes.items():
            squares[_index(sq)] = piece
        return Board(tuple(squares))

    # -- Factory ------------------------------------------------------------

    @classmethod
    def empty(cls) -> Board:
        return cls()

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        squares: list[Piece | None] = [None] * 64
        for col, kind in enumerate(_BACK_RANK):
            squares[col] = Piece(Color.BLACK, kind)
            squares[56 + col] = Piece(Color.WHITE, kind)
        for col in range(8):
            squares[8 + col] = Piece(Color.BLACK, PieceType.PAWN)
            squares[48 + col] = Piece(Color.WHITE, PieceType.PAWN)
        return cls(tuple(squares))

    @classmethod
    def from_pieces(cls, placement: Mapping[Square, Piece]) -> Board:
        """Board holding exactly the pieces in *placement*."""
        return cls().updated(placement)

    # -- Dunder helpers -----------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._squares == other._squares

    def __hash__(self) -> int:
        if self._hash is None:
            self._hash = hash(self._squares)
        return self._hash

    def __repr__(self) -> str:
        rows: list[str] = []
        for row in range(8):
            cells = []
            for col in range(8):
                p = self._squares[row * 8 + col]
                cells.append(str(p) if p else ".")
            rows.append(f"{8 - row} {' '.join(cells)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
