"""Attack detection: is a square (or a king) attacked by a side?

Attack patterns are evaluated directly instead of asking the move rules, so
king-attacks-king is a fixed-radius lookup and never recurses into castling
checks.
"""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.types import Square

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (-2, -1),
    (-2, 1),
    (-1, -2),
    (-1, 2),
    (1, -2),
    (1, 2),
    (2, -1),
    (2, 1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, -1),
    (0, 1),
    (1, -1),
    (1, 0),
    (1, 1),
)

BISHOP_DIRS: tuple[tuple[int, int], ...] = ((-1, -1), (-1, 1), (1, -1), (1, 1))
ROOK_DIRS: tuple[tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))
QUEEN_DIRS: tuple[tuple[int, int], ...] = BISHOP_DIRS + ROOK_DIRS

_DIAGONAL_ATTACKERS = (PieceType.BISHOP, PieceType.QUEEN)
_LINE_ATTACKERS = (PieceType.ROOK, PieceType.QUEEN)


def _ray_hits(
    board: Board,
    sq: Square,
    directions: tuple[tuple[int, int], ...],
    by_color: Color,
    kinds: tuple[PieceType, ...],
) -> bool:
    for d_row, d_col in directions:
        cur = sq.offset(d_row, d_col)
        while cur is not None:
            piece = board[cur]
            if piece is not None:
                if piece.color == by_color and piece.kind in kinds:
                    return True
                break
            cur = cur.offset(d_row, d_col)
    return False


def _offset_hits(
    board: Board,
    sq: Square,
    offsets: tuple[tuple[int, int], ...],
    by_color: Color,
    kind: PieceType,
) -> bool:
    for d_row, d_col in offsets:
        cur = sq.offset(d_row, d_col)
        if cur is None:
            continue
        piece = board[cur]
        if piece is not None and piece.color == by_color and piece.kind == kind:
            return True
    return False


def is_square_attacked(sq: Square, by_color: Color, board: Board) -> bool:
    """Is *sq* attacked by any piece of *by_color*?

    Occupancy of *sq* itself is ignored: pawns attack their diagonals whether
    or not something stands there.
    """
    # A pawn of by_color attacks sq from one row "behind" it.
    behind = -by_color.forward
    for d_col in (-1, 1):
        cur = sq.offset(behind, d_col)
        if cur is None:
            continue
        piece = board[cur]
        if piece is not None and piece.color == by_color and piece.kind == PieceType.PAWN:
            return True

    if _offset_hits(board, sq, KNIGHT_OFFSETS, by_color, PieceType.KNIGHT):
        return True
    if _offset_hits(board, sq, KING_OFFSETS, by_color, PieceType.KING):
        return True
    if _ray_hits(board, sq, BISHOP_DIRS, by_color, _DIAGONAL_ATTACKERS):
        return True
    return _ray_hits(board, sq, ROOK_DIRS, by_color, _LINE_ATTACKERS)


def is_king_in_check(color: Color, board: Board) -> bool:
    """Is *color*'s king attacked by the opponent?

    Raises :class:`~rookery.core.errors.NoKingError` if *color* has no king.
    """
    return is_square_attacked(board.king_square(color), color.opposite, board)
