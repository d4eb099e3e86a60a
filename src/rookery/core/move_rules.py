"""Per-piece movement rules (pseudo-legality).

A move is pseudo-legal when it fits the piece's movement pattern and the
path/occupancy rules. Whether it leaves the mover's own king in check is the
move generator's concern, except for castling, which may never start from,
pass through or land on an attacked square.
"""

from __future__ import annotations

from collections.abc import Callable

from rookery.core.attacks import is_square_attacked
from rookery.core.board import Board
from rookery.core.context import MoveContext
from rookery.core.enums import Color, PieceType
from rookery.core.piece import Piece
from rookery.core.types import Square

PieceRule = Callable[[Piece, Square, Square, Board, MoveContext], bool]

KING_HOME_COL = 4
A_ROOK_COL = 0
H_ROOK_COL = 7


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


def path_is_clear(from_sq: Square, to_sq: Square, board: Board) -> bool:
    """Every square strictly between two aligned squares is empty."""
    d_row = _sign(to_sq.row - from_sq.row)
    d_col = _sign(to_sq.col - from_sq.col)
    row = from_sq.row + d_row
    col = from_sq.col + d_col
    while (row, col) != (to_sq.row, to_sq.col):
        if not board.is_empty(Square(row, col)):
            return False
        row += d_row
        col += d_col
    return True


# -- Piece rules -------------------------------------------------------------


def pawn_rule(
    piece: Piece, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    forward = piece.color.forward
    d_row = to_sq.row - from_sq.row
    d_col = to_sq.col - from_sq.col
    target = board[to_sq]

    if d_col == 0:
        if target is not None:
            return False
        if d_row == forward:
            return True
        if d_row == 2 * forward and from_sq.row == piece.color.pawn_row:
            return board.is_empty(Square(from_sq.row + forward, from_sq.col))
        return False

    if abs(d_col) != 1 or d_row != forward:
        return False
    if target is not None:
        return target.color != piece.color
    return _is_en_passant_capture(piece, from_sq, to_sq, board, context)


def _is_en_passant_capture(
    piece: Piece, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    ep = context.en_passant
    if ep is None or not ep.double_step or ep.target != to_sq:
        return False
    # The pawn that just advanced must stand beside the capturer.
    if ep.to_sq != Square(from_sq.row, to_sq.col):
        return False
    victim = board[ep.to_sq]
    return (
        victim is not None
        and victim.kind == PieceType.PAWN
        and victim.color != piece.color
    )


def knight_rule(
    piece: Piece, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    d_row = abs(to_sq.row - from_sq.row)
    d_col = abs(to_sq.col - from_sq.col)
    return (d_row, d_col) in ((1, 2), (2, 1))


def bishop_rule(
    piece: Piece, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    if abs(to_sq.row - from_sq.row) != abs(to_sq.col - from_sq.col):
        return False
    return path_is_clear(from_sq, to_sq, board)


def rook_rule(
    piece: Piece, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    if from_sq.row != to_sq.row and from_sq.col != to_sq.col:
        return False
    return path_is_clear(from_sq, to_sq, board)


def queen_rule(
    piece: Piece, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    return rook_rule(piece, from_sq, to_sq, board, context) or bishop_rule(
        piece, from_sq, to_sq, board, context
    )


def king_rule(
    piece: Piece, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    d_row = abs(to_sq.row - from_sq.row)
    d_col = abs(to_sq.col - from_sq.col)
    if max(d_row, d_col) == 1:
        return True
    if d_row == 0 and d_col == 2:
        return can_castle(piece.color, from_sq, to_sq, board, context)
    return False


def can_castle(
    color: Color, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    """Castling preconditions for a king moving two columns along its rank."""
    home_row = color.home_row
    if from_sq != Square(home_row, KING_HOME_COL) or to_sq.row != home_row:
        return False

    rights = context.castling(color)
    kingside = to_sq.col > from_sq.col
    if kingside:
        if not rights.kingside:
            return False
        rook_sq = Square(home_row, H_ROOK_COL)
    else:
        if not rights.queenside:
            return False
        rook_sq = Square(home_row, A_ROOK_COL)

    if board[rook_sq] != Piece(color, PieceType.ROOK):
        return False
    if not path_is_clear(from_sq, rook_sq, board):
        return False

    opponent = color.opposite
    step = 1 if kingside else -1
    crossed = Square(home_row, from_sq.col + step)
    return not any(
        is_square_attacked(sq, opponent, board) for sq in (from_sq, crossed, to_sq)
    )


_RULES: dict[PieceType, PieceRule] = {
    PieceType.PAWN: pawn_rule,
    PieceType.KNIGHT: knight_rule,
    PieceType.BISHOP: bishop_rule,
    PieceType.ROOK: rook_rule,
    PieceType.QUEEN: queen_rule,
    PieceType.KING: king_rule,
}

if set(_RULES) != set(PieceType):
    raise RuntimeError("Every PieceType needs a movement rule")


def is_pseudo_legal(
    piece: Piece, from_sq: Square, to_sq: Square, board: Board, context: MoveContext
) -> bool:
    """Does *piece* on *from_sq* have a pseudo-legal move to *to_sq*?"""
    if from_sq == to_sq:
        return False
    target = board[to_sq]
    if target is not None and target.color == piece.color:
        return False
    return _RULES[piece.kind](piece, from_sq, to_sq, board, context)
