"""Move application: board + move + context → next board and context."""

from __future__ import annotations

from dataclasses import replace

from rookery.core.board import Board
from rookery.core.context import EnPassantState, MoveContext
from rookery.core.enums import Color, PieceType
from rookery.core.errors import IllegalMoveError
from rookery.core.move import Move
from rookery.core.move_rules import A_ROOK_COL, H_ROOK_COL
from rookery.core.piece import Piece
from rookery.core.types import Square

# Home corner → (owner, which rook)
_ROOK_CORNERS: dict[Square, tuple[Color, str]] = {
    Square(Color.WHITE.home_row, A_ROOK_COL): (Color.WHITE, "a_rook_moved"),
    Square(Color.WHITE.home_row, H_ROOK_COL): (Color.WHITE, "h_rook_moved"),
    Square(Color.BLACK.home_row, A_ROOK_COL): (Color.BLACK, "a_rook_moved"),
    Square(Color.BLACK.home_row, H_ROOK_COL): (Color.BLACK, "h_rook_moved"),
}


def apply(board: Board, move: Move, context: MoveContext) -> tuple[Board, MoveContext]:
    """Play *move* on *board* and return the resulting board and context.

    The move is assumed pseudo-legal; only a missing piece on the origin is
    rejected. Side effects of special moves are explicit square edits.
    """
    piece = board[move.from_sq]
    if piece is None:
        raise IllegalMoveError(f"No piece on {move.from_sq}")

    changes: dict[Square, Piece | None] = {move.from_sq: None, move.to_sq: piece}

    if piece.kind == PieceType.PAWN:
        # Diagonal step onto an empty square can only be en passant.
        if move.from_sq.col != move.to_sq.col and board.is_empty(move.to_sq):
            changes[Square(move.from_sq.row, move.to_sq.col)] = None
        if move.to_sq.row == piece.color.promotion_row:
            promotion = move.promotion if move.promotion is not None else PieceType.QUEEN
            changes[move.to_sq] = Piece(piece.color, promotion)

    elif piece.kind == PieceType.KING and move.is_castling:
        row = move.from_sq.row
        if move.to_sq.col > move.from_sq.col:
            rook_from, rook_to = Square(row, H_ROOK_COL), Square(row, move.to_sq.col - 1)
        else:
            rook_from, rook_to = Square(row, A_ROOK_COL), Square(row, move.to_sq.col + 1)
        changes[rook_to] = board[rook_from]
        changes[rook_from] = None

    next_context = _update_castling(context, move, piece)
    next_context = next_context.with_en_passant(_next_en_passant(move, piece))
    return board.updated(changes), next_context


def _update_castling(context: MoveContext, move: Move, piece: Piece) -> MoveContext:
    if piece.kind == PieceType.KING:
        rights = context.castling(piece.color)
        if not rights.king_moved:
            context = context.with_castling(piece.color, replace(rights, king_moved=True))

    # A rook leaving its corner, or anything landing on a corner, ends that right.
    for sq in (move.from_sq, move.to_sq):
        corner = _ROOK_CORNERS.get(sq)
        if corner is None:
            continue
        owner, flag = corner
        rights = context.castling(owner)
        if not getattr(rights, flag):
            context = context.with_castling(owner, replace(rights, **{flag: True}))
    return context


def _next_en_passant(move: Move, piece: Piece) -> EnPassantState | None:
    if piece.kind != PieceType.PAWN:
        return None
    if abs(move.to_sq.row - move.from_sq.row) != 2:
        return None
    return EnPassantState(move.from_sq, move.to_sq, double_step=True)
