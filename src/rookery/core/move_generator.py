"""Legal and pseudo-legal move enumeration."""

from __future__ import annotations

from rookery.core.applier import apply
from rookery.core.attacks import (
    BISHOP_DIRS,
    KING_OFFSETS,
    KNIGHT_OFFSETS,
    QUEEN_DIRS,
    ROOK_DIRS,
    is_king_in_check,
)
from rookery.core.board import Board
from rookery.core.context import MoveContext
from rookery.core.enums import Color, PieceType
from rookery.core.move import Move
from rookery.core.move_rules import is_pseudo_legal
from rookery.core.piece import Piece
from rookery.core.types import Square

PROMOTION_KINDS: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)

_SLIDER_DIRS: dict[PieceType, tuple[tuple[int, int], ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


def _candidate_targets(piece: Piece, sq: Square) -> list[Square]:
    """Squares matching the piece's geometry, before any occupancy checks."""
    targets: list[Square] = []
    kind = piece.kind

    if kind in _SLIDER_DIRS:
        for d_row, d_col in _SLIDER_DIRS[kind]:
            cur = sq.offset(d_row, d_col)
            while cur is not None:
                targets.append(cur)
                cur = cur.offset(d_row, d_col)
        return targets

    if kind == PieceType.KNIGHT:
        offsets: tuple[tuple[int, int], ...] = KNIGHT_OFFSETS
    elif kind == PieceType.KING:
        offsets = KING_OFFSETS + ((0, -2), (0, 2))
    else:
        fwd = piece.color.forward
        offsets = ((fwd, 0), (2 * fwd, 0), (fwd, -1), (fwd, 1))

    for d_row, d_col in offsets:
        cur = sq.offset(d_row, d_col)
        if cur is not None:
            targets.append(cur)
    return targets


class MoveGenerator:
    """Enumerates moves for a board and its :class:`MoveContext`.

    Look-ahead uses the immutable boards returned by the applier, so the
    inputs are never touched.
    """

    __slots__ = ("_board", "_context")

    def __init__(self, board: Board, context: MoveContext) -> None:
        self._board = board
        self._context = context

    # -- Public API ---------------------------------------------------------

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        """All pseudo-legal moves (may leave own king in check).

        Ordered by origin, then destination, both row-major. A pawn move onto
        the last rank yields one move per promotion kind.
        """
        board = self._board
        context = self._context
        moves: list[Move] = []
        for from_sq, piece in board.occupied(color):
            for to_sq in sorted(_candidate_targets(piece, from_sq)):
                if not is_pseudo_legal(piece, from_sq, to_sq, board, context):
                    continue
                if piece.kind == PieceType.PAWN and to_sq.row == color.promotion_row:
                    for kind in PROMOTION_KINDS:
                        moves.append(Move(from_sq, to_sq, piece, kind))
                else:
                    moves.append(Move(from_sq, to_sq, piece))
        return moves

    def generate_legal_moves(self, color: Color) -> list[Move]:
        """All moves for *color* that do not leave its own king in check."""
        return [
            move
            for move in self.generate_pseudo_legal_moves(color)
            if self.is_king_safe_after(move)
        ]

    def is_king_safe_after(self, move: Move) -> bool:
        """Would the mover's king be out of check after *move*?"""
        next_board, _ = apply(self._board, move, self._context)
        return not is_king_in_check(move.piece.color, next_board)

    def is_in_check(self, color: Color) -> bool:
        return is_king_in_check(color, self._board)
