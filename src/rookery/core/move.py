"""Move value object (coordinate-notation representation)."""

from __future__ import annotations

from dataclasses import dataclass, replace

from rookery.core.enums import PieceType
from rookery.core.piece import Piece
from rookery.core.types import Square, square_name

PROMOTION_CHARS: dict[PieceType, str] = {
    PieceType.QUEEN: "q",
    PieceType.ROOK: "r",
    PieceType.BISHOP: "b",
    PieceType.KNIGHT: "n",
}


@dataclass(frozen=True, slots=True)
class Move:
    """A candidate move.

    ``piece`` is the piece standing on ``from_sq`` when the move was built.
    ``promotion`` is the requested promotion kind, or ``None`` when nothing
    was requested (a pawn reaching the last rank then becomes a queen).
    """

    from_sq: Square
    to_sq: Square
    piece: Piece
    promotion: PieceType | None = None

    @property
    def is_on_board(self) -> bool:
        return self.from_sq.is_valid and self.to_sq.is_valid

    @property
    def is_pawn_move(self) -> bool:
        return self.piece.kind == PieceType.PAWN

    @property
    def reaches_last_rank(self) -> bool:
        """Pawn move onto the mover's promotion row."""
        return self.is_pawn_move and self.to_sq.row == self.piece.color.promotion_row

    @property
    def is_castling(self) -> bool:
        return (
            self.piece.kind == PieceType.KING
            and self.from_sq.row == self.to_sq.row
            and abs(self.to_sq.col - self.from_sq.col) == 2
        )

    def with_promotion(self, promotion: PieceType | None) -> Move:
        return replace(self, promotion=promotion)

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        base = f"{square_name(self.from_sq)}{square_name(self.to_sq)}"
        if self.promotion is not None:
            base += PROMOTION_CHARS.get(self.promotion, "")
        return base

    @property
    def uci(self) -> str:
        """Coordinate notation, e.g. 'e7e8q'."""
        return str(self)
