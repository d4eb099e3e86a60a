"""Move context: castling rights and en-passant state carried between plies."""

from __future__ import annotations

from dataclasses import dataclass, replace

from rookery.core.enums import Color
from rookery.core.types import Square


@dataclass(frozen=True, slots=True)
class CastlingRights:
    """Castling bookkeeping for one color.

    Flags only ever go from ``False`` to ``True``. A rook captured on its
    home square is recorded as moved.
    """

    king_moved: bool = False
    a_rook_moved: bool = False
    h_rook_moved: bool = False

    @property
    def kingside(self) -> bool:
        """Castling toward the h-file is still available."""
        return not (self.king_moved or self.h_rook_moved)

    @property
    def queenside(self) -> bool:
        """Castling toward the a-file is still available."""
        return not (self.king_moved or self.a_rook_moved)

    @classmethod
    def lost(cls) -> CastlingRights:
        return cls(king_moved=True, a_rook_moved=True, h_rook_moved=True)


@dataclass(frozen=True, slots=True)
class EnPassantState:
    """The previous ply's pawn advance, valid for the next ply only."""

    from_sq: Square
    to_sq: Square
    double_step: bool = True

    @property
    def target(self) -> Square | None:
        """Square a capturing pawn lands on, if the advance allows it."""
        if not self.double_step:
            return None
        return Square((self.from_sq.row + self.to_sq.row) // 2, self.to_sq.col)


@dataclass(frozen=True, slots=True)
class MoveContext:
    """Everything beyond piece placement that move legality depends on."""

    white_castling: CastlingRights = CastlingRights()
    black_castling: CastlingRights = CastlingRights()
    en_passant: EnPassantState | None = None

    def castling(self, color: Color) -> CastlingRights:
        return self.white_castling if color == Color.WHITE else self.black_castling

    def with_castling(self, color: Color, rights: CastlingRights) -> MoveContext:
        if color == Color.WHITE:
            return replace(self, white_castling=rights)
        return replace(self, black_castling=rights)

    def with_en_passant(self, en_passant: EnPassantState | None) -> MoveContext:
        return replace(self, en_passant=en_passant)

    @property
    def en_passant_target(self) -> Square | None:
        if self.en_passant is None:
            return None
        return self.en_passant.target
