"""Piece value object."""

from __future__ import annotations

from dataclasses import dataclass

from rookery.core.enums import Color, PieceType

# Lowercase FEN letter and (white, black) glyphs per kind
_KIND_CHARS: dict[PieceType, tuple[str, str, str]] = {
    PieceType.PAWN: ("p", "♙", "♟"),
    PieceType.KNIGHT: ("n", "♘", "♞"),
    PieceType.BISHOP: ("b", "♗", "♝"),
    PieceType.ROOK: ("r", "♖", "♜"),
    PieceType.QUEEN: ("q", "♕", "♛"),
    PieceType.KING: ("k", "♔", "♚"),
}


def _fen_char(color: Color, kind: PieceType) -> str:
    letter = _KIND_CHARS[kind][0]
    return letter.upper() if color == Color.WHITE else letter


_FROM_FEN: dict[str, tuple[Color, PieceType]] = {
    _fen_char(color, kind): (color, kind) for color in Color for kind in PieceType
}


@dataclass(frozen=True, slots=True)
class Piece:
    """A color and a kind. Two pieces are equal when both match."""

    color: Color
    kind: PieceType

    def __str__(self) -> str:
        """FEN letter: uppercase for white, lowercase for black."""
        return _fen_char(self.color, self.kind)

    @classmethod
    def from_char(cls, char: str) -> Piece:
        """Piece for a FEN letter; raises ``ValueError`` for anything else."""
        entry = _FROM_FEN.get(char)
        if entry is None:
            raise ValueError(f"Invalid piece character: {char!r}")
        return cls(*entry)

    @property
    def symbol(self) -> str:
        """Unicode glyph, e.g. ♞ for a black knight."""
        _, white, black = _KIND_CHARS[self.kind]
        return white if self.color == Color.WHITE else black
