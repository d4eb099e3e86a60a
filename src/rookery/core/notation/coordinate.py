"""Coordinate move notation (``e2e4``, ``e7e8q``)."""

from __future__ import annotations

from rookery.core.board import Board
from rookery.core.enums import Color, PieceType
from rookery.core.errors import ParseError
from rookery.core.move import PROMOTION_CHARS, Move
from rookery.core.types import parse_square

_PROMOTION_KINDS: dict[str, PieceType] = {v: k for k, v in PROMOTION_CHARS.items()}


def parse_move(text: str, color: Color, board: Board) -> Move:
    """Parse coordinate notation for *color* against *board*.

    Surrounding whitespace is ignored and letters are case-insensitive.
    Legality is not checked here; only that the text names a piece of
    *color*. Raises :class:`ParseError` otherwise.
    """
    if not isinstance(text, str):
        raise ParseError(f"Move text must be a string, got {type(text).__name__}")
    cleaned = text.strip().lower()
    if not (4 <= len(cleaned) <= 5):
        raise ParseError(f"Move must be 4-5 characters: {text!r}")

    from_sq = parse_square(cleaned[0:2])
    to_sq = parse_square(cleaned[2:4])

    promotion: PieceType | None = None
    if len(cleaned) == 5:
        promotion = _PROMOTION_KINDS.get(cleaned[4])
        if promotion is None:
            raise ParseError(f"Unknown promotion piece {cleaned[4]!r}: {text!r}")

    piece = board[from_sq]
    if piece is None:
        raise ParseError(f"No piece on {from_sq}: {text!r}")
    if piece.color != color:
        raise ParseError(f"Piece on {from_sq} is not {color!s}: {text!r}")

    return Move(from_sq, to_sq, piece, promotion)
