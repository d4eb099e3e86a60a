"""Exceptions raised by the rules engine."""

from __future__ import annotations


class ChessError(Exception):
    """Base class for all engine errors."""


class ParseError(ChessError, ValueError):
    """Malformed notation: bad square, bad move text or bad FEN."""


class IllegalMoveError(ChessError, ValueError):
    """A well-formed move that the rules do not allow in the given state."""


class NoKingError(ChessError, LookupError):
    """A side has no king on the board; the state is corrupted."""
