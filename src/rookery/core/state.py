"""GameState: complete, immutable game position."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from rookery.core.board import Board
from rookery.core.context import CastlingRights, EnPassantState, MoveContext
from rookery.core.enums import Color, GameStatus

if TYPE_CHECKING:
    from rookery.core.move import Move


@dataclass(frozen=True, slots=True)
class GameState:
    """Board + side to move + castling/en-passant context + status + clocks.

    Transitions never mutate a state; :meth:`apply_move` returns the next one.
    ``status`` describes the side to move and is refreshed on every
    transition by :class:`~rookery.core.rules.Rules`.
    """

    board: Board = field(default_factory=Board.initial)
    side_to_move: Color = Color.WHITE
    context: MoveContext = MoveContext()
    status: GameStatus = GameStatus.IN_PROGRESS
    halfmove_clock: int = 0
    fullmove_number: int = 1

    @classmethod
    def initial(cls) -> GameState:
        """Standard starting position, white to move."""
        return cls()

    # ── Convenience accessors ────────────────────────────────────────────

    def castling_rights(self, color: Color) -> CastlingRights:
        return self.context.castling(color)

    @property
    def en_passant(self) -> EnPassantState | None:
        return self.context.en_passant

    @property
    def is_over(self) -> bool:
        return self.status.is_terminal

    # ── Rules shortcuts ──────────────────────────────────────────────────

    def legal_moves(self) -> list[Move]:
        """Legal moves for the side to move."""
        from rookery.core.rules import Rules

        return Rules.legal_moves(self.side_to_move, self)

    def is_move_legal(self, move: Move) -> bool:
        from rookery.core.rules import Rules

        return Rules.is_move_legal(move, self)

    def apply_move(self, move: Move) -> GameState:
        """Return the state after *move*; raises ``IllegalMoveError``."""
        from rookery.core.rules import Rules

        return Rules.apply_move(move, self)
