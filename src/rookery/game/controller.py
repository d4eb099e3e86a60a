"""GameController: the central orchestrator of a game.

Coordinates: Players, MatchState, Rules.
Emits events via simple callbacks so callers and tests can subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from rookery.core.enums import Color, GameResult, PieceType
from rookery.core.errors import IllegalMoveError, ParseError
from rookery.core.move import Move
from rookery.core.notation import parse_move
from rookery.core.types import Square
from rookery.game.interfaces import GamePhase, IGameController, IPlayer
from rookery.game.match import MatchState, MoveRecord

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[MoveRecord, MatchState], None]
GameOverCallback = Callable[[GameResult], None]
PhaseCallback = Callable[[GamePhase], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a full game: validates moves, switches turns, notifies
    listeners.

    Methods are meant to be called from a single thread. Moves from a
    remote source arrive through ``submit_*`` once the request resolves.
    Rejected submissions return ``False`` and leave the game untouched; what
    to do next is up to the caller.
    """

    __slots__ = ("_match", "_players", "events")

    def __init__(self) -> None:
        self._match = MatchState()
        self._players: dict[Color, IPlayer] = {}
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def match(self) -> MatchState:
        return self._match

    @property
    def current_player(self) -> IPlayer | None:
        return self._players.get(self._match.side_to_move)

    def player(self, color: Color) -> IPlayer | None:
        return self._players.get(color)

    # ── IGameController impl ─────────────────────────────────────────────

    def new_game(self, white: IPlayer, black: IPlayer, fen: str | None = None) -> None:
        for player in self._players.values():
            if not player.is_human:
                player.cancel()
        self._players = {Color.WHITE: white, Color.BLACK: black}

        self._match = MatchState()
        self._match.setup(fen)

        if self._match.is_game_over:
            self._emit_game_over(self._match.result)
            return
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()

    def submit_move(self, move: Move) -> bool:
        if self._match.is_game_over:
            return False
        if not move.is_on_board:
            _LOGGER.debug("Rejected move off the board: %r", move)
            return False
        if self._match.phase not in (GamePhase.AWAITING_MOVE, GamePhase.THINKING):
            return False

        try:
            record = self._match.apply_move(move)
        except IllegalMoveError as exc:
            _LOGGER.debug("Rejected move %s: %s", move, exc)
            return False

        self._emit_move(record)

        if self._match.is_game_over:
            self._emit_game_over(self._match.result)
            return True

        self._prompt_current_player()
        return True

    def submit_text(self, text: str) -> bool:
        """Parse coordinate notation for the side to move and submit it."""
        state = self._match.state
        try:
            move = parse_move(text, state.side_to_move, state.board)
        except ParseError as exc:
            _LOGGER.debug("Rejected move text %r: %s", text, exc)
            return False
        return self.submit_move(move)

    def submit_squares(
        self,
        from_sq: Square,
        to_sq: Square,
        promotion: PieceType | None = None,
    ) -> bool:
        """Submit a from/to pair, e.g. from a board click."""
        if not (from_sq.is_valid and to_sq.is_valid):
            _LOGGER.debug("Rejected squares off the board: %r, %r", from_sq, to_sq)
            return False
        state = self._match.state
        piece = state.board[from_sq]
        if piece is None or piece.color != state.side_to_move:
            _LOGGER.debug("No %s piece on %s", state.side_to_move, from_sq)
            return False
        return self.submit_move(Move(from_sq, to_sq, piece, promotion))

    def resign(self, color: Color) -> None:
        if self._match.is_game_over:
            return
        cp = self.current_player
        if cp is not None and not cp.is_human:
            cp.cancel()
        self._match.resign(color)
        self._emit_game_over(self._match.result)

    def undo_move(self) -> bool:
        if self._match.is_game_over or not self._match.move_history:
            return False

        # Drop any pending request for the position being undone
        cp = self.current_player
        if cp and not cp.is_human:
            cp.cancel()

        self._match.undo_last_move()
        self._emit_phase(GamePhase.AWAITING_MOVE)
        self._prompt_current_player()
        return True

    # ── Internal helpers ─────────────────────────────────────────────────

    def _prompt_current_player(self) -> None:
        """Ask the current player to move."""
        cp = self.current_player
        if cp is None:
            return

        if cp.is_human:
            self._match.phase = GamePhase.AWAITING_MOVE
            self._emit_phase(GamePhase.AWAITING_MOVE)
        else:
            self._match.phase = GamePhase.THINKING
            self._emit_phase(GamePhase.THINKING)
            cp.request_move(self._match.state)

    def _emit_move(self, record: MoveRecord) -> None:
        for cb in self.events.on_move:
            cb(record, self._match)

    def _emit_game_over(self, result: GameResult) -> None:
        self._emit_phase(GamePhase.GAME_OVER)
        for cb in self.events.on_game_over:
            cb(result)

    def _emit_phase(self, phase: GamePhase) -> None:
        for cb in self.events.on_phase_changed:
            cb(phase)
