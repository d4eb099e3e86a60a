"""Move-source session orchestration for the caller's thread."""

from __future__ import annotations

import logging
import random
from collections.abc import Callable
from typing import TYPE_CHECKING, Protocol

from PyQt6.QtCore import QObject, QThread, pyqtSignal

from rookery.core.enums import Color
from rookery.core.errors import ParseError
from rookery.core.move import Move
from rookery.core.notation import parse_move, state_to_fen
from rookery.core.rules import Rules
from rookery.engine.qt_bridge import MoveSourceWorker
from rookery.engine.source import IMoveSource, MoveRequest
from rookery.game.interfaces import GamePhase
from rookery.game.player import AIPlayer
from rookery.settings import OpponentSettings

if TYPE_CHECKING:
    from rookery.core.state import GameState
    from rookery.game.controller import GameController

_LOGGER = logging.getLogger(__name__)


class MoveRequestSignal(Protocol):
    """Minimal signal interface used by :class:`MoveSourceSession`."""

    def connect(self, slot: Callable[..., object]) -> object: ...

    def emit(self, request_obj: object, request_id: int) -> object: ...


class _RequestBus(QObject):
    """Carries requests to the worker thread with queued delivery."""

    move_requested = pyqtSignal(object, int)


class MoveSourceSession:
    """Owns the worker thread, the request lifecycle and the fallback policy.

    At most one request is outstanding: issuing a new one cancels the
    previous, and responses whose id or position no longer match are
    dropped. A failed, empty, unparseable or illegal proposal is retried
    ``settings.max_failure_retries`` times, then replaced by a random legal
    move.
    """

    __slots__ = (
        "__weakref__",
        "_controller",
        "_settings",
        "_set_status",
        "_rng",
        "_bus",
        "_move_request",
        "_thread",
        "_worker",
        "_request_id",
        "_pending_request",
        "_pending_fen",
        "_remaining_failure_retries",
        "_is_shutting_down",
        "_is_started",
    )

    def __init__(
        self,
        *,
        controller: GameController,
        settings: OpponentSettings | None = None,
        source: IMoveSource | None = None,
        move_request: MoveRequestSignal | None = None,
        set_status: Callable[[str], None] | None = None,
        rng: random.Random | None = None,
        parent: QObject | None = None,
    ) -> None:
        self._controller = controller
        self._settings = settings or OpponentSettings()
        self._set_status = set_status
        self._rng = rng or random.Random()

        self._bus = _RequestBus(parent)
        self._move_request: MoveRequestSignal = (
            move_request if move_request is not None else self._bus.move_requested
        )
        self._thread = QThread(parent)
        self._worker = MoveSourceWorker(source)
        self._request_id = 0
        self._pending_request: int | None = None
        self._pending_fen: str | None = None
        self._remaining_failure_retries = 0
        self._is_shutting_down = False
        self._is_started = False

    @property
    def settings(self) -> OpponentSettings:
        return self._settings

    @property
    def has_pending_request(self) -> bool:
        return self._pending_request is not None

    def setup(self) -> None:
        """Start the worker in a dedicated thread and connect callbacks."""
        if self._is_started:
            return
        self._is_shutting_down = False
        self._worker.moveToThread(self._thread)
        self._move_request.connect(self._worker.request_move)
        self._worker.move_ready.connect(self._on_move_ready)
        self._worker.no_move.connect(self._on_no_move)
        self._worker.request_failed.connect(self._on_request_failed)
        self._worker.request_cancelled.connect(self._on_request_cancelled)
        self._thread.start()
        self._is_started = True

    def shutdown(self) -> None:
        """Drop the pending request and stop the worker thread."""
        if not self._is_started:
            return
        self._is_shutting_down = True
        self.cancel_request()
        self._thread.quit()
        self._thread.wait(2000)
        self._clear_pending_request()
        self._is_started = False

    def create_ai_player(self, color: Color, name: str = "Opponent") -> AIPlayer:
        """Create an AI player wired to this session."""
        return AIPlayer(
            color,
            name,
            on_request_move=self.request_ai_move,
            on_cancel=self.cancel_request,
        )

    def request_ai_move(self, state: GameState) -> None:
        """Ask the move source for a move in *state*."""
        if not self._is_started or self._is_shutting_down:
            return
        self._queue_request(state, reset_retry_budget=True)

    def cancel_request(self) -> None:
        """Forget the pending request and tell the worker to stop."""
        self._clear_pending_request()
        if self._is_started:
            self._worker.cancel()

    # ── Worker callbacks ─────────────────────────────────────────────────

    def _on_move_ready(self, request_id: int, text: str) -> None:
        if not self._is_current(request_id):
            return

        state = self._controller.match.state
        try:
            move = parse_move(text, state.side_to_move, state.board)
        except ParseError as exc:
            self._handle_failure(request_id, f"unreadable move {text!r} ({exc})")
            return
        if not Rules.is_move_legal(move, state):
            self._handle_failure(request_id, f"illegal move {text!r}")
            return

        self._clear_pending_request()
        self._remaining_failure_retries = 0
        self._controller.submit_move(move)

    def _on_no_move(self, request_id: int) -> None:
        self._handle_failure(request_id, "move source produced no move")

    def _on_request_failed(self, request_id: int, message: str) -> None:
        self._handle_failure(request_id, message)

    def _on_request_cancelled(self, request_id: int) -> None:
        if self._is_shutting_down:
            return
        if request_id != self._pending_request:
            return
        self._clear_pending_request()
        self._remaining_failure_retries = 0

    # ── Internal ─────────────────────────────────────────────────────────

    def _is_current(self, request_id: int) -> bool:
        """Response belongs to the pending request and the position is unchanged."""
        if self._is_shutting_down or request_id != self._pending_request:
            return False
        match = self._controller.match
        if match.phase != GamePhase.THINKING:
            self._clear_pending_request()
            return False
        if self._pending_fen != state_to_fen(match.state):
            self._clear_pending_request()
            return False
        return True

    def _queue_request(self, state: GameState, *, reset_retry_budget: bool) -> None:
        self.cancel_request()
        if self._is_shutting_down:
            return

        self._request_id += 1
        self._pending_request = self._request_id
        self._pending_fen = state_to_fen(state)
        if reset_retry_budget:
            self._remaining_failure_retries = self._settings.max_failure_retries

        request = MoveRequest(
            fen=self._pending_fen,
            side_to_move=state.side_to_move,
            difficulty=self._settings.difficulty,
            api_key=self._settings.api_key,
        )
        self._move_request.emit(request, self._request_id)

    def _clear_pending_request(self) -> None:
        self._pending_request = None
        self._pending_fen = None

    def _handle_failure(self, request_id: int, message: str) -> None:
        if not self._is_current(request_id):
            return

        state = self._controller.match.state
        if self._remaining_failure_retries > 0:
            self._remaining_failure_retries -= 1
            _LOGGER.info("Retrying move request after failure: %s", message)
            self._queue_request(state, reset_retry_budget=False)
            return

        self._clear_pending_request()
        self._play_fallback(state, message)

    def _play_fallback(self, state: GameState, reason: str) -> None:
        legal = state.legal_moves()
        if not legal:
            return
        move: Move = self._rng.choice(legal)
        _LOGGER.warning("Move source failed (%s); playing random move %s", reason, move)
        if self._set_status is not None:
            self._set_status(f"Opponent error: {reason}. Playing {move} instead.")
        self._controller.submit_move(move)
