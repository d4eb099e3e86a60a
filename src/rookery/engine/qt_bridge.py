"""Worker object that hosts a move source on a ``QThread``."""

from __future__ import annotations

import logging
import threading

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from rookery.engine.source import IMoveSource, MoveRequest, RandomMoveSource

_LOGGER = logging.getLogger(__name__)


class MoveSourceWorker(QObject):
    """Answers one :class:`MoveRequest` at a time on its owning thread.

    Every request ends in exactly one of the four signals below, tagged
    with the caller's request id. A source that raises is reported through
    ``request_failed``; nothing propagates into the Qt event loop.
    """

    move_ready = pyqtSignal(int, str)
    no_move = pyqtSignal(int)
    request_failed = pyqtSignal(int, str)
    request_cancelled = pyqtSignal(int)

    __slots__ = ("_cancel_event", "_source")

    def __init__(self, source: IMoveSource | None = None) -> None:
        super().__init__()
        self._source: IMoveSource = source or RandomMoveSource()
        self._cancel_event = threading.Event()

    @pyqtSlot(object, int)
    def request_move(self, request_obj: object, request_id: int) -> None:
        if not isinstance(request_obj, MoveRequest):
            self.request_failed.emit(request_id, "Move source received invalid request")
            return

        self._cancel_event.clear()
        try:
            text = self._source.propose(
                request_obj,
                is_cancelled=self._cancel_event.is_set,
            )
        except Exception as exc:
            _LOGGER.exception("Move source failed for request %d", request_id)
            self.request_failed.emit(request_id, str(exc))
            return

        if self._cancel_event.is_set():
            self.request_cancelled.emit(request_id)
            return

        if text is None:
            self.no_move.emit(request_id)
            return

        self.move_ready.emit(request_id, text)

    def cancel(self) -> None:
        """Flag the running proposal as abandoned.

        Called directly from the session's thread, not through a queued
        signal: while ``propose`` runs, this worker's event loop is blocked.
        """
        self._cancel_event.set()
