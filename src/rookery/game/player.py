"""Participants: a human at the board and a move-source driven opponent."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from rookery.core.enums import Color
from rookery.game.interfaces import IPlayer

if TYPE_CHECKING:
    from rookery.core.state import GameState

RequestHandler = Callable[["GameState"], None]
CancelHandler = Callable[[], None]


class _SeatedPlayer(IPlayer):
    """Color and display name shared by both participants."""

    __slots__ = ("_color", "_name")

    def __init__(self, color: Color, name: str) -> None:
        self._color = color
        self._name = name

    @property
    def color(self) -> Color:
        return self._color

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._color!s}, {self._name!r})"


class HumanPlayer(_SeatedPlayer):
    """Someone at the board. Their moves reach the controller through
    ``submit_move``, ``submit_text`` or ``submit_squares``, so being asked
    for a move does nothing here.
    """

    __slots__ = ()

    def __init__(self, color: Color, name: str = "") -> None:
        super().__init__(color, name or f"Player ({color!s})")

    @property
    def is_human(self) -> bool:
        return True

    def request_move(self, state: GameState) -> None:
        del state

    def cancel(self) -> None:
        pass


class AIPlayer(_SeatedPlayer):
    """Opponent whose moves come from a move source.

    The player forwards the controller's prompts to ``on_request_move`` and
    ``on_cancel``. :meth:`MoveSourceSession.create_ai_player
    <rookery.engine.session.MoveSourceSession.create_ai_player>` binds them
    to the session; tests can pass plain lambdas. Either handler may be
    omitted.
    """

    __slots__ = ("_on_request_move", "_on_cancel")

    def __init__(
        self,
        color: Color,
        name: str = "Opponent",
        on_request_move: RequestHandler | None = None,
        on_cancel: CancelHandler | None = None,
    ) -> None:
        super().__init__(color, name)
        self._on_request_move = on_request_move
        self._on_cancel = on_cancel

    @property
    def is_human(self) -> bool:
        return False

    def request_move(self, state: GameState) -> None:
        if self._on_request_move is not None:
            self._on_request_move(state)

    def cancel(self) -> None:
        if self._on_cancel is not None:
            self._on_cancel()
