"""Move-source protocol and request model."""

from __future__ import annotations

import random
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from rookery.core.enums import Color
from rookery.core.notation import state_from_fen
from rookery.settings import Difficulty

CancelCheck = Callable[[], bool]


@dataclass(slots=True, frozen=True)
class MoveRequest:
    """Everything a move source receives for one proposal."""

    fen: str
    side_to_move: Color
    difficulty: Difficulty = Difficulty.NORMAL
    api_key: str = ""

    def __repr__(self) -> str:
        return (
            f"MoveRequest(fen={self.fen!r}, side_to_move={self.side_to_move!s}, "
            f"difficulty={self.difficulty.value!r})"
        )


class IMoveSource(Protocol):
    """Anything that proposes a move in coordinate notation.

    Implementations may block (a remote model, an engine process); they run
    on the session's worker thread and should poll ``is_cancelled`` while
    they wait. ``None`` means no proposal.
    """

    def propose(
        self,
        request: MoveRequest,
        is_cancelled: CancelCheck | None = None,
    ) -> str | None: ...


class RandomMoveSource:
    """Proposes a uniformly random legal move; the built-in opponent."""

    __slots__ = ("_rng",)

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    def propose(
        self,
        request: MoveRequest,
        is_cancelled: CancelCheck | None = None,
    ) -> str | None:
        del is_cancelled
        state = state_from_fen(request.fen)
        legal = state.legal_moves()
        if not legal:
            return None
        return self._rng.choice(legal).uci
