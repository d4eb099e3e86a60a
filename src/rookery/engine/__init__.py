"""Move-source package: source protocol, random source and Qt worker bridge."""

from rookery.engine.qt_bridge import MoveSourceWorker
from rookery.engine.session import MoveSourceSession
from rookery.engine.source import CancelCheck, IMoveSource, MoveRequest, RandomMoveSource

__all__ = [
    "CancelCheck",
    "IMoveSource",
    "MoveRequest",
    "MoveSourceSession",
    "MoveSourceWorker",
    "RandomMoveSource",
]
