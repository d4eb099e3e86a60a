"""Opponent settings shared by the game and engine layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Difficulty(str, Enum):
    """Strength hint forwarded to the move source; the rules ignore it."""

    EASY = "easy"
    NORMAL = "normal"
    HARD = "hard"


@dataclass
class OpponentSettings:
    """All user-configurable opponent settings (kept in memory only)."""

    # Credential for a remote move source; opaque to the engine.
    api_key: str = ""
    difficulty: Difficulty = Difficulty.NORMAL

    # Failed or garbage proposals are retried this many times before the
    # session falls back to a random legal move.
    max_failure_retries: int = 1

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())

    def set_api_key(self, value: str) -> bool:
        """Store a non-blank credential; returns False and keeps the old one otherwise."""
        if not value or not value.strip():
            return False
        self.api_key = value.strip()
        return True

    def __repr__(self) -> str:
        masked = "***" if self.has_api_key else "''"
        return (
            f"OpponentSettings(api_key={masked}, difficulty={self.difficulty.value!r}, "
            f"max_failure_retries={self.max_failure_retries})"
        )
