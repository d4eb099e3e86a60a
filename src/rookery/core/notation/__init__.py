"""Notation package: FEN and coordinate-move parsing and serialization."""

from rookery.core.notation.coordinate import parse_move
from rookery.core.notation.fen import (
    STARTING_FEN,
    board_to_fen,
    placement_to_fen,
    state_from_fen,
    state_to_fen,
)

__all__ = [
    "STARTING_FEN",
    "board_to_fen",
    "parse_move",
    "placement_to_fen",
    "state_from_fen",
    "state_to_fen",
]
