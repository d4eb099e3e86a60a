"""Core domain layer: pure chess rules with zero external dependencies.

Quick start::

    from rookery.core import GameState, Rules, parse_move

    state = GameState.initial()
    move = parse_move("e2e4", state.side_to_move, state.board)
    state = Rules.apply_move(move, state)
    print(state.status, len(state.legal_moves()))
"""

from rookery.core.attacks import is_king_in_check, is_square_attacked
from rookery.core.board import Board
from rookery.core.context import CastlingRights, EnPassantState, MoveContext
from rookery.core.enums import Color, GameResult, GameStatus, PieceType
from rookery.core.errors import ChessError, IllegalMoveError, NoKingError, ParseError
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.move_rules import is_pseudo_legal
from rookery.core.notation import (
    STARTING_FEN,
    board_to_fen,
    parse_move,
    state_from_fen,
    state_to_fen,
)
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.state import GameState
from rookery.core.types import Square, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "GameResult",
    "GameStatus",
    "PieceType",
    # Errors
    "ChessError",
    "IllegalMoveError",
    "NoKingError",
    "ParseError",
    # Types / helpers
    "Square",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "CastlingRights",
    "EnPassantState",
    "GameState",
    "Move",
    "MoveContext",
    "MoveGenerator",
    "Piece",
    "Rules",
    # Rule predicates
    "is_king_in_check",
    "is_pseudo_legal",
    "is_square_attacked",
    # Notation
    "STARTING_FEN",
    "board_to_fen",
    "parse_move",
    "state_from_fen",
    "state_to_fen",
]
