"""High-level rules: the engine's public interface and the status machine."""

from __future__ import annotations

from dataclasses import replace

from rookery.core.applier import apply
from rookery.core.attacks import is_king_in_check
from rookery.core.enums import Color, GameStatus, PieceType
from rookery.core.errors import IllegalMoveError
from rookery.core.move import Move
from rookery.core.move_generator import MoveGenerator
from rookery.core.state import GameState


class Rules:
    """Static rule-checker that operates on a :class:`GameState`."""

    # Status transitions, evaluated for the side to move after every move:
    #   in check, no moves      -> CHECKMATE (terminal)
    #   not in check, no moves  -> STALEMATE (terminal)
    #   in check, moves exist   -> CHECK
    #   otherwise               -> IN_PROGRESS

    @staticmethod
    def legal_moves(color: Color, state: GameState) -> list[Move]:
        gen = MoveGenerator(state.board, state.context)
        return gen.generate_legal_moves(color)

    @staticmethod
    def normalize(move: Move) -> Move:
        """Fill in the default queen promotion for a pawn reaching the last rank."""
        if move.promotion is None and move.reaches_last_rank:
            return move.with_promotion(PieceType.QUEEN)
        return move

    @staticmethod
    def is_move_legal(move: Move, state: GameState) -> bool:
        if not move.is_on_board:
            return False
        if move.piece.color != state.side_to_move:
            return False
        if state.board[move.from_sq] != move.piece:
            return False
        return Rules.normalize(move) in Rules.legal_moves(state.side_to_move, state)

    @staticmethod
    def apply_move(move: Move, state: GameState) -> GameState:
        """Play *move* and return the next state.

        Raises :class:`IllegalMoveError` for anything not in
        :meth:`legal_moves`; *state* is left as it was.
        """
        if not Rules.is_move_legal(move, state):
            shown = move.uci if move.is_on_board else repr(move)
            raise IllegalMoveError(f"Illegal move {shown} for {state.side_to_move!s}")

        move = Rules.normalize(move)
        is_capture = state.board[move.to_sq] is not None
        board, context = apply(state.board, move, state.context)

        if move.is_pawn_move or is_capture:
            halfmove_clock = 0
        else:
            halfmove_clock = state.halfmove_clock + 1

        fullmove_number = state.fullmove_number
        if state.side_to_move == Color.BLACK:
            fullmove_number += 1

        next_state = GameState(
            board=board,
            side_to_move=state.side_to_move.opposite,
            context=context,
            halfmove_clock=halfmove_clock,
            fullmove_number=fullmove_number,
        )
        return replace(next_state, status=Rules.status(next_state))

    @staticmethod
    def is_in_check(state: GameState) -> bool:
        return is_king_in_check(state.side_to_move, state.board)

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        return Rules.status(state) == GameStatus.CHECKMATE

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        return Rules.status(state) == GameStatus.STALEMATE

    @staticmethod
    def status(state: GameState) -> GameStatus:
        """Status of the side to move, computed from the position."""
        in_check = Rules.is_in_check(state)
        has_moves = bool(Rules.legal_moves(state.side_to_move, state))
        if in_check:
            return GameStatus.CHECK if has_moves else GameStatus.CHECKMATE
        return GameStatus.IN_PROGRESS if has_moves else GameStatus.STALEMATE
