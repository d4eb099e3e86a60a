"""Tests for Rules: legality, transitions and game status."""

import pytest

from rookery.core.applier import apply
from rookery.core.attacks import is_king_in_check
from rookery.core.enums import Color, GameStatus, PieceType
from rookery.core.errors import IllegalMoveError
from rookery.core.move import Move
from rookery.core.notation import parse_move, state_from_fen
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.state import GameState
from rookery.core.types import A8, ALL_SQUARES, E1, E2, E4, G1, Square, parse_square

KIWIPETE = "r3k2r/p1ppqpb1/bn2pnp1/3PN3/1p2P3/2N2Q1p/PPPBBPPP/R3K2R w KQkq - 0 1"


def _play(state: GameState, *moves: str) -> GameState:
    for text in moves:
        move = parse_move(text, state.side_to_move, state.board)
        state = Rules.apply_move(move, state)
    return state


class TestStatus:
    def test_initial_in_progress(self) -> None:
        state = GameState.initial()
        assert Rules.status(state) == GameStatus.IN_PROGRESS
        assert len(Rules.legal_moves(Color.WHITE, state)) == 20

    def test_check(self) -> None:
        state = _play(GameState.initial(), "e2e4", "f7f6", "d1h5")
        assert state.status == GameStatus.CHECK
        assert Rules.is_in_check(state)
        assert not Rules.is_checkmate(state)

    def test_fools_mate(self) -> None:
        state = _play(GameState.initial(), "f2f3", "e7e5", "g2g4", "d8h4")
        assert state.status == GameStatus.CHECKMATE
        assert state.side_to_move == Color.WHITE
        assert state.is_over
        assert Rules.is_checkmate(state)
        assert state.legal_moves() == []

    def test_queen_mate_on_h8(self) -> None:
        state = state_from_fen("7k/6Q1/6K1/8/8/8/8/8 b - - 0 1")
        assert state.status == GameStatus.CHECKMATE
        assert Rules.legal_moves(Color.BLACK, state) == []

    def test_stalemate(self) -> None:
        state = state_from_fen("7k/5Q2/6K1/8/8/8/8/8 b - - 0 1")
        assert state.status == GameStatus.STALEMATE
        assert Rules.is_stalemate(state)
        assert not Rules.is_in_check(state)

    def test_status_describes_side_to_move(self) -> None:
        state = _play(GameState.initial(), "e2e4")
        assert state.side_to_move == Color.BLACK
        assert state.status == GameStatus.IN_PROGRESS


class TestLegality:
    def test_every_generated_move_is_accepted(self) -> None:
        state = state_from_fen(KIWIPETE)
        for move in state.legal_moves():
            assert Rules.is_move_legal(move, state)
            Rules.apply_move(move, state)

    def test_wrong_color_rejected(self) -> None:
        state = GameState.initial()
        black_pawn = Piece(Color.BLACK, PieceType.PAWN)
        move = Move(parse_square("e7"), parse_square("e5"), black_pawn)
        assert not Rules.is_move_legal(move, state)

    def test_piece_must_match_board(self) -> None:
        state = GameState.initial()
        knight = Piece(Color.WHITE, PieceType.KNIGHT)
        assert not Rules.is_move_legal(Move(E2, E4, knight), state)

    def test_illegal_apply_raises_and_keeps_state(self) -> None:
        state = GameState.initial()
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        with pytest.raises(IllegalMoveError):
            Rules.apply_move(Move(E2, parse_square("e5"), pawn), state)
        assert state == GameState.initial()

    def test_cannot_move_into_check(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/3r4/4K3 w - - 0 1")
        king = Piece(Color.WHITE, PieceType.KING)
        assert not Rules.is_move_legal(Move(E1, parse_square("f2"), king), state)
        assert Rules.is_move_legal(Move(E1, parse_square("d2"), king), state)

    @pytest.mark.parametrize(
        ("from_sq", "to_sq"),
        [
            (Square(8, 4), Square(7, 4)),
            (Square(-1, 4), E4),
            (E2, Square(4, 9)),
            (E2, Square(-4, 4)),
        ],
    )
    def test_off_board_squares_rejected(self, from_sq: Square, to_sq: Square) -> None:
        state = GameState.initial()
        move = Move(from_sq, to_sq, Piece(Color.WHITE, PieceType.KING))
        assert Rules.is_move_legal(move, state) is False
        with pytest.raises(IllegalMoveError):
            Rules.apply_move(move, state)

    def test_promotion_letter_on_plain_move_is_illegal(self) -> None:
        state = GameState.initial()
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        assert not Rules.is_move_legal(Move(E2, E4, pawn, PieceType.QUEEN), state)


class TestSpecialMoves:
    def test_promotion_defaults_to_queen(self) -> None:
        state = state_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        move = Move(parse_square("a7"), A8, pawn)
        assert Rules.normalize(move).promotion == PieceType.QUEEN
        assert Rules.is_move_legal(move, state)
        after = Rules.apply_move(move, state)
        assert after.board[A8] == Piece(Color.WHITE, PieceType.QUEEN)
        assert after.status == GameStatus.CHECK

    def test_underpromotion(self) -> None:
        state = state_from_fen("4k3/P7/8/8/8/8/8/4K3 w - - 0 1")
        after = _play(state, "a7a8r")
        assert after.board[A8] == Piece(Color.WHITE, PieceType.ROOK)

    def test_en_passant(self) -> None:
        state = _play(GameState.initial(), "e2e4", "a7a6", "e4e5", "d7d5")
        assert state.context.en_passant_target == parse_square("d6")
        state = _play(state, "e5d6")
        assert state.board.is_empty(parse_square("d5"))
        assert state.board[parse_square("d6")] == Piece(Color.WHITE, PieceType.PAWN)

    def test_en_passant_expires_after_one_ply(self) -> None:
        state = _play(
            GameState.initial(), "e2e4", "a7a6", "e4e5", "d7d5", "g1f3", "a6a5"
        )
        pawn = Piece(Color.WHITE, PieceType.PAWN)
        move = Move(parse_square("e5"), parse_square("d6"), pawn)
        assert not Rules.is_move_legal(move, state)

    def test_castling_moves_rook_and_clears_rights(self) -> None:
        state = state_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        state = _play(state, "e1g1")
        assert state.board[G1] == Piece(Color.WHITE, PieceType.KING)
        assert state.board[parse_square("f1")] == Piece(Color.WHITE, PieceType.ROOK)
        assert not state.castling_rights(Color.WHITE).kingside
        assert not state.castling_rights(Color.WHITE).queenside
        assert state.castling_rights(Color.BLACK).kingside

    def test_castling_after_king_returns_is_illegal(self) -> None:
        state = state_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        state = _play(state, "e1f1", "e8f8", "f1e1", "f8e8")
        king = Piece(Color.WHITE, PieceType.KING)
        assert not Rules.is_move_legal(Move(E1, G1, king), state)


class TestClocks:
    def test_halfmove_and_fullmove(self) -> None:
        state = _play(GameState.initial(), "g1f3")
        assert state.halfmove_clock == 1
        assert state.fullmove_number == 1
        state = _play(state, "b8c6")
        assert state.halfmove_clock == 2
        assert state.fullmove_number == 2
        state = _play(state, "e2e4")
        assert state.halfmove_clock == 0

    def test_capture_resets_halfmove(self) -> None:
        state = _play(GameState.initial(), "g1f3", "e7e5", "b1c3", "g8f6", "f3e5")
        assert state.halfmove_clock == 0


class TestProperties:
    @pytest.mark.parametrize(
        "fen",
        [
            KIWIPETE,
            "8/2p5/3p4/KP5r/1R3p1k/8/4P1P1/8 w - - 0 1",
            "r3k2r/Pppp1ppp/1b3nbN/nP6/BBP1P3/q4N2/Pp1P2PP/R2Q1RK1 w kq - 0 1",
        ],
    )
    def test_legal_moves_never_leave_king_in_check(self, fen: str) -> None:
        state = state_from_fen(fen)
        for move in state.legal_moves():
            board, _ = apply(state.board, move, state.context)
            assert not is_king_in_check(state.side_to_move, board)

    def test_moves_outside_legal_list_rejected(self) -> None:
        state = state_from_fen("r3k2r/8/8/8/8/8/8/R3K2R w KQkq - 0 1")
        legal = set(state.legal_moves())
        for from_sq, piece in state.board.occupied(state.side_to_move):
            for to_sq in ALL_SQUARES:
                move = Move(from_sq, to_sq, piece)
                expected = Rules.normalize(move) in legal
                assert Rules.is_move_legal(move, state) == expected
                if not expected:
                    with pytest.raises(IllegalMoveError):
                        Rules.apply_move(move, state)
