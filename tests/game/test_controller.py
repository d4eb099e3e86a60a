"""Tests for GameController: the orchestrator."""

from rookery.core.enums import Color, GameResult, PieceType
from rookery.core.move import Move
from rookery.core.piece import Piece
from rookery.core.state import GameState
from rookery.core.types import D5, D7, E2, E4, Square, parse_square
from rookery.game.controller import GameController
from rookery.game.interfaces import GamePhase
from rookery.game.match import MatchState, MoveRecord
from rookery.game.player import AIPlayer, HumanPlayer

WP = Piece(Color.WHITE, PieceType.PAWN)
BP = Piece(Color.BLACK, PieceType.PAWN)


def _make_hh_controller(fen: str | None = None) -> GameController:
    """Helper: human vs human game."""
    ctrl = GameController()
    ctrl.new_game(
        HumanPlayer(Color.WHITE, "W"),
        HumanPlayer(Color.BLACK, "B"),
        fen=fen,
    )
    return ctrl


class TestNewGame:
    def test_phase_awaiting(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.match.phase == GamePhase.AWAITING_MOVE

    def test_players_assigned(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.player(Color.WHITE) is not None
        assert ctrl.player(Color.BLACK) is not None

    def test_current_player_is_white(self) -> None:
        ctrl = _make_hh_controller()
        cp = ctrl.current_player
        assert cp is not None and cp.color == Color.WHITE

    def test_custom_fen(self) -> None:
        fen = "rnbqkbnr/pppppppp/8/8/4P3/8/PPPP1PPP/RNBQKBNR b KQkq e3 0 1"
        ctrl = _make_hh_controller(fen=fen)
        assert ctrl.match.side_to_move == Color.BLACK

    def test_terminal_fen_emits_game_over(self) -> None:
        ctrl = GameController()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.new_game(
            HumanPlayer(Color.WHITE),
            HumanPlayer(Color.BLACK),
            fen="7k/5Q2/6K1/8/8/8/8/8 b - - 0 1",
        )
        assert results == [GameResult.DRAW]

    def test_new_game_cancels_previous_ai(self) -> None:
        cancelled: list[bool] = []
        ctrl = GameController()
        ctrl.new_game(
            AIPlayer(Color.WHITE, on_cancel=lambda: cancelled.append(True)),
            HumanPlayer(Color.BLACK),
        )
        ctrl.new_game(HumanPlayer(Color.WHITE), HumanPlayer(Color.BLACK))
        assert cancelled == [True]


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_move(Move(E2, E4, WP))
        assert ctrl.match.side_to_move == Color.BLACK

    def test_illegal_move_rejected(self) -> None:
        ctrl = _make_hh_controller()
        ok = ctrl.submit_move(Move(E2, parse_square("e5"), WP))
        assert not ok
        assert ctrl.match.side_to_move == Color.WHITE
        assert ctrl.match.ply_count == 0

    def test_submit_text(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_text("e2e4")
        assert ctrl.submit_text("d7d5")
        assert ctrl.match.ply_count == 2

    def test_submit_text_garbage(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.submit_text("hello")
        assert not ctrl.submit_text("e7e5")
        assert ctrl.match.ply_count == 0

    def test_submit_squares(self) -> None:
        ctrl = _make_hh_controller()
        assert ctrl.submit_squares(E2, E4)
        assert ctrl.submit_squares(D7, D5)
        assert not ctrl.submit_squares(D5, E4)  # white to move
        assert ctrl.match.state.board[D5] == BP

    def test_submit_squares_off_board(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.submit_squares(Square(8, 4), Square(7, 4))
        assert not ctrl.submit_squares(Square(-1, 4), E4)
        assert not ctrl.submit_squares(E2, Square(4, 9))
        assert ctrl.match.ply_count == 0
        assert ctrl.match.phase == GamePhase.AWAITING_MOVE

    def test_submit_move_off_board(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.submit_move(Move(E2, Square(-2, 4), WP))
        assert ctrl.match.ply_count == 0

    def test_move_event(self) -> None:
        ctrl = _make_hh_controller()
        seen: list[tuple[MoveRecord, MatchState]] = []
        ctrl.events.on_move.append(lambda rec, match: seen.append((rec, match)))
        ctrl.submit_text("e2e4")
        assert len(seen) == 1
        assert seen[0][0].move == Move(E2, E4, WP)
        assert seen[0][1] is ctrl.match

    def test_checkmate_ends_game(self) -> None:
        ctrl = _make_hh_controller()
        results: list[GameResult] = []
        phases: list[GamePhase] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.events.on_phase_changed.append(phases.append)
        for text in ("f2f3", "e7e5", "g2g4", "d8h4"):
            assert ctrl.submit_text(text)
        assert results == [GameResult.BLACK_WINS]
        assert phases[-1] == GamePhase.GAME_OVER
        assert not ctrl.submit_text("e2e4")


class TestResignUndo:
    def test_resign(self) -> None:
        ctrl = _make_hh_controller()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.resign(Color.WHITE)
        assert results == [GameResult.BLACK_WINS]
        assert ctrl.match.is_game_over

    def test_resign_twice_is_noop(self) -> None:
        ctrl = _make_hh_controller()
        results: list[GameResult] = []
        ctrl.events.on_game_over.append(results.append)
        ctrl.resign(Color.WHITE)
        ctrl.resign(Color.BLACK)
        assert results == [GameResult.BLACK_WINS]

    def test_undo(self) -> None:
        ctrl = _make_hh_controller()
        ctrl.submit_text("e2e4")
        assert ctrl.undo_move()
        assert ctrl.match.state == GameState.initial()
        assert ctrl.match.side_to_move == Color.WHITE

    def test_undo_nothing(self) -> None:
        ctrl = _make_hh_controller()
        assert not ctrl.undo_move()


class TestAIPrompting:
    def test_ai_is_asked_to_move(self) -> None:
        requests: list[GameState] = []
        ctrl = GameController()
        ctrl.new_game(
            HumanPlayer(Color.WHITE),
            AIPlayer(Color.BLACK, on_request_move=requests.append),
        )
        assert requests == []
        ctrl.submit_text("e2e4")
        assert len(requests) == 1
        assert requests[0] is ctrl.match.state
        assert ctrl.match.phase == GamePhase.THINKING

    def test_ai_move_accepted_while_thinking(self) -> None:
        ctrl = GameController()
        ctrl.new_game(HumanPlayer(Color.WHITE), AIPlayer(Color.BLACK))
        ctrl.submit_text("e2e4")
        assert ctrl.submit_text("e7e5")
        assert ctrl.match.phase == GamePhase.AWAITING_MOVE

    def test_ai_white_prompted_on_new_game(self) -> None:
        requests: list[GameState] = []
        ctrl = GameController()
        ctrl.new_game(
            AIPlayer(Color.WHITE, on_request_move=requests.append),
            HumanPlayer(Color.BLACK),
        )
        assert len(requests) == 1
