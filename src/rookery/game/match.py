"""Match state: phase, result and move history around an immutable GameState."""

from __future__ import annotations

from dataclasses import dataclass, field

from rookery.core.enums import Color, GameResult, GameStatus
from rookery.core.move import Move
from rookery.core.notation import STARTING_FEN, state_from_fen, state_to_fen
from rookery.core.rules import Rules
from rookery.core.state import GameState
from rookery.game.interfaces import GamePhase


@dataclass
class MoveRecord:
    """A single entry in the move history."""

    move: Move
    fen_after: str
    status: GameStatus
    state_before: GameState = field(repr=False)
    was_capture: bool = False

    @property
    def was_check(self) -> bool:
        return self.status in (GameStatus.CHECK, GameStatus.CHECKMATE)


@dataclass
class MatchState:
    """Manages game lifecycle: phase, result and move history.

    A pure data/logic class with no threading. Undo restores the stored
    previous :class:`GameState` instead of reversing the move.
    """

    state: GameState = field(default_factory=GameState.initial, init=False)
    phase: GamePhase = field(default=GamePhase.NOT_STARTED, init=False)
    result: GameResult = field(default=GameResult.IN_PROGRESS, init=False)
    move_history: list[MoveRecord] = field(default_factory=list, init=False)
    start_fen: str = field(default=STARTING_FEN, init=False)

    # ── Initialisation ───────────────────────────────────────────────────

    def setup(self, fen: str | None = None) -> None:
        """Initialise (or reset) the match; raises ``ParseError`` on bad FEN."""
        self.start_fen = fen or STARTING_FEN
        self.state = state_from_fen(self.start_fen)
        self.phase = GamePhase.AWAITING_MOVE
        self.result = GameResult.IN_PROGRESS
        self.move_history.clear()
        self._check_game_over()

    # ── Move application ─────────────────────────────────────────────────

    def apply_move(self, move: Move) -> MoveRecord:
        """Apply *move* and return the history record.

        Raises ``IllegalMoveError`` (leaving the match untouched) if the move
        is not legal.
        """
        before = self.state
        self.state = Rules.apply_move(move, before)
        was_capture = before.board[move.to_sq] is not None or (
            move.is_pawn_move and move.from_sq.col != move.to_sq.col
        )

        record = MoveRecord(
            move=Rules.normalize(move),
            fen_after=state_to_fen(self.state),
            status=self.state.status,
            was_capture=was_capture,
            state_before=before,
        )
        self.move_history.append(record)
        self._check_game_over()
        return record

    def undo_last_move(self) -> Move | None:
        """Undo the last move. Returns the undone Move, or None if empty."""
        if not self.move_history:
            return None

        record = self.move_history.pop()
        self.state = record.state_before

        if self.result != GameResult.IN_PROGRESS:
            self.result = GameResult.IN_PROGRESS
            self.phase = GamePhase.AWAITING_MOVE

        return record.move

    # ── Resignation ──────────────────────────────────────────────────────

    def resign(self, color: Color) -> None:
        self.result = (
            GameResult.BLACK_WINS if color == Color.WHITE else GameResult.WHITE_WINS
        )
        self.phase = GamePhase.GAME_OVER

    # ── Query helpers ────────────────────────────────────────────────────

    @property
    def side_to_move(self) -> Color:
        return self.state.side_to_move

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def is_game_over(self) -> bool:
        return self.phase == GamePhase.GAME_OVER

    @property
    def ply_count(self) -> int:
        """Number of half-moves played."""
        return len(self.move_history)

    def legal_moves(self) -> list[Move]:
        """Legal moves in the current position."""
        return self.state.legal_moves()

    # ── Internal ─────────────────────────────────────────────────────────

    def _check_game_over(self) -> None:
        status = self.state.status
        if status == GameStatus.CHECKMATE:
            self.result = (
                GameResult.BLACK_WINS
                if self.state.side_to_move == Color.WHITE
                else GameResult.WHITE_WINS
            )
            self.phase = GamePhase.GAME_OVER
        elif status == GameStatus.STALEMATE:
            self.result = GameResult.DRAW
            self.phase = GamePhase.GAME_OVER
