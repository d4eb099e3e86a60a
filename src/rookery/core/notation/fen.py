"""FEN parsing and serialization."""

from __future__ import annotations

from dataclasses import replace

from rookery.core.board import Board
from rookery.core.context import CastlingRights, EnPassantState, MoveContext
from rookery.core.enums import Color, PieceType
from rookery.core.errors import ParseError
from rookery.core.move_rules import A_ROOK_COL, H_ROOK_COL, KING_HOME_COL
from rookery.core.piece import Piece
from rookery.core.rules import Rules
from rookery.core.state import GameState
from rookery.core.types import Square, parse_square, square_name

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[str, tuple[Color, bool]] = {
    "K": (Color.WHITE, True),
    "Q": (Color.WHITE, False),
    "k": (Color.BLACK, True),
    "q": (Color.BLACK, False),
}


# ── Serialisation ────────────────────────────────────────────────────────────


def placement_to_fen(board: Board) -> str:
    """Piece-placement field, rank 8 first."""
    rows: list[str] = []
    for row in range(8):
        empty = 0
        text = ""
        for col in range(8):
            piece = board[Square(row, col)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    text += str(empty)
                    empty = 0
                text += str(piece)
        if empty:
            text += str(empty)
        rows.append(text)
    return "/".join(rows)


def _side_char(color: Color) -> str:
    return "w" if color == Color.WHITE else "b"


def board_to_fen(board: Board, side_to_move: Color) -> str:
    """Board and side to move only; the remaining fields are placeholders."""
    return f"{placement_to_fen(board)} {_side_char(side_to_move)} - - 0 1"


def _castling_field(state: GameState) -> str:
    board = state.board
    text = ""
    for char, (color, kingside) in _CASTLING_CHARS.items():
        rights = state.context.castling(color)
        if not (rights.kingside if kingside else rights.queenside):
            continue
        row = color.home_row
        rook_col = H_ROOK_COL if kingside else A_ROOK_COL
        if board[Square(row, KING_HOME_COL)] != Piece(color, PieceType.KING):
            continue
        if board[Square(row, rook_col)] != Piece(color, PieceType.ROOK):
            continue
        text += char
    return text or "-"


def state_to_fen(state: GameState) -> str:
    """Full six-field FEN derived from the state."""
    target = state.context.en_passant_target
    ep_text = square_name(target) if target is not None else "-"
    return (
        f"{placement_to_fen(state.board)} {_side_char(state.side_to_move)} "
        f"{_castling_field(state)} {ep_text} "
        f"{state.halfmove_clock} {state.fullmove_number}"
    )


# ── Parsing ──────────────────────────────────────────────────────────────────


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != 8:
        raise ParseError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    pieces: dict[Square, Piece] = {}
    for row, rank_text in enumerate(ranks):
        col = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= 8):
                    raise ParseError(f"Invalid FEN digit {ch!r}: {fen!r}")
                col += step
            else:
                if col >= 8:
                    raise ParseError(f"Invalid FEN rank width: {fen!r}")
                try:
                    pieces[Square(row, col)] = Piece.from_char(ch)
                except ValueError as exc:
                    raise ParseError(f"{exc}: {fen!r}") from None
                col += 1
            if col > 8:
                raise ParseError(f"Invalid FEN rank width: {fen!r}")
        if col != 8:
            raise ParseError(f"Invalid FEN rank width: {fen!r}")

    board = Board.from_pieces(pieces)
    for color in Color:
        kings = board.pieces(color, PieceType.KING)
        if len(kings) != 1:
            raise ParseError(f"FEN needs exactly one {color!s} king: {fen!r}")
    return board


def _parse_castling(text: str) -> MoveContext:
    if text == "-":
        return MoveContext(CastlingRights.lost(), CastlingRights.lost())

    seen: set[str] = set()
    for ch in text:
        if ch not in _CASTLING_CHARS or ch in seen:
            raise ParseError(f"Invalid FEN castling field: {text!r}")
        seen.add(ch)

    def rights_for(kingside_char: str, queenside_char: str) -> CastlingRights:
        kingside = kingside_char in seen
        queenside = queenside_char in seen
        if not (kingside or queenside):
            return CastlingRights.lost()
        return CastlingRights(
            king_moved=False,
            a_rook_moved=not queenside,
            h_rook_moved=not kingside,
        )

    return MoveContext(rights_for("K", "Q"), rights_for("k", "q"))


def _parse_en_passant(text: str, side: Color) -> EnPassantState | None:
    if text == "-":
        return None
    try:
        target = parse_square(text)
    except ParseError:
        raise ParseError(f"Invalid FEN en-passant square: {text!r}") from None

    mover = side.opposite
    from_sq = Square(mover.pawn_row, target.col)
    to_sq = Square(mover.pawn_row + 2 * mover.forward, target.col)
    state = EnPassantState(from_sq, to_sq, double_step=True)
    if state.target != target:
        raise ParseError(f"Invalid FEN en-passant square for side-to-move: {text!r}")
    return state


def _parse_counter(text: str, minimum: int, label: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise ParseError(f"Invalid FEN {label}: {text!r}") from None
    if value < minimum:
        raise ParseError(f"Invalid FEN {label}: {text!r}")
    return value


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a :class:`GameState` with its status computed."""
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ParseError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    board = _parse_placement(placement, fen)

    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ParseError(f"Invalid FEN side-to-move field: {side_part!r}")

    context = _parse_castling(castling_part).with_en_passant(
        _parse_en_passant(ep_part, side)
    )

    halfmove = _parse_counter(parts[4], 0, "halfmove clock") if len(parts) > 4 else 0
    fullmove = _parse_counter(parts[5], 1, "fullmove number") if len(parts) > 5 else 1

    state = GameState(
        board=board,
        side_to_move=side,
        context=context,
        halfmove_clock=halfmove,
        fullmove_number=fullmove,
    )
    return replace(state, status=Rules.status(state))
