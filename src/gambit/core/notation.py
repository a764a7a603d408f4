"""FEN parsing and serialization.

The board has no castling-rights or en-passant fields; both are read off
piece history.  Loading a FEN therefore records synthetic history entries:
a ``SETUP`` step for a king or rook that has lost its castling right, and a
double step for the pawn that may be captured en passant.
"""

from __future__ import annotations

from gambit.core.board import Board
from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Step
from gambit.core.move_generator import (
    CASTLING_PATTERNS,
    KINGSIDE,
    QUEENSIDE,
    CastlingPattern,
    king_home,
)
from gambit.core.piece import Piece, parse_piece_char
from gambit.core.state import GameState
from gambit.core.types import BOARD_SIZE, Square, parse_square

STARTING_FEN = "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR w KQkq - 0 1"

_CASTLING_CHARS: dict[tuple[Color, CastlingPattern], str] = {
    (Color.WHITE, KINGSIDE): "K",
    (Color.WHITE, QUEENSIDE): "Q",
    (Color.BLACK, KINGSIDE): "k",
    (Color.BLACK, QUEENSIDE): "q",
}


def _castling_pieces(
    board: Board, color: Color, pattern: CastlingPattern
) -> tuple[Piece, Piece] | None:
    """King and rook for *pattern* if both stand on their home squares."""
    home = king_home(color)
    king = board[home]
    rook = board[home.offset(pattern.king_to_rook, 0)]
    if (
        king is None
        or king.color != color
        or king.piece_type != PieceType.KING
        or rook is None
        or rook.color != color
        or rook.piece_type != PieceType.ROOK
    ):
        return None
    return king, rook


def _mark_moved(board: Board, sq: Square, piece: Piece) -> None:
    if not board.has_moved(piece):
        board.record_history(piece, Step(sq, sq, MoveFlag.SETUP))


def _parse_placement(placement: str, fen: str) -> Board:
    ranks = placement.split("/")
    if len(ranks) != BOARD_SIZE:
        raise ValueError(f"Invalid FEN board (must contain 8 ranks): {fen!r}")
    board = Board()
    for rank_idx, rank_text in enumerate(ranks):
        rank = BOARD_SIZE - 1 - rank_idx
        file = 0
        for ch in rank_text:
            if ch.isdigit():
                step = int(ch)
                if not (1 <= step <= BOARD_SIZE):
                    raise ValueError(f"Invalid FEN digit {ch!r}: {fen!r}")
                file += step
            else:
                if file >= BOARD_SIZE:
                    raise ValueError(f"Invalid FEN rank width: {fen!r}")
                color, piece_type = parse_piece_char(ch)
                board.place_new_piece(Square(file, rank), color, piece_type)
                file += 1
            if file > BOARD_SIZE:
                raise ValueError(f"Invalid FEN rank width: {fen!r}")
        if file != BOARD_SIZE:
            raise ValueError(f"Invalid FEN rank width: {fen!r}")
    board.validate()
    return board


def _apply_castling(board: Board, castling_part: str) -> None:
    granted: set[str] = set()
    if castling_part != "-":
        for ch in castling_part:
            if ch not in "KQkq" or ch in granted:
                raise ValueError(f"Invalid FEN castling field: {castling_part!r}")
            granted.add(ch)

    for color in Color:
        kept = 0
        for pattern in CASTLING_PATTERNS:
            char = _CASTLING_CHARS[(color, pattern)]
            pieces = _castling_pieces(board, color, pattern)
            if char in granted:
                if pieces is None:
                    raise ValueError(
                        f"Castling right {char!r} without king and rook at home"
                    )
                kept += 1
            elif pieces is not None:
                _, rook = pieces
                _mark_moved(board, king_home(color).offset(pattern.king_to_rook, 0), rook)

        king_sq = board.king_square(color)
        king = board[king_sq]
        if kept == 0 and king is not None:
            _mark_moved(board, king_sq, king)


def _apply_en_passant(board: Board, ep_part: str, side: Color) -> None:
    if ep_part == "-":
        return
    ep = parse_square(ep_part)
    mover = side.opposite  # the side that just double-stepped
    expected_rank = 2 if mover == Color.WHITE else 5
    if ep.rank != expected_rank:
        raise ValueError(f"Invalid FEN en-passant square for side-to-move: {ep_part!r}")
    direction = 1 if mover == Color.WHITE else -1
    pawn_sq = ep.offset(0, direction)
    pawn = board[pawn_sq]
    if pawn is None or pawn.color != mover or pawn.piece_type != PieceType.PAWN:
        raise ValueError(f"No pawn behind FEN en-passant square: {ep_part!r}")
    board.record_history(pawn, Step(ep.offset(0, -direction), pawn_sq, MoveFlag.DOUBLE_PAWN))


def state_from_fen(fen: str) -> GameState:
    """Parse a FEN string into a fresh :class:`GameState`.

    The full-move field is validated but not kept; move numbers restart
    at the loaded position.
    """
    parts = fen.split()
    if not (4 <= len(parts) <= 6):
        raise ValueError(f"Invalid FEN (need 4-6 fields): {fen!r}")

    placement, side_part, castling_part, ep_part = parts[:4]

    # 1. Piece placement
    board = _parse_placement(placement, fen)

    # 2. Side to move
    if side_part == "w":
        side = Color.WHITE
    elif side_part == "b":
        side = Color.BLACK
    else:
        raise ValueError(f"Invalid FEN side-to-move field: {side_part!r}")

    # 3. Castling
    _apply_castling(board, castling_part)

    # 4. En passant
    _apply_en_passant(board, ep_part, side)

    # 5–6. Clocks (optional)
    halfmove = 0
    if len(parts) > 4:
        if not parts[4].isdigit():
            raise ValueError(f"Invalid FEN halfmove clock: {parts[4]!r}")
        halfmove = int(parts[4])
    if len(parts) > 5 and (not parts[5].isdigit() or int(parts[5]) < 1):
        raise ValueError(f"Invalid FEN fullmove number: {parts[5]!r}")

    state = GameState(board, side, halfmove_clock=halfmove)
    if state.is_in_check(side.opposite):
        raise ValueError(f"Side not to move is in check: {fen!r}")
    return state


def _castling_field(state: GameState) -> str:
    board = state.board
    rights = ""
    for color in Color:
        for pattern in CASTLING_PATTERNS:
            pieces = _castling_pieces(board, color, pattern)
            if pieces is None:
                continue
            king, rook = pieces
            if not board.has_moved(king) and not board.has_moved(rook):
                rights += _CASTLING_CHARS[(color, pattern)]
    return rights or "-"


def _en_passant_field(state: GameState) -> str:
    mover = state.active_color.opposite
    for sq, piece in state.board.pieces(mover):
        if piece.piece_type != PieceType.PAWN:
            continue
        last = state.board.last_move(piece)
        if last is not None and last.flag == MoveFlag.DOUBLE_PAWN and last.ply == state.ply:
            direction = 1 if mover == Color.WHITE else -1
            return sq.offset(0, -direction).name
    return "-"


def state_to_fen(state: GameState) -> str:
    """Serialise a :class:`GameState` to FEN."""
    # 1. Board
    rows: list[str] = []
    for rank in range(BOARD_SIZE - 1, -1, -1):
        empty = 0
        row = ""
        for file in range(BOARD_SIZE):
            piece = state.board[Square(file, rank)]
            if piece is None:
                empty += 1
            else:
                if empty:
                    row += str(empty)
                    empty = 0
                row += str(piece)
        if empty:
            row += str(empty)
        rows.append(row)
    board_str = "/".join(rows)

    # 2. Side
    side_str = "w" if state.active_color == Color.WHITE else "b"

    return (
        f"{board_str} {side_str} {_castling_field(state)} {_en_passant_field(state)}"
        f" {state.halfmove_clock} {state.fullmove_number}"
    )
