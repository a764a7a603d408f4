"""Static position evaluation: material plus piece-square tables."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from gambit.core.enums import Color, GameStatus, PieceType
from gambit.core.types import BOARD_SIZE, Square

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.piece import Piece
    from gambit.core.state import GameState

PIECE_VALUES: dict[PieceType, int] = {
    PieceType.KING: 0,
    PieceType.QUEEN: 18,
    PieceType.ROOK: 10,
    PieceType.BISHOP: 7,
    PieceType.KNIGHT: 6,
    PieceType.PAWN: 2,
}

POSITION_WEIGHT = 0.05

# Score of a finished game for the side to move.
TERMINAL_VALUES: dict[GameStatus, float] = {
    GameStatus.DRAW: 0.0,
    GameStatus.CHECKMATE: -math.inf,
}

# Tables are written from white's side: first row is rank 8, last is rank 1.
# fmt: off
_PAWN_TABLE: tuple[int, ...] = (
     0,  0,  0,  0,  0,  0,  0,  0,
    10, 10, 10, 10, 10, 10, 10, 10,
     2,  2,  4,  6,  6,  4,  2,  2,
     1,  1,  2,  5,  5,  2,  1,  1,
     0,  0,  0,  4,  4,  0,  0,  0,
     1, -1, -2,  0,  0, -2, -1,  1,
     1,  2,  2, -4, -4,  2,  2,  1,
     0,  0,  0,  0,  0,  0,  0,  0,
)
_KNIGHT_TABLE: tuple[int, ...] = (
    -10, -8, -6, -6, -6, -6, -8, -10,
     -8, -4,  0,  0,  0,  0, -4,  -8,
     -6,  0,  2,  3,  3,  2,  0,  -6,
     -6,  1,  3,  4,  4,  3,  1,  -6,
     -6,  0,  3,  4,  4,  3,  0,  -6,
     -6,  1,  1,  3,  3,  2,  1,  -6,
     -8, -4,  0,  1,  1,  0, -4,  -8,
    -10, -8, -6, -6, -6, -6, -8, -10,
)
_BISHOP_TABLE: tuple[int, ...] = (
    -4, -2, -2, -2, -2, -2, -2, -4,
    -2,  0,  0,  0,  0,  0,  0, -2,
    -2,  0,  1,  2,  2,  1,  0, -2,
    -2,  1,  1,  2,  2,  1,  1, -2,
    -2,  0,  2,  2,  2,  2,  0, -2,
    -2,  2,  2,  2,  2,  2,  2, -2,
    -2,  1,  0,  0,  0,  0,  1, -2,
    -4, -2, -2, -2, -2, -2, -2, -4,
)
_ROOK_TABLE: tuple[int, ...] = (
     0,  0,  0,  0,  0,  0,  0,  0,
     1,  2,  2,  2,  2,  2,  2,  1,
    -1,  0,  0,  0,  0,  0,  0, -1,
    -1,  0,  0,  0,  0,  0,  0, -1,
    -1,  0,  0,  0,  0,  0,  0, -1,
    -1,  0,  0,  0,  0,  0,  0, -1,
    -1,  0,  0,  0,  0,  0,  0, -1,
     0,  0,  0,  1,  1,  0,  0,  0,
)
_QUEEN_TABLE: tuple[int, ...] = (
    -4, -2, -2, -1, -1, -2, -2, -4,
    -2,  0,  0,  0,  0,  0,  0, -2,
    -2,  0,  1,  1,  1,  1,  0, -2,
    -1,  0,  1,  1,  1,  1,  0, -1,
    -1,  0,  1,  1,  1,  1,  0, -1,
    -2,  1,  1,  1,  1,  1,  1, -2,
    -2,  0,  1,  0,  0,  0,  0, -2,
    -4, -2, -2, -1, -1, -2, -2, -4,
)
_KING_TABLE: tuple[int, ...] = (
    -6, -8, -8, -10, -10, -8, -8, -6,
    -6, -8, -8, -10, -10, -8, -8, -6,
    -6, -8, -8, -10, -10, -8, -8, -6,
    -6, -8, -8, -10, -10, -8, -8, -6,
    -4, -6, -6,  -8,  -8, -6, -6, -4,
    -2, -4, -4,  -4,  -4, -4, -4, -2,
     4,  4,  0,   0,   0,  0,  4,  4,
     4,  6,  2,   0,   0,  2,  6,  4,
)
# fmt: on

POSITION_TABLES: dict[PieceType, tuple[int, ...]] = {
    PieceType.PAWN: _PAWN_TABLE,
    PieceType.KNIGHT: _KNIGHT_TABLE,
    PieceType.BISHOP: _BISHOP_TABLE,
    PieceType.ROOK: _ROOK_TABLE,
    PieceType.QUEEN: _QUEEN_TABLE,
    PieceType.KING: _KING_TABLE,
}


def table_index(sq: Square, color: Color) -> int:
    """Index into a white-oriented table; black reads it mirrored vertically."""
    row = sq.rank if color == Color.BLACK else BOARD_SIZE - 1 - sq.rank
    return row * BOARD_SIZE + sq.file


def piece_score(piece: Piece, sq: Square) -> float:
    """Material plus weighted placement bonus of *piece* standing on *sq*."""
    table = POSITION_TABLES[piece.piece_type]
    bonus = table[table_index(sq, piece.color)]
    return PIECE_VALUES[piece.piece_type] + POSITION_WEIGHT * bonus


def score_position(
    board: Board, status: GameStatus, active_color: Color, perspective: Color
) -> float:
    """Score a position for *perspective*; higher is better for that side."""
    if status.is_terminal:
        sign = 1 if perspective == active_color else -1
        value = TERMINAL_VALUES[status] * sign
    else:
        value = 0.0
        for sq, piece in board.pieces():
            score = piece_score(piece, sq)
            value += score if piece.color == perspective else -score
    # -0.0 == 0.0, so this turns -0.0 into 0.0 and leaves everything else
    return 0.0 if value == 0 else value


class GameEvaluator:
    """Scores game states from a configurable side's point of view."""

    __slots__ = ("perspective",)

    def __init__(self, perspective: Color = Color.WHITE) -> None:
        self.perspective = perspective

    def evaluate(self, state: GameState) -> float:
        return score_position(
            state.board, state.status(), state.active_color, self.perspective
        )
