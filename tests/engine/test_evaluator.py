"""Tests for static evaluation."""

import math
from collections.abc import Callable

import pytest

from gambit.core.enums import Color, GameStatus, PieceType
from gambit.core.move import Move
from gambit.core.notation import state_from_fen
from gambit.core.piece import Piece
from gambit.core.state import GameState
from gambit.core.types import A1, A8, E2, E4, H8, parse_square
from gambit.engine.evaluator import (
    PIECE_VALUES,
    POSITION_WEIGHT,
    GameEvaluator,
    piece_score,
    score_position,
    table_index,
)


class TestTables:
    def test_white_reads_rank_8_first(self) -> None:
        assert table_index(A8, Color.WHITE) == 0
        assert table_index(A1, Color.WHITE) == 56

    def test_black_is_mirrored(self) -> None:
        assert table_index(A1, Color.BLACK) == 0
        assert table_index(H8, Color.BLACK) == 63
        for sq in (E2, E4, parse_square("c6")):
            mirrored = parse_square(f"{sq.name[0]}{9 - int(sq.name[1])}")
            assert table_index(sq, Color.WHITE) == table_index(mirrored, Color.BLACK)

    def test_piece_score(self) -> None:
        pawn = Piece(Color.WHITE, PieceType.PAWN, 1)
        # e4 pawn table entry is 4
        assert piece_score(pawn, E4) == pytest.approx(2 + 4 * POSITION_WEIGHT)
        black_pawn = Piece(Color.BLACK, PieceType.PAWN, 2)
        assert piece_score(black_pawn, parse_square("e5")) == piece_score(pawn, E4)

    def test_king_is_worth_nothing(self) -> None:
        assert PIECE_VALUES[PieceType.KING] == 0


class TestEvaluate:
    def test_starting_position_is_balanced(self) -> None:
        state = GameState()
        assert GameEvaluator(Color.WHITE).evaluate(state) == pytest.approx(0.0, abs=1e-9)
        assert GameEvaluator(Color.BLACK).evaluate(state) == pytest.approx(0.0, abs=1e-9)

    def test_perspective_negates(self, play: Callable[..., list[Move]]) -> None:
        state = GameState()
        play(state, "e2e4", "d7d5", "e4d5")
        white = GameEvaluator(Color.WHITE).evaluate(state)
        black = GameEvaluator(Color.BLACK).evaluate(state)
        assert white > 0
        assert black == -white

    def test_material_advantage(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/3QK3 w - - 0 1")
        value = GameEvaluator(Color.WHITE).evaluate(state)
        assert value == pytest.approx(18, abs=1.0)

    def test_mirrored_positions_score_alike(self) -> None:
        white = state_from_fen("4k3/8/8/8/4P3/2N5/8/4K3 w - - 0 1")
        black = state_from_fen("4k3/8/2n5/4p3/8/8/8/4K3 b - - 0 1")
        assert GameEvaluator(Color.WHITE).evaluate(white) == pytest.approx(
            GameEvaluator(Color.BLACK).evaluate(black)
        )

    def test_checkmate(self, play: Callable[..., list[Move]]) -> None:
        state = GameState()
        play(state, "f2f3", "e7e5", "g2g4", "d8h4")
        assert state.status() == GameStatus.CHECKMATE
        assert GameEvaluator(Color.WHITE).evaluate(state) == -math.inf
        assert GameEvaluator(Color.BLACK).evaluate(state) == math.inf

    def test_draw_is_zero(self) -> None:
        state = state_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        assert state.status() == GameStatus.DRAW
        assert GameEvaluator(Color.WHITE).evaluate(state) == 0.0
        assert GameEvaluator(Color.BLACK).evaluate(state) == 0.0

    def test_no_negative_zero(self) -> None:
        state = state_from_fen("7k/8/5KQ1/8/8/8/8/8 b - - 0 1")
        for color in Color:
            value = score_position(state.board, GameStatus.DRAW, Color.WHITE, color)
            assert math.copysign(1.0, value) == 1.0

    def test_bare_kings_on_mirrored_squares(self) -> None:
        state = state_from_fen("4k3/8/8/8/8/8/8/4K3 w - - 0 1")
        for color in Color:
            value = score_position(state.board, GameStatus.NONE, Color.WHITE, color)
            assert value == 0.0
            assert math.copysign(1.0, value) == 1.0

