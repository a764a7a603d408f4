"""High-level chess rules: check, checkmate, stalemate, draw detection."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.core.accumulators import AcceptAccumulator, LosingMoveFilter
from gambit.core.enums import GameStatus, PieceType

if TYPE_CHECKING:
    from gambit.core.board import Board
    from gambit.core.state import GameState


class Rules:
    """Static rule-checker that operates on a :class:`GameState`."""

    # Automatic draws only: insufficient material, 75-move rule.
    SEVENTY_FIVE_MOVE_LIMIT = 150

    @staticmethod
    def is_in_check(state: GameState) -> bool:
        return state.generator.is_in_check(state.active_color)

    @staticmethod
    def has_legal_move(state: GameState) -> bool:
        acc = AcceptAccumulator()
        state.generator.accumulate_all(
            acc.with_filters(LosingMoveFilter(state)), state.active_color
        )
        return acc.condition_satisfied

    @staticmethod
    def is_checkmate(state: GameState) -> bool:
        return Rules.is_in_check(state) and not Rules.has_legal_move(state)

    @staticmethod
    def is_stalemate(state: GameState) -> bool:
        return not Rules.is_in_check(state) and not Rules.has_legal_move(state)

    @staticmethod
    def is_insufficient_material(board: Board) -> bool:
        """K vs K, K+minor vs K, K+B vs K+B with bishops on one square color."""
        total = len(board)

        # K vs K
        if total <= 2:
            return True

        extras = [
            (sq, p) for sq, p in board.pieces() if p.piece_type != PieceType.KING
        ]

        # K+minor vs K
        if total == 3:
            return extras[0][1].piece_type in (PieceType.BISHOP, PieceType.KNIGHT)

        # Two bishops on same-colored squares
        if total == 4:
            if all(p.piece_type == PieceType.BISHOP for _, p in extras):
                (first, _), (second, _) = extras
                return first.is_light == second.is_light

        return False

    @staticmethod
    def is_seventy_five_move_rule(state: GameState) -> bool:
        return state.halfmove_clock >= Rules.SEVENTY_FIVE_MOVE_LIMIT

    @staticmethod
    def game_status(state: GameState) -> GameStatus:
        """Classify the position for the side to move."""
        in_check = Rules.is_in_check(state)
        can_move = Rules.has_legal_move(state)

        if in_check:
            status = GameStatus.IN_CHECK if can_move else GameStatus.CHECKMATE
        else:
            status = GameStatus.NONE if can_move else GameStatus.DRAW

        if (
            Rules.is_seventy_five_move_rule(state) and not status.is_terminal
        ) or Rules.is_insufficient_material(state.board):
            return GameStatus.DRAW
        return status
