"""Fixed-depth minimax search with alpha-beta pruning."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

from gambit.core.accumulators import MoveAccumulator
from gambit.engine.search import CancelCheck, SearchStrategy

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState
    from gambit.engine.evaluator import GameEvaluator


class _MinMaxAccumulator(MoveAccumulator):
    """Scores each legal move of one node and stops on a cutoff."""

    __slots__ = ("_search", "_state", "_depth", "_maximizing", "alpha", "beta", "best_value")

    def __init__(
        self,
        search: FixedAlphaBeta,
        state: GameState,
        alpha: float,
        beta: float,
        depth: int,
    ) -> None:
        self._search = search
        self._state = state
        self._depth = depth
        # Root is depth 0 and belongs to the searching side.
        self._maximizing = depth % 2 == 0
        self.alpha = alpha
        self.beta = beta
        self.best_value = -math.inf if self._maximizing else math.inf

    def add_move(self, move: Move) -> bool:
        value = self._state.run_with_move(
            move,
            lambda: self._search.min_max(
                self._state, self.alpha, self.beta, self._depth + 1
            ),
        )
        if self._maximizing:
            self.best_value = max(self.best_value, value)
            self.alpha = max(self.alpha, self.best_value)
        else:
            self.best_value = min(self.best_value, value)
            self.beta = min(self.beta, self.best_value)
        return self.alpha < self.beta

    def generate_more(self) -> bool:
        return self.alpha < self.beta


class FixedAlphaBeta(SearchStrategy):
    """Minimax to a fixed depth, pruning branches that cannot matter."""

    __slots__ = ("_max_depth",)

    def __init__(
        self,
        max_depth: int,
        evaluator: GameEvaluator | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> None:
        super().__init__(evaluator, is_cancelled)
        self.max_depth = max_depth

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        if value <= 0:
            raise ValueError("Search depth must be >= 1")
        self._max_depth = value

    def find_best_move(self, state: GameState) -> Move | None:
        return self._maximize_first_level(
            state, lambda s: self.min_max(s, -math.inf, math.inf, 1)
        )

    def min_max(self, state: GameState, alpha: float, beta: float, depth: int) -> float:
        """Value of *state* for the searching side, *depth* plies below the root."""
        if self.is_aborted():
            # Worst case for whoever chooses here, so the caller prunes at once.
            return -math.inf if depth % 2 == 0 else math.inf

        if depth >= self._max_depth or state.is_game_over:
            return self.evaluator.evaluate(state)

        acc = _MinMaxAccumulator(self, state, alpha, beta, depth)
        state.accumulate_legal_moves(acc)
        return acc.best_value
