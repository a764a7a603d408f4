"""One-ply search: play each move and evaluate the result."""

from __future__ import annotations

from typing import TYPE_CHECKING

from gambit.engine.search import SearchStrategy

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState


class ShallowEvaluation(SearchStrategy):
    """Chooses the move with the best immediate evaluation."""

    __slots__ = ()

    def find_best_move(self, state: GameState) -> Move | None:
        return self._maximize_first_level(state, self.evaluator.evaluate)
