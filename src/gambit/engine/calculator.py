"""Move calculator: a search strategy plus the abort flag that stops it."""

from __future__ import annotations

import logging
import threading
from time import perf_counter
from typing import TYPE_CHECKING

from gambit.engine.alpha_beta import FixedAlphaBeta
from gambit.engine.evaluator import GameEvaluator
from gambit.engine.search import SearchKind, SearchLimits, SearchStrategy
from gambit.engine.shallow import ShallowEvaluation

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState

_LOGGER = logging.getLogger(__name__)


class MoveCalculator:
    """Runs a :class:`SearchStrategy` for whichever side is to move.

    :meth:`abort` may be called from another thread while
    :meth:`find_best_move` runs; the search notices it the next time it
    polls and returns ``None``.  The flag stays set until :meth:`reset`.
    """

    __slots__ = ("_strategy", "_abort_event")

    def __init__(self, strategy: SearchStrategy) -> None:
        self._abort_event = threading.Event()
        self._strategy = strategy
        strategy.set_cancel_check(self._abort_event.is_set)

    # -- Factories ----------------------------------------------------------

    @classmethod
    def with_shallow_evaluation(cls) -> MoveCalculator:
        return cls(ShallowEvaluation(GameEvaluator()))

    @classmethod
    def with_fixed_alpha_beta(cls, max_depth: int) -> MoveCalculator:
        return cls(FixedAlphaBeta(max_depth, GameEvaluator()))

    @classmethod
    def from_limits(cls, limits: SearchLimits) -> MoveCalculator:
        if limits.kind == SearchKind.SHALLOW:
            return cls.with_shallow_evaluation()
        return cls.with_fixed_alpha_beta(limits.max_depth)

    # -- Configuration ------------------------------------------------------

    @property
    def strategy(self) -> SearchStrategy:
        return self._strategy

    @property
    def max_depth(self) -> int:
        if isinstance(self._strategy, FixedAlphaBeta):
            return self._strategy.max_depth
        return 1

    @max_depth.setter
    def max_depth(self, value: int) -> None:
        if not isinstance(self._strategy, FixedAlphaBeta):
            raise ValueError(
                f"{type(self._strategy).__name__} has no configurable depth"
            )
        self._strategy.max_depth = value

    # -- Abort flag ---------------------------------------------------------

    def abort(self) -> None:
        self._abort_event.set()

    def reset(self) -> None:
        self._abort_event.clear()

    @property
    def is_aborted(self) -> bool:
        return self._abort_event.is_set()

    # -- Search -------------------------------------------------------------

    def find_best_move(self, state: GameState) -> Move | None:
        """Search the best move for the side to move of *state*."""
        started = perf_counter()
        _LOGGER.debug(
            "Searching for %s with %s", state.active_color, type(self._strategy).__name__
        )

        move = self._strategy.find_best_move(state)

        elapsed_ms = (perf_counter() - started) * 1000.0
        if move is None:
            _LOGGER.info("Search aborted after %.1f ms", elapsed_ms)
        else:
            _LOGGER.debug("Found %s in %.1f ms", move, elapsed_ms)
        return move
