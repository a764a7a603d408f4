"""Shared engine search models and the strategy base class."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from gambit.engine.evaluator import GameEvaluator

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState

CancelCheck = Callable[[], bool]


def _never_cancelled() -> bool:
    return False


class SearchKind(StrEnum):
    """Available search strategies."""

    SHALLOW = "shallow"
    ALPHA_BETA = "alpha_beta"


@dataclass(slots=True, frozen=True)
class SearchLimits:
    """Search configuration for a single move computation."""

    max_depth: int = 3
    kind: SearchKind = SearchKind.ALPHA_BETA

    def __post_init__(self) -> None:
        if self.max_depth <= 0:
            raise ValueError("Search depth must be >= 1")


class SearchStrategy(ABC):
    """Picks a move for the side to move of a :class:`GameState`.

    Strategies poll ``is_cancelled`` while they work.  Once it reports
    ``True`` the search unwinds and :meth:`find_best_move` returns ``None``.
    """

    __slots__ = ("evaluator", "_cancel_check")

    def __init__(
        self,
        evaluator: GameEvaluator | None = None,
        is_cancelled: CancelCheck | None = None,
    ) -> None:
        self.evaluator = evaluator or GameEvaluator()
        self._cancel_check: CancelCheck = is_cancelled or _never_cancelled

    def set_cancel_check(self, is_cancelled: CancelCheck | None) -> None:
        self._cancel_check = is_cancelled or _never_cancelled

    def is_aborted(self) -> bool:
        return self._cancel_check()

    @abstractmethod
    def find_best_move(self, state: GameState) -> Move | None:
        """Best legal move for the side to move, or ``None`` if aborted.

        Raises ``RuntimeError`` if the side to move has no legal move.
        """

    def _maximize_first_level(
        self, state: GameState, score: Callable[[GameState], float]
    ) -> Move | None:
        """Return the legal move whose resulting position scores highest.

        Positions are scored for the side to move of *state*; later moves
        win ties.
        """
        self.evaluator.perspective = state.active_color
        best_move: Move | None = None
        best_value = -math.inf
        for move in state.legal_moves():
            if self.is_aborted():
                return None
            value = state.run_with_move(move, lambda: score(state))
            if best_move is None or value >= best_value:
                best_move = move
                best_value = value

        if best_move is None:
            raise RuntimeError("No move could be found: side to move has no legal move")
        if self.is_aborted():
            return None
        return best_move
