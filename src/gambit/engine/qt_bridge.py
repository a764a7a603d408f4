"""Qt bridge to run engine search in a worker thread."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from gambit.core.state import GameState
from gambit.engine.calculator import MoveCalculator
from gambit.engine.search import SearchLimits

_LOGGER = logging.getLogger(__name__)


class EngineWorker(QObject):
    """Thread-affine worker that computes engine moves on demand.

    Move the worker to a ``QThread`` and call :meth:`request_move` through a
    queued connection.  The game state is searched in place, so the caller
    must not touch it until one of the result signals arrives.
    """

    best_move_ready = pyqtSignal(int, object)
    search_cancelled = pyqtSignal(int)
    search_no_move = pyqtSignal(int)
    search_error = pyqtSignal(int, str)

    __slots__ = ("_calculator",)

    def __init__(self, *, limits: SearchLimits | None = None) -> None:
        super().__init__()
        self._calculator = MoveCalculator.from_limits(limits or SearchLimits())

    @property
    def calculator(self) -> MoveCalculator:
        return self._calculator

    @pyqtSlot(object, int)
    def request_move(self, state_obj: object, request_id: int) -> None:
        """Search for the best move in *state_obj* and emit result."""
        if not isinstance(state_obj, GameState):
            self.search_error.emit(request_id, "Engine received invalid game state")
            return

        self._calculator.reset()
        try:
            if state_obj.is_game_over:
                self.search_no_move.emit(request_id)
                return
            move = self._calculator.find_best_move(state_obj)
        except Exception as exc:
            _LOGGER.exception("Engine search %d failed", request_id)
            self.search_error.emit(request_id, str(exc))
            return

        if move is None or self._calculator.is_aborted:
            self.search_cancelled.emit(request_id)
            return

        self.best_move_ready.emit(request_id, move)

    @pyqtSlot()
    def cancel(self) -> None:
        """Request cancellation of the current search."""
        self._calculator.abort()

    @pyqtSlot(int)
    def set_max_depth(self, max_depth: int) -> None:
        """Update the search depth (takes effect on the next search)."""
        self._calculator.max_depth = max_depth
