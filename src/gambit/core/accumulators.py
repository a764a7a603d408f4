"""Move accumulators: the receiving end of move generation.

The generator offers candidate moves one at a time to an accumulator and
stops as soon as the accumulator says it has seen enough.  Filters sit in
front of another accumulator and decide which candidates it gets to see.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from gambit.core.move import Move, MoveRequest
    from gambit.core.state import GameState
    from gambit.core.types import Square


class MoveAccumulator(ABC):
    """Receives generated moves and controls how much is generated."""

    __slots__ = ()

    @abstractmethod
    def add_move(self, move: Move) -> bool:
        """Take *move*; return whether generation should continue."""

    def generate_more(self) -> bool:
        """Whether generation should continue without a new move."""
        return True

    def generate_non_attacking(self) -> bool:
        """Whether moves that capture nothing are of interest."""
        return True

    def with_filters(self, *filters: MoveFilter) -> MoveAccumulator:
        """Put *filters* in front of this accumulator, first one outermost."""
        inner: MoveAccumulator = self
        for move_filter in reversed(filters):
            move_filter.inner = inner
            inner = move_filter
        return inner


class CollectionAccumulator(MoveAccumulator):
    """Collects every move it is offered."""

    __slots__ = ("moves",)

    def __init__(self) -> None:
        self.moves: list[Move] = []

    def add_move(self, move: Move) -> bool:
        self.moves.append(move)
        return True


class SearchAccumulator(MoveAccumulator):
    """Stops generation at the first move satisfying :meth:`check_move`."""

    __slots__ = ("satisfying_move",)

    def __init__(self) -> None:
        self.satisfying_move: Move | None = None

    @abstractmethod
    def check_move(self, move: Move) -> bool: ...

    @property
    def condition_satisfied(self) -> bool:
        return self.satisfying_move is not None

    def add_move(self, move: Move) -> bool:
        if self.check_move(move):
            self.satisfying_move = move
            return False
        return True

    def generate_more(self) -> bool:
        return not self.condition_satisfied


class AcceptAccumulator(SearchAccumulator):
    """Satisfied by any move: answers "is there a move at all"."""

    __slots__ = ()

    def check_move(self, move: Move) -> bool:
        return True


class CaptureTestAccumulator(SearchAccumulator):
    """Satisfied by the first move that captures on a given square."""

    __slots__ = ("square",)

    def __init__(self, square: Square) -> None:
        super().__init__()
        self.square = square

    def check_move(self, move: Move) -> bool:
        return move.is_attacking(self.square)

    def generate_non_attacking(self) -> bool:
        return False


# ── Filters ─────────────────────────────────────────────────────────────────


class MoveFilter(MoveAccumulator):
    """Forwards only the moves passing :meth:`check_move` to ``inner``."""

    __slots__ = ("inner",)

    def __init__(self, inner: MoveAccumulator | None = None) -> None:
        self.inner = inner

    @abstractmethod
    def check_move(self, move: Move) -> bool: ...

    def _require_inner(self) -> MoveAccumulator:
        if self.inner is None:
            raise RuntimeError(f"{type(self).__name__} has no inner accumulator")
        return self.inner

    def add_move(self, move: Move) -> bool:
        inner = self._require_inner()
        if self.check_move(move):
            return inner.add_move(move)
        return inner.generate_more()

    def generate_more(self) -> bool:
        return self._require_inner().generate_more()

    def generate_non_attacking(self) -> bool:
        return self._require_inner().generate_non_attacking()


class FulfillmentFilter(MoveFilter):
    """Passes only moves matching a user's :class:`MoveRequest`."""

    __slots__ = ("request",)

    def __init__(self, request: MoveRequest, inner: MoveAccumulator | None = None) -> None:
        super().__init__(inner)
        self.request = request

    def check_move(self, move: Move) -> bool:
        return move.fulfills(self.request)


class LosingMoveFilter(MoveFilter):
    """Rejects moves that leave the mover's own king attacked."""

    __slots__ = ("state",)

    def __init__(self, state: GameState, inner: MoveAccumulator | None = None) -> None:
        super().__init__(inner)
        self.state = state

    def check_move(self, move: Move) -> bool:
        piece = self.state.board[move.origin]
        if piece is None:
            return False
        mover = piece.color
        return not self.state.run_with_move(
            move, lambda: self.state.generator.is_in_check(mover)
        )
