"""Undo/redo log of committed moves."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from gambit.core.enums import JournalDirection

if TYPE_CHECKING:
    from gambit.core.move import Move
    from gambit.core.state import GameState

_LOGGER = logging.getLogger(__name__)


def _contains(moves: list[Move], move: Move) -> bool:
    return any(m is move for m in moves)


class MoveJournal:
    """History and future stacks on top of a :class:`GameState`.

    ``history`` is ordered oldest first; ``future`` is ordered so that its
    first entry is the next move :meth:`redo` replays.  Entries are matched
    by identity: the same move played twice is two entries.
    """

    __slots__ = ("_state", "_history", "_future")

    def __init__(self, state: GameState) -> None:
        self._state = state
        self._history: list[Move] = []
        self._future: list[Move] = []  # top of stack = next redo

    # -- Queries ------------------------------------------------------------

    @property
    def history(self) -> tuple[Move, ...]:
        return tuple(self._history)

    @property
    def future(self) -> tuple[Move, ...]:
        return tuple(reversed(self._future))

    @property
    def latest(self) -> Move | None:
        return self._history[-1] if self._history else None

    @property
    def can_undo(self) -> bool:
        return bool(self._history)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    # -- Commands -----------------------------------------------------------

    def do_move(self, move: Move) -> None:
        """Commit *move*; discards anything that could be redone."""
        self._state.apply_move(move)
        self._history.append(move)
        if self._future:
            _LOGGER.debug("Dropping %d redoable moves", len(self._future))
            self._future.clear()
        _LOGGER.debug("Played %s at ply %d", move, move.ply)

    def undo(self) -> Move | None:
        if not self._history:
            return None
        move = self._history.pop()
        self._state.reverse_move(move)
        self._future.append(move)
        _LOGGER.debug("Undid %s", move)
        return move

    def redo(self) -> Move | None:
        if not self._future:
            return None
        move = self._future.pop()
        self._state.apply_move(move)
        self._history.append(move)
        _LOGGER.debug("Redid %s", move)
        return move

    def undo_until(self, move: Move | None) -> None:
        """Undo until *move* is the latest entry, or history is empty."""
        while self._history and self._history[-1] is not move:
            self.undo()

    def redo_until(self, move: Move | None) -> None:
        """Redo until *move* is the latest entry, or nothing is left to redo."""
        while self._future and self.latest is not move:
            self.redo()

    def jump(self, move: Move | None, direction: JournalDirection) -> None:
        """Undo or redo until *move* is the latest entry.

        If *move* is not on the stack *direction* walks, that stack is
        exhausted.
        """
        if direction == JournalDirection.UNDO:
            self.undo_until(move)
        else:
            self.redo_until(move)

    def jump_to(self, move: Move | None) -> bool:
        """Make *move* the latest entry; ``None`` means the initial state.

        Picks the direction from the stack holding *move*.  Returns
        ``False`` (and changes nothing) if the journal does not contain it;
        use :meth:`jump` to walk a stack regardless.
        """
        if move is None or _contains(self._history, move):
            self.undo_until(move)
            return True
        if _contains(self._future, move):
            self.redo_until(move)
            return True
        return False

    def clear(self) -> None:
        """Forget both stacks without touching the game state."""
        self._history.clear()
        self._future.clear()
