"""Game state: board, side to move, ply counter, status and draw counter."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TypeVar

from gambit.core.accumulators import (
    AcceptAccumulator,
    CollectionAccumulator,
    FulfillmentFilter,
    LosingMoveFilter,
    MoveAccumulator,
)
from gambit.core.board import Board, BoardSnapshot
from gambit.core.enums import Color, GameStatus, PieceType
from gambit.core.journal import MoveJournal
from gambit.core.move import Move, MoveRequest
from gambit.core.move_generator import MoveGenerator
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.types import Square

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class StateSnapshot:
    """Structural copy of a :class:`GameState` for equality checks."""

    board: BoardSnapshot
    active_color: Color
    ply: int
    draw_counters: tuple[int, ...]


class GameState:
    """Mutable state of one game session.

    ``apply_move``/``reverse_move`` are the only operations that change the
    board; :meth:`run_with_move` wraps them for speculative look-ahead.
    The status is computed on demand and cached until the next mutation.
    """

    __slots__ = (
        "board",
        "active_color",
        "ply",
        "generator",
        "journal",
        "_status",
        "_draw_counters",
    )

    def __init__(
        self,
        board: Board | None = None,
        active_color: Color = Color.WHITE,
        *,
        halfmove_clock: int = 0,
    ) -> None:
        if halfmove_clock < 0:
            raise ValueError(f"Invalid halfmove clock: {halfmove_clock}")
        self.board = board if board is not None else Board.initial()
        self.active_color = active_color
        self.ply = 0
        self.generator = MoveGenerator(self)
        self.journal = MoveJournal(self)
        self._status: GameStatus | None = None
        self._draw_counters: list[int] = [halfmove_clock]

    # -- Queries ------------------------------------------------------------

    def status(self) -> GameStatus:
        if self._status is None:
            self._status = Rules.game_status(self)
        return self._status

    @property
    def is_game_over(self) -> bool:
        return self.status().is_terminal

    def is_in_check(self, color: Color | None = None) -> bool:
        return self.generator.is_in_check(
            self.active_color if color is None else color
        )

    @property
    def halfmove_clock(self) -> int:
        """Half-moves since the last capture or pawn move."""
        return self._draw_counters[-1]

    @property
    def fullmove_number(self) -> int:
        """Move number counted from the start of this session."""
        first = self.active_color if self.ply % 2 == 0 else self.active_color.opposite
        return 1 + (self.ply + (1 if first == Color.BLACK else 0)) // 2

    def captured_pieces(self) -> list[Piece]:
        return self.board.sorted_captured()

    def snapshot(self) -> StateSnapshot:
        return StateSnapshot(
            board=self.board.snapshot(),
            active_color=self.active_color,
            ply=self.ply,
            draw_counters=tuple(self._draw_counters),
        )

    # -- Move generation ----------------------------------------------------

    def accumulate_moves(self, acc: MoveAccumulator, square: Square | None = None) -> bool:
        """Pseudo-legal moves of one square, or of the side to move."""
        if square is None:
            return self.generator.accumulate_all(acc, self.active_color)
        return self.generator.accumulate(acc, square)

    def _is_own_square(self, square: Square) -> bool:
        piece = self.board[square]
        return piece is not None and piece.color == self.active_color

    def accumulate_legal_moves(
        self, acc: MoveAccumulator, square: Square | None = None
    ) -> bool:
        """Legal moves of one square, or of the side to move.

        A square that does not hold a piece of the side to move has none.
        """
        if square is not None and not self._is_own_square(square):
            return True
        return self.accumulate_moves(acc.with_filters(LosingMoveFilter(self)), square)

    def legal_moves(self, square: Square | None = None) -> list[Move]:
        acc = CollectionAccumulator()
        self.accumulate_legal_moves(acc, square)
        return acc.moves

    def has_legal_move(self) -> bool:
        return Rules.has_legal_move(self)

    def validate_move(
        self,
        origin: Square,
        target: Square,
        promotion: PieceType | None = None,
    ) -> Move | None:
        """Return the legal move matching the request, or ``None``."""
        if origin.out_of_bounds or target.out_of_bounds:
            return None
        if not self._is_own_square(origin):
            return None

        found = AcceptAccumulator()
        pipeline = found.with_filters(
            FulfillmentFilter(MoveRequest(origin, target, promotion)),
            LosingMoveFilter(self),
        )
        self.generator.accumulate(pipeline, origin)
        return found.satisfying_move

    # -- Mutation -----------------------------------------------------------

    def apply_move(self, move: Move) -> None:
        """Play *move* for the side to move."""
        piece = self.board[move.origin]
        if piece is None:
            raise ValueError(f"No piece on {move.origin} to play {move}")

        resets_clock = move.is_capture or piece.piece_type == PieceType.PAWN
        move.apply_to(self.board)
        self._draw_counters.append(0 if resets_clock else self.halfmove_clock + 1)
        self.ply += 1
        move.stamp(self.ply)
        self.active_color = self.active_color.opposite
        self._status = None

    def reverse_move(self, move: Move) -> None:
        """Take back *move*, which must be the latest applied move."""
        if move.ply == 0 or move.ply != self.ply:
            raise RuntimeError(
                f"Cannot reverse {move}: applied at ply {move.ply}, current ply {self.ply}"
            )
        move.reverse_on(self.board)
        move.stamp(0)
        self.ply -= 1
        self._draw_counters.pop()
        self.active_color = self.active_color.opposite
        self._status = None

    def run_with_move(self, move: Move, fn: Callable[[], T]) -> T:
        """Call *fn* with *move* applied, then take the move back."""
        cached = self._status
        self.apply_move(move)
        try:
            return fn()
        finally:
            self.reverse_move(move)
            self._status = cached

    # -- Journal shortcuts --------------------------------------------------

    def do_move(self, move: Move) -> None:
        self.journal.do_move(move)

    def undo(self) -> Move | None:
        return self.journal.undo()

    def redo(self) -> Move | None:
        return self.journal.redo()

    def __repr__(self) -> str:
        return f"GameState({self.active_color} to move, ply {self.ply})\n{self.board!r}"
