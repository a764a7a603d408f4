"""Reversible move descriptors.

Every move knows how to apply itself to a :class:`Board` and how to undo
exactly that change.  Moves compare by structure; the ``ply`` stamp is
bookkeeping and takes no part in equality.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from gambit.core.enums import MoveFlag, PieceType
from gambit.core.piece import PROMOTION_TYPES
from gambit.core.types import Square

if TYPE_CHECKING:
    from gambit.core.board import Board

_PROMO_CHARS: dict[PieceType, str] = {
    PieceType.KNIGHT: "n",
    PieceType.BISHOP: "b",
    PieceType.ROOK: "r",
    PieceType.QUEEN: "q",
}


@dataclass(frozen=True, slots=True)
class MoveRequest:
    """A move as a user names it: two squares and maybe a promotion kind."""

    origin: Square
    target: Square
    promotion: PieceType | None = None


@dataclass(slots=True, eq=False)
class Move(ABC):
    """Base class of all move kinds.

    ``ply`` is the 1-based ply at which the move was committed, or 0 while
    the move is not applied.
    """

    ply: int = field(default=0, compare=False, kw_only=True, repr=False)

    @property
    @abstractmethod
    def origin(self) -> Square:
        """Square the moving piece starts on, as shown to a user."""

    @property
    @abstractmethod
    def target(self) -> Square:
        """Square the moving piece ends on, as shown to a user."""

    @property
    def is_capture(self) -> bool:
        return False

    @abstractmethod
    def is_attacking(self, square: Square) -> bool:
        """Whether this move captures whatever stands on *square*."""

    @abstractmethod
    def apply_to(self, board: Board) -> None: ...

    @abstractmethod
    def reverse_on(self, board: Board) -> None: ...

    def stamp(self, ply: int) -> None:
        self.ply = ply

    def fulfills(self, request: MoveRequest) -> bool:
        """Whether this move is the one *request* describes."""
        return (
            request.promotion is None
            and self.origin == request.origin
            and self.target == request.target
        )

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        return f"{self.origin}{self.target}"


@dataclass(slots=True, unsafe_hash=True)
class Step(Move):
    """Move one piece to an empty square."""

    from_sq: Square
    to_sq: Square
    flag: MoveFlag = MoveFlag.NORMAL

    @property
    def origin(self) -> Square:
        return self.from_sq

    @property
    def target(self) -> Square:
        return self.to_sq

    def is_attacking(self, square: Square) -> bool:
        return False

    def apply_to(self, board: Board) -> None:
        board.apply_step(self)

    def reverse_on(self, board: Board) -> None:
        board.reverse_step(self)


@dataclass(slots=True, unsafe_hash=True)
class Capture(Step):
    """Remove the piece on the target square, then step onto it."""

    @property
    def is_capture(self) -> bool:
        return True

    def is_attacking(self, square: Square) -> bool:
        return self.to_sq == square

    def apply_to(self, board: Board) -> None:
        board.capture(self.to_sq)
        board.apply_step(self)

    def reverse_on(self, board: Board) -> None:
        board.reverse_step(self)
        board.uncapture(self.to_sq)


@dataclass(slots=True, unsafe_hash=True)
class Compound(Move):
    """Two moves applied in order and reversed in the opposite order.

    Used for castling (king step + rook step) and en passant (sideways
    capture + forward step).  ``origin_sq``/``target_sq`` describe the move
    the way a player sees it.
    """

    first: Move
    second: Move
    origin_sq: Square
    target_sq: Square

    @property
    def origin(self) -> Square:
        return self.origin_sq

    @property
    def target(self) -> Square:
        return self.target_sq

    @property
    def is_capture(self) -> bool:
        return self.first.is_capture or self.second.is_capture

    def is_attacking(self, square: Square) -> bool:
        return self.first.is_attacking(square) or self.second.is_attacking(square)

    def apply_to(self, board: Board) -> None:
        self.first.apply_to(board)
        self.second.apply_to(board)

    def reverse_on(self, board: Board) -> None:
        self.second.reverse_on(board)
        self.first.reverse_on(board)

    def stamp(self, ply: int) -> None:
        self.ply = ply
        self.first.stamp(ply)
        self.second.stamp(ply)


@dataclass(slots=True, unsafe_hash=True)
class Promotion(Move):
    """A pawn step or capture onto the last rank that swaps the pawn."""

    base: Step
    promotion: PieceType

    def __post_init__(self) -> None:
        if self.promotion not in PROMOTION_TYPES:
            raise ValueError(f"Cannot promote to {self.promotion.name}")

    @property
    def origin(self) -> Square:
        return self.base.from_sq

    @property
    def target(self) -> Square:
        return self.base.to_sq

    @property
    def is_capture(self) -> bool:
        return self.base.is_capture

    def is_attacking(self, square: Square) -> bool:
        return self.base.is_attacking(square)

    def apply_to(self, board: Board) -> None:
        self.base.apply_to(board)
        board.promote(self.base.to_sq, self.promotion)

    def reverse_on(self, board: Board) -> None:
        board.unpromote(self.base.to_sq)
        self.base.reverse_on(board)

    def stamp(self, ply: int) -> None:
        self.ply = ply
        self.base.stamp(ply)

    def fulfills(self, request: MoveRequest) -> bool:
        return (
            request.promotion == self.promotion
            and self.origin == request.origin
            and self.target == request.target
        )

    def __str__(self) -> str:
        return f"{self.origin}{self.target}{_PROMO_CHARS[self.promotion]}"
