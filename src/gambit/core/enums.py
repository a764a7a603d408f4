"""Core enumerations for the chess domain."""

from __future__ import annotations

from enum import IntEnum


class Color(IntEnum):
    """Side color."""

    WHITE = 0
    BLACK = 1

    @property
    def opposite(self) -> Color:
        return Color(1 - self.value)

    def __str__(self) -> str:
        return self.name.lower()


class PieceType(IntEnum):
    """Chess piece types ordered by conventional value."""

    PAWN = 1
    KNIGHT = 2
    BISHOP = 3
    ROOK = 4
    QUEEN = 5
    KING = 6


class MoveFlag(IntEnum):
    """Extra classification of a single step."""

    NORMAL = 0
    DOUBLE_PAWN = 1
    SETUP = 2  # synthetic history entry recorded while loading a position


class GameStatus(IntEnum):
    """Status of the side to move."""

    NONE = 0
    IN_CHECK = 1
    CHECKMATE = 2
    DRAW = 3

    @property
    def is_terminal(self) -> bool:
        return self in (GameStatus.CHECKMATE, GameStatus.DRAW)


class JournalDirection(IntEnum):
    """Which journal stack a jump walks through."""

    UNDO = 0
    REDO = 1
