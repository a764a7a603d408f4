"""Board geometry: vectors, squares and coordinate helpers.

Board layout (Little-Endian Rank-File mapping):
    a1=0, b1=1, ..., h1=7
    a2=8, b2=9, ..., h2=15
    ...
    a8=56, b8=57, ..., h8=63
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8

_FILES = "abcdefgh"
_RANKS = "12345678"


@dataclass(frozen=True, slots=True)
class Vector:
    """Integer displacement on the board grid."""

    dx: int
    dy: int

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.dx + other.dx, self.dy + other.dy)

    def __mul__(self, factor: int) -> Vector:
        return Vector(self.dx * factor, self.dy * factor)

    def flipped(self) -> Vector:
        """Mirror vertically (white's view → black's view)."""
        return Vector(self.dx, -self.dy)


@dataclass(frozen=True, slots=True)
class Square:
    """A (file, rank) coordinate, possibly off the board.

    Offset arithmetic is allowed to leave the board; callers test
    :attr:`out_of_bounds` before looking anything up.
    """

    file: int
    rank: int

    # ── Conversion ───────────────────────────────────────────────────────

    @property
    def index(self) -> int:
        """Linear index ``file + rank * 8``."""
        return self.file + self.rank * BOARD_SIZE

    @classmethod
    def from_index(cls, index: int) -> Square:
        if not 0 <= index < BOARD_SIZE * BOARD_SIZE:
            raise ValueError(f"Square index out of range: {index}")
        return cls(index % BOARD_SIZE, index // BOARD_SIZE)

    @property
    def out_of_bounds(self) -> bool:
        return not (0 <= self.file < BOARD_SIZE and 0 <= self.rank < BOARD_SIZE)

    @property
    def is_light(self) -> bool:
        """Whether the square is light (a1 is dark)."""
        return (self.file + self.rank) % 2 == 1

    # ── Arithmetic ───────────────────────────────────────────────────────

    def shifted(self, vector: Vector) -> Square:
        return Square(self.file + vector.dx, self.rank + vector.dy)

    def offset(self, dx: int, dy: int) -> Square:
        return Square(self.file + dx, self.rank + dy)

    # ── Display ──────────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        """Algebraic name, e.g. ``Square(4, 3)`` → ``'e4'``."""
        if self.out_of_bounds:
            return f"({self.file},{self.rank})"
        return _FILES[self.file] + _RANKS[self.rank]

    def __str__(self) -> str:
        return self.name


def parse_square(name: str) -> Square:
    """Parse square name, e.g. 'e4' → Square(4, 3)."""
    if len(name) != 2 or name[0] not in _FILES or name[1] not in _RANKS:
        raise ValueError(f"Invalid square name: {name!r}")
    return Square(_FILES.index(name[0]), _RANKS.index(name[1]))


ALL_SQUARES: tuple[Square, ...] = tuple(
    Square.from_index(i) for i in range(BOARD_SIZE * BOARD_SIZE)
)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = ALL_SQUARES[0:8]
A2, B2, C2, D2, E2, F2, G2, H2 = ALL_SQUARES[8:16]
A3, B3, C3, D3, E3, F3, G3, H3 = ALL_SQUARES[16:24]
A4, B4, C4, D4, E4, F4, G4, H4 = ALL_SQUARES[24:32]
A5, B5, C5, D5, E5, F5, G5, H5 = ALL_SQUARES[32:40]
A6, B6, C6, D6, E6, F6, G6, H6 = ALL_SQUARES[40:48]
A7, B7, C7, D7, E7, F7, G7, H7 = ALL_SQUARES[48:56]
A8, B8, C8, D8, E8, F8, G8, H8 = ALL_SQUARES[56:64]
