"""Pseudo-legal move generation and attack detection.

Moves are produced piece by piece and handed to a
:class:`~gambit.core.accumulators.MoveAccumulator`.  Every generator
returns ``False`` as soon as the accumulator asks to stop, and the caller
passes that straight up, so a probe never pays for moves it does not need.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from gambit.core.accumulators import (
    CaptureTestAccumulator,
    CollectionAccumulator,
    MoveAccumulator,
)
from gambit.core.enums import Color, MoveFlag, PieceType
from gambit.core.move import Capture, Compound, Move, Promotion, Step
from gambit.core.piece import PROMOTION_TYPES, Piece
from gambit.core.types import BOARD_SIZE, Square, Vector

if TYPE_CHECKING:
    from gambit.core.state import GameState


KNIGHT_OFFSETS: tuple[Vector, ...] = (
    Vector(-2, -1),
    Vector(-2, 1),
    Vector(-1, -2),
    Vector(-1, 2),
    Vector(1, -2),
    Vector(1, 2),
    Vector(2, -1),
    Vector(2, 1),
)

KING_OFFSETS: tuple[Vector, ...] = (
    Vector(-1, -1),
    Vector(-1, 0),
    Vector(-1, 1),
    Vector(0, -1),
    Vector(0, 1),
    Vector(1, -1),
    Vector(1, 0),
    Vector(1, 1),
)

BISHOP_DIRS: tuple[Vector, ...] = (
    Vector(-1, -1),
    Vector(-1, 1),
    Vector(1, -1),
    Vector(1, 1),
)
ROOK_DIRS: tuple[Vector, ...] = (Vector(-1, 0), Vector(1, 0), Vector(0, -1), Vector(0, 1))
QUEEN_DIRS: tuple[Vector, ...] = BISHOP_DIRS + ROOK_DIRS

_SLIDING_DIRS: dict[PieceType, tuple[Vector, ...]] = {
    PieceType.BISHOP: BISHOP_DIRS,
    PieceType.ROOK: ROOK_DIRS,
    PieceType.QUEEN: QUEEN_DIRS,
}


@dataclass(frozen=True, slots=True)
class CastlingPattern:
    """Castling geometry relative to the king's home square."""

    king_offset: int
    rook_offset: int
    king_to_rook: int

    @property
    def direction(self) -> int:
        return 1 if self.king_to_rook > 0 else -1


KINGSIDE = CastlingPattern(king_offset=2, rook_offset=-2, king_to_rook=3)
QUEENSIDE = CastlingPattern(king_offset=-2, rook_offset=3, king_to_rook=-4)
CASTLING_PATTERNS: tuple[CastlingPattern, ...] = (KINGSIDE, QUEENSIDE)

# ── Per-side constants ──────────────────────────────────────────────────────

_PAWN_FORWARD: dict[Color, Vector] = {
    Color.WHITE: Vector(0, 1),
    Color.BLACK: Vector(0, 1).flipped(),
}
_BACK_RANK: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: BOARD_SIZE - 1}
_PAWN_RANK: dict[Color, int] = {Color.WHITE: 1, Color.BLACK: BOARD_SIZE - 2}
_EN_PASSANT_RANK: dict[Color, int] = {Color.WHITE: 4, Color.BLACK: 3}
_KING_FILE = 4


def king_home(color: Color) -> Square:
    return Square(_KING_FILE, _BACK_RANK[color])


def promotion_rank(color: Color) -> int:
    return _BACK_RANK[color.opposite]


class MoveGenerator:
    """Generates pseudo-legal moves for the pieces of a game state."""

    __slots__ = ("_state",)

    def __init__(self, state: GameState) -> None:
        self._state = state

    # -- Public API ---------------------------------------------------------

    def accumulate(self, acc: MoveAccumulator, sq: Square) -> bool:
        """Offer every pseudo-legal move of the piece on *sq* to *acc*."""
        piece = self._state.board[sq]
        if piece is None:
            return True

        kind = piece.piece_type
        if kind == PieceType.PAWN:
            return self._gen_pawn(sq, piece, acc)
        if kind == PieceType.KNIGHT:
            return self._gen_jumps(sq, piece, KNIGHT_OFFSETS, acc)
        if kind == PieceType.KING:
            return self._gen_king(sq, piece, acc)
        return self._gen_sliding(sq, piece, _SLIDING_DIRS[kind], acc)

    def accumulate_all(self, acc: MoveAccumulator, color: Color) -> bool:
        """Offer the pseudo-legal moves of every piece of *color* to *acc*."""
        for sq, _piece in self._state.board.pieces(color):
            if not self.accumulate(acc, sq):
                return False
        return True

    def generate_pseudo_legal_moves(self, color: Color) -> list[Move]:
        acc = CollectionAccumulator()
        self.accumulate_all(acc, color)
        return acc.moves

    def is_square_attacked(self, sq: Square, by_color: Color) -> bool:
        """Whether some piece of *by_color* can capture on *sq* right now.

        Pawns only generate captures onto occupied squares, so the answer
        is exact for occupied squares.  Use :meth:`is_attacked_at` to probe
        an empty square.
        """
        acc = CaptureTestAccumulator(sq)
        self.accumulate_all(acc, by_color)
        return acc.condition_satisfied

    def is_attacked_at(self, origin: Square, target: Square) -> bool:
        """Whether the piece on *origin* would be attacked standing on *target*."""
        board = self._state.board
        piece = board[origin]
        if piece is None:
            raise ValueError(f"No piece on {origin} to probe with")
        probe = Step(origin, target)
        board.apply_step(probe)
        try:
            return self.is_square_attacked(target, piece.color.opposite)
        finally:
            board.reverse_step(probe)

    def is_in_check(self, color: Color) -> bool:
        king_sq = self._state.board.king_square(color)
        return self.is_square_attacked(king_sq, color.opposite)

    # -- Generators ---------------------------------------------------------

    def _offer(
        self, origin: Square, target: Square, piece: Piece, acc: MoveAccumulator
    ) -> bool:
        """Offer a step or capture onto *target* unless an own piece is there."""
        occupant = self._state.board[target]
        if occupant is None:
            if acc.generate_non_attacking():
                return acc.add_move(Step(origin, target))
            return True
        if occupant.color != piece.color:
            return acc.add_move(Capture(origin, target))
        return True

    def _gen_jumps(
        self,
        sq: Square,
        piece: Piece,
        offsets: tuple[Vector, ...],
        acc: MoveAccumulator,
    ) -> bool:
        for offset in offsets:
            target = sq.shifted(offset)
            if target.out_of_bounds:
                continue
            if not self._offer(sq, target, piece, acc):
                return False
        return True

    def _gen_sliding(
        self,
        sq: Square,
        piece: Piece,
        directions: tuple[Vector, ...],
        acc: MoveAccumulator,
    ) -> bool:
        board = self._state.board
        for direction in directions:
            target = sq.shifted(direction)
            while not target.out_of_bounds:
                occupant = board[target]
                if occupant is not None:
                    if occupant.color != piece.color and not acc.add_move(
                        Capture(sq, target)
                    ):
                        return False
                    break
                if acc.generate_non_attacking() and not acc.add_move(Step(sq, target)):
                    return False
                target = target.shifted(direction)
        return True

    def _gen_pawn(self, sq: Square, piece: Piece, acc: MoveAccumulator) -> bool:
        board = self._state.board
        color = piece.color
        forward = _PAWN_FORWARD[color]

        # Pushes
        if acc.generate_non_attacking():
            one = sq.shifted(forward)
            if not one.out_of_bounds and board.is_empty(one):
                if not self._add_pawn_move(Step(sq, one), color, acc):
                    return False
                two = one.shifted(forward)
                if (
                    sq.rank == _PAWN_RANK[color]
                    and not board.has_moved(piece)
                    and board.is_empty(two)
                    and not acc.add_move(Step(sq, two, MoveFlag.DOUBLE_PAWN))
                ):
                    return False

        # Captures
        for dx in (-1, 1):
            target = sq.offset(dx, forward.dy)
            occupant = board[target]
            if occupant is not None and occupant.color != color:
                if not self._add_pawn_move(Capture(sq, target), color, acc):
                    return False

        # En passant
        if sq.rank == _EN_PASSANT_RANK[color]:
            for dx in (-1, 1):
                move = self._en_passant(sq, dx, piece)
                if move is not None and not acc.add_move(move):
                    return False
        return True

    def _add_pawn_move(self, base: Step, color: Color, acc: MoveAccumulator) -> bool:
        if base.to_sq.rank != promotion_rank(color):
            return acc.add_move(base)
        for kind in PROMOTION_TYPES:
            if not acc.add_move(Promotion(base, kind)):
                return False
        return True

    def _en_passant(self, sq: Square, dx: int, piece: Piece) -> Move | None:
        board = self._state.board
        beside = sq.offset(dx, 0)
        victim = board[beside]
        if (
            victim is None
            or victim.color == piece.color
            or victim.piece_type != PieceType.PAWN
        ):
            return None
        last = board.last_move(victim)
        if (
            last is None
            or last.flag != MoveFlag.DOUBLE_PAWN
            or last.ply != self._state.ply
        ):
            return None
        target = beside.shifted(_PAWN_FORWARD[piece.color])
        if not board.is_empty(target):
            return None
        return Compound(
            Capture(sq, beside),
            Step(beside, target),
            origin_sq=sq,
            target_sq=target,
        )

    def _gen_king(self, sq: Square, piece: Piece, acc: MoveAccumulator) -> bool:
        if not self._gen_jumps(sq, piece, KING_OFFSETS, acc):
            return False
        if acc.generate_non_attacking():
            return self._gen_castling(sq, piece, acc)
        return True

    # -- Castling -----------------------------------------------------------

    def _gen_castling(self, sq: Square, king: Piece, acc: MoveAccumulator) -> bool:
        if sq != king_home(king.color) or self._state.board.has_moved(king):
            return True

        candidates = [
            pattern
            for pattern in CASTLING_PATTERNS
            if self._castling_path_clear(sq, king, pattern)
        ]
        if not candidates or self.is_square_attacked(sq, king.color.opposite):
            return True

        for pattern in candidates:
            if not self._castling_path_safe(sq, pattern):
                continue
            rook_sq = sq.offset(pattern.king_to_rook, 0)
            king_target = sq.offset(pattern.king_offset, 0)
            move = Compound(
                Step(sq, king_target),
                Step(rook_sq, rook_sq.offset(pattern.rook_offset, 0)),
                origin_sq=sq,
                target_sq=king_target,
            )
            if not acc.add_move(move):
                return False
        return True

    def _castling_path_clear(
        self, sq: Square, king: Piece, pattern: CastlingPattern
    ) -> bool:
        board = self._state.board
        rook_sq = sq.offset(pattern.king_to_rook, 0)
        rook = board[rook_sq]
        if (
            rook is None
            or rook.color != king.color
            or rook.piece_type != PieceType.ROOK
            or board.has_moved(rook)
        ):
            return False
        between = sq.offset(pattern.direction, 0)
        while between != rook_sq:
            if not board.is_empty(between):
                return False
            between = between.offset(pattern.direction, 0)
        return True

    def _castling_path_safe(self, sq: Square, pattern: CastlingPattern) -> bool:
        """Whether every square the king crosses, destination included, is safe."""
        for step in range(1, abs(pattern.king_offset) + 1):
            if self.is_attacked_at(sq, sq.offset(step * pattern.direction, 0)):
                return False
        return True
