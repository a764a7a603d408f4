"""Sparse board: piece placement, captured stack, piece history, kings."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType
from gambit.core.move import Step
from gambit.core.piece import Piece, capture_order_key
from gambit.core.types import ALL_SQUARES, BOARD_SIZE, Square

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True, slots=True)
class BoardSnapshot:
    """Structural copy of everything a :class:`Board` tracks."""

    placement: tuple[tuple[int, Color, PieceType, int], ...]
    captured: tuple[int, ...]
    history: tuple[tuple[int, tuple[Step, ...]], ...]
    kings: tuple[tuple[Color, Square], ...]


class Board:
    """Mapping of squares to pieces, mutated in place by moves.

    Besides placement the board keeps the stack of captured pieces, the
    past steps of every pawn, rook and king (keyed by ``piece_id``) and the
    square of each king.  All four are updated together by the mutation
    primitives below; a mismatch raises ``RuntimeError``.
    """

    __slots__ = ("_squares", "_captured", "_history", "_kings", "_next_id")

    def __init__(self) -> None:
        self._squares: dict[int, Piece] = {}
        self._captured: list[Piece] = []
        self._history: dict[int, list[Step]] = {}
        self._kings: dict[Color, Square] = {}
        self._next_id = 0

    # -- Access -------------------------------------------------------------

    def __getitem__(self, sq: Square) -> Piece | None:
        if sq.out_of_bounds:
            return None
        return self._squares.get(sq.index)

    def is_empty(self, sq: Square) -> bool:
        return self[sq] is None

    def __len__(self) -> int:
        return len(self._squares)

    def pieces(self, color: Color | None = None) -> list[tuple[Square, Piece]]:
        """Occupied squares in index order, optionally for one side.

        Moving a piece and moving it back leaves the result unchanged.
        Returns a fresh list, so callers may move pieces while iterating.
        """
        return [
            (ALL_SQUARES[index], piece)
            for index, piece in sorted(self._squares.items())
            if color is None or piece.color == color
        ]

    def king_square(self, color: Color) -> Square:
        """Return the single king square for *color*."""
        sq = self._kings.get(color)
        if sq is None:
            raise ValueError(f"No {color.name} king on board")
        return sq

    @property
    def captured_pieces(self) -> tuple[Piece, ...]:
        """Captured pieces, oldest capture first."""
        return tuple(self._captured)

    def sorted_captured(self) -> list[Piece]:
        """Captured pieces ordered by side, then value, then capture order."""
        indexed = list(enumerate(self._captured))
        indexed.sort(key=lambda item: capture_order_key(item[1], item[0]))
        return [piece for _, piece in indexed]

    # -- History ------------------------------------------------------------

    def history_of(self, piece: Piece) -> tuple[Step, ...]:
        return tuple(self._history.get(piece.piece_id, ()))

    def last_move(self, piece: Piece) -> Step | None:
        stack = self._history.get(piece.piece_id)
        return stack[-1] if stack else None

    def has_moved(self, piece: Piece) -> bool:
        return piece.piece_id in self._history

    def record_history(self, piece: Piece, step: Step) -> None:
        """Append *step* to the history of *piece* without moving it."""
        self._history.setdefault(piece.piece_id, []).append(step)

    # -- Setup --------------------------------------------------------------

    def place_new_piece(self, sq: Square, color: Color, piece_type: PieceType) -> Piece:
        """Create a piece on an empty square and return it."""
        if sq.out_of_bounds:
            raise ValueError(f"Square {sq} is off the board")
        if sq.index in self._squares:
            raise ValueError(f"Square {sq} is already occupied")
        if piece_type == PieceType.KING and color in self._kings:
            raise ValueError(f"Board already has a {color.name} king")
        piece = Piece(color, piece_type, self._new_id())
        self._squares[sq.index] = piece
        if piece_type == PieceType.KING:
            self._kings[color] = sq
        return piece

    def validate(self) -> None:
        """Raise ``ValueError`` unless each side has exactly one king."""
        for color in Color:
            kings = [
                p
                for p in self._squares.values()
                if p.color == color and p.piece_type == PieceType.KING
            ]
            if len(kings) != 1:
                raise ValueError(
                    f"Board needs exactly one {color.name} king, found {len(kings)}"
                )

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    # -- Mutation primitives ------------------------------------------------

    def apply_step(self, step: Step) -> None:
        piece = self[step.from_sq]
        if piece is None:
            raise ValueError(f"No piece on {step.from_sq} to move")
        if step.to_sq.out_of_bounds or step.to_sq.index in self._squares:
            raise RuntimeError(f"Cannot step onto {step.to_sq}: square not free")

        del self._squares[step.from_sq.index]
        self._squares[step.to_sq.index] = piece
        if piece.tracks_history:
            self.record_history(piece, step)
        if piece.piece_type == PieceType.KING:
            self._kings[piece.color] = step.to_sq

    def reverse_step(self, step: Step) -> None:
        piece = self[step.to_sq]
        if piece is None:
            raise RuntimeError(f"No piece on {step.to_sq} to move back")
        if step.from_sq.index in self._squares:
            raise RuntimeError(f"Cannot move back onto occupied {step.from_sq}")

        if piece.tracks_history:
            stack = self._history.get(piece.piece_id)
            if not stack or stack[-1] != step:
                raise RuntimeError(f"History of {piece!r} does not end with {step}")
            stack.pop()
            if not stack:
                del self._history[piece.piece_id]

        del self._squares[step.to_sq.index]
        self._squares[step.from_sq.index] = piece
        if piece.piece_type == PieceType.KING:
            self._kings[piece.color] = step.from_sq

    def capture(self, sq: Square) -> Piece:
        """Move the piece on *sq* to the captured stack."""
        piece = self[sq]
        if piece is None:
            raise RuntimeError(f"Nothing to capture on {sq}")
        if piece.piece_type == PieceType.KING:
            raise RuntimeError(f"Attempted to capture the {piece.color.name} king")
        del self._squares[sq.index]
        self._captured.append(piece)
        return piece

    def uncapture(self, sq: Square) -> Piece:
        """Put the most recently captured piece back on *sq*."""
        if not self._captured:
            raise RuntimeError("Captured stack is empty")
        if sq.index in self._squares:
            raise RuntimeError(f"Cannot restore a captured piece onto occupied {sq}")
        piece = self._captured.pop()
        self._squares[sq.index] = piece
        return piece

    def promote(self, sq: Square, piece_type: PieceType) -> Piece:
        """Replace the pawn on *sq* with a new piece of *piece_type*."""
        pawn = self[sq]
        if pawn is None or pawn.piece_type != PieceType.PAWN:
            raise RuntimeError(f"Expected a pawn to promote on {sq}, found {pawn!r}")
        promoted = Piece(pawn.color, piece_type, self._new_id(), replaced=pawn)
        self._squares[sq.index] = promoted
        return promoted

    def unpromote(self, sq: Square) -> Piece:
        """Undo :meth:`promote`: put the original pawn back on *sq*."""
        promoted = self[sq]
        if promoted is None or promoted.replaced is None:
            raise RuntimeError(f"No promoted piece on {sq}, found {promoted!r}")
        if promoted.piece_id in self._history:
            raise RuntimeError(f"Promoted {promoted!r} still has history")
        original = promoted.replaced
        promoted.replaced = None
        self._squares[sq.index] = original
        return original

    # -- Snapshots ----------------------------------------------------------

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot(
            placement=tuple(
                (index, p.color, p.piece_type, p.piece_id)
                for index, p in sorted(self._squares.items())
            ),
            captured=tuple(p.piece_id for p in self._captured),
            history=tuple(
                (piece_id, tuple(stack))
                for piece_id, stack in sorted(self._history.items())
            ),
            kings=tuple(sorted(self._kings.items())),
        )

    # -- Factory ------------------------------------------------------------

    @classmethod
    def initial(cls) -> Board:
        """Standard starting position."""
        b = cls()
        for f, pt in enumerate(_BACK_RANK):
            b.place_new_piece(Square(f, 0), Color.WHITE, pt)
            b.place_new_piece(Square(f, 1), Color.WHITE, PieceType.PAWN)
        for f, pt in enumerate(_BACK_RANK):
            b.place_new_piece(Square(f, BOARD_SIZE - 2), Color.BLACK, PieceType.PAWN)
            b.place_new_piece(Square(f, BOARD_SIZE - 1), Color.BLACK, pt)
        return b

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        rows: list[str] = []
        for rank in range(BOARD_SIZE - 1, -1, -1):
            row = []
            for file in range(BOARD_SIZE):
                p = self[Square(file, rank)]
                row.append(str(p) if p else ".")
            rows.append(f"{rank + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        return "\n".join(rows)
