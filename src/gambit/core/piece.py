"""Piece identity objects."""

from __future__ import annotations

from dataclasses import dataclass

from gambit.core.enums import Color, PieceType

# FEN character ↔ (Color, PieceType)
_CHAR_MAP: dict[str, tuple[Color, PieceType]] = {
    "P": (Color.WHITE, PieceType.PAWN),
    "N": (Color.WHITE, PieceType.KNIGHT),
    "B": (Color.WHITE, PieceType.BISHOP),
    "R": (Color.WHITE, PieceType.ROOK),
    "Q": (Color.WHITE, PieceType.QUEEN),
    "K": (Color.WHITE, PieceType.KING),
    "p": (Color.BLACK, PieceType.PAWN),
    "n": (Color.BLACK, PieceType.KNIGHT),
    "b": (Color.BLACK, PieceType.BISHOP),
    "r": (Color.BLACK, PieceType.ROOK),
    "q": (Color.BLACK, PieceType.QUEEN),
    "k": (Color.BLACK, PieceType.KING),
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}

_FEN_CHARS: dict[tuple[Color, PieceType], str] = {v: k for k, v in _CHAR_MAP.items()}

# Kinds whose past steps decide castling and en-passant eligibility.
HISTORY_KINDS: frozenset[PieceType] = frozenset(
    {PieceType.PAWN, PieceType.ROOK, PieceType.KING}
)

PROMOTION_TYPES: tuple[PieceType, ...] = (
    PieceType.QUEEN,
    PieceType.ROOK,
    PieceType.BISHOP,
    PieceType.KNIGHT,
)


def parse_piece_char(char: str) -> tuple[Color, PieceType]:
    """Decode a FEN character, e.g. 'N' → (WHITE, KNIGHT)."""
    try:
        return _CHAR_MAP[char]
    except KeyError:
        raise ValueError(f"Invalid piece character: {char!r}") from None


@dataclass(eq=False, slots=True)
class Piece:
    """A single piece on (or captured from) a board.

    Pieces are created by a :class:`~gambit.core.board.Board`, which hands
    out ``piece_id``.  Equality is identity: two white knights are two
    different pieces.  ``replaced`` is the only field written after
    creation; it points at the pawn a promoted piece stands in for.
    """

    color: Color
    piece_type: PieceType
    piece_id: int
    replaced: Piece | None = None

    # ── Serialisation ────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN character (uppercase = white, lowercase = black)."""
        return _FEN_CHARS[(self.color, self.piece_type)]

    def __repr__(self) -> str:
        return f"Piece({self}#{self.piece_id})"

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.piece_type)]

    @property
    def tracks_history(self) -> bool:
        return self.piece_type in HISTORY_KINDS


def capture_order_key(piece: Piece, captured_index: int) -> tuple[int, int, int]:
    """Sort key for captured-piece display.

    White pieces first, then most valuable kind first, then the order in
    which the pieces were captured.
    """
    return (int(piece.color), -int(piece.piece_type), captured_index)
