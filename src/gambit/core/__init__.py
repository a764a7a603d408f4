"""Core domain layer: board, moves, move generation and game state.

Quick start::

    from gambit.core import GameState, parse_square

    state = GameState()
    for move in state.legal_moves():
        print(move)
    move = state.validate_move(parse_square("e2"), parse_square("e4"))
    if move is not None:
        state.do_move(move)
"""

from gambit.core.accumulators import (
    AcceptAccumulator,
    CaptureTestAccumulator,
    CollectionAccumulator,
    FulfillmentFilter,
    LosingMoveFilter,
    MoveAccumulator,
    MoveFilter,
    SearchAccumulator,
)
from gambit.core.board import Board, BoardSnapshot
from gambit.core.enums import Color, GameStatus, JournalDirection, MoveFlag, PieceType
from gambit.core.journal import MoveJournal
from gambit.core.move import Capture, Compound, Move, MoveRequest, Promotion, Step
from gambit.core.move_generator import MoveGenerator
from gambit.core.notation import STARTING_FEN, state_from_fen, state_to_fen
from gambit.core.piece import Piece
from gambit.core.rules import Rules
from gambit.core.state import GameState, StateSnapshot
from gambit.core.types import Square, Vector, parse_square

__all__ = [
    # Enums
    "Color",
    "GameStatus",
    "JournalDirection",
    "MoveFlag",
    "PieceType",
    # Geometry
    "Square",
    "Vector",
    "parse_square",
    # Domain objects
    "Board",
    "BoardSnapshot",
    "Piece",
    "GameState",
    "StateSnapshot",
    "MoveJournal",
    "MoveGenerator",
    "Rules",
    # Moves
    "Move",
    "MoveRequest",
    "Step",
    "Capture",
    "Compound",
    "Promotion",
    # Accumulators
    "MoveAccumulator",
    "CollectionAccumulator",
    "SearchAccumulator",
    "AcceptAccumulator",
    "CaptureTestAccumulator",
    "MoveFilter",
    "FulfillmentFilter",
    "LosingMoveFilter",
    # Notation
    "STARTING_FEN",
    "state_from_fen",
    "state_to_fen",
]
