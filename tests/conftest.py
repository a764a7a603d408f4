"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Iterator

import pytest

from gambit.core.enums import PieceType
from gambit.core.move import Move
from gambit.core.state import GameState
from gambit.core.types import parse_square

# Linux CI runners are often headless. Force an offscreen backend only there.
if (
    sys.platform.startswith("linux")
    and "QT_QPA_PLATFORM" not in os.environ
    and "DISPLAY" not in os.environ
    and "WAYLAND_DISPLAY" not in os.environ
):
    os.environ["QT_QPA_PLATFORM"] = "offscreen"


_PROMOTION_CHARS: dict[str, PieceType] = {
    "q": PieceType.QUEEN,
    "r": PieceType.ROOK,
    "b": PieceType.BISHOP,
    "n": PieceType.KNIGHT,
}


def _play(state: GameState, *moves: str) -> list[Move]:
    """Commit coordinate moves such as ``"e2e4"`` or ``"a7a8q"``."""
    played: list[Move] = []
    for text in moves:
        promotion = _PROMOTION_CHARS[text[4]] if len(text) == 5 else None
        move = state.validate_move(
            parse_square(text[:2]), parse_square(text[2:4]), promotion
        )
        assert move is not None, f"{text} is not legal in\n{state.board!r}"
        state.do_move(move)
        played.append(move)
    return played


@pytest.fixture(scope="session")
def qapp() -> Iterator[object]:
    """Provide a singleton Qt application for signal tests."""
    from PyQt6.QtCore import QCoreApplication

    app = QCoreApplication.instance()
    if app is None:
        app = QCoreApplication([])
    yield app


@pytest.fixture
def play() -> Callable[..., list[Move]]:
    """Return a helper that plays coordinate moves on a state."""
    return _play


@pytest.fixture
def start_state() -> GameState:
    return GameState()
