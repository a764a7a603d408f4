"""Chess engine package: evaluation, search strategies and Qt worker bridge."""

from gambit.engine.alpha_beta import FixedAlphaBeta
from gambit.engine.calculator import MoveCalculator
from gambit.engine.evaluator import GameEvaluator, score_position
from gambit.engine.qt_bridge import EngineWorker
from gambit.engine.search import CancelCheck, SearchKind, SearchLimits, SearchStrategy
from gambit.engine.shallow import ShallowEvaluation

__all__ = [
    "CancelCheck",
    "EngineWorker",
    "FixedAlphaBeta",
    "GameEvaluator",
    "MoveCalculator",
    "SearchKind",
    "SearchLimits",
    "SearchStrategy",
    "ShallowEvaluation",
    "score_position",
]
