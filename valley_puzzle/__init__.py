"""
A murder in the valley - fill-in-the-blank deduction puzzle board.
"""

from .definition import (
    Token,
    Blank,
    Sentence,
    PuzzleDefinition,
    PuzzleDefinitionError,
    parse_definition,
    load_definition,
    load_bundled,
)
from .board import BoardState, InvariantViolation, Dragging, IDLE
from .scoring import score, classify, evaluate, Feedback, FeedbackTier, FeedbackThresholds
from .controller import BoardController, BoardStatus, VICTORY_MESSAGE
from .scenes import SceneFlow, Scene

__all__ = [
    "Token",
    "Blank",
    "Sentence",
    "PuzzleDefinition",
    "PuzzleDefinitionError",
    "parse_definition",
    "load_definition",
    "load_bundled",
    "BoardState",
    "InvariantViolation",
    "Dragging",
    "IDLE",
    "score",
    "classify",
    "evaluate",
    "Feedback",
    "FeedbackTier",
    "FeedbackThresholds",
    "BoardController",
    "BoardStatus",
    "VICTORY_MESSAGE",
    "SceneFlow",
    "Scene",
]
