"""
Scoring of a filled board against the answer key.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .board import BoardState
from .definition import PuzzleDefinition


class FeedbackTier(str, Enum):
    VICTORY = "victory"
    WARNING = "warning"
    FAILURE = "failure"


@dataclass(frozen=True)
class FeedbackThresholds:
    """Mismatch counts from 1 up to `warning_max` are a warning, anything above is a failure."""
    warning_max: int = 2

    def __post_init__(self):
        if self.warning_max < 1:
            raise ValueError(f"warning_max must be at least 1, got {self.warning_max}")


DEFAULT_THRESHOLDS = FeedbackThresholds()

FEEDBACK_MESSAGES = {
    FeedbackTier.VICTORY: "Case closed! You found the murderer.",
    FeedbackTier.WARNING: "Almost there... a few words are not in the right place.",
    FeedbackTier.FAILURE: "Too many errors. Go back over the testimonies and try again.",
}


@dataclass(frozen=True)
class Feedback:
    tier: FeedbackTier
    mismatch_count: int

    @property
    def message(self) -> str:
        return FEEDBACK_MESSAGES[self.tier]


def score(board: BoardState, definition: PuzzleDefinition) -> int:
    """
    Count blanks that are empty or hold a token with the wrong value.

    Tokens are compared by value, so any of several same-valued tokens
    counts as correct.
    """
    placements = board.placements
    mismatches = 0
    for blank in definition.blanks:
        token = placements[blank.id]
        if token is None or token.value != blank.expected_value:
            mismatches += 1
    return mismatches


def classify(mismatch_count: int, thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS) -> FeedbackTier:
    if mismatch_count < 0:
        raise ValueError(f"mismatch_count cannot be negative: {mismatch_count}")
    if mismatch_count == 0:
        return FeedbackTier.VICTORY
    if mismatch_count <= thresholds.warning_max:
        return FeedbackTier.WARNING
    return FeedbackTier.FAILURE


def evaluate(
    board: BoardState,
    definition: PuzzleDefinition,
    thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
) -> Feedback:
    """Score the board and pick its feedback tier. Never says which blanks are wrong."""
    mismatches = score(board, definition)
    return Feedback(tier=classify(mismatches, thresholds), mismatch_count=mismatches)
