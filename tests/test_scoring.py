import pytest

from valley_puzzle.board import BoardState
from valley_puzzle.scoring import (
    FeedbackThresholds,
    FeedbackTier,
    classify,
    evaluate,
    score,
)


def test_empty_board_counts_every_blank(definition):
    board = BoardState(definition)
    assert score(board, definition) == 3


def test_correct_board_scores_zero(exact_definition):
    board = BoardState(exact_definition)
    board.place("t1", "who")
    board.place("t2", "culprit")
    board.place("t3", "motive")
    assert score(board, exact_definition) == 0
    assert evaluate(board, exact_definition).tier is FeedbackTier.VICTORY


def test_wrong_value_counts_as_mismatch(definition):
    board = BoardState(definition)
    board.place("t4", "who")
    board.place("t2", "culprit")
    board.place("t3", "motive")
    assert score(board, definition) == 1


def test_scoring_compares_values_not_ids(bundled):
    board = BoardState(bundled)
    # each pair of twins placed the "other" way round
    for token_id, blank_id in [("t10", "b1"), ("t8", "b2"), ("t9", "b3"), ("t6", "b4"),
                               ("t2", "b5"), ("t1", "b6"), ("t5", "b7")]:
        board.place(token_id, blank_id)
    assert score(board, bundled) == 0


def test_score_is_deterministic(definition):
    board = BoardState(definition)
    board.place("t4", "who")
    first = evaluate(board, definition)
    second = evaluate(board, definition)
    assert first == second
    assert first.mismatch_count == 3


@pytest.mark.parametrize("mismatches, tier", [
    (0, FeedbackTier.VICTORY),
    (1, FeedbackTier.WARNING),
    (2, FeedbackTier.WARNING),
    (3, FeedbackTier.FAILURE),
    (7, FeedbackTier.FAILURE),
])
def test_default_tiers(mismatches, tier):
    assert classify(mismatches) is tier


def test_custom_threshold():
    strict = FeedbackThresholds(warning_max=1)
    assert classify(1, strict) is FeedbackTier.WARNING
    assert classify(2, strict) is FeedbackTier.FAILURE


def test_invalid_thresholds():
    with pytest.raises(ValueError):
        FeedbackThresholds(warning_max=0)
    with pytest.raises(ValueError):
        classify(-1)


def test_feedback_messages_do_not_name_blanks(definition):
    board = BoardState(definition)
    feedback = evaluate(board, definition)
    assert feedback.tier is FeedbackTier.FAILURE
    assert "too many errors" in feedback.message.lower()
    for blank_id in definition.blank_ids:
        assert blank_id not in feedback.message
