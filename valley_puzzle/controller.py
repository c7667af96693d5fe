"""
Board controller: gesture handling, submit gating, and the victory transition.
"""

from __future__ import annotations

import logging
import threading
from enum import Enum
from typing import Callable, Optional

from .board import IDLE, BoardState, Dragging, DragSession
from .channels import ChatChannel, send_in_background
from .definition import PuzzleDefinition
from .scoring import DEFAULT_THRESHOLDS, Feedback, FeedbackThresholds, FeedbackTier, evaluate

logger = logging.getLogger(__name__)

VICTORY_MESSAGE = "User has solved the puzzle and found the murderer. Congratulate them."


class BoardStatus(str, Enum):
    INCOMPLETE = "incomplete"
    READY_TO_SUBMIT = "ready_to_submit"
    SCORED_WARNING = "scored_warning"
    SCORED_FAILURE = "scored_failure"
    VICTORY = "victory"
    CLOSED = "closed"


_SCORED_STATUS = {
    FeedbackTier.VICTORY: BoardStatus.VICTORY,
    FeedbackTier.WARNING: BoardStatus.SCORED_WARNING,
    FeedbackTier.FAILURE: BoardStatus.SCORED_FAILURE,
}


class BoardController:
    """
    Owns the board for one puzzle session.

    Gesture handlers return True when they had an effect. Gestures that
    arrive out of order (a drop without a drag, a submit on an incomplete
    board) are ignored. Once the puzzle is won or closed the board no longer
    accepts gestures.
    """

    def __init__(
        self,
        definition: PuzzleDefinition,
        on_victory: Optional[Callable[[], None]] = None,
        channel: Optional[ChatChannel] = None,
        thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
    ):
        self.definition = definition
        self.board = BoardState(definition)
        self.on_victory = on_victory
        self.channel = channel
        self.thresholds = thresholds
        self.drag: DragSession = IDLE
        self.feedback: Optional[Feedback] = None
        self.status = BoardStatus.READY_TO_SUBMIT if self.board.is_complete else BoardStatus.INCOMPLETE
        self._victory_signalled = False
        self.notification: Optional[threading.Thread] = None

    @property
    def is_active(self) -> bool:
        return self.status not in (BoardStatus.VICTORY, BoardStatus.CLOSED)

    @property
    def can_submit(self) -> bool:
        return self.status == BoardStatus.READY_TO_SUBMIT

    # Gestures

    def drag_start(self, token_id: str) -> bool:
        if not self.is_active:
            return False
        if not self.board.has_token(token_id):
            logger.warning("Ignoring drag of unknown token %s", token_id)
            return False
        self.drag = Dragging(token_id=token_id, source_blank=self.board.locate(token_id))
        logger.debug("Drag started: %s", self.drag)
        return True

    def drag_over(self, blank_id: Optional[str]) -> bool:
        """Whether dropping here would be accepted. `None` targets the pool."""
        if not self.is_active or not isinstance(self.drag, Dragging):
            return False
        return blank_id is None or self.board.has_blank(blank_id)

    def drop(self, blank_id: str) -> bool:
        session = self._take_session("drop on %s" % blank_id)
        if session is None:
            return False
        return self._after_move(self.board.place(session.token_id, blank_id))

    def drop_on_pool(self) -> bool:
        session = self._take_session("drop on pool")
        if session is None:
            return False
        return self._after_move(self.board.return_to_pool(session.token_id))

    def drag_end(self) -> bool:
        """Abandon the current gesture. The board is left untouched."""
        if isinstance(self.drag, Dragging):
            logger.debug("Drag cancelled: %s", self.drag)
            self.drag = IDLE
            return True
        return False

    def place(self, token_id: str, blank_id: str) -> bool:
        """Drag a token and drop it on a blank in one step."""
        return self.drag_start(token_id) and self.drop(blank_id)

    def return_to_pool(self, token_id: str) -> bool:
        return self.drag_start(token_id) and self.drop_on_pool()

    def _take_session(self, what: str) -> Optional[Dragging]:
        session = self.drag
        self.drag = IDLE
        if not self.is_active:
            return None
        if not isinstance(session, Dragging):
            logger.warning("Ignoring %s: no drag in progress", what)
            return None
        return session

    def _after_move(self, changed: bool) -> bool:
        if not changed:
            return False
        if self.board.is_complete:
            # Re-entering ReadyToSubmit clears whatever the last submit said
            self.status = BoardStatus.READY_TO_SUBMIT
            self.feedback = None
        else:
            self.status = BoardStatus.INCOMPLETE
        return True

    # Submit and teardown

    def submit(self) -> Optional[Feedback]:
        """
        Score the board. Only accepted when every blank is filled and the
        board changed since the last submit.
        """
        if not self.can_submit:
            logger.warning("Ignoring submit in state %s", self.status.value)
            return None

        feedback = evaluate(self.board, self.definition, self.thresholds)
        self.feedback = feedback
        self.status = _SCORED_STATUS[feedback.tier]
        logger.info("Submitted: %d mismatch(es), tier %s", feedback.mismatch_count, feedback.tier.value)

        if feedback.tier is FeedbackTier.VICTORY:
            self._signal_victory()
        return feedback

    def close(self) -> None:
        """Discard the board without scoring. Safe from any state."""
        self.drag = IDLE
        if self.status is BoardStatus.VICTORY:
            return
        self.status = BoardStatus.CLOSED
        self.feedback = None
        logger.info("Puzzle closed without a solution")

    def _signal_victory(self) -> None:
        if self._victory_signalled:
            return
        self._victory_signalled = True
        self.drag = IDLE

        if self.channel is not None:
            self.notification = send_in_background(self.channel, VICTORY_MESSAGE)

        if self.on_victory is not None:
            self.on_victory()
