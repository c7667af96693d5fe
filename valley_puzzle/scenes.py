"""
Scene flow of the game: start screen, intro, interrogation, puzzle, victory.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .channels import ChatChannel, send_in_background
from .controller import BoardController
from .definition import PuzzleDefinition
from .scoring import DEFAULT_THRESHOLDS, FeedbackThresholds

logger = logging.getLogger(__name__)


class Scene(str, Enum):
    START = "start"
    INTRO = "intro"
    INTERROGATION = "interrogation"
    PUZZLE = "puzzle"
    VICTORY = "victory"


@dataclass(frozen=True)
class Suspect:
    name: str
    role: str
    description: str


SUSPECTS: Tuple[Suspect, ...] = (
    Suspect("Sam", "Former Rival", "Known to have disliked Claude in the past. Had ongoing tensions with the victim."),
    Suspect("Dario", "Claude's Father", "Claude's dad. Close family member with access to the home."),
    Suspect("Elon", "Unstable Acquaintance", "Known to be unstable. Had unpredictable behavior around Claude."),
)

INTRO_DIALOGUE: Tuple[str, ...] = (
    "The Valley is a small, peaceful community located in the mountains, "
    "known for its beautiful scenery and its passion for AI.",
    "One day, a shocking murder occurred...",
    "Claude, a friendly AI bot, has been found dead at his home.",
    "Three suspects have been identified.",
    "Your task is to interrogate each one and uncover the truth behind this mysterious murder.",
)


class SceneFlow:
    """
    Linear scene sequence around the puzzle board.

    Calls that do not fit the current scene are ignored and return False.
    """

    def __init__(
        self,
        channel: Optional[ChatChannel] = None,
        thresholds: FeedbackThresholds = DEFAULT_THRESHOLDS,
        suspects: Tuple[Suspect, ...] = SUSPECTS,
    ):
        self.channel = channel
        self.thresholds = thresholds
        self.suspects = suspects
        self.scene = Scene.START
        self.intro_index = 0
        self.highlighted_suspect: Optional[str] = None
        self.controller: Optional[BoardController] = None
        self.notification: Optional[threading.Thread] = None

    def _enter(self, scene: Scene) -> None:
        logger.info("Scene %s -> %s", self.scene.value, scene.value)
        self.scene = scene

    def _expect(self, scene: Scene, action: str) -> bool:
        if self.scene is not scene:
            logger.warning("Ignoring %s during the %s scene", action, self.scene.value)
            return False
        return True

    def start(self) -> bool:
        if not self._expect(Scene.START, "start"):
            return False
        self.intro_index = 0
        self._enter(Scene.INTRO)
        return True

    @property
    def intro_line(self) -> Optional[str]:
        if self.scene is not Scene.INTRO:
            return None
        return INTRO_DIALOGUE[self.intro_index]

    def next_intro_line(self) -> bool:
        """Advance the intro; the last line leads to the interrogation room."""
        if not self._expect(Scene.INTRO, "intro advance"):
            return False
        if self.intro_index < len(INTRO_DIALOGUE) - 1:
            self.intro_index += 1
        else:
            self._enter(Scene.INTERROGATION)
        return True

    def skip_intro(self) -> bool:
        if not self._expect(Scene.INTRO, "intro skip"):
            return False
        self._enter(Scene.INTERROGATION)
        return True

    def suspect(self, name: str) -> Optional[Suspect]:
        for s in self.suspects:
            if s.name.lower() == name.strip().lower():
                return s
        return None

    def interrogate(self, name: str) -> bool:
        if not self._expect(Scene.INTERROGATION, "interrogation"):
            return False
        suspect = self.suspect(name)
        if suspect is None:
            logger.warning("Ignoring interrogation of unknown suspect %r", name)
            return False
        self.highlighted_suspect = suspect.name
        self._notify(f"User has decided to interrogate {suspect.name}")
        return True

    def open_puzzle(self, definition: PuzzleDefinition) -> Optional[BoardController]:
        if not self._expect(Scene.INTERROGATION, "puzzle opening"):
            return None
        self.controller = BoardController(
            definition,
            on_victory=self._on_victory,
            channel=self.channel,
            thresholds=self.thresholds,
        )
        self._enter(Scene.PUZZLE)
        return self.controller

    def close_puzzle(self) -> bool:
        """Leave the puzzle without solving it and go back to the suspects."""
        if not self._expect(Scene.PUZZLE, "puzzle closing"):
            return False
        if self.controller is not None:
            self.controller.close()
        self.controller = None
        self._enter(Scene.INTERROGATION)
        return True

    def _on_victory(self) -> None:
        self.controller = None
        self._enter(Scene.VICTORY)

    def _notify(self, prompt: str) -> None:
        if self.channel is None:
            return
        self.notification = send_in_background(self.channel, prompt)
