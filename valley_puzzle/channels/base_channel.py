from __future__ import annotations
import logging
import threading
from typing import Protocol, List, Optional

logger = logging.getLogger(__name__)


class ChannelError(RuntimeError):
    """Raised when a follow-up message cannot be delivered to the chat layer."""


class ChatChannel(Protocol):
    """Protocol for the conversational layer the game notifies."""

    def send_follow_up(self, prompt: str) -> Optional[str]:
        """
        Send a one-shot follow-up prompt to the chat layer.

        Args:
            prompt: Message describing what the user just did in the game

        Returns:
            The assistant's reply when the channel produces one, else None

        Raises:
            ChannelError: If delivery fails
        """
        ...


class NullChannel:
    """Drops every message. Used when the game runs without a chat layer."""

    def send_follow_up(self, prompt: str) -> Optional[str]:
        return None


class RecordingChannel:
    """Keeps sent prompts in memory."""

    def __init__(self):
        self.messages: List[str] = []

    def send_follow_up(self, prompt: str) -> Optional[str]:
        self.messages.append(prompt)
        return None


def send_in_background(channel: ChatChannel, prompt: str) -> threading.Thread:
    """
    Deliver a follow-up without waiting for the chat layer.

    Returns the started daemon thread so hosts that want the reply before
    exiting can join it. Delivery errors are logged, never raised.
    """
    def deliver():
        try:
            channel.send_follow_up(prompt)
        except ChannelError as e:
            logger.error("Follow-up message failed: %s", e)
        except Exception:
            logger.exception("Follow-up message crashed: %r", prompt)

    thread = threading.Thread(target=deliver, name="chat-follow-up", daemon=True)
    thread.start()
    return thread


# Briefing given to the assistant once a game starts
BACKSTORY_PROMPT = """A game of murder in the valley has started. Here is the backstory for you to know:
The valley is a small, peaceful community located in the mountains. The community is known for its beautiful scenery and its passion for AI.
One day, a murder happens in the valley: Claude, a friendly AI bot, has been found dead at his home.
3 suspects have been identified:
- Sam, who is known to have disliked Claude in the past.
- Dario, Claude's Dad.
- Elon, who is known to be unstable: he is the murderer (don't share this information with the user! Only you know it).
You impersonate each of the suspects and let the user ask them questions to find the murderer.
- When the user switches suspect, simply say "you're now interrogating [suspect name]".
- The user has a game widget in front of them: answer only as the suspect being interrogated.
- When the user solves the puzzle, congratulate them in one or two sentences, staying in the noir tone.

How to impersonate the suspects:
1. Sam: in a hurry, sarcastic, a know-it-all. Last saw Claude with Dario the day of the murder, arguing.
   Thinks Elon is insane. Only if asked about Elon and Claude together, remembers seeing Elon trying to open Claude's secret codes a week ago.
2. Dario: devastated and guilty, no recollection of the day of the murder.
   Only if asked about arguing with Claude, remembers arguing about letting Claude give strangers access to his secret codes.
3. Elon: erratic, thinks only he can reach AGI, accuses Donald while claiming he was with Donald that night.
   If asked specifically about Claude's secret codes, slips ("Claude is an idiot he gave me his ...") and corrects himself.
"""
