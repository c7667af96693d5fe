from __future__ import annotations
import os
from typing import Any, Callable, Optional
from anthropic import Anthropic
from tenacity import retry, stop_after_attempt, wait_exponential

from .base_channel import ChannelError, BACKSTORY_PROMPT


class AnthropicChannel:
    """Chat layer backed by a Claude model via the official SDK."""

    def __init__(
        self,
        model: str = "claude-3-5-haiku-20241022",
        api_key: str | None = None,
        client: Any = None,
        on_reply: Optional[Callable[[str], None]] = None,
        max_tokens: int = 300,
    ):
        """
        Initialize the channel.

        Args:
            model: Claude model name
            api_key: Anthropic API key (defaults to ANTHROPIC_API_KEY env var)
            client: Pre-built SDK client, mostly for tests
            on_reply: Called with the assistant's reply text
            max_tokens: Max response tokens
        """
        self.client = client or Anthropic(api_key=api_key or os.getenv("ANTHROPIC_API_KEY"))
        self.model = model
        self.on_reply = on_reply
        self.max_tokens = max_tokens
        self.history: list[dict[str, str]] = []

    @retry(stop=stop_after_attempt(3), wait=wait_exponential(multiplier=1, min=1, max=8))
    def _create(self, messages: list[dict[str, str]]):
        return self.client.messages.create(
            model=self.model,
            max_tokens=self.max_tokens,
            system=BACKSTORY_PROMPT,
            messages=messages,
        )

    def send_follow_up(self, prompt: str) -> Optional[str]:
        messages = self.history + [{"role": "user", "content": prompt}]
        try:
            response = self._create(messages)
        except Exception as e:
            cause = e.__cause__ or e
            detail = getattr(cause, "message", None) or str(cause)
            raise ChannelError(f"Anthropic error calling {self.model}: {detail}") from e

        reply = "".join(getattr(block, "text", "") for block in response.content)
        self.history = messages + [{"role": "assistant", "content": reply}]
        if self.on_reply:
            self.on_reply(reply)
        return reply
