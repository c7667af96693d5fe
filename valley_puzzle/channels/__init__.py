"""
Chat channels notified by the game.

The game never waits on the conversational layer; it only sends one-shot
follow-up prompts (a suspect was picked, the puzzle was solved):
- console: echo prompts in the terminal
- anthropic: send prompts to a Claude model that plays the suspects
- none: drop prompts

Usage:
    from valley_puzzle.channels import get_channel

    channel = get_channel("anthropic", model="claude-3-5-haiku-20241022")
    channel.send_follow_up("User has decided to interrogate Sam")
"""

from __future__ import annotations
from typing import Callable, Optional

from rich.console import Console

from .base_channel import ChatChannel, ChannelError, NullChannel, RecordingChannel, BACKSTORY_PROMPT, send_in_background
from .console_channel import ConsoleChannel

CHANNEL_NAMES = ("console", "anthropic", "none")


def get_channel(
    name: str,
    model: str | None = None,
    console: Console | None = None,
    on_reply: Optional[Callable[[str], None]] = None,
) -> ChatChannel:
    """
    Factory for chat channels.

    Raises:
        ValueError: If the channel name is unknown
    """
    if name == "console":
        return ConsoleChannel(console)
    if name == "anthropic":
        # Imported here so the SDK is only touched when actually used
        from .anthropic_channel import AnthropicChannel
        if model:
            return AnthropicChannel(model=model, on_reply=on_reply)
        return AnthropicChannel(on_reply=on_reply)
    if name == "none":
        return NullChannel()
    raise ValueError(f"Unknown channel: {name}\nAvailable: {', '.join(CHANNEL_NAMES)}")


__all__ = [
    "get_channel",
    "ChatChannel",
    "ChannelError",
    "NullChannel",
    "RecordingChannel",
    "ConsoleChannel",
    "BACKSTORY_PROMPT",
    "send_in_background",
    "CHANNEL_NAMES",
]
