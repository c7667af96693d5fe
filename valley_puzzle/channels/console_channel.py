from __future__ import annotations
from typing import Optional
from rich.console import Console


class ConsoleChannel:
    """Echoes follow-up prompts to the terminal instead of a live chat model."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def send_follow_up(self, prompt: str) -> Optional[str]:
        self.console.print(f"[dim italic]→ chat:[/] {prompt}")
        return None
