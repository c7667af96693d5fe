# valley_puzzle/core/env.py
from __future__ import annotations
import os
from dataclasses import dataclass
from typing import Mapping
from dotenv import load_dotenv

from ..scoring import FeedbackThresholds

KNOWN_KEYS = [
    "ANTHROPIC_API_KEY",
    "VALLEY_CHAT_MODEL",               # model behind the anthropic channel
    "VALLEY_WARNING_MAX_MISMATCHES",   # highest mismatch count still reported as a warning
    "VALLEY_PUZZLE_PATH",              # puzzle JSON to play instead of the bundled one
]

DEFAULT_CHAT_MODEL = "claude-3-5-haiku-20241022"


@dataclass(frozen=True)
class Settings:
    warning_max_mismatches: int = 2
    chat_model: str = DEFAULT_CHAT_MODEL
    puzzle_path: str | None = None

    @property
    def thresholds(self) -> FeedbackThresholds:
        return FeedbackThresholds(warning_max=self.warning_max_mismatches)


def load_env(dotenv_path: str | None = None) -> dict[str, str]:
    """
    Load .env once. Returns a dict of which keys are present (masked).
    """
    load_dotenv(dotenv_path or os.getenv("DOTENV_PATH", ".env"), override=False)
    found = {}
    for k in KNOWN_KEYS:
        v = os.getenv(k)
        if v:
            mask = v[:4] + "…" if len(v) > 4 else "…"
            found[k] = mask
    return found


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """
    Build Settings from the environment (call load_env first to pick up .env).

    Raises:
        ValueError: If VALLEY_WARNING_MAX_MISMATCHES is not a positive integer
    """
    env = os.environ if environ is None else environ

    raw = env.get("VALLEY_WARNING_MAX_MISMATCHES", "").strip()
    warning_max = 2
    if raw:
        try:
            warning_max = int(raw)
        except ValueError:
            raise ValueError(f"VALLEY_WARNING_MAX_MISMATCHES must be an integer, got {raw!r}")
        if warning_max < 1:
            raise ValueError(f"VALLEY_WARNING_MAX_MISMATCHES must be at least 1, got {warning_max}")

    return Settings(
        warning_max_mismatches=warning_max,
        chat_model=env.get("VALLEY_CHAT_MODEL") or DEFAULT_CHAT_MODEL,
        puzzle_path=env.get("VALLEY_PUZZLE_PATH") or None,
    )
