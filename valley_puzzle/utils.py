"""
Utility functions for parsing player commands and rendering sentences.
"""

import shlex
from typing import List, Mapping, Optional, Tuple

from .definition import BlankSegment, Sentence, Token

BLANK_PLACEHOLDER = "____"

# command -> (usage, help)
PUZZLE_COMMANDS = {
    "drag": ("drag <token>", "pick up a token from the pool or a blank"),
    "drop": ("drop <blank>|pool", "drop the token you are holding"),
    "cancel": ("cancel", "put the held token back where it was"),
    "place": ("place <token> <blank>", "drag and drop in one go"),
    "back": ("back <token>", "send a placed token back to the pool"),
    "submit": ("submit", "check your deduction (all blanks must be filled)"),
    "board": ("board", "show the board again"),
    "help": ("help", "show this list"),
    "quit": ("quit", "leave the puzzle"),
}


def parse_command(line: str) -> Tuple[str, List[str]]:
    """
    Split a command line into a lowercase verb and its arguments.
    Quoted arguments are kept together. Returns ("", []) for blank input.
    """
    try:
        parts = shlex.split(line)
    except ValueError:
        parts = line.split()
    if not parts:
        return "", []
    return parts[0].lower(), parts[1:]


def render_sentence(
    sentence: Sentence,
    placements: Mapping[str, Optional[Token]],
) -> str:
    """Render a sentence as plain text, filling blanks with their current tokens
    and tagging each with its blank id."""
    out = []
    for seg in sentence.segments:
        if isinstance(seg, BlankSegment):
            token = placements.get(seg.blank.id)
            shown = token.value if token else BLANK_PLACEHOLDER
            out.append(f"[{shown}]({seg.blank.id})")
        else:
            out.append(seg.text)
    return "".join(out)
