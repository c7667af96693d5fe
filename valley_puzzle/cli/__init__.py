"""
CLI commands for playing and checking murder-in-the-valley puzzles.
"""

import typer

from .play import main as play_game
from .check import main as check_puzzle

app = typer.Typer(help="A murder in the valley: deduction puzzle in the terminal.")
app.command("play")(play_game)
app.command("check")(check_puzzle)


def cli():
    """Entry point for CLI."""
    app()


__all__ = [
    "app",
    "cli",
    "play_game",
    "check_puzzle",
]
