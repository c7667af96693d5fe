from __future__ import annotations

import os
from typing import Optional

import typer
from rich import print as rprint
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..channels import CHANNEL_NAMES, get_channel
from ..controller import BoardController, BoardStatus
from ..core import load_env, load_settings, setup_logging
from ..definition import PuzzleDefinitionError, load_bundled, load_definition
from ..scenes import Scene, SceneFlow
from ..scoring import FeedbackTier
from ..utils import PUZZLE_COMMANDS, parse_command, render_sentence

app = typer.Typer()
console = Console()

NOTIFICATION_WAIT = 30.0  # seconds

STATUS_LABELS = {
    BoardStatus.INCOMPLETE: "[dim]fill every blank to submit[/]",
    BoardStatus.READY_TO_SUBMIT: "[green]ready to submit[/]",
    BoardStatus.SCORED_WARNING: "[yellow]scored[/]",
    BoardStatus.SCORED_FAILURE: "[red]scored[/]",
    BoardStatus.VICTORY: "[bold green]solved[/]",
    BoardStatus.CLOSED: "[dim]closed[/]",
}

TIER_STYLES = {
    FeedbackTier.VICTORY: "bold green",
    FeedbackTier.WARNING: "yellow",
    FeedbackTier.FAILURE: "bold red",
}


def read_line(prompt: str) -> Optional[str]:
    try:
        return console.input(prompt)
    except EOFError:
        return None


def render_board(controller: BoardController) -> None:
    definition = controller.definition
    console.rule(f"[bold purple]{escape(definition.title or 'The deduction')}")
    for i, sentence in enumerate(definition.sentences, start=1):
        console.print(f"{i}. " + escape(render_sentence(sentence, controller.board.placements)))

    pool = controller.board.pool
    if pool:
        table = Table("token", "word", title="Word pool")
        for token in pool:
            table.add_row(token.id, escape(token.value))
        console.print(table)
    else:
        console.print("[dim]The word pool is empty.[/]")

    status = STATUS_LABELS[controller.status]
    empty = controller.board.empty_blanks
    if empty and controller.is_active:
        status += f" [dim]({len(empty)} empty: {', '.join(empty)})[/]"
    console.print(f"Status: {status}")
    if controller.feedback is not None:
        style = TIER_STYLES[controller.feedback.tier]
        console.print(f"[{style}]{escape(controller.feedback.message)}[/]")


def print_help() -> None:
    table = Table("command", "what it does")
    for usage, text in PUZZLE_COMMANDS.values():
        table.add_row(escape(usage), text)
    console.print(table)


def print_suspects(flow: SceneFlow) -> None:
    table = Table("suspect", "role", "notes", title="The suspects")
    for s in flow.suspects:
        name = f"[yellow]{s.name}[/]" if s.name == flow.highlighted_suspect else s.name
        table.add_row(name, s.role, s.description)
    console.print(table)
    console.print("[dim]Commands: interrogate <name>, suspects, solve, quit[/]")


def run_interrogation(flow: SceneFlow) -> bool:
    """Interrogation room loop. Returns True when the player wants to solve the case."""
    print_suspects(flow)
    while True:
        line = read_line("[bold purple]suspects> [/]")
        if line is None:
            return False
        verb, args = parse_command(line)
        if verb == "":
            continue
        if verb == "quit":
            return False
        if verb == "solve":
            return True
        if verb == "suspects":
            print_suspects(flow)
        elif verb in ("interrogate", "talk") and args:
            name = " ".join(args)
            if flow.interrogate(name):
                console.print(f"You're now interrogating [yellow]{escape(flow.highlighted_suspect or name)}[/].")
            else:
                console.print(f"[red]No suspect named[/] {escape(name)}")
        else:
            console.print("[dim]Commands: interrogate <name>, suspects, solve, quit[/]")


def run_puzzle(controller: BoardController) -> bool:
    """Puzzle loop. Returns True once the board is solved, False if the player leaves."""
    render_board(controller)
    console.print("[dim]Type 'help' for the list of commands.[/]")

    while controller.is_active:
        line = read_line("[bold purple]> [/]")
        if line is None:
            return False
        verb, args = parse_command(line)
        moved = False

        if verb == "":
            continue
        elif verb == "quit":
            return False
        elif verb == "help":
            print_help()
        elif verb == "board":
            render_board(controller)
        elif verb == "drag" and len(args) == 1:
            if controller.drag_start(args[0]):
                console.print(f"Holding [bold]{escape(args[0])}[/]. Drop it on a blank or on the pool.")
            else:
                console.print(f"[red]No token[/] {escape(args[0])}")
        elif verb == "drop" and len(args) == 1:
            if args[0].lower() == "pool":
                moved = controller.drop_on_pool()
            else:
                moved = controller.drop(args[0])
            if not moved:
                console.print("[dim]Nothing moved.[/]")
        elif verb == "cancel":
            controller.drag_end()
        elif verb == "place" and len(args) == 2:
            moved = controller.place(args[0], args[1])
            if not moved:
                console.print("[dim]Nothing moved.[/]")
        elif verb == "back" and len(args) == 1:
            moved = controller.return_to_pool(args[0])
            if not moved:
                console.print("[dim]Nothing moved.[/]")
        elif verb == "submit":
            feedback = controller.submit()
            if feedback is None:
                if controller.status is BoardStatus.INCOMPLETE:
                    console.print("[dim]Fill every blank before submitting.[/]")
                else:
                    console.print("[dim]Move a word before submitting again.[/]")
            else:
                render_board(controller)
        else:
            console.print(f"[red]Unknown command:[/] {escape(line)} [dim](type 'help')[/]")

        if moved:
            render_board(controller)

    return controller.status is BoardStatus.VICTORY


@app.command()
def main(
    puzzle: Optional[str] = None,
    channel: str = "console",
    skip_intro: bool = False,
    verbose: bool = False,
):
    """
    Play a game of murder in the valley in the terminal.

    Channels:
    - console: follow-up messages are echoed in the terminal
    - anthropic: a Claude model plays the chat layer (needs ANTHROPIC_API_KEY)
    - none: no chat layer
    """
    seen = load_env()
    setup_logging(verbose, console)
    if verbose:
        rprint({"env_keys_detected": seen})

    try:
        settings = load_settings()
    except ValueError as e:
        console.print(f"[red]Bad configuration:[/] {escape(str(e))}")
        raise typer.Exit(1)

    if channel not in CHANNEL_NAMES:
        console.print(f"[red]Unknown channel[/] {escape(channel)}. Try: {', '.join(CHANNEL_NAMES)}")
        raise typer.Exit(1)
    if channel == "anthropic" and not os.getenv("ANTHROPIC_API_KEY"):
        console.print("[red]ANTHROPIC_API_KEY not found in .env[/]")
        raise typer.Exit(1)

    path = puzzle or settings.puzzle_path
    try:
        definition = load_definition(path) if path else load_bundled()
    except PuzzleDefinitionError as e:
        console.print(f"[red]Invalid puzzle definition:[/] {escape(str(e))}")
        raise typer.Exit(1)

    chat = get_channel(
        channel,
        model=settings.chat_model,
        console=console,
        on_reply=lambda reply: console.print(f"[bold magenta]Assistant:[/] {escape(reply)}"),
    )
    flow = SceneFlow(channel=chat, thresholds=settings.thresholds)

    console.rule("[bold purple]A MURDER IN THE VALLEY")
    flow.start()
    if skip_intro:
        flow.skip_intro()
    while flow.scene is Scene.INTRO:
        console.print(f"[yellow]{escape(flow.intro_line or '')}[/]")
        if read_line("[dim](enter)[/] ") is None:
            raise typer.Exit()
        flow.next_intro_line()

    while True:
        if not run_interrogation(flow):
            console.print("[dim]The case remains open.[/]")
            return
        controller = flow.open_puzzle(definition)
        if run_puzzle(controller):
            if controller.notification is not None:
                # let the assistant's congratulations reach the terminal before exiting
                controller.notification.join(timeout=NOTIFICATION_WAIT)
            console.rule("[bold green]CASE CLOSED")
            return
        flow.close_puzzle()


if __name__ == "__main__":
    app()
