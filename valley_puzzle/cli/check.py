from __future__ import annotations

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..definition import PuzzleDefinitionError, load_definition
from ..utils import render_sentence

app = typer.Typer()
console = Console()


@app.command()
def main(path: str):
    """Validate a puzzle definition file and summarize it."""
    try:
        definition = load_definition(path)
    except PuzzleDefinitionError as e:
        console.print(f"[red]Invalid puzzle definition:[/] {escape(str(e))}")
        raise typer.Exit(1)

    table = Table("#", "Sentence", "Blanks", title=escape(definition.title) or None)
    for i, sentence in enumerate(definition.sentences, start=1):
        table.add_row(
            str(i),
            escape(render_sentence(sentence, {})),
            ", ".join(b.id for b in sentence.blanks),
        )
    console.print(table)

    distractors = len(definition.pool) - len(definition.blanks)
    console.print(
        f"[green]OK[/] {len(definition.blanks)} blanks, "
        f"{len(definition.pool)} tokens in the pool ({distractors} spare)"
    )


if __name__ == "__main__":
    app()
