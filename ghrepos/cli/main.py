"""CLI entrypoint that wires commands into a Typer app."""

import typer

from .commands.pairs import pairs
from .commands.sync import sync

app = typer.Typer(add_completion=False, help="Clone or pull every repository of a GitHub org or user.")

app.command()(sync)
app.command()(pairs)


if __name__ == "__main__":
    app()
