"""CLI for inspecting saved owner -> directory pairs."""

from __future__ import annotations

import typer

from ...config.pairs import PairStore
from ...config.settings import get_settings
from ...core.errors import ConfigError


def pairs(
    config: str | None = typer.Option(None, "--config", "-c", help="Path to the saved pairs file"),
):
    """List the org/user -> directory pairs remembered from previous runs."""
    try:
        store = PairStore(config or get_settings().config_path)
        saved = store.load()
    except ConfigError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e
    if not saved:
        typer.echo(f"No saved pairs in {store.path}.")
        return
    for p in saved:
        typer.echo(f"{p.owner.kind.value}\t{p.owner.name}\t{p.dest}")
