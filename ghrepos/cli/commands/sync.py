"""CLI for cloning or pulling every repository of an organization or user."""

from __future__ import annotations

import logging
import os

import typer

from ...config.pairs import Pair, PairStore
from ...config.settings import get_settings
from ...core.errors import AuthMissingError, ConfigError, ReposError
from ...core.types import OwnerIdentity, SyncConfig
from ...services.sync import run_sync

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format=LOG_FORMAT)


def _prompt_token() -> str:
    return typer.prompt("Enter personal access token", hide_input=True).strip()


def _run_one(config: SyncConfig) -> None:
    typer.echo(f"Clone or pull repositories into {config.dest}")
    report = run_sync(config)
    typer.echo(f"Total number of repositories: {report.processed}")
    typer.echo(
        f"Done. cloned={report.cloned}, pulled={report.pulled}, failed={report.failed}."
    )
    for o in report.failures:
        typer.secho(f"[fail] {o.error}", fg=typer.colors.RED, err=True)


def sync(
    org: str | None = typer.Option(None, "--org", "-o", help="GitHub organization name"),
    user: str | None = typer.Option(None, "--user", "-u", help="GitHub username"),
    dest: str | None = typer.Option(None, "--dir", "-d", help="Directory where repositories should be cloned"),
    jobs: int | None = typer.Option(
        None, "--jobs", "-j", min=1, help="Max concurrent git operations (default: one per repository)"
    ),
    api_base: str | None = typer.Option(None, "--api-base", help="GitHub API base URL"),
    config: str | None = typer.Option(None, "--config", "-c", help="Path to the saved pairs file"),
    all_pairs: bool = typer.Option(False, "--all-pairs", help="Sync every pair saved in the config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Clone missing repositories and pull existing ones for an org or user.

    Examples:
      repos sync --org acme --dir ~/src/acme
      repos sync --user octocat --jobs 8
      repos sync --all-pairs
      repos sync                                # interactive prompts
    """
    _setup_logging(verbose)
    try:
        s = get_settings()
        store = PairStore(config or s.config_path)
        _api = api_base or s.api_base
        _jobs = jobs if jobs is not None else s.jobs
        token = s.github_token

        if all_pairs:
            pairs = store.load()
            if not pairs:
                typer.echo(f"No saved pairs in {store.path}.")
                return
            token = token or _prompt_token()
            for p in pairs:
                _run_one(SyncConfig(api_base=_api, owner=p.owner, token=token, dest=p.dest, jobs=_jobs))
            return

        interactive = org is None and user is None
        if interactive:
            org = typer.prompt(
                "Enter GitHub organization name (leave empty if cloning for a username)",
                default="",
                show_default=False,
            )
            if not org.strip():
                user = typer.prompt(
                    "Enter GitHub username (leave empty if cloning for an organization)",
                    default="",
                    show_default=False,
                )

        owner = OwnerIdentity.from_names(org, user)

        if not token:
            if not interactive:
                raise AuthMissingError("GITHUB_TOKEN environment variable is not set.")
            token = _prompt_token()

        if interactive and dest is None:
            dest = typer.prompt(
                "Enter the directory where repositories should be cloned "
                "(empty for ~/<org or user>)",
                default="",
                show_default=False,
            )
        _dest = (dest or "").strip() or os.path.join(os.path.expanduser("~"), owner.name)

        _run_one(SyncConfig(api_base=_api, owner=owner, token=token, dest=_dest, jobs=_jobs))
    except ReposError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from e

    # saving the pair never changes the exit code of a finished sync
    try:
        if store.add(Pair(owner, _dest)):
            typer.echo(f"Saved {owner} -> {_dest} to {store.path}")
    except ConfigError as e:
        typer.secho(f"Warning: could not save {owner} -> {_dest}: {e}", fg=typer.colors.YELLOW, err=True)
