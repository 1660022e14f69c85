"""Service: clone missing repositories and pull existing ones, concurrently."""

from __future__ import annotations

import logging
import os
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from ..core.constants import DIR_MODE
from ..core.errors import DirectoryError, RepoSyncError
from ..core.git_client import GitClient
from ..core.github_client import GitHubClient
from ..core.types import Repository, SyncAction, SyncConfig, SyncOutcome, SyncReport

logger = logging.getLogger(__name__)


def ensure_dest(dest: str) -> None:
    """Create dest (and parents) if missing; anything else is fatal for the run."""
    try:
        os.makedirs(dest, mode=DIR_MODE, exist_ok=True)
    except OSError as e:
        raise DirectoryError(f"Failed to create directory {dest}: {e}") from e


class RepoSyncer:
    def __init__(self, git: GitClient | None = None, jobs: int | None = None) -> None:
        if jobs is not None and jobs < 1:
            raise ValueError(f"jobs must be >= 1, got {jobs}")
        self.git = git or GitClient()
        self.jobs = jobs

    def _sync_one(self, repo: Repository, dest: str) -> SyncOutcome:
        repo_dir = os.path.join(dest, repo.name)
        action = SyncAction.pull if os.path.exists(repo_dir) else SyncAction.clone
        try:
            if action is SyncAction.pull:
                logger.info("Repository %s already exists. Pulling...", repo.name)
                ok, err = self.git.pull_all(repo_dir)
            else:
                logger.info("Cloning repository %s...", repo.name)
                ok, err = self.git.clone(repo.ssh_url or repo.clone_url, cwd=dest)
        except Exception as e:
            ok, err = False, f"{e!r}"

        if not ok:
            error = RepoSyncError(repo.name, f"{action.value} failed: {err}")
            logger.error("Error syncing repository %s", error)
            return SyncOutcome(repo, action, error)

        logger.info("%s repository: %s", "Pulled" if action is SyncAction.pull else "Cloned", repo.name)
        return SyncOutcome(repo, action)

    def sync(self, repositories: Sequence[Repository], dest: str) -> SyncReport:
        """Run one task per repository and wait for all of them to finish."""
        ensure_dest(dest)
        if not repositories:
            return SyncReport()

        workers = self.jobs or len(repositories)
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="repo-sync") as pool:
            futures = [pool.submit(self._sync_one, r, dest) for r in repositories]
            outcomes = tuple(f.result() for f in futures)
        return SyncReport(outcomes)


def sync_all(
    repositories: Sequence[Repository],
    dest: str,
    *,
    jobs: int | None = None,
    git: GitClient | None = None,
) -> int:
    """Sync every repository under dest; returns the number processed, not succeeded."""
    report = RepoSyncer(git=git, jobs=jobs).sync(repositories, dest)
    return report.processed


def run_sync(
    config: SyncConfig,
    *,
    client: GitHubClient | None = None,
    git: GitClient | None = None,
) -> SyncReport:
    """List the owner's repositories, then clone or pull each into config.dest."""
    client = client or GitHubClient(token=config.token, api_base=config.api_base)
    repos = client.list_repositories(config.owner)
    logger.info("Found %d repositories for %s", len(repos), config.owner)
    return RepoSyncer(git=git, jobs=config.jobs).sync(repos, config.dest)
