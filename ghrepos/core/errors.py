"""Error types raised by the sync engine.

Everything except RepoSyncError is fatal for a run. RepoSyncError is recorded
per repository and never aborts the batch.
"""

from __future__ import annotations


class ReposError(RuntimeError):
    pass


class InvalidInputError(ReposError):
    pass


class AuthMissingError(ReposError):
    pass


class TransportError(ReposError):
    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class DecodeError(ReposError):
    pass


class DirectoryError(ReposError):
    pass


class ConfigError(ReposError):
    pass


class RepoSyncError(ReposError):
    def __init__(self, repo_name: str, message: str) -> None:
        super().__init__(f"{repo_name}: {message}")
        self.repo_name = repo_name
