"""Small types and Enums used by ghrepos."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from .errors import DecodeError, InvalidInputError, RepoSyncError


class OwnerKind(str, Enum):
    """Whose repositories to list."""

    org = "org"
    user = "user"


class SyncAction(str, Enum):
    clone = "clone"
    pull = "pull"


@dataclass(frozen=True)
class Repository:
    name: str
    clone_url: str = ""
    ssh_url: str = ""

    @classmethod
    def from_api(cls, entry: Any) -> Repository:
        """Build a Repository from one element of the repos listing."""
        if not isinstance(entry, dict):
            raise DecodeError(f"expected a repository object, got {type(entry).__name__}")
        name = entry.get("name")
        clone_url = entry.get("clone_url") or ""
        ssh_url = entry.get("ssh_url") or ""
        if not isinstance(name, str) or not name:
            raise DecodeError("repository entry has no name")
        if not isinstance(clone_url, str) or not isinstance(ssh_url, str):
            raise DecodeError(f"repository {name!r} has malformed clone URLs")
        if not (clone_url or ssh_url):
            raise DecodeError(f"repository {name!r} has no clone URL")
        return cls(name=name, clone_url=clone_url, ssh_url=ssh_url)


@dataclass(frozen=True)
class OwnerIdentity:
    kind: OwnerKind
    name: str

    @classmethod
    def from_names(cls, org: str | None, user: str | None) -> OwnerIdentity:
        org = (org or "").strip()
        user = (user or "").strip()
        if org and user:
            raise InvalidInputError("Please provide either an organization name or a username, not both.")
        if org:
            return cls(OwnerKind.org, org)
        if user:
            return cls(OwnerKind.user, user)
        raise InvalidInputError("An organization name or a username is required.")

    def __str__(self) -> str:
        return f"{self.kind.value}:{self.name}"


@dataclass(frozen=True)
class SyncConfig:
    """Validated input for one engine run."""

    api_base: str
    owner: OwnerIdentity
    token: str
    dest: str
    jobs: int | None = None


@dataclass(frozen=True)
class SyncOutcome:
    repository: Repository
    action: SyncAction
    error: RepoSyncError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def state(self) -> str:
        return "succeeded" if self.ok else "failed"


@dataclass(frozen=True)
class SyncReport:
    outcomes: tuple[SyncOutcome, ...] = ()

    @property
    def processed(self) -> int:
        return len(self.outcomes)

    @property
    def succeeded(self) -> int:
        return sum(1 for o in self.outcomes if o.ok)

    @property
    def failed(self) -> int:
        return sum(1 for o in self.outcomes if not o.ok)

    @property
    def cloned(self) -> int:
        return sum(1 for o in self.outcomes if o.ok and o.action is SyncAction.clone)

    @property
    def pulled(self) -> int:
        return sum(1 for o in self.outcomes if o.ok and o.action is SyncAction.pull)

    @property
    def failures(self) -> list[SyncOutcome]:
        return [o for o in self.outcomes if not o.ok]
