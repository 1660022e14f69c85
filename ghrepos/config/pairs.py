"""Persisted owner -> directory pairs from previous runs.

The file is YAML with a single ``pairs`` list of ``"<kind>:<name>:<dir>"``
strings, e.g.::

    pairs:
      - org:acme:/home/me/acme
      - user:octocat:/home/me/octocat
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

import yaml

from ..core.errors import ConfigError
from ..core.types import OwnerIdentity, OwnerKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Pair:
    owner: OwnerIdentity
    dest: str

    @classmethod
    def parse(cls, text: str) -> Pair | None:
        # dest may itself contain ':' (C:\...), so only split twice
        parts = str(text).split(":", 2)
        if len(parts) != 3:
            return None
        kind, name, dest = (p.strip() for p in parts)
        if kind not in (OwnerKind.org.value, OwnerKind.user.value) or not name or not dest:
            return None
        return cls(OwnerIdentity(OwnerKind(kind), name), dest)

    def __str__(self) -> str:
        return f"{self.owner.kind.value}:{self.owner.name}:{self.dest}"


class PairStore:
    def __init__(self, path: str) -> None:
        self.path = os.path.expanduser(path)

    def _read_raw(self) -> list:
        if not os.path.exists(self.path):
            return []
        try:
            with open(self.path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Error reading config file {self.path}: {e}") from e
        if data is None:
            return []
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {self.path} must be a mapping")
        raw = data.get("pairs") or []
        if not isinstance(raw, list):
            raise ConfigError(f"'pairs' in {self.path} must be a list")
        return raw

    def load(self) -> list[Pair]:
        pairs: list[Pair] = []
        for item in self._read_raw():
            pair = Pair.parse(item)
            if pair is None:
                logger.warning("Skipping malformed pair %r in %s", item, self.path)
                continue
            pairs.append(pair)
        return pairs

    def add(self, pair: Pair) -> bool:
        """Append pair unless already present. Returns True if the file changed."""
        raw = [str(p) for p in self._read_raw()]
        entry = str(pair)
        if entry in raw:
            return False
        raw.append(entry)
        try:
            os.makedirs(os.path.dirname(self.path) or ".", exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                yaml.safe_dump({"pairs": raw}, f, default_flow_style=False)
        except OSError as e:
            raise ConfigError(f"Error writing config file {self.path}: {e}") from e
        return True
