"""Small helpers for running Git commands against local clones."""

from __future__ import annotations

import subprocess


class GitClient:
    def __init__(self, executable: str = "git") -> None:
        self.executable = executable

    # ---------- process helpers ----------
    @staticmethod
    def _run(cmd: list[str], cwd: str | None = None) -> tuple[bool, str | None]:
        # stdout/stderr are inherited so progress streams straight to the terminal
        try:
            subprocess.check_call(cmd, cwd=cwd)
            return True, None
        except subprocess.CalledProcessError as e:
            return False, f"{e}"
        except OSError as e:
            return False, f"could not run {cmd[0]!r}: {e}"

    # ---------- clone / pull ----------
    def clone(self, url: str, cwd: str) -> tuple[bool, str | None]:
        """Clone url into a new directory under cwd (git picks the leaf name)."""
        return self._run([self.executable, "clone", url], cwd=cwd)

    def pull_all(self, repo_dir: str) -> tuple[bool, str | None]:
        return self._run([self.executable, "pull", "--all"], cwd=repo_dir)
