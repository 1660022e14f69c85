from __future__ import annotations

import json
import os
import threading
import urllib.parse
import urllib.request
from typing import Any

import pytest

from ghrepos.core.types import Repository


def make_entries(names: list[str], org: str = "acme") -> list[dict[str, Any]]:
    return [
        {
            "name": n,
            "full_name": f"{org}/{n}",
            "clone_url": f"https://github.com/{org}/{n}.git",
            "ssh_url": f"git@github.com:{org}/{n}.git",
        }
        for n in names
    ]


def make_repos(*names: str) -> list[Repository]:
    return [Repository(name=n, clone_url=f"https://example.test/{n}.git", ssh_url=f"git@example.test:{n}.git") for n in names]


class FakeResponse:
    def __init__(self, body: bytes, link: str | None = None) -> None:
        self._body = body
        self.headers = {"Link": link} if link else {}
        self.closed = False

    def read(self) -> bytes:
        return self._body

    def __enter__(self) -> FakeResponse:
        return self

    def __exit__(self, *exc: object) -> bool:
        self.closed = True
        return False


class FakeApi:
    """Serves queued pages in place of urllib.request.urlopen."""

    def __init__(self) -> None:
        self.pages: list[Any] = []
        self.requests: list[urllib.request.Request] = []
        self.responses: list[FakeResponse] = []

    def add_page(self, entries: Any, has_next: bool = False, raw: bytes | None = None) -> None:
        self.pages.append((entries, has_next, raw))

    def page_numbers(self) -> list[int]:
        nums = []
        for req in self.requests:
            query = urllib.parse.parse_qs(urllib.parse.urlparse(req.full_url).query)
            nums.append(int(query["page"][0]))
        return nums

    def __call__(self, req: urllib.request.Request, timeout: float | None = None) -> FakeResponse:
        self.requests.append(req)
        idx = len(self.requests) - 1
        if idx >= len(self.pages):
            raise AssertionError(f"unexpected request #{idx + 1}: {req.full_url}")
        entries, has_next, raw = self.pages[idx]
        link = None
        if has_next:
            base = req.full_url.split("?")[0]
            link = f'<{base}?page={idx + 2}>; rel="next", <{base}?page=99>; rel="last"'
        elif idx > 0:
            link = f'<{req.full_url}>; rel="first"'
        body = raw if raw is not None else json.dumps(entries).encode("utf-8")
        resp = FakeResponse(body, link)
        self.responses.append(resp)
        return resp


@pytest.fixture
def fake_api(monkeypatch: pytest.MonkeyPatch) -> FakeApi:
    api = FakeApi()
    monkeypatch.setattr(urllib.request, "urlopen", api)
    return api


class FakeGit:
    """Records clone/pull calls; creates the clone directory like git would."""

    def __init__(self, fail: tuple[str, ...] = (), barrier: threading.Barrier | None = None) -> None:
        self.calls: list[tuple[str, str, str]] = []
        self.fail = set(fail)
        self.barrier = barrier
        self._lock = threading.Lock()
        self.active = 0
        self.max_active = 0

    def _enter(self, op: str, name: str, target: str, cwd: str) -> bool:
        with self._lock:
            self.calls.append((op, target, cwd))
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.barrier is not None:
                self.barrier.wait()
            return name not in self.fail
        finally:
            with self._lock:
                self.active -= 1

    def clone(self, url: str, cwd: str) -> tuple[bool, str | None]:
        name = url.rsplit(":", 1)[-1].rsplit("/", 1)[-1]
        if name.endswith(".git"):
            name = name[: -len(".git")]
        if not self._enter("clone", name, url, cwd):
            return False, "Command '['git', 'clone']' returned non-zero exit status 128."
        os.makedirs(os.path.join(cwd, name))
        return True, None

    def pull_all(self, repo_dir: str) -> tuple[bool, str | None]:
        name = os.path.basename(repo_dir)
        if not self._enter("pull", name, repo_dir, repo_dir):
            return False, "Command '['git', 'pull', '--all']' returned non-zero exit status 1."
        return True, None

    def ops(self) -> dict[str, str]:
        out = {}
        for op, target, _cwd in self.calls:
            name = target.rsplit("/", 1)[-1].rsplit(":", 1)[-1]
            if name.endswith(".git"):
                name = name[: -len(".git")]
            out[name] = op
        return out


@pytest.fixture
def fake_git() -> FakeGit:
    return FakeGit()
