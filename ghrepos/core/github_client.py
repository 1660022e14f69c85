"""GitHub REST API access: paginated repository listing."""

from __future__ import annotations

import http.client
import json
import logging
import re
import urllib.error
import urllib.request
from typing import Any
from urllib.parse import quote, urlencode, urlparse

from .constants import API_BASE, GITHUB_API_ACCEPT, HTTP_TIMEOUT_SEC, PER_PAGE, USER_AGENT
from .errors import AuthMissingError, DecodeError, InvalidInputError, TransportError
from .types import OwnerIdentity, OwnerKind, Repository

logger = logging.getLogger(__name__)

_LINK_RE = re.compile(r"<(?P<url>[^>]*)>(?P<params>[^<]*)")
_REL_RE = re.compile(r'\brel\s*=\s*"?(?P<rel>[^";,]+)"?')


def parse_link_header(value: str | None) -> dict[str, str]:
    """'<u1>; rel="next", <u2>; rel="last"' -> {"next": u1, "last": u2}"""
    links: dict[str, str] = {}
    if not value:
        return links
    for m in _LINK_RE.finditer(value):
        rel = _REL_RE.search(m.group("params"))
        if not rel:
            continue
        for name in rel.group("rel").split():
            links.setdefault(name.lower(), m.group("url"))
    return links


def has_next_page(link_header: str | None) -> bool:
    return "next" in parse_link_header(link_header)


class GitHubClient:
    def __init__(self, token: str | None, api_base: str = API_BASE) -> None:
        if not token:
            raise AuthMissingError("No GitHub access token available (set GITHUB_TOKEN).")
        parsed = urlparse(api_base)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise InvalidInputError(f"API base URL must be an http(s) URL, got {api_base!r}")
        self.token = token
        self.api_base = api_base.rstrip("/")

    # ---------- low-level HTTP ----------
    def _request_page(self, url: str) -> tuple[Any, str | None]:
        """GET url and return (decoded JSON body, Link header)."""
        req = urllib.request.Request(url)
        req.add_header("Accept", GITHUB_API_ACCEPT)
        req.add_header("User-Agent", USER_AGENT)
        req.add_header("Authorization", f"Bearer {self.token}")
        try:
            with urllib.request.urlopen(req, timeout=HTTP_TIMEOUT_SEC) as resp:
                raw = resp.read()
                link = resp.headers.get("Link")
        except urllib.error.HTTPError as e:
            e.close()
            raise TransportError(f"GET {url} failed: HTTP {e.code} {e.reason}", status=e.code) from e
        except (urllib.error.URLError, http.client.HTTPException, OSError) as e:
            raise TransportError(f"GET {url} failed: {e}") from e

        try:
            return json.loads(raw.decode("utf-8")), link
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DecodeError(f"GET {url} returned invalid JSON: {e}") from e

    # ---------- public API ----------
    def repos_url(self, owner: OwnerIdentity) -> str:
        segment = "orgs" if owner.kind is OwnerKind.org else "users"
        return f"{self.api_base}/{segment}/{quote(owner.name, safe='')}/repos"

    def list_repositories(self, owner: OwnerIdentity) -> list[Repository]:
        base_url = self.repos_url(owner)
        repos: list[Repository] = []
        page = 1
        while True:
            query = urlencode({"type": "all", "per_page": PER_PAGE, "page": page})
            url = f"{base_url}?{query}"
            logger.debug("Fetching %s", url)
            data, link = self._request_page(url)
            if not isinstance(data, list):
                raise DecodeError(f"GET {url} returned {type(data).__name__}, expected a list")
            if not data:
                break
            repos.extend(Repository.from_api(r) for r in data)
            if not has_next_page(link):
                break
            page += 1
        logger.debug("Listed %d repositories for %s", len(repos), owner)
        return repos


def list_repositories(api_base: str, owner: OwnerIdentity, token: str | None) -> list[Repository]:
    return GitHubClient(token=token, api_base=api_base).list_repositories(owner)
