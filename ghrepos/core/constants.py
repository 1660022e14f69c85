"""Module holding constants used across ghrepos."""

API_BASE = "https://api.github.com"
GITHUB_API_ACCEPT = "application/vnd.github.v3+json"
USER_AGENT = "ghrepos/0.1"
PER_PAGE = 100
HTTP_TIMEOUT_SEC = 30
DIR_MODE = 0o755
DEFAULT_CONFIG_PATH = "~/.repos/repos.yaml"
