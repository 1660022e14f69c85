from __future__ import annotations

import os

from dotenv import load_dotenv
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..core.constants import API_BASE, DEFAULT_CONFIG_PATH
from ..core.errors import ConfigError

# Load .env once, early
load_dotenv()


class Settings(BaseSettings):
    """Application config (env or .env)."""

    model_config = SettingsConfigDict(env_prefix="REPOS_", env_file=None, extra="ignore")

    github_token: str | None = Field(default_factory=lambda: os.getenv("GITHUB_TOKEN"))
    api_base: str = Field(default=API_BASE)
    config_path: str = Field(default=DEFAULT_CONFIG_PATH, validation_alias="REPOS_CONFIG")
    jobs: int | None = Field(default=None, ge=1)


def get_settings() -> Settings:
    try:
        return Settings()
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e
