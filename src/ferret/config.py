"""Environment-driven configuration for Ferret and its providers."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def _strip_trailing_slash(value: str) -> str:
    return value.rstrip("/")


class AnswerHubConfig(BaseSettings):
    """AnswerHub provider configuration values."""

    model_config = SettingsConfigDict(
        env_prefix="FERRET_ANSWERHUB_", env_file=".env", extra="ignore"
    )

    url: str = ""  # empty disables the provider
    username: str = ""
    password: str = ""

    @field_validator("url")
    @classmethod
    def _normalize_url(cls, value: str) -> str:
        return _strip_trailing_slash(value.strip())


class GitHubConfig(BaseSettings):
    """GitHub code search configuration values."""

    model_config = SettingsConfigDict(
        env_prefix="FERRET_GITHUB_", env_file=".env", extra="ignore"
    )

    url: str = "https://api.github.com"
    token: str = ""  # Personal Access Token (optional)
    search_user: str = ""  # scopes the query with +user:<name>

    @field_validator("url")
    @classmethod
    def _default_url(cls, value: str) -> str:
        return _strip_trailing_slash(value.strip()) or "https://api.github.com"


class SlackConfig(BaseSettings):
    """Slack message search configuration values."""

    model_config = SettingsConfigDict(
        env_prefix="FERRET_SLACK_", env_file=".env", extra="ignore"
    )

    url: str = "https://slack.com/api"
    token: str = ""


class Settings(BaseSettings):
    """Top-level settings loaded from FERRET_* environment variables and .env."""

    model_config = SettingsConfigDict(
        env_prefix="FERRET_",
        env_file=".env",
        extra="ignore",
    )

    goto_cmd: str = "open"
    # Deadline for a whole search in seconds; None waits until cancelled
    timeout: Optional[float] = None
    http_timeout: float = 30.0
    log_level: str = "WARNING"

    answerhub: AnswerHubConfig = Field(default_factory=AnswerHubConfig)
    github: GitHubConfig = Field(default_factory=GitHubConfig)
    slack: SlackConfig = Field(default_factory=SlackConfig)

    @field_validator("goto_cmd")
    @classmethod
    def _default_goto_cmd(cls, value: str) -> str:
        return value.strip() or "open"


def load_settings() -> Settings:
    """Load settings from environment variables and .env only."""
    return Settings()  # type: ignore[call-arg]
