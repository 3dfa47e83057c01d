"""Runtime settings."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from commitsight.errors import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(
        env_prefix="COMMITSIGHT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    github_token: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("COMMITSIGHT_GITHUB_TOKEN", "GITHUB_TOKEN"),
    )
    anthropic_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices("COMMITSIGHT_ANTHROPIC_API_KEY", "ANTHROPIC_API_KEY"),
    )
    github_api_url: str = "https://api.github.com"

    database_path: Path = Path("commitsight.db")
    max_commits_per_repo: int = Field(default=100, ge=1, le=1000)
    include_forks: bool = False
    concurrency: int = Field(default=5, ge=1, le=50)

    request_timeout: float = Field(default=30.0, ge=1, le=300)
    rate_limit_per_second: float = Field(default=10.0, gt=0)
    soft_limit_requests: int = Field(default=30, ge=1)
    soft_limit_window_seconds: float = Field(default=60.0, gt=0)

    llm_provider: Literal["claude"] = "claude"
    llm_model: str = "claude-sonnet-4-20250514"
    llm_max_tokens: int = Field(default=4096, ge=256, le=32000)
    llm_context_tokens: int = Field(default=200_000, ge=8_000)

    log_level: str = "INFO"

    def require_credentials(self) -> tuple[str, str]:
        """Return ``(github_token, anthropic_api_key)`` or raise ConfigError."""

        if self.github_token is None or not self.github_token.get_secret_value():
            raise ConfigError("GITHUB_TOKEN environment variable not set")
        if self.anthropic_api_key is None or not self.anthropic_api_key.get_secret_value():
            raise ConfigError("ANTHROPIC_API_KEY environment variable not set")
        return self.github_token.get_secret_value(), self.anthropic_api_key.get_secret_value()
