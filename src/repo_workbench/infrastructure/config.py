"""Workbench settings, read from the environment and an optional ``.env`` file.

Only ``GITHUB_TOKEN`` is mandatory.  Without ``OPENAI_API_KEY`` the text
generation features answer with their fixed fallbacks.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── GitHub ──────────────────────────────────────────────────────────
    github_token: SecretStr
    github_api_url: str = "https://api.github.com"
    http_timeout_seconds: float = Field(default=30.0, gt=0)
    commit_page_size: int = Field(default=20, ge=1, le=100)

    # ── Text generation ─────────────────────────────────────────────────
    openai_api_key: SecretStr | None = None
    openai_model: str = "gpt-4o-mini"
    max_prompt_tokens: int = Field(default=2_000, ge=100)

    # ── Server ──────────────────────────────────────────────────────────
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = []

    @field_validator("github_api_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def ai_enabled(self) -> bool:
        return self.openai_api_key is not None and bool(self.openai_api_key.get_secret_value())


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()  # type: ignore[call-arg]
