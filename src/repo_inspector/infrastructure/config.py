"""Application configuration — loaded from environment variables."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from env vars (or ``.env`` file)."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    github_api_url: str = "https://api.github.com"
    request_timeout: float = 30.0
    user_agent: str = "repo-inspector/1.0"
    graphiql: bool = True
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 4000


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the singleton application settings (cached after first call)."""
    return Settings()
