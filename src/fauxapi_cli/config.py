"""Configuration loading for the FauxAPI CLI."""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Connection settings loaded from environment variables or .env files."""

    model_config = SettingsConfigDict(
        env_prefix="FAUXAPI_CLI_",
        extra="ignore",
    )

    uri: str | None = None
    api_key: str | None = None
    api_secret: str | None = None
    debug: bool = False
    verify_ssl: bool = True
    timeout: float = 30.0
    log_level: str = "WARNING"

    @classmethod
    def from_env_file(cls, env_file: Path | None = None) -> Settings:
        kwargs: dict[str, Path] = {}
        if env_file is not None:
            kwargs["_env_file"] = env_file
        return cls(**kwargs)
