from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Local dev: load from .env automatically.
    # In production: you typically inject real env vars instead.
    model_config = SettingsConfigDict(
        env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8", populate_by_name=True
    )

    # Env vars:
    # - DATABASE_PATH: snapshot file, relative to the working directory
    # - CORS_ALLOW_ORIGIN_REGEX / CORS_MAX_AGE
    # - HOST / PORT (only used by run())
    # - LOG_LEVEL
    database_path: str = Field(default="database.json", validation_alias="DATABASE_PATH")

    # Browser frontends served from any localhost port, plus file:// pages (Origin: null).
    cors_allow_origin_regex: str = Field(
        default=r"^(http://localhost.*|null)$", validation_alias="CORS_ALLOW_ORIGIN_REGEX"
    )
    cors_max_age: int = Field(default=3600, validation_alias="CORS_MAX_AGE")

    host: str = Field(default="127.0.0.1", validation_alias="HOST")
    port: int = Field(default=8080, validation_alias="PORT")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")


def get_settings() -> Settings:
    """Build Settings from the process environment and .env.

    create_app() and run() both go through here; tests pass their own Settings instead.
    """
    return Settings()
