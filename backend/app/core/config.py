"""Application configuration via pydantic-settings.

All config is sourced from environment variables and an optional .env file.
Never use os.getenv() directly.
"""

import json

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised at startup when required configuration is missing or invalid."""


class WeaviateSettings(BaseSettings):
    """Weaviate connection configuration."""

    # .env is shared with Settings; keys belonging to other groups are ignored
    model_config = SettingsConfigDict(env_prefix="", env_file=".env", extra="ignore")

    # Required at startup; checked when the client is built, not at import.
    weaviate_url: str | None = None
    weaviate_api_key: str | None = None
    weaviate_timeout: float = 10.0  # seconds, per outbound request
    weaviate_count_concurrency: int = 4  # aggregate count queries in flight

    @field_validator("weaviate_url", mode="before")
    @classmethod
    def normalize_url(cls, v: str | None) -> str | None:
        if v is None or not str(v).strip():
            return None
        return str(v).strip().rstrip("/")

    @field_validator("weaviate_count_concurrency")
    @classmethod
    def validate_concurrency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("WEAVIATE_COUNT_CONCURRENCY must be at least 1")
        return v


class Settings(BaseSettings):
    """Dashboard application settings.

    Environment variables are the single source of truth.
    Defaults are development-safe values only.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "development"

    # Built per Settings instance so the group reads the same .env
    weaviate: WeaviateSettings = Field(default_factory=WeaviateSettings)

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    metrics_enabled: bool = True

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        if isinstance(v, str):
            return json.loads(v)
        return v


settings = Settings()
