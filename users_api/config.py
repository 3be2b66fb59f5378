"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - MONGO_URI is required; everything else has a default
    - Real environment variables always win over .env values
    - get_settings() is cached (lru_cache) — single instance per process
    - Invalid settings surface as ConfigurationError, never a raw ValidationError

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support (ADR: developer UX)
    - First existing .env among ENV_FILE_CANDIDATES wins; none found is not an error
      (ADR: server may be started from the repo root or a nested working directory)
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from users_api.core.errors import ConfigurationError

logger = logging.getLogger(__name__)

ENV_FILE_CANDIDATES = (".env", "../.env", "../../.env")


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    # MongoDB
    mongo_uri: str
    mongo_database: str = "fiberdb"
    mongo_collection: str = "users"

    @field_validator("mongo_uri")
    @classmethod
    def require_mongo_uri(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("MONGO_URI cannot be empty")
        return v

    # Deadlines (seconds)
    request_timeout_seconds: float = 5.0
    connect_timeout_seconds: float = 10.0
    shutdown_timeout_seconds: float = 5.0

    # Server
    host: str = "0.0.0.0"
    port: int = 5000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


def locate_env_file(candidates: tuple[str, ...] = ENV_FILE_CANDIDATES) -> Path | None:
    """Return the first candidate .env path that exists, or None."""
    for candidate in candidates:
        path = Path(candidate)
        if path.is_file():
            return path
    return None


def load_settings(env_file: Path | None = None) -> Settings:
    """Build Settings from the environment plus an optional .env file."""
    try:
        return Settings(_env_file=env_file)
    except ValidationError as e:
        fields = sorted({".".join(str(loc) for loc in err["loc"]) for err in e.errors()})
        if "mongo_uri" in fields:
            raise ConfigurationError(
                "MONGO_URI missing! Create .env file with MONGO_URI=your_connection_string",
            ) from e
        raise ConfigurationError(f"Invalid settings: {', '.join(fields)}") from e


@lru_cache
def get_settings() -> Settings:
    env_file = locate_env_file()
    if env_file is not None:
        logger.info(f".env loaded from: {env_file}")
    return load_settings(env_file)
