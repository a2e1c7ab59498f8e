import os
from functools import lru_cache

from pydantic import BaseModel, Field


def _env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):

    mongodb_url: str = "mongodb://localhost:27017"
    mongodb_db: str = "chatapp"
    # upper bound for every driver call, including server selection
    mongodb_timeout_ms: int = Field(5000, ge=1)
    cors_origin: str = "https://ydkm-chatapp.vercel.app"
    host: str = "0.0.0.0"
    port: int = 3000
    log_level: str = "INFO"
    summary_update_attempts: int = Field(3, ge=1)
    expose_error_details: bool = False


def load_settings() -> Settings:
    """Build settings from the process environment, falling back to defaults."""
    defaults = Settings()
    return Settings(
        mongodb_url=os.getenv("MONGODB_URL", defaults.mongodb_url),
        mongodb_db=os.getenv("MONGODB_DB", defaults.mongodb_db),
        mongodb_timeout_ms=int(os.getenv("MONGODB_TIMEOUT_MS", defaults.mongodb_timeout_ms)),
        cors_origin=os.getenv("CORS_ORIGIN", defaults.cors_origin),
        host=os.getenv("HOST", defaults.host),
        port=int(os.getenv("PORT", defaults.port)),
        log_level=os.getenv("LOG_LEVEL", defaults.log_level).upper(),
        summary_update_attempts=int(os.getenv("SUMMARY_UPDATE_ATTEMPTS", defaults.summary_update_attempts)),
        expose_error_details=_env_bool("EXPOSE_ERROR_DETAILS", defaults.expose_error_details),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()
