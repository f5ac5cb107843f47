"""
Core configuration module for the postkv service.

This module defines all application settings using Pydantic BaseSettings,
enabling configuration through environment variables with type validation.
Settings are loaded from .env files and environment variables.
"""

import json
from functools import lru_cache
from typing import Annotated, Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Connection details for the key-value store should be provided via
    environment variables, never hardcoded.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="allow",
    )

    # Application Settings
    APP_NAME: str = Field(default="postkv", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    DEBUG: bool = Field(default=False, description="Debug mode flag")
    ENVIRONMENT: str = Field(
        default="development",
        description="Environment (development/staging/production)",
    )

    # Server Settings
    HOST: str = Field(default="0.0.0.0", description="Server host")  # noqa: S104
    PORT: int = Field(default=8787, description="Server port")
    API_PREFIX: str = Field(default="/api", description="API route prefix")

    # CORS Settings
    CORS_ORIGINS: Annotated[list[str], NoDecode] = Field(
        default=["*"], description="Allowed CORS origins"
    )
    CORS_ALLOW_METHODS: Annotated[list[str], NoDecode] = Field(
        default=["GET", "POST", "OPTIONS"], description="Allowed HTTP methods"
    )
    CORS_ALLOW_HEADERS: Annotated[list[str], NoDecode] = Field(
        default=["Content-Type"], description="Allowed HTTP headers"
    )

    # Response Settings
    CACHE_CONTROL: str = Field(
        default="public, max-age=3600",
        description="Cache-Control header sent with successful API responses",
    )

    # Key-Value Store Settings
    STORE_BACKEND: Literal["redis", "memory"] = Field(
        default="redis", description="Key-value store backend (redis/memory)"
    )
    REDIS_URL: str = Field(default="redis://localhost:6379/0", description="Redis connection URL")
    REDIS_SOCKET_TIMEOUT: float = Field(
        default=5.0, description="Redis connect/read timeout in seconds"
    )

    # Content Settings
    DEFAULT_LANGUAGE: str = Field(default="en", description="Language used when none is given")
    DEFAULT_RECENT_LIMIT: int = Field(default=10, description="Default size of recent listings")
    STRICT_DATE_VALIDATION: bool = Field(
        default=False,
        description="Reject front matter whose date is not a YYYY-MM-DD calendar date",
    )

    # Logging Settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(
        default="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        description="Log message format",
    )
    LOG_FILE: str | None = Field(default=None, description="Log file path (None for stdout only)")
    LOG_QUIET_LOGGERS: Annotated[list[str], NoDecode] = Field(
        default=["uvicorn", "fastapi", "redis", "httpx", "httpcore"],
        description="Third-party loggers held at WARNING",
    )

    @field_validator(
        "CORS_ORIGINS", "CORS_ALLOW_METHODS", "CORS_ALLOW_HEADERS", "LOG_QUIET_LOGGERS",
        mode="before",
    )
    @classmethod
    def parse_list(cls, v: Any) -> list[str]:
        """Parse list settings from JSON array or comma-separated string."""
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                return json.loads(s)
            return [item.strip() for item in s.split(",") if item.strip()]
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Settings are loaded only once per process.

    Returns:
        Settings: Cached settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
