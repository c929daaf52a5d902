# tabstate/config.py
"""
Centralized application configuration using pydantic-settings.

All settings are read from environment variables or .env file.
Switching the history storage (memory, file, redis) only needs an env change.
"""

import os
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from tabstate.constants import HISTORY_CAPACITY, HISTORY_KEY


PROJECT_ROOT: str = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Priority: environment variables > .env file > defaults
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",  # Ignore unknown env vars
    )

    # --- Server ---
    HOST: str = Field(
        default="127.0.0.1",
        description="Server bind host"
    )
    PORT: int = Field(
        default=8888,
        description="Server bind port"
    )

    # --- Debug / Logging ---
    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode"
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR)"
    )
    LOGS_PATH: str = Field(
        default=os.path.join(PROJECT_ROOT, "logs"),
        description="Directory for access/error log files"
    )
    LOG_TO_FILE: bool = Field(
        default=False,
        description="Also write access.log and error.log under LOGS_PATH"
    )

    # --- History storage ---
    STORAGE_BACKEND: str = Field(
        default="file",
        description="Key-value backend for the history log (memory, file, redis)"
    )
    HISTORY_FILE: str = Field(
        default=os.path.join(PROJECT_ROOT, "data", "tabstate.json"),
        description="JSON document used by the file backend"
    )
    REDIS_URL: str = Field(
        default="redis://localhost:6379/0",
        description="Redis connection URL"
    )
    HISTORY_KEY: str = Field(
        default=HISTORY_KEY,
        description="Storage key holding the whole history log"
    )
    HISTORY_CAPACITY: int = Field(
        default=HISTORY_CAPACITY,
        ge=1,
        description="Maximum number of saved exports kept"
    )

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in allowed:
            raise ValueError(f"LOG_LEVEL must be one of {allowed}")
        return v_upper

    @field_validator("STORAGE_BACKEND")
    @classmethod
    def validate_storage_backend(cls, v: str) -> str:
        allowed = {"memory", "file", "redis"}
        v_lower = v.lower()
        if v_lower not in allowed:
            raise ValueError(f"STORAGE_BACKEND must be one of {allowed}")
        return v_lower


@lru_cache
def get_settings() -> Settings:
    """Return cached Settings instance (singleton pattern)."""
    return Settings()
