"""
WorshipDeck Backend - Application Configuration
================================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time.

Note:
    The song similarity threshold is not a setting. It lives
    next to the guard in app.services.song_service as a module constant.
"""

from pydantic_settings import BaseSettings
from pydantic import AliasChoices, Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have working defaults for a single-machine deployment:
    the database is a SQLite file next to the process working directory.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Format: sqlite+aiosqlite:///<path>  (three slashes = relative path)
    database_url: str = Field(
        default="sqlite+aiosqlite:///./sqlite.db",
        description="Async SQLAlchemy URL of the SQLite store",
    )

    # Validates pooled connections before use; cheap on SQLite
    db_pool_pre_ping: bool = Field(default=True)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Any origin is reflected back (credentials allowed). Tighten by setting
    # e.g. CORS_ORIGIN_REGEX="https://(www\.)?example\.org"
    cors_origin_regex: str = Field(default=".*")

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(
        default=5050,
        ge=1,
        le=65535,
        validation_alias=AliasChoices("port", "backend_port"),
    )

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # DATABASE_URL and database_url both work
    }


# Singleton instance, imported throughout the application
settings = Settings()
