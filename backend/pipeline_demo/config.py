"""
Pipeline Demo — Application Configuration
==========================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the CLI and the test harness.
When:  Loaded once at module import time.

Recognized variables:
    PORT                   Listening port for `pipeline-demo serve`
    HOST                   Bind address for `pipeline-demo serve`
    ENVIRONMENT            Label echoed by GET /; "development" enables error detail
    LOG_LEVEL              Logging verbosity
    PERSIST_CREATED_USERS  Whether POST /api/users appends to the listed users
"""

from fastapi import Request
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development and CI runs.
    """

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # What: Deployment label returned by GET / and used to gate error detail
    # Only "development" changes behavior: 500 responses include the exception text
    environment: str = Field(default="development")

    @field_validator("environment")
    @classmethod
    def normalize_environment(cls, v: str) -> str:
        """Environment labels are compared case-insensitively."""
        v = v.strip().lower()
        if not v:
            raise ValueError("environment must not be empty")
        return v

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    # ── Logging ───────────────────────────────────────────────────────────
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

    # ── User Store ────────────────────────────────────────────────────────
    # What: Whether created users show up in subsequent GET /api/users calls
    # Default False: creation answers 201 with the new user but the listed
    # mock data stays at its two seed records
    persist_created_users: bool = Field(default=False)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


# Process-wide defaults; create_app() may be handed a different instance
settings = Settings()


def get_app_settings(request: Request) -> Settings:
    """FastAPI dependency returning the settings the running app was built with."""
    return request.app.state.settings
