"""
NotesApp Backend — Application Configuration
==============================================

What:  Centralized configuration management using Pydantic Settings.
Why:   Type-safe environment variable loading with validation on startup.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by the app factory, the database layer, and Alembic.
When:  Loaded once at module import time.

Database location:
    Either a full DATABASE_URL, or the individual DB_HOST / DB_PORT / DB_USER /
    DB_PASSWORD / DB_NAME parts. DATABASE_URL wins when both are present.
"""

from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL, make_url


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults suitable for local development.
    Attributes are grouped by concern.
    """

    # ── Database ──────────────────────────────────────────────────────────
    # Full async SQLAlchemy URL, e.g. postgresql+asyncpg://user:pw@host:5432/db
    database_url: Optional[str] = Field(
        default=None,
        description="Full async database URL; overrides the DB_* parts",
    )

    db_driver: str = Field(default="postgresql+asyncpg")
    db_host: str = Field(default="localhost")
    db_port: int = Field(default=5432, ge=1, le=65535)
    db_user: str = Field(default="notesapp")
    db_password: str = Field(default="")
    db_name: str = Field(default="notesapp")

    # Bounded pool: at most db_pool_size + db_max_overflow connections
    db_pool_size: int = Field(default=10, ge=1, le=100)
    db_max_overflow: int = Field(default=0, ge=0, le=50)
    db_pool_pre_ping: bool = Field(default=True)

    # Seconds to wait while establishing a new connection
    db_connect_timeout: int = Field(default=10, ge=1, le=120)

    # Run the idempotent schema step during startup
    auto_migrate: bool = Field(default=True)

    # ── Credentials ───────────────────────────────────────────────────────
    # bcrypt cost factor; each +1 doubles hashing time
    bcrypt_rounds: int = Field(default=10, ge=4, le=16)

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins, "*" allows any
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=5001, ge=1, le=65535)

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
        "case_sensitive": False,
        "extra": "ignore",
    }

    @property
    def sqlalchemy_url(self) -> URL:
        """
        What:  The database URL as a SQLAlchemy URL object.
        How:   Parses DATABASE_URL when set, otherwise assembles it from the
               DB_* parts. URL.create escapes special characters in the password.
        """
        if self.database_url:
            return make_url(self.database_url)
        return URL.create(
            drivername=self.db_driver,
            username=self.db_user or None,
            password=self.db_password or None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
        )


# Singleton instance, imported throughout the application
settings = Settings()
