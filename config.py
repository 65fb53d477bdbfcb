"""Configuration management for the shortlinks service."""

from typing import Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Config(BaseSettings):
    """Application configuration."""

    # Server settings
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind to"
    )

    port: int = Field(
        default=8080,
        description="Port to listen on"
    )

    # Shortener settings
    base_url: str = Field(
        default="http://localhost:8080",
        description="Base URL for generating short URLs"
    )

    path_prefix: str = Field(
        default="",
        description="Path prefix for short URLs (e.g., '/s' for /s/abc123)"
    )

    short_code_length: int = Field(
        default=6,
        gt=0,
        description="Default length for generated short codes"
    )

    max_generation_attempts: int = Field(
        default=3,
        gt=0,
        description="Attempts (or batch rounds) before giving up on a free short code"
    )

    # Storage settings
    database_url: Optional[str] = Field(
        default=None,
        description="PostgreSQL connection URL; the in-memory backend is used when unset"
    )

    create_tables: bool = Field(
        default=True,
        description="Create the shortlinks table on startup (PostgreSQL backend)"
    )

    db_pool_max_size: int = Field(
        default=10,
        ge=1,
        description="Maximum size of the PostgreSQL connection pool"
    )

    ping_timeout_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Upper bound for the storage liveness probe"
    )

    snapshot_path: Optional[str] = Field(
        default=None,
        description="Snapshot file for the in-memory backend (no snapshots when unset)"
    )

    delete_flush_interval_seconds: float = Field(
        default=1.0,
        gt=0,
        description="Interval between two flushes of buffered deletes"
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    log_file: Optional[str] = Field(
        default=None,
        description="Log file path (logs to stdout if not specified)"
    )

    log_json: bool = Field(
        default=False,
        description="Use JSON format for logs"
    )

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",  # Ignore extra environment variables
    }


def load_config() -> Config:
    """Load configuration from environment."""
    return Config()
