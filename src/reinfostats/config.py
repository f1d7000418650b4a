"""Configuration system for reinfostats.

Uses pydantic-settings to load configuration from environment variables
and .env files with defaults suited to batch report generation against
the MLIT Real Estate Information Library API.
"""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables or .env file.
    Environment variables are prefixed with REINFO_ (e.g., REINFO_API_KEY).
    """

    model_config = SettingsConfigDict(
        env_prefix="REINFO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API access
    api_key: str | None = Field(
        default=None,
        description="Subscription key for the reinfolib API",
    )
    base_url: str = Field(
        default="https://www.reinfolib.mlit.go.jp/ex-api/external",
        description="Base URL of the reinfolib external API",
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="HTTP timeout in seconds",
    )

    # Response cache
    cache_dir: Path = Field(
        default=Path(".cache") / "reinfo",
        description="Directory for caching API responses",
    )
    cache_ttl_days: float = Field(
        default=7,
        ge=0,
        description="Days before a cached response is considered stale",
    )

    # Rate limiting
    inter_city_delay: float = Field(
        default=0.2,
        ge=0,
        description="Seconds to wait between cities in a multi-city run",
    )


# Singleton instance for easy import
config = Settings()
