"""
Productive Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://api.productive.io/api/v2"


class ProductiveConfig(BaseSettings):
    """
    Configuration for the Productive API client and resolution engine.

    Reads from environment variables with PRODUCTIVE_ prefix
    (e.g. PRODUCTIVE_API_TOKEN, PRODUCTIVE_ORG_ID).
    """

    model_config = SettingsConfigDict(
        env_prefix="PRODUCTIVE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    api_token: str | None = Field(
        default=None,
        description="Productive API token (X-Auth-Token)",
    )
    org_id: str | None = Field(
        default=None,
        description="Organization ID (X-Organization-Id)",
    )
    user_id: str | None = Field(
        default=None,
        description="Person ID of the current user, used as default for time entries",
    )

    # Transport
    base_url: str = Field(
        default=DEFAULT_BASE_URL,
        description="Base URL of the Productive API",
    )
    timeout_seconds: float = Field(
        default=30.0,
        description="Timeout for API calls",
    )
    retry_max_attempts: int = Field(
        default=3,
        description="Maximum attempts for GET requests failing with transport errors",
    )

    # Resolution
    resolution_enabled: bool = Field(
        default=True,
        description="Resolve human-friendly identifiers (emails, names, numbers) to IDs",
    )
    resolve_strict: bool = Field(
        default=False,
        description="Reject ambiguous matches instead of accepting the first result",
    )
    resolver_cache_url: str | None = Field(
        default=None,
        description="Optional redis:// URL for a persistent resolver cache",
    )
    resolver_cache_ttl_seconds: int = Field(
        default=86400,
        description="TTL for persistent resolver cache entries (24 hours)",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Logging level",
    )

    def with_overrides(self, **overrides: object) -> ProductiveConfig:
        """Return a copy with the non-None overrides applied (CLI flags win)."""
        updates = {key: value for key, value in overrides.items() if value is not None}
        return self.model_copy(update=updates)


def load_config() -> ProductiveConfig:
    """Load configuration from environment."""
    return ProductiveConfig()
