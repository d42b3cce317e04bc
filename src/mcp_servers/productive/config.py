"""
Productive MCP Server Configuration

Configuration settings using pydantic-settings for environment variable support.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.productive_api.config import ProductiveConfig, load_config


class ProductiveMCPConfig(BaseSettings):
    """
    Configuration for the Productive MCP Server.

    Reads from environment variables with PRODUCTIVE_MCP_ prefix. Credential
    fields left unset fall back to the shared PRODUCTIVE_ settings.
    """

    model_config = SettingsConfigDict(
        env_prefix="PRODUCTIVE_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Server Identity
    server_name: str = Field(
        default="productive",
        description="Server name for MCP protocol identification",
    )
    server_version: str = Field(
        default="0.1.0",
        description="Server version for MCP protocol",
    )

    transport: Literal["stdio"] = Field(
        default="stdio",
        description="Transport mode",
    )

    # Credentials (override PRODUCTIVE_API_TOKEN etc. when set)
    api_token: str | None = Field(default=None, description="Productive API token")
    org_id: str | None = Field(default=None, description="Organization ID")
    user_id: str | None = Field(default=None, description="Person ID of the acting user")

    # Resolution
    resolution_enabled: bool | None = Field(
        default=None,
        description="Resolve human-friendly identifiers in tool arguments",
    )
    resolve_strict: bool | None = Field(
        default=None,
        description="Reject ambiguous matches instead of accepting the first result",
    )
    resolver_cache_url: str | None = Field(
        default=None,
        description="Optional redis:// URL shared by all requests of this server",
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )

    def productive_config(self) -> ProductiveConfig:
        """API client settings: PRODUCTIVE_ values with this server's overrides applied."""
        return load_config().with_overrides(
            api_token=self.api_token,
            org_id=self.org_id,
            user_id=self.user_id,
            resolution_enabled=self.resolution_enabled,
            resolve_strict=self.resolve_strict,
            resolver_cache_url=self.resolver_cache_url,
        )


def load_mcp_config() -> ProductiveMCPConfig:
    """Load configuration from environment."""
    return ProductiveMCPConfig()
