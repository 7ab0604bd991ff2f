"""
Application Configuration

Uses pydantic-settings for environment variable loading with validation.
All configuration is centralized here for easy management.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables can be set directly or via .env file.
    List values (disabled_tools) are read as JSON, e.g.
    ELEMENTOR_MCP_DISABLED_TOOLS='["build_page"]'.
    """

    model_config = SettingsConfigDict(
        env_prefix="ELEMENTOR_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Environment
    # ==========================================================================
    environment: Literal["development", "testing", "production"] = Field(
        default="development",
        description="Runtime environment"
    )

    debug: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    log_level: str = Field(
        default="INFO",
        description="Root log level (DEBUG, INFO, WARNING, ...)"
    )

    # ==========================================================================
    # MCP Server
    # ==========================================================================
    server_name: str = Field(
        default="elementor-mcp",
        description="Name announced by the MCP server"
    )

    transport: Literal["stdio", "http"] = Field(
        default="stdio",
        description="MCP transport used by the standalone server"
    )

    host: str = Field(
        default="127.0.0.1",
        description="Bind host for the HTTP transport"
    )

    port: int = Field(
        default=8765,
        description="Bind port for the HTTP transport"
    )

    disabled_tools: list[str] = Field(
        default_factory=list,
        description="Tool IDs that are not exposed to MCP clients"
    )

    pro_widgets: bool = Field(
        default=True,
        description="Expose the add_<widget> tools for Elementor Pro widgets"
    )

    # ==========================================================================
    # Collaborators
    # ==========================================================================
    storage_path: str = Field(
        default="",
        description="Directory for JSON document storage (empty = in-memory)"
    )

    widget_registry_path: str = Field(
        default="",
        description="YAML widget catalog (empty = bundled catalog)"
    )

    # ==========================================================================
    # Media
    # ==========================================================================
    media_path: str = Field(
        default="",
        description="Directory for uploaded media files (empty = in-memory)"
    )

    media_base_url: str = Field(
        default="",
        description="Public URL prefix for stored media (empty = file URIs)"
    )

    openverse_api_url: str = Field(
        default="https://api.openverse.org/v1",
        description="Openverse API root used for stock image search"
    )

    openverse_timeout: float = Field(
        default=15.0,
        description="Openverse request timeout in seconds"
    )

    download_timeout: float = Field(
        default=30.0,
        description="Timeout in seconds for downloading remote media"
    )

    # ==========================================================================
    # Structure compiler
    # ==========================================================================
    strict_structure: bool = Field(
        default=False,
        description=(
            "Reject malformed build_page structure items instead of skipping them"
        ),
    )

    # ==========================================================================
    # Computed Properties
    # ==========================================================================
    @computed_field
    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.environment == "development"

    @computed_field
    @property
    def is_testing(self) -> bool:
        """Check if running in testing mode."""
        return self.environment == "testing"

    @property
    def storage_dir(self) -> Path | None:
        """Storage directory as a Path, or None for in-memory storage."""
        return Path(self.storage_path) if self.storage_path else None

    @property
    def media_dir(self) -> Path | None:
        """Media directory as a Path, or None for in-memory media."""
        return Path(self.media_path) if self.media_path else None


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()
