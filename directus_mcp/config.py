"""
Application configuration loaded from environment variables.

Uses pydantic-settings to define typed configuration that automatically reads
from environment variables (or a local .env file). The variable names match
what MCP client configurations for Directus usually pass in:

    DIRECTUS_URL=https://cms.example.com
    DIRECTUS_TOKEN=...                      # static token, or:
    DIRECTUS_EMAIL=... / DIRECTUS_PASSWORD=...
    MCP_TOOLSETS=default,flow

Settings are read once at import time and never change afterwards.
"""

from typing import Literal

from pydantic_settings import BaseSettings

from directus_mcp.client import DirectusConfig
from directus_mcp.errors import ConfigurationError


class Settings(BaseSettings):
    """
    Server configuration with environment variable bindings.

    Field names map directly to environment variables (case-insensitive):
    `directus_url` reads DIRECTUS_URL, `mcp_toolsets` reads MCP_TOOLSETS.
    """

    # --- Directus connection ---

    directus_url: str | None = None

    # Exactly one credential form is needed. A static token takes precedence
    # over email/password when both are set.
    directus_token: str | None = None
    directus_email: str | None = None
    directus_password: str | None = None

    # Seconds before an outbound request is abandoned. None means no timeout.
    directus_timeout: float | None = None

    # --- Tool exposure ---

    # Comma-separated toolset names, e.g. "default,flow" or "all".
    # Empty selects the "default" toolset.
    mcp_toolsets: str = ""

    # --- Server settings ---

    # "stdio" for local MCP clients, "streamable-http" for network deployments.
    mcp_transport: Literal["stdio", "streamable-http"] = "stdio"

    # Only used by the streamable-http transport.
    mcp_host: str = "0.0.0.0"
    mcp_port: int = 8080

    # Logging verbosity. Maps to Python's logging levels.
    mcp_log_level: str = "info"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        # The .env file may carry unrelated variables for other tools.
        "extra": "ignore",
    }

    def directus_config(self) -> DirectusConfig:
        """
        Build the immutable client configuration from these settings.

        Raises:
            ConfigurationError: If DIRECTUS_URL is missing or no credential
                                form is configured
        """
        if not self.directus_url:
            raise ConfigurationError("DIRECTUS_URL environment variable is required")

        return DirectusConfig(
            url=self.directus_url,
            token=self.directus_token,
            email=self.directus_email,
            password=self.directus_password,
            timeout=self.directus_timeout,
        )


# Singleton instance: import this from other modules.
settings = Settings()
