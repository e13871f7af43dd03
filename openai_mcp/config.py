"""Configuration settings for openai_mcp.

Uses pydantic-settings for config parsing from environment variables
and defaults. The OpenAI credential is read from ``OPENAI_API_KEY``;
everything else uses the ``OPENAI_MCP_`` prefix.
"""

import json
from typing import Literal

from pydantic import AliasChoices, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_API_BASE_URL = "https://api.openai.com/v1"
DEFAULT_SERVER_NAME = "openai-mcp"
API_KEY_ENV_VAR = "OPENAI_API_KEY"


class Settings(BaseSettings):
    """Application settings.

    Settings are loaded from environment variables with the OPENAI_MCP_ prefix,
    except for the API key which keeps the conventional OPENAI_API_KEY name.
    An instance is built once per process and passed to the server explicitly.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENAI_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Credentials
    openai_api_key: SecretStr | None = Field(
        default=None,
        validation_alias=AliasChoices(API_KEY_ENV_VAR, "openai_api_key"),
        description="OpenAI API key used as the bearer token",
    )

    # Upstream
    api_base_url: str = Field(
        default=DEFAULT_API_BASE_URL,
        description="Base URL of the OpenAI API",
    )
    request_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout in seconds for image generation requests",
    )

    # Server
    server_name: str = Field(
        default=DEFAULT_SERVER_NAME,
        description="Name advertised to MCP clients and used when installing",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )

    @property
    def has_api_key(self) -> bool:
        """Whether a non-empty API key is configured."""
        return self.api_key() is not None

    def api_key(self) -> str | None:
        """Return the raw API key, or None if it is missing or empty."""
        if self.openai_api_key is None:
            return None
        return self.openai_api_key.get_secret_value() or None


def get_settings() -> Settings:
    """Get the application settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()


def print_settings_json(settings: Settings | None = None) -> str:
    """Render effective settings as JSON with the API key masked.

    Args:
        settings: Optional settings instance; uses default if not provided.

    Returns:
        JSON string of effective settings.
    """
    if settings is None:
        settings = get_settings()
    data = settings.model_dump(mode="json", exclude={"openai_api_key"})
    data["openai_api_key"] = "********" if settings.has_api_key else None
    return json.dumps(data, indent=2)


__all__ = [
    "API_KEY_ENV_VAR",
    "DEFAULT_API_BASE_URL",
    "DEFAULT_SERVER_NAME",
    "Settings",
    "get_settings",
    "print_settings_json",
]
