"""
Configuration for Relay Service.

Uses Pydantic settings for environment-based configuration. The upstream
target is fixed in code and intentionally not part of the settings.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Environment(str, Enum):
    """Defines application environments."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Configuration settings for Relay Service."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="RELAY_SERVICE_",
        case_sensitive=False,
        extra="ignore",
    )

    # Service identity
    SERVICE_NAME: str = "relay-service"

    ENVIRONMENT: Environment = Field(
        default=Environment.DEVELOPMENT,
        validation_alias="ENVIRONMENT",  # Read from global ENVIRONMENT var
        description="Runtime environment for the service",
    )

    # HTTP server configuration
    HTTP_HOST: str = Field(default="127.0.0.1", description="HTTP server host")
    HTTP_PORT: int = Field(default=3000, description="HTTP server port")

    # Logging configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    # HTTP client configuration
    HTTP_CLIENT_TIMEOUT_SECONDS: float | None = Field(
        default=None,
        description="Outbound request timeout in seconds; None waits indefinitely",
    )

    def is_development(self) -> bool:
        return self.ENVIRONMENT == Environment.DEVELOPMENT

    def is_production(self) -> bool:
        return self.ENVIRONMENT == Environment.PRODUCTION


# Global settings instance
settings = Settings()
