"""
Shared configuration management for the OAuth gateway adapter.
"""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="allow"
    )

    # Environment
    env: str = Field(default="local", validation_alias="ACCESS_ENV")
    log_level: str = Field(default="info", validation_alias="ACCESS_LOG_LEVEL")

    # Identity provider (Keycloak / ForgeRock)
    forgerock_endpoint: Optional[str] = None
    forgerock_realm: Optional[str] = None
    forgerock_public_key: Optional[str] = None
    openssl_verify: bool = False

    # Backend authorization service
    backend_endpoint: str = "http://localhost:8081"
    backend_service_id: str = "default"
    backend_authentication_type: str = "service_token"
    backend_authentication_value: Optional[str] = None


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int
    host: str = "0.0.0.0"

    def __init__(self, service_name: str, port: int, **kwargs):
        super().__init__(service_name=service_name, port=port, **kwargs)


def get_config(service_name: str, port: int) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port)
