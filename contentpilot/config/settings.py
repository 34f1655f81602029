"""
Application Settings.

Centralized configuration using Pydantic Settings with environment variable loading.
Settings are read once per process; components receive the Settings instance
explicitly instead of reading the environment at call time.

The AI gateway key is optional here so the service can boot and report
readiness. Components that need it validate its presence at construction
(see ContentGenerator).

Production Mode:
    When app_env="production", additional validations apply:
    - debug must be False
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # AI Gateway (chat completions)
    # -------------------------------------------------------------------------
    ai_gateway_api_key: SecretStr | None = Field(
        default=None,
        description="Bearer credential for the AI gateway",
    )
    ai_gateway_url: str = Field(
        default="https://ai.gateway.lovable.dev/v1",
        description="Base URL of the OpenAI-compatible gateway",
    )
    ai_model: str = Field(
        default="google/gemini-2.5-flash",
        description="Model identifier sent with every completion request",
    )
    ai_request_timeout_seconds: float = Field(
        default=60.0,
        gt=0,
        description="Upper bound for a single completion request in seconds",
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_env: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment",
    )
    debug: bool = Field(
        default=True,
        description="Enable debug mode",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Logging level",
    )
    api_host: str = Field(default="0.0.0.0", description="Bind address for uvicorn")
    api_port: int = Field(default=8000, description="Bind port for uvicorn")

    # -------------------------------------------------------------------------
    # CORS Settings
    # -------------------------------------------------------------------------
    cors_allowed_origins: list[str] = Field(
        default=["*"],
        description="Allowed CORS origins. The browser client calls from any origin.",
    )
    cors_allowed_headers: list[str] = Field(
        default=["authorization", "x-client-info", "apikey", "content-type"],
        description="Request headers accepted on cross-origin calls",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.app_env == "development"

    @property
    def has_gateway_credentials(self) -> bool:
        """True when a non-blank gateway key is configured."""
        return bool(
            self.ai_gateway_api_key
            and self.ai_gateway_api_key.get_secret_value().strip()
        )

    @model_validator(mode="after")
    def validate_production_settings(self) -> "Settings":
        """Validate that production settings are secure."""
        if self.app_env == "production" and self.debug:
            raise ValueError(
                "Production configuration errors: debug must be False in production"
            )
        return self


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    Call get_settings.cache_clear() to reload settings if needed.
    """
    return Settings()
