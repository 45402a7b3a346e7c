"""
Application Configuration Module

This module uses Pydantic Settings for type-safe configuration management.

Settings are loaded from environment variables (case-insensitive) and fall
back to a local .env file. A single Settings instance is cached with
@lru_cache so every module shares the same configuration.

Usage:
    from bookgraph.config import get_settings

    settings = get_settings()
    print(settings.rest_api_base_url)
"""

from functools import lru_cache
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    SECURITY NOTE:
    ==============
    - jwt_secret is validated at startup
    - Placeholder values or short secrets raise errors
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------
    app_name: str = Field(
        default="Bookgraph",
        description="Application name displayed in logs and the health check"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode (detailed errors, auto-reload)"
    )
    host: str = Field(
        default="0.0.0.0",
        description="Host to bind the server to"
    )
    port: int = Field(
        default=4000,
        description="Port the GraphQL API listens on"
    )
    environment: str = Field(
        default="development",
        description="Environment: development, staging, production"
    )
    graphql_ide: bool = Field(
        default=True,
        description="Serve the in-browser GraphQL IDE at /graphql"
    )

    # -------------------------------------------------------------------------
    # REST Resource Store
    # -------------------------------------------------------------------------
    rest_api_base_url: str = Field(
        default="http://localhost:5000",
        description="Base URL of the REST resource store"
    )

    # -------------------------------------------------------------------------
    # Security Settings
    # -------------------------------------------------------------------------
    jwt_secret: str = Field(
        default="REPLACE_WITH_YOUR_GENERATED_SECRET_KEY",
        description="Shared secret used to sign session tokens"
    )
    token_location: str = Field(
        default="both",
        description="Where session tokens are read from: header, cookie or both"
    )
    token_cookie_name: str = Field(
        default="token",
        description="Cookie holding the session token"
    )
    allowed_origins: str = Field(
        default="http://localhost:3000,https://studio.apollographql.com",
        description="Comma-separated list of allowed CORS origins"
    )

    # -------------------------------------------------------------------------
    # Logging Settings
    # -------------------------------------------------------------------------
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------
    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",")]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def reads_token_from_header(self) -> bool:
        return self.token_location in {"header", "both"}

    @property
    def reads_token_from_cookie(self) -> bool:
        return self.token_location in {"cookie", "both"}

    # -------------------------------------------------------------------------
    # Validators
    # -------------------------------------------------------------------------
    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that log_level is a valid Python logging level."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v.upper()

    @field_validator("jwt_secret")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """
        Validate that jwt_secret is not a placeholder value.

        The application will fail to start if JWT_SECRET is not properly set.

        Raises:
            ValueError: If the secret is a placeholder or too short
        """
        placeholder_indicators = [
            "REPLACE_WITH",
            "change-me",
            "your-secret",
            "generate-with",
        ]

        for indicator in placeholder_indicators:
            if indicator.lower() in v.lower():
                raise ValueError(
                    "JWT_SECRET contains a placeholder value. "
                    "Generate a secure key with: openssl rand -hex 32"
                )

        if len(v) < 32:
            raise ValueError(
                "JWT_SECRET must be at least 32 characters long. "
                "Generate a secure key with: openssl rand -hex 32"
            )

        return v

    @field_validator("token_location")
    @classmethod
    def validate_token_location(cls, v: str) -> str:
        valid_locations = {"header", "cookie", "both"}
        if v.lower() not in valid_locations:
            raise ValueError(f"token_location must be one of {valid_locations}")
        return v.lower()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment is a known value."""
        valid_envs = {"development", "staging", "production"}
        if v.lower() not in valid_envs:
            raise ValueError(f"environment must be one of {valid_envs}")
        return v.lower()

    @field_validator("rest_api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    First call creates the Settings instance (reading .env and validating);
    subsequent calls return the cached instance.

    Returns:
        Cached Settings instance
    """
    return Settings()
