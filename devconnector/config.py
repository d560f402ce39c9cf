"""
Application configuration using Pydantic settings.

Usage:
    from devconnector.config import get_settings
    settings = get_settings()

For constants, import from devconnector.constants:
    from devconnector.constants import SOCIAL_PLATFORMS, GITHUB_API_BASE
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for production:
        - JWT_SECRET_KEY (min 32 chars, shared with the auth service)
        - SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET (for the Spotify proxy)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "DevConnector"
    api_prefix: str = "/api"
    debug: bool = Field(default=False)

    # Database
    database_url: str = Field(default="sqlite:///devconnector.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    auto_create_tables: bool = Field(default=True, validation_alias="AUTO_CREATE_TABLES")

    # JWT / Authentication (tokens are issued by the auth service)
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60)

    # CORS
    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")

    # Upstream APIs
    github_token: Optional[str] = Field(default=None, validation_alias="GITHUB_TOKEN")
    spotify_client_id: Optional[str] = Field(default=None, validation_alias="SPOTIFY_CLIENT_ID")
    spotify_client_secret: Optional[str] = Field(default=None, validation_alias="SPOTIFY_CLIENT_SECRET")
    spotify_profile_user: str = Field(default="sillysalamander", validation_alias="SPOTIFY_PROFILE_USER")
    http_timeout_seconds: float = Field(default=10.0, gt=0, validation_alias="HTTP_TIMEOUT_SECONDS")

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Reject default or short JWT secrets in production; allow them elsewhere."""
        import os

        env = os.getenv("ENV", "development")
        if env.lower() not in ("production", "prod"):
            return v

        if v.lower() in ("change_me", "changeme", "secret", "test"):
            raise ValueError(f"JWT_SECRET_KEY cannot be a default value ('{v}') in production.")
        if len(v) < 32:
            raise ValueError(
                f"JWT_SECRET_KEY must be at least 32 characters in production (got {len(v)})."
            )
        return v

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    @property
    def spotify_configured(self) -> bool:
        """Check if Spotify client credentials are present."""
        return bool(self.spotify_client_id and self.spotify_client_secret)

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if self.jwt_secret_key == "CHANGE_ME":
            errors.append("JWT_SECRET_KEY must be set for production")

        if not self.spotify_configured:
            warnings.append(
                "SPOTIFY_CLIENT_ID / SPOTIFY_CLIENT_SECRET not set - /profile/spotify will fail"
            )
        if not self.github_token:
            warnings.append("GITHUB_TOKEN not set - GitHub proxy uses unauthenticated rate limits")

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
