"""Application configuration management using Pydantic Settings."""

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables.
    Required settings will raise validation errors if not provided.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="duo-match-backend", description="Application name")
    app_env: str = Field(default="development", description="Environment (development/staging/production)")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="Comma-separated list of allowed CORS origins",
    )

    # Supabase
    supabase_url: str = Field(..., description="Supabase project URL")
    supabase_secret_key: str = Field(..., description="Supabase secret key for backend operations")
    supabase_signing_key_jwk: str = Field(..., description="Supabase signing key JWK (JSON string) for JWT token verification")
    jwt_audience: str | None = Field(default=None, description="Expected JWT audience (skipped when unset)")

    # Storage
    storage_backend: Literal["supabase", "memory"] = Field(
        default="supabase",
        description="Persistence backend for profiles, likes, matches and messages",
    )
    photo_bucket: str = Field(default="duo-photos", description="Supabase Storage bucket for profile photos")
    max_photo_size_bytes: int = Field(default=5 * 1024 * 1024, description="Maximum photo upload size (5 MB)")
    max_request_body_size: int = Field(default=6 * 1024 * 1024, description="Maximum request body size in bytes")

    # Matching and messaging
    browse_page_size: int = Field(default=20, description="Profiles returned per browse request")
    max_message_length: int = Field(default=2000, description="Maximum message length after trimming")
    conceal_match_membership: bool = Field(
        default=True,
        description="Report non-participant access to a match as 'match not found'",
    )

    # Rate limiting
    rate_limit_requests: int = Field(default=60, description="Likes/messages allowed per user per window")
    rate_limit_window_seconds: int = Field(default=60, description="Rate limit window in seconds")

    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins string into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are cached using lru_cache for performance.
        Call get_settings.cache_clear() to reload settings.
    """
    return Settings()
