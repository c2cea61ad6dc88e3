"""
Application configuration.

Loads settings from environment variables with sensible defaults.

The cached ``get_settings()`` accessor is only used at process bootstrap.
Components (token service, password hasher, stores) receive the Settings
value explicitly when they are constructed.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # ==========================================================================
    # Environment
    # ==========================================================================

    environment: str = "development"
    debug: bool = True
    log_level: str = "INFO"

    # ==========================================================================
    # API Server
    # ==========================================================================

    api_host: str = "0.0.0.0"
    api_port: int = 4000
    cors_origins: str = "http://localhost:3000"

    # ==========================================================================
    # Authentication
    # ==========================================================================

    jwt_secret_key: str = "dev-jwt-secret-change-in-production"
    jwt_algorithm: str = "HS256"
    jwt_issuer: str = "steep"
    jwt_audience: str = "steep-clients"
    jwt_expire_days: int = Field(default=7, gt=0)

    # bcrypt cost is drawn from this range for every new hash
    bcrypt_min_rounds: int = Field(default=8, ge=4, le=31)
    bcrypt_max_rounds: int = Field(default=12, ge=4, le=31)

    # ==========================================================================
    # Document store
    # ==========================================================================

    store_backend: str = "memory"  # "memory" or "firestore"
    firestore_project: str = ""
    store_timeout_seconds: float = Field(default=10.0, gt=0)
    identity_timeout_seconds: float = Field(default=5.0, gt=0)

    # ==========================================================================
    # Optional Services
    # ==========================================================================

    sentry_dsn: str = ""

    @model_validator(mode="after")
    def _check_rounds(self) -> Settings:
        if self.bcrypt_min_rounds > self.bcrypt_max_rounds:
            raise ValueError("bcrypt_min_rounds must not exceed bcrypt_max_rounds")
        return self

    # ==========================================================================
    # Helpers
    # ==========================================================================

    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
