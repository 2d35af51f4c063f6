"""Application configuration loaded from environment variables."""

import logging
from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"

    # JSON document holding users and approvals
    DATA_FILE: str = "data/db.json"

    # Registering with this address yields role 'admin'
    ADMIN_EMAIL: str = "admin@watchearn.com"

    # Deployment variants: approval-gated signup/purchase, token-issuing login
    REQUIRE_APPROVAL: bool = True
    ISSUE_TOKENS: bool = True

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-this-secret")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 10080

    PASSWORD_MIN_LEN: int = 1

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in logging.getLevelNamesMapping():
            raise ValueError(f"LOG_LEVEL must be a logging level name, got {v!r}")
        return level

    @field_validator("API_PREFIX")
    @classmethod
    def validate_api_prefix(cls, v: str) -> str:
        v = v.strip().rstrip("/")
        if v and not v.startswith("/"):
            raise ValueError("API_PREFIX must start with '/' (e.g. /api)")
        return v

    @field_validator("DATA_FILE")
    @classmethod
    def validate_data_file(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATA_FILE must be set and non-empty")
        return v.strip()

    @field_validator("ADMIN_EMAIL")
    @classmethod
    def normalize_admin_email(cls, v: str) -> str:
        return v.strip().lower()

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("PASSWORD_MIN_LEN")
    @classmethod
    def validate_password_min_len(cls, v: int) -> int:
        if v < 1 or v > 72:
            raise ValueError("PASSWORD_MIN_LEN must be between 1 and 72")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
