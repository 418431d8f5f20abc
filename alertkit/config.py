"""Application configuration settings."""
from __future__ import annotations

import os
from functools import lru_cache

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Runtime toggles -----------------------------------------------------
# Execution environment: "dev" | "test" | "staging" | "prod"
ENV = os.getenv("ALERTKIT_ENV", "dev").lower()


class Settings(BaseSettings):
    """Environment configuration for alertkit."""

    app_env: str = ENV
    database_url: str = Field(
        default="sqlite:///alertkit.db",
        validation_alias=AliasChoices("DATABASE_URL", "ALERTKIT_DATABASE_URL"),
    )
    LOG_LEVEL: str = "INFO"
    ALLOW_DB_CREATE_ALL: bool = True

    # --- Capability defaults ---------------------------------------------
    DEFAULT_ALERT_TYPE: str = "alert"
    REMOVE_ALERTS_ON_DELETE: bool = True
    REMOVE_REPORTS_ON_DELETE: bool = True

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="", env_file_encoding="utf-8", extra="ignore"
    )

    @field_validator("DEFAULT_ALERT_TYPE")
    @classmethod
    def _strip_alert_type(cls, value: str) -> str:
        """Reject blank alert types so rows never carry an empty ``type``."""

        cleaned = value.strip()
        if not cleaned:
            raise ValueError("DEFAULT_ALERT_TYPE must not be blank")
        return cleaned


class AppInfo(BaseModel):
    name: str = "alertkit"
    version: str = "0.1.0"


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings."""

    return Settings()


__all__ = [
    "ENV",
    "Settings",
    "AppInfo",
    "get_settings",
]
