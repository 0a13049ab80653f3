"""Configuration helpers for server settings."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class _Settings(BaseSettings):
    four_ball_share: Literal["full", "split"] = Field(
        default="full", alias="FOUR_BALL_SHARE"
    )
    share_qr_size: int = Field(default=256, alias="SHARE_QR_SIZE", ge=64)
    default_course_id: str = Field(default="bayou-desiard", alias="DEFAULT_COURSE_ID")
    default_tee_name: str = Field(default="Blue", alias="DEFAULT_TEE_NAME")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


@lru_cache(maxsize=1)
def get_settings() -> _Settings:
    """Return cached application settings."""

    return _Settings()  # type: ignore[call-arg]


def reset_settings_cache() -> None:
    """Clear cached settings (primarily for tests)."""

    get_settings.cache_clear()


def env_bool(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def cors_allow_origins() -> list[str]:
    allow = os.getenv("CORS_ALLOW_ORIGINS", "http://localhost,http://127.0.0.1")
    return [origin.strip() for origin in allow.split(",") if origin.strip()]


__all__ = [
    "cors_allow_origins",
    "env_bool",
    "get_settings",
    "reset_settings_cache",
]
