"""Runtime configuration based on environment variables."""

from __future__ import annotations

from functools import lru_cache
from typing import Literal
import logging

from pydantic import AnyHttpUrl, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

CLIENT_VERSION = "0.1.0"


class ApiSettings(BaseModel):
    base_url: AnyHttpUrl = Field(
        default="http://localhost:8080/",
        description="Root of the remote content service exposing /v1/post.",
    )
    request_timeout_seconds: float = Field(default=10, ge=1, le=60)
    user_agent: str = Field(default=f"blogclient/{CLIENT_VERSION}", min_length=1)


class SearchSettings(BaseModel):
    quiet_period_ms: int = Field(default=350, ge=0)

    @property
    def quiet_period_seconds(self) -> float:
        return self.quiet_period_ms / 1000


class BlogSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="BLOG_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__"
    )

    environment: Literal["dev", "staging", "prod"] = "dev"
    log_level: str = "INFO"
    log_json: bool = True

    api: ApiSettings = Field(default_factory=ApiSettings)
    search: SearchSettings = Field(default_factory=SearchSettings)

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        if isinstance(value, str):
            value = value.strip().upper()
        if value not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value!r}")
        return value

    @property
    def log_level_value(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


@lru_cache
def get_settings() -> BlogSettings:
    """Return cached settings instance."""

    return BlogSettings()


__all__ = [
    "ApiSettings",
    "BlogSettings",
    "SearchSettings",
    "get_settings",
]
