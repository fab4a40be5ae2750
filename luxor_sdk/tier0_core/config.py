"""
luxor_sdk.tier0_core.config
────────────────────────────
Typed configuration with env layering. Reads from .env → environment
variables. All fields are typed via Pydantic and prefixed with LUXOR_.

Only front-ends (the CLI, a Controller built without an explicit base URL)
read this; the executor itself is configured by its constructor.
"""
from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LuxorConfig(BaseSettings):
    """Typed client configuration. All env vars are prefixed with LUXOR_."""

    model_config = SettingsConfigDict(
        env_prefix="LUXOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── Controller ────────────────────────────────────────────────────────────
    base_url: str = Field(default="http://luxor/")

    # Seconds per call; None means calls carry no deadline.
    timeout: float | None = Field(default=None)

    # ── Logging ───────────────────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="console")

    # ── Error reporting ───────────────────────────────────────────────────────
    error_backend: str = Field(default="none")

    @field_validator("timeout")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"timeout must be positive, got {v!r}")
        return v

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        allowed = {"console", "json"}
        if v.lower() not in allowed:
            raise ValueError(f"log_format must be one of {allowed}, got {v!r}")
        return v.lower()


@lru_cache(maxsize=1)
def get_config() -> LuxorConfig:
    """
    Return the singleton client config. Cached after first call.
    Call _reset_config() in tests to pick up new env vars.
    """
    return LuxorConfig()


def _reset_config() -> None:
    """For tests: clear the config cache."""
    get_config.cache_clear()


__all__ = ["LuxorConfig", "get_config"]
