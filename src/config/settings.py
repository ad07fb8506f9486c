# src/config/settings.py - v1
"""Typed configuration loaded from .env via pydantic-settings.

Single source of truth for store lifetimes, cookie attributes, session
backend selection, codecs and logging.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """Raised when configuration is internally inconsistent."""


class Settings(BaseSettings):
    """Application settings loaded from .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Lifetimes (seconds, 0 = no expiry) ===
    session_ttl: int = 3600
    cookie_ttl: int = 43200

    # === Session ===
    session_backend: Literal["memory", "json", "sqlite", "redis"] = "memory"
    session_root: Path = Path("~/.httpstore/sessions")
    session_redis_url: str = ""
    session_cookie_name: str = "HTTPSTORESESSID"
    session_codec: Literal["json", "pickle"] = "json"

    # === Cookies ===
    cookie_codec: Literal["json", "pickle"] = "json"
    cookie_path: str = "/"
    cookie_domain: str = ""
    cookie_secure: bool = False
    cookie_httponly: bool = True
    cookie_samesite: Literal["Lax", "Strict", "None"] | None = "Lax"

    # === Values ===
    decode_mode: Literal["lenient", "strict"] = "lenient"

    # === Logging ===
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_format: Literal["json", "text"] = "json"
    log_file: Path | None = None
    log_rotation: str = "10MB"
    log_retention: int = 30

    # --- Validators ---

    @field_validator("session_ttl", "cookie_ttl")
    @classmethod
    def validate_ttl(cls, v: int, info) -> int:  # noqa: N805
        """Lifetimes are plain non-negative seconds."""
        if v < 0:
            raise ValueError(f"{info.field_name} must be >= 0")
        return v

    @model_validator(mode="after")
    def validate_config_consistency(self) -> Settings:
        """Validate cross-field consistency rules."""
        errors: list[str] = []

        if self.cookie_codec == "pickle":
            errors.append(
                "COOKIE_CODEC=pickle would execute client-controlled data; use json"
            )

        if self.session_backend == "redis" and not self.session_redis_url:
            errors.append(
                "SESSION_REDIS_URL must be set when SESSION_BACKEND=redis"
            )

        if self.cookie_samesite == "None" and not self.cookie_secure:
            errors.append("COOKIE_SAMESITE=None requires COOKIE_SECURE=true")

        if not self.session_cookie_name.strip():
            errors.append("SESSION_COOKIE_NAME must not be empty")

        if errors:
            raise ConfigurationError("; ".join(errors))

        return self


def load_settings(**overrides: object) -> Settings:
    """Load settings from .env with optional overrides.

    Args:
        **overrides: Field-level overrides (for testing or per-app config).

    Returns:
        Validated Settings instance.

    Raises:
        ConfigurationError: If configuration is internally inconsistent.
    """
    return Settings(**overrides)  # type: ignore[arg-type]
