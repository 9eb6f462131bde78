"""Centralized configuration management for the Global Error Handler.

This module provides a single source of truth for all configuration values,
using TOML config files with pydantic validation.

Design Principles:
    - TOML Configuration: Loads from config.toml in the working directory
    - Pydantic Validation: Type-safe configuration with validation
    - Sensible Defaults: All settings have production-ready defaults
    - Singleton Pattern: Cached settings instance via lru_cache

Configuration Loading:
    1. Reads config.toml from the current working directory (if exists)
    2. Falls back to defaults if not set
    3. Validates all values using Pydantic

Configuration Sections:
    - APIConfig: FastAPI application metadata and log level
    - HandlerConfig: Error handling middleware behavior
    - TelegramConfig: Telegram alerting channel

Usage:
    from global_error_handler.infrastructure.config import get_settings

    settings = get_settings()
    timeout = settings.handler.alert_timeout_seconds
"""

from __future__ import annotations

import tomllib
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator


class APIConfig(BaseModel):
    """FastAPI application configuration."""

    title: str = Field(default="Global Error Handler", description="API title")
    version: str = Field(default="1.0.0", description="API version")
    log_level: Literal["debug", "info", "warning", "error", "critical"] = Field(
        default="info", description="Logging level"
    )


class HandlerConfig(BaseModel):
    """Error handling middleware configuration."""

    environment: str = Field(default="development", description="Environment tag for alerts")
    alert_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=300.0,
        description="Deadline for body capture and alert dispatch (seconds)",
    )
    max_body_bytes: int = Field(
        default=1024 * 1024,  # 1MB
        ge=0,
        le=100 * 1024 * 1024,
        description="Max request body bytes captured for diagnostics",
    )
    expose_unclassified_messages: bool = Field(
        default=True,
        description="Return the raw message of unclassified (500) errors to clients",
    )
    unclassified_message: str = Field(
        default="An unexpected error occurred. Please try again later.",
        description="Message returned for 500 errors when raw messages are hidden",
    )
    attachment_filename: str = Field(
        default="request.json", description="Filename of the snapshot attachment"
    )


class TelegramConfig(BaseModel):
    """Telegram alerting channel configuration."""

    bot_token: str | None = Field(default=None, description="Telegram bot token")
    chat_id: str | None = Field(default=None, description="Target chat identifier")
    api_base_url: str = Field(
        default="https://api.telegram.org", description="Telegram Bot API base URL"
    )
    timeout: float = Field(default=10.0, gt=0.0, le=120.0, description="HTTP timeout (seconds)")

    @property
    def enabled(self) -> bool:
        """Whether both credentials are present."""
        return bool(self.bot_token and self.chat_id)

    @field_validator("api_base_url")
    @classmethod
    def validate_api_base_url(cls, v: str) -> str:
        """Validate base URL format."""
        if not v.startswith(("http://", "https://")):
            msg = "api_base_url must start with http:// or https://"
            raise ValueError(msg)
        return v.rstrip("/")


class Settings(BaseModel):
    """Root settings class containing all configuration sections."""

    api: APIConfig = Field(default_factory=APIConfig)
    handler: HandlerConfig = Field(default_factory=HandlerConfig)
    telegram: TelegramConfig = Field(default_factory=TelegramConfig)

    @classmethod
    def from_toml(cls, config_path: Path | None = None) -> Settings:
        """Load settings from TOML file.

        Args:
            config_path: Path to config.toml. If None, reads config.toml
                from the current working directory.

        Returns:
            Settings instance populated from TOML file, or default settings
            if file not found.

        Raises:
            ValueError: If TOML file is invalid or contains validation errors.
        """
        if config_path is None:
            config_path = Path.cwd() / "config.toml"

        if not config_path.exists():
            return cls()

        try:
            with Path(config_path).open("rb") as f:
                config_data = tomllib.load(f)

            return cls(
                api=APIConfig(**config_data.get("api", {})),
                handler=HandlerConfig(**config_data.get("handler", {})),
                telegram=TelegramConfig(**config_data.get("telegram", {})),
            )
        except Exception as exc:
            msg = f"Failed to load config from {config_path}: {exc}"
            raise ValueError(msg) from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance (singleton pattern)."""
    return Settings.from_toml()


__all__ = [
    "APIConfig",
    "HandlerConfig",
    "Settings",
    "TelegramConfig",
    "get_settings",
]
