"""Application configuration."""

import logging
import sys
from collections.abc import Callable
from functools import lru_cache
from typing import Any, Literal

import structlog
from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings."""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Database
    DATABASE_URL: str = "sqlite:///./linkshelf.db"
    DATABASE_ECHO: bool = False
    DATABASE_POOL_SIZE: int = 20
    DATABASE_MAX_OVERFLOW: int = 30

    PROJECT_NAME: str = "linkshelf"
    VERSION: str = "0.1.0"

    # Environment
    ENVIRONMENT: Literal["development", "production", "test"] = "development"
    LOG_LEVEL: str | None = None

    # Queries
    DEFAULT_PAGE_SIZE: int = 20
    MAX_PAGE_SIZE: int = 100

    @field_validator("LOG_LEVEL", mode="after")
    @classmethod
    def normalize_log_level(cls, value: str | None) -> str | None:
        """Upper-case the log level and reject unknown names."""
        if value is None:
            return None
        level = value.strip().upper()
        if level not in logging.getLevelNamesMapping():
            msg = f"Unknown LOG_LEVEL '{value}'"
            raise ValueError(msg)
        return level

    @model_validator(mode="after")
    def validate_page_sizes(self) -> "Settings":
        """Validate page size configuration."""
        if self.MAX_PAGE_SIZE < 1:
            msg = "MAX_PAGE_SIZE must be at least 1"
            raise ValueError(msg)
        if not 1 <= self.DEFAULT_PAGE_SIZE <= self.MAX_PAGE_SIZE:
            msg = "DEFAULT_PAGE_SIZE must be between 1 and MAX_PAGE_SIZE"
            raise ValueError(msg)
        return self


def _resolve_level(environment: str, log_level: str | None) -> int:
    if log_level is not None:
        return logging.getLevelNamesMapping()[log_level.upper()]
    return logging.DEBUG if environment == "development" else logging.INFO


def configure_logging(environment: str = "development", log_level: str | None = None) -> None:
    """
    Route structlog through stdlib logging.

    Production emits one JSON object per event; other environments get the
    console renderer. Use case modules log snake_case events with keyword
    context, e.g. ``logger.info("card_added_to_library", card_id=...)``.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=_resolve_level(environment, log_level),
        force=True,
    )

    renderer: Callable[..., Any] = (
        structlog.processors.JSONRenderer()
        if environment == "production"
        else structlog.dev.ConsoleRenderer()
    )
    processors: list[Callable[..., Any]] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        renderer,
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
