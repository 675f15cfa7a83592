"""Tests for settings validation and logging setup."""

from collections.abc import Generator

import pytest
import structlog
from pydantic import ValidationError

from linkshelf.config import Settings, configure_logging


class TestSettings:
    def test_defaults(self) -> None:
        settings = Settings(_env_file=None)
        assert settings.ENVIRONMENT == "development"
        assert settings.DEFAULT_PAGE_SIZE == 20
        assert settings.MAX_PAGE_SIZE == 100

    def test_log_level_is_normalized(self) -> None:
        assert Settings(_env_file=None, LOG_LEVEL=" warning ").LOG_LEVEL == "WARNING"

    def test_unknown_log_level_is_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, LOG_LEVEL="chatty")

    def test_page_sizes_must_be_consistent(self) -> None:
        with pytest.raises(ValidationError):
            Settings(_env_file=None, DEFAULT_PAGE_SIZE=200, MAX_PAGE_SIZE=100)
        with pytest.raises(ValidationError):
            Settings(_env_file=None, MAX_PAGE_SIZE=0)

    def test_environment_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("ENVIRONMENT", "production")
        assert Settings(_env_file=None).ENVIRONMENT == "production"


@pytest.fixture(autouse=True)
def _restore_structlog() -> Generator[None, None, None]:
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    def test_production_renders_json(self) -> None:
        configure_logging("production", "INFO")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_development_renders_console(self) -> None:
        configure_logging("development")
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.dev.ConsoleRenderer)
