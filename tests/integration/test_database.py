"""Tests for engine and session lifecycle."""

from collections.abc import Generator

import pytest
from sqlalchemy import text

from linkshelf.config import Settings
from linkshelf.database import (
    dispose_engine,
    get_engine,
    get_session_factory,
    initialize_database,
    session_scope,
)


@pytest.fixture
def memory_database() -> Generator[None, None, None]:
    initialize_database(Settings(_env_file=None, DATABASE_URL="sqlite:///:memory:"))
    yield
    dispose_engine()


class TestDatabaseLifecycle:
    def test_engine_requires_initialization(self) -> None:
        dispose_engine()
        with pytest.raises(RuntimeError):
            get_engine()

    def test_sqlite_enforces_foreign_keys(self, memory_database: None) -> None:
        with session_scope() as session:
            assert session.execute(text("PRAGMA foreign_keys")).scalar_one() == 1

    def test_factory_is_reused_until_disposed(self, memory_database: None) -> None:
        factory = get_session_factory()
        assert get_session_factory() is factory
        assert get_engine().url.get_backend_name() == "sqlite"

        dispose_engine()
        with pytest.raises(RuntimeError):
            get_engine()

    def test_factory_initializes_from_given_settings(self) -> None:
        dispose_engine()
        try:
            get_session_factory(Settings(_env_file=None, DATABASE_URL="sqlite:///:memory:"))
            assert get_engine().url.database == ":memory:"
        finally:
            dispose_engine()
