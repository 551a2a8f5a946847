"""
svc-notes: Configuration Tests
================================

What we test:
    ✅ env() returns set values, falls back for absent/empty ones
    ✅ env() without fallback fails with the variable name
    ✅ load_settings() requires DATABASE_URL and coerces PORT
    ✅ invalid values surface as ConfigurationError
"""

import pytest

from svc_notes.config import Settings, env, load_settings
from svc_notes.exceptions import ConfigurationError


class TestEnv:

    def test_returns_value_when_set(self, monkeypatch):
        monkeypatch.setenv("SVC_NOTES_TEST_VAR", "value")
        assert env("SVC_NOTES_TEST_VAR") == "value"

    def test_fallback_when_absent(self, monkeypatch):
        monkeypatch.delenv("SVC_NOTES_TEST_VAR", raising=False)
        assert env("SVC_NOTES_TEST_VAR", "3000") == "3000"

    def test_fallback_when_empty(self, monkeypatch):
        monkeypatch.setenv("SVC_NOTES_TEST_VAR", "")
        assert env("SVC_NOTES_TEST_VAR", "3000") == "3000"

    def test_missing_without_fallback_names_variable(self, monkeypatch):
        monkeypatch.delenv("SVC_NOTES_TEST_VAR", raising=False)
        with pytest.raises(ConfigurationError) as exc_info:
            env("SVC_NOTES_TEST_VAR")
        assert exc_info.value.message == "Missing env: SVC_NOTES_TEST_VAR"
        assert exc_info.value.variable == "SVC_NOTES_TEST_VAR"


class TestLoadSettings:

    def test_missing_database_url(self, monkeypatch):
        monkeypatch.delenv("DATABASE_URL", raising=False)
        with pytest.raises(ConfigurationError, match="DATABASE_URL"):
            load_settings()

    def test_empty_database_url(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "")
        with pytest.raises(ConfigurationError, match="DATABASE_URL"):
            load_settings()

    def test_defaults(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///notes.db")
        monkeypatch.delenv("PORT", raising=False)
        monkeypatch.delenv("SHUTDOWN_TIMEOUT", raising=False)
        settings = load_settings()
        assert settings.port == 3000
        assert settings.shutdown_timeout == 10.0
        assert settings.database_url == "sqlite+aiosqlite:///notes.db"

    def test_empty_port_uses_default(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///notes.db")
        monkeypatch.setenv("PORT", "")
        assert load_settings().port == 3000

    def test_port_is_coerced_to_int(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///notes.db")
        monkeypatch.setenv("PORT", "8080")
        assert load_settings().port == 8080

    def test_invalid_port(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///notes.db")
        monkeypatch.setenv("PORT", "not-a-port")
        with pytest.raises(ConfigurationError, match="PORT"):
            load_settings()

    def test_invalid_log_level(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///notes.db")
        monkeypatch.setenv("LOG_LEVEL", "chatty")
        with pytest.raises(ConfigurationError, match="LOG_LEVEL"):
            load_settings()


class TestDatabaseUrl:

    @pytest.mark.parametrize(
        "raw",
        ["postgres://u:p@db:5432/notes", "postgresql://u:p@db:5432/notes"],
    )
    def test_postgres_urls_use_asyncpg(self, raw):
        settings = Settings(database_url=raw)
        assert settings.database_url == "postgresql+asyncpg://u:p@db:5432/notes"
        assert not settings.is_sqlite

    def test_explicit_driver_is_kept(self):
        url = "postgresql+asyncpg://u:p@db/notes"
        assert Settings(database_url=url).database_url == url
