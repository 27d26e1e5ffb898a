import logging

import pytest
from pydantic import ValidationError

import articletree.server.settings as server_settings
from articletree.server.log_config import configure_logging


def test_settings_read_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("ARTICLES_DB", str(tmp_path / "env.db"))
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = server_settings.Settings()

    assert settings.sqlite_db_path == tmp_path / "env.db"
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.log_level == "DEBUG"
    assert settings.is_production


def test_settings_defaults(monkeypatch):
    for name in ("ARTICLES_DB", "CORS_ORIGINS", "LOG_LEVEL", "ENVIRONMENT", "SESSION_MAX_AGE_SECONDS"):
        monkeypatch.delenv(name, raising=False)

    settings = server_settings.Settings()

    assert settings.cors_origins == list(server_settings.DEFAULT_CORS_ORIGINS)
    assert settings.session_max_age_seconds == 60 * 60 * 24 * 30
    assert settings.log_level == "INFO"
    assert not settings.is_production


def test_settings_reject_bad_values():
    with pytest.raises(ValidationError):
        server_settings.Settings(session_max_age_seconds=0)
    with pytest.raises(ValidationError):
        server_settings.Settings(log_level="chatty")


def test_get_settings_is_cached():
    server_settings.get_settings.cache_clear()

    assert server_settings.get_settings() is server_settings.get_settings()


def test_configure_logging_sets_root_level():
    configure_logging("warning")
    assert logging.getLogger().level == logging.WARNING
    configure_logging("INFO")
    assert logging.getLogger().level == logging.INFO
