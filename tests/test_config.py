"""Tests for configuration helpers."""

import logging

from trainer_metrics.config import Settings, parse_log_level


def test_settings_defaults(settings: Settings) -> None:
    assert settings.history_limit == 100
    assert settings.due_evaluation_window_days == 30
    assert settings.log_level == "INFO"


def test_settings_read_environment(monkeypatch) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://env.supabase.co")
    monkeypatch.setenv("SUPABASE_SERVICE_KEY", "key")
    monkeypatch.setenv("HISTORY_LIMIT", "12")

    loaded = Settings()

    assert loaded.supabase_url == "https://env.supabase.co"
    assert loaded.history_limit == 12


def test_parse_log_level() -> None:
    assert parse_log_level(None) == logging.INFO
    assert parse_log_level("debug") == logging.DEBUG
    assert parse_log_level(" WARNING ") == logging.WARNING
    assert parse_log_level("15") == 15
    assert parse_log_level("nonsense") == logging.INFO
