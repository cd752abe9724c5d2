"""Settings loading tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from pageship.core.config import Settings


def test_defaults_without_config(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PGS_DB_PATH", raising=False)
    settings = Settings()
    assert settings.debounce_seconds == 2.0
    assert settings.flush_interval_seconds == 30.0
    assert settings.upload_workers == 4
    assert settings.hosting_api_url == "https://api.netlify.com/api/v1"


def test_yaml_sections_are_flattened(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PGS_DB_PATH", raising=False)
    config = tmp_path / "config.yaml"
    config.write_text(
        "storage:\n"
        f"  db_path: {tmp_path / 'pages.db'}\n"
        "hosting:\n"
        "  api_url: https://hosting.example/api/\n"
        "  upload_workers: 8\n"
        "sync:\n"
        "  debounce_seconds: 0.5\n",
        encoding="utf-8",
    )
    settings = Settings.from_yaml(config)
    assert settings.db_path == tmp_path / "pages.db"
    assert settings.hosting_api_url == "https://hosting.example/api"
    assert settings.upload_workers == 8
    assert settings.debounce_seconds == 0.5


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config = tmp_path / "config.yaml"
    config.write_text("sync:\n  flush_interval_seconds: 10\n", encoding="utf-8")
    monkeypatch.setenv("PGS_FLUSH_INTERVAL_SECONDS", "45")
    monkeypatch.setenv("PGS_HOSTING_ACCESS_TOKEN", "secret")
    settings = Settings.from_yaml(config)
    assert settings.flush_interval_seconds == 45.0
    assert settings.hosting_access_token == "secret"
    assert settings.db_path == tmp_path / "pageship.db"


def test_invalid_worker_count_is_rejected() -> None:
    with pytest.raises(ValueError):
        Settings(upload_workers=0)


def test_logging_section(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PGS_LOG_LEVEL", raising=False)
    config = tmp_path / "config.yaml"
    config.write_text("logging:\n  level: debug\n  json: false\n", encoding="utf-8")
    settings = Settings.from_yaml(config)
    assert settings.log_level == "DEBUG"
    assert settings.log_json is False
    with pytest.raises(ValueError):
        Settings(log_level="loud")
