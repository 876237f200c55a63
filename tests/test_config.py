"""Tests for environment-driven settings."""

from pathlib import Path

import pytest

from huddle.app.config import Settings


def test_database_url_defaults_to_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("HUDDLE_DATABASE_URL", raising=False)

    cfg = Settings(_env_file=None, data_dir=tmp_path)

    assert cfg.database_url == f"sqlite+aiosqlite:///{tmp_path / 'huddle.db'}"


def test_database_url_from_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("HUDDLE_DATABASE_URL", "sqlite+aiosqlite:////srv/huddle/prod.db")

    cfg = Settings(_env_file=None)

    assert cfg.database_url == "sqlite+aiosqlite:////srv/huddle/prod.db"
