"""Tests for settings resolution."""
from __future__ import annotations

import json
import logging

from spacity import config
from spacity.config import ENV_DATA_DIR, ENV_LOG_LEVEL, configure_logging, load_settings, persist_data_dir


def test_env_var_sets_data_dir(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(ENV_DATA_DIR, str(tmp_path / "env"))
    settings = load_settings()

    assert settings.data_dir == (tmp_path / "env").resolve()
    assert settings.store_path.name == "spacity.json"
    assert settings.data_dir.is_dir()
    assert settings.default_spa_percent == 30
    assert settings.currency == "IDR"


def test_session_value_wins(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(ENV_DATA_DIR, str(tmp_path / "env"))
    settings = load_settings(str(tmp_path / "session"))
    assert settings.data_dir == (tmp_path / "session").resolve()


def test_persisted_dir_used_by_default(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv(ENV_DATA_DIR, raising=False)
    monkeypatch.setattr(config, "_default_data_dir", lambda: tmp_path / "home")

    target = persist_data_dir(str(tmp_path / "elsewhere"))
    saved = json.loads((tmp_path / "home" / "settings.json").read_text(encoding="utf-8"))

    assert saved["data_dir"] == str(target)
    assert load_settings().data_dir == target


def test_unreadable_settings_fall_back(tmp_path, monkeypatch) -> None:
    monkeypatch.delenv(ENV_DATA_DIR, raising=False)
    home = tmp_path / "home"
    home.mkdir()
    (home / "settings.json").write_text("{broken", encoding="utf-8")
    monkeypatch.setattr(config, "_default_data_dir", lambda: home)

    assert load_settings().data_dir == home.resolve()


def test_log_level_from_env(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(ENV_DATA_DIR, str(tmp_path))
    monkeypatch.setenv(ENV_LOG_LEVEL, "debug")
    settings = load_settings()
    assert settings.log_level == "DEBUG"

    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.append(kw))
    configure_logging(settings)
    assert calls[0]["level"] == logging.DEBUG
