"""Tests for configuration loading and validation."""

import pytest

from seisen.config import (
    DEFAULT_DATA_HOME,
    get_config_path,
    get_seisen_home,
    load_config,
    load_settings,
)


def test_defaults_without_config_file():
    settings = load_settings()
    assert settings.notes.default_category == "sensei_notes"
    assert settings.notifications.backend == "desktop"
    assert settings.notifications.interval_seconds == 3600
    assert settings.logging.level == "INFO"


def test_config_path_follows_xdg(tmp_path):
    assert get_config_path() == tmp_path / "config" / "seisen" / "config.toml"


def test_reads_toml(config_file):
    config_file.write_text(
        '[notes]\n'
        'default_category = "zen"\n'
        '\n'
        '[notifications]\n'
        'backend = "log"\n'
        'interval_seconds = 60\n'
        '\n'
        '[logging]\n'
        'level = "debug"\n',
        encoding="utf-8",
    )

    assert load_config()["notes"]["default_category"] == "zen"

    settings = load_settings()
    assert settings.notes.default_category == "zen"
    assert settings.notifications.backend == "log"
    assert settings.notifications.interval_seconds == 60
    assert settings.logging.level == "DEBUG"


def test_env_home_wins(config_file, tmp_path):
    config_file.write_text('[notes]\nhome = "/somewhere/else"\n', encoding="utf-8")
    assert get_seisen_home() == tmp_path / "notes"


def test_home_from_config(config_file, tmp_path, monkeypatch):
    monkeypatch.delenv("SEISEN_HOME")
    config_file.write_text(f'[notes]\nhome = "{tmp_path / "synced"}"\n', encoding="utf-8")
    assert get_seisen_home() == tmp_path / "synced"


def test_default_home(monkeypatch):
    monkeypatch.delenv("SEISEN_HOME")
    assert get_seisen_home() == DEFAULT_DATA_HOME


@pytest.mark.parametrize("config", [
    {"notes": {"default_category": "nonexistent"}},
    {"notifications": {"interval_seconds": 0}},
    {"notifications": {"backend": "carrier-pigeon"}},
    {"logging": {"level": "LOUD"}},
])
def test_invalid_values_rejected(config):
    with pytest.raises(ValueError):
        load_settings(config)


def test_invalid_toml_rejected(config_file):
    config_file.write_text("[notes\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_settings()


def test_numeric_chat_id_becomes_string():
    settings = load_settings({"telegram": {"chat_id": 123456}})
    assert settings.telegram.chat_id == "123456"
