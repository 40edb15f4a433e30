"""
Tests for settings resolution.
"""

import logging

import yaml

from ptracker.infra.config import DisplayPreferences, Settings


def test_paths_derive_from_data_dir(settings):
    assert settings.data_dir.is_dir()
    assert settings.data_file == settings.data_dir / "data.json"
    assert settings.log_file == settings.data_dir / "ptracker.log"
    assert settings.config_file == settings.data_dir / "settings.yaml"


def test_default_data_dir_is_in_home(tmp_path, monkeypatch):
    monkeypatch.delenv("PTRACKER_DATA_DIR", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path))

    settings = Settings()

    assert settings.data_dir == tmp_path / ".ptracker"
    assert settings.data_dir.is_dir()


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.setenv("PTRACKER_DATA_DIR", str(tmp_path / "elsewhere"))
    monkeypatch.setenv("PTRACKER_LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.data_file == tmp_path / "elsewhere" / "data.json"
    assert settings.log_level_value == logging.DEBUG


def test_unknown_log_level_falls_back_to_info(tmp_path):
    settings = Settings(data_dir=tmp_path, log_level="chatty")
    assert settings.log_level_value == logging.INFO


def test_preferences_default_without_yaml(settings):
    assert settings.preferences == DisplayPreferences()
    assert settings.preferences.confirm_delete is True


def test_preferences_from_yaml(tmp_path):
    (tmp_path / "settings.yaml").write_text(
        yaml.dump({"sort_report": True, "timestamp_format": "%d.%m.%Y %H:%M"}),
        encoding="utf-8"
    )

    settings = Settings(data_dir=tmp_path)

    assert settings.preferences.sort_report is True
    assert settings.preferences.timestamp_format == "%d.%m.%Y %H:%M"
    assert settings.preferences.confirm_delete is True
