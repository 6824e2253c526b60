"""Tests for settings.json handling."""

import json

import pytest

from settings import PosSettings, load_settings, save_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("POS_API_URL", raising=False)
    monkeypatch.delenv("POS_API_TOKEN", raising=False)


def test_defaults_when_file_missing(tmp_path):
    settings = load_settings(tmp_path / "settings.json")
    assert settings == PosSettings()
    assert settings.scan_threshold_ms == 100
    assert settings.code_prefix == "FZ-"


def test_file_values_and_unknown_keys(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"dedup_window_ms": 1500, "legacy_option": True}), encoding="utf-8")
    settings = load_settings(path)
    assert settings.dedup_window_ms == 1500
    assert settings.poll_interval_ms == 3000
    assert not hasattr(settings, "legacy_option")


def test_broken_file_falls_back_to_defaults(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_settings(path) == PosSettings()


@pytest.mark.parametrize("content", ["[1, 2]", "\"x\"", "3", "null"])
def test_non_object_file_falls_back_to_defaults(tmp_path, capsys, content):
    path = tmp_path / "settings.json"
    path.write_text(content, encoding="utf-8")
    assert load_settings(path) == PosSettings()
    assert "Settings load error" in capsys.readouterr().out


def test_environment_overrides_file(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"api_url": "http://file/api"}), encoding="utf-8")
    monkeypatch.setenv("POS_API_URL", "http://env/api")
    monkeypatch.setenv("POS_API_TOKEN", "secret")
    settings = load_settings(path)
    assert settings.api_url == "http://env/api"
    assert settings.api_token == "secret"


def test_save_then_load(tmp_path):
    path = tmp_path / "settings.json"
    assert save_settings(PosSettings(global_capture=True, max_toasts=2), path)
    settings = load_settings(path)
    assert settings.global_capture is True
    assert settings.max_toasts == 2
