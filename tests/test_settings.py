"""Tests for referral.settings."""

from pathlib import Path

import pytest
import yaml

from referral.settings import get_default_settings, get_setting, load_settings, reload_settings


@pytest.fixture(autouse=True)
def _clear_settings_cache() -> None:
    reload_settings()
    yield
    reload_settings()


def test_defaults_when_file_missing(tmp_path: Path) -> None:
    settings = load_settings(tmp_path)
    assert get_setting(settings, "referral.code_pattern") == "^[A-Z0-9]{6}$"
    assert get_setting(settings, "launch_gate.mode") == "once"
    assert get_setting(settings, "api.timeout") is None


def test_file_values_merge_over_defaults(tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text(
        yaml.safe_dump({"api": {"base_url": "https://api.example.test"}, "launch_gate": {"mode": "window"}})
    )
    settings = load_settings(tmp_path)
    assert get_setting(settings, "api.base_url") == "https://api.example.test"
    assert get_setting(settings, "launch_gate.mode") == "window"
    assert get_setting(settings, "launch_gate.window_hours") == 24
    assert get_setting(settings, "storage.backend") == "json"


def test_settings_are_cached_until_reload(tmp_path: Path) -> None:
    first = load_settings(tmp_path)
    (tmp_path / "settings.yaml").write_text(yaml.safe_dump({"storage": {"backend": "sqlite"}}))
    assert load_settings(tmp_path) is first
    reload_settings()
    assert get_setting(load_settings(tmp_path), "storage.backend") == "sqlite"


def test_invalid_yaml_falls_back_to_defaults(tmp_path: Path) -> None:
    (tmp_path / "settings.yaml").write_text("api: [unclosed\n")
    settings = load_settings(tmp_path)
    assert settings == get_default_settings()


def test_get_setting_missing_path_returns_default() -> None:
    assert get_setting({"api": {}}, "api.base_url.host", "x") == "x"


def test_default_settings_are_independent_copies() -> None:
    a = get_default_settings()
    a["api"]["base_url"] = "changed"
    assert get_default_settings()["api"]["base_url"] != "changed"
