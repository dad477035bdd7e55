"""Config validation shared by the CLI `check` command and the setup wizard.

Determines whether settings are sufficient to run the tracker.
"""

import re
from pathlib import Path
from urllib.parse import urlparse

import yaml

from referral.factory import STORAGE_BACKENDS
from referral.launch_gate import GATE_MODES
from referral.settings import get_default_settings, get_setting


def _read_settings(settings_file: Path) -> tuple[dict, str | None]:
    """Load and parse settings YAML. Returns (settings, None) or ({}, error_message)."""
    try:
        data = yaml.safe_load(settings_file.read_text(encoding="utf-8")) or {}
        return (data, None)
    except yaml.YAMLError as e:
        return ({}, f"settings.yaml parse error: {e}")


def check_base_url(base_url: str | None) -> tuple[bool, str]:
    if not base_url:
        return False, "api.base_url not set"
    parsed = urlparse(str(base_url))
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False, f"api.base_url is not an http(s) URL: {base_url!r}"
    return True, "ok"


def check_code_pattern(pattern: str | None) -> tuple[bool, str]:
    if not pattern:
        return False, "referral.code_pattern not set"
    try:
        re.compile(pattern)
    except re.error as e:
        return False, f"referral.code_pattern does not compile: {e}"
    return True, "ok"


def check_settings(settings: dict) -> tuple[bool, str]:
    """Validate an already loaded settings dict. Returns (ok, reason)."""
    defaults = get_default_settings()
    ok, reason = check_base_url(
        get_setting(settings, "api.base_url", get_setting(defaults, "api.base_url"))
    )
    if not ok:
        return ok, reason
    ok, reason = check_code_pattern(
        get_setting(
            settings, "referral.code_pattern", get_setting(defaults, "referral.code_pattern")
        )
    )
    if not ok:
        return ok, reason
    mode = get_setting(settings, "launch_gate.mode", "once")
    if mode not in GATE_MODES:
        return False, f"Unknown launch_gate.mode {mode!r}"
    if mode == "window":
        hours = get_setting(settings, "launch_gate.window_hours", 24)
        if not isinstance(hours, (int, float)) or hours <= 0:
            return False, "launch_gate.window_hours must be a positive number"
    backend = get_setting(settings, "storage.backend", "json")
    if backend not in STORAGE_BACKENDS:
        return False, f"Unknown storage.backend {backend!r}"
    return True, "ok"


def is_configured(
    settings_path: Path | None = None,
    project_root: Path | None = None,
) -> tuple[bool, str]:
    """Check whether config/settings.yaml is sufficient to run. Returns (ok, reason)."""
    root = project_root or Path.cwd()
    settings_file = settings_path or (root / "config" / "settings.yaml")
    if not settings_file.exists():
        return False, "config/settings.yaml not found"
    settings, err = _read_settings(settings_file)
    if err is not None:
        return False, err
    if not isinstance(settings, dict):
        return False, "settings.yaml must be a mapping"
    return check_settings(settings)
