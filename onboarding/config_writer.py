"""Atomic config write for settings.yaml, plus the bearer token (keyring or .env)."""

import logging
import tempfile
from pathlib import Path
from typing import Any

import yaml
from dotenv import dotenv_values

from referral.secrets import (
    AUTH_TOKEN_SECRET,
    is_keyring_available,
    normalize_token,
    set_secret,
)
from referral.settings import get_default_settings
from onboarding.state import WizardState

logger = logging.getLogger(__name__)


def build_settings(state: WizardState) -> dict[str, Any]:
    """Defaults overlaid with the wizard answers."""
    base = get_default_settings()
    for section in ("api", "referral", "launch_gate", "storage"):
        base[section].update(getattr(state, section))
    return base


def write_config(state: WizardState, settings_path: Path, env_path: Path) -> None:
    """Atomically write settings.yaml; store the token in keyring, else in .env."""
    _write_atomic_yaml(settings_path, build_settings(state))

    token = normalize_token(state.auth_token)
    if not token:
        return
    if is_keyring_available():
        try:
            set_secret(AUTH_TOKEN_SECRET, token)
            _write_env(env_path, {}, exclude_secrets={AUTH_TOKEN_SECRET})
            return
        except Exception as e:
            logger.warning(
                "Failed to store %s in keyring: %s. Writing to .env.", AUTH_TOKEN_SECRET, e
            )
    else:
        logger.warning("Keyring unavailable (headless/CI). Storing the token in .env.")
    _write_env(env_path, {AUTH_TOKEN_SECRET: token})


def _write_atomic_yaml(path: Path, data: dict[str, Any]) -> None:
    """Write YAML atomically via temp file + rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(suffix=".yaml", prefix="settings_", dir=path.parent)
    try:
        with open(fd, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, allow_unicode=True)
        Path(tmp).replace(path)
    except Exception:
        Path(tmp).unlink(missing_ok=True)
        raise


def _write_env(
    env_path: Path,
    new_vars: dict[str, str],
    *,
    exclude_secrets: set[str] | None = None,
) -> None:
    """Merge new env vars into .env, preserving existing unrelated keys.

    Keys in exclude_secrets are stripped from the existing file so a token
    moved to the keyring does not linger in plain text.
    """
    exclude = exclude_secrets or set()
    existing = dict(dotenv_values(env_path)) if env_path.exists() else {}
    if not existing and not new_vars:
        return
    existing = {k: v for k, v in existing.items() if k not in exclude}
    merged = {**existing, **new_vars}

    content = "\n".join(f"{k}={v}" for k, v in merged.items())
    if content and not content.endswith("\n"):
        content += "\n"

    env_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(suffix=".env", prefix="env_", dir=env_path.parent)
    try:
        with open(fd, "w", encoding="utf-8") as f:
            f.write(content)
        Path(tmp).replace(env_path)
    except Exception:
        Path(tmp).unlink(missing_ok=True)
        raise
