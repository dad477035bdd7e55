"""Build tracker components from settings."""

import logging
from pathlib import Path
from typing import Any

from referral.api import ReferralApiClient
from referral.clipboard import StaticClipboard, SystemClipboard
from referral.contract import ClipboardProvider
from referral.launch_gate import create_gate
from referral.settings import get_setting
from referral.sqlite_store import SqliteStore
from referral.storage import JsonFileStore
from referral.tracker import DEFAULT_CODE_PATTERN, ReferralAttributionTracker

logger = logging.getLogger(__name__)

STORAGE_BACKENDS = ("json", "sqlite")


def create_store(settings: dict[str, Any], project_root: Path) -> JsonFileStore | SqliteStore:
    backend = get_setting(settings, "storage.backend", "json")
    path = project_root / get_setting(settings, "storage.path", "data/referral_state.json")
    namespace = get_setting(settings, "storage.namespace", "") or ""
    if backend == "json":
        store = JsonFileStore(path, namespace)
        store.initialize()
        return store
    if backend == "sqlite":
        return SqliteStore(path, namespace)
    raise ValueError(f"Unknown storage.backend: {backend}. Supports: json, sqlite")


def create_api(settings: dict[str, Any]) -> ReferralApiClient:
    return ReferralApiClient(
        base_url=get_setting(settings, "api.base_url", "http://localhost:3000"),
        timeout=get_setting(settings, "api.timeout"),
    )


def create_tracker(
    settings: dict[str, Any],
    project_root: Path,
    *,
    clipboard_text: str | None = None,
) -> tuple[ReferralAttributionTracker, JsonFileStore | SqliteStore, ReferralApiClient]:
    """Wire store, clipboard, API and gate. Caller closes the returned store."""
    store = create_store(settings, project_root)
    api = create_api(settings)
    clipboard: ClipboardProvider = (
        StaticClipboard(clipboard_text) if clipboard_text is not None else SystemClipboard()
    )
    gate = create_gate(
        get_setting(settings, "launch_gate.mode", "once"),
        get_setting(settings, "launch_gate.window_hours", 24),
    )
    tracker = ReferralAttributionTracker(
        store,
        clipboard,
        api,
        code_pattern=get_setting(settings, "referral.code_pattern", DEFAULT_CODE_PATTERN),
        launch_gate=gate,
    )
    logger.debug(
        "Tracker wired: store=%s clipboard=%s", type(store).__name__, getattr(clipboard, "name", "?")
    )
    return tracker, store, api
