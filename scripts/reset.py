#!/usr/bin/env python3
"""
Reset referral tracker state: stored codes, the first-launch flag, logs and the saved token.
Run from project root or any directory; paths are resolved relative to this script.
"""

import asyncio
import sys
from pathlib import Path

# Make project imports available when executing as: python scripts/reset.py
PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from referral.secrets import AUTH_TOKEN_SECRET, delete_secret  # noqa: E402
from referral.settings import get_setting, load_settings  # noqa: E402


def confirm() -> bool:
    """Prompt until user enters Y (proceed) or n (abort). Returns True only for Y, False for n."""
    while True:
        answer = input("Are you sure? [Y/n]: ").strip().lower()
        if answer in ("y", "yes"):
            return True
        if answer in ("n", "no"):
            return False


def state_files(root: Path, settings: dict) -> list[Path]:
    """Files owned by the tracker, including SQLite WAL side files and the JSON temp file."""
    state = root / get_setting(settings, "storage.path", "data/referral_state.json")
    log_file = root / get_setting(settings, "logging.file", "logs/referral.log")
    return [
        state,
        state.with_name(state.name + ".tmp"),
        state.with_name(state.name + "-wal"),
        state.with_name(state.name + "-shm"),
        log_file,
    ]


async def _forget_namespaced_state(root: Path, settings: dict) -> None:
    """Clear only this namespace's keys when the state file is shared."""
    from referral.factory import create_tracker

    tracker, store, _api = create_tracker(settings, root, clipboard_text="")
    try:
        await tracker.reset()
    finally:
        await store.close()


def main() -> int:
    if not confirm():
        print("Aborted.")
        return 0

    root = PROJECT_ROOT
    settings = load_settings(root / "config")
    errors: list[tuple[Path, Exception]] = []
    removed = 0

    delete_secret(AUTH_TOKEN_SECRET)
    print(f"Cleared secret: {AUTH_TOKEN_SECRET}")

    if get_setting(settings, "storage.namespace", ""):
        asyncio.run(_forget_namespaced_state(root, settings))
        print("Cleared namespaced referral state.")
        files = state_files(root, settings)[-1:]
    else:
        files = state_files(root, settings)

    for path in files:
        if path.exists():
            try:
                path.unlink()
                print(f"Removed: {path.relative_to(root)}")
                removed += 1
            except OSError as e:
                errors.append((path, e))
                print(f"Error removing {path.relative_to(root)}: {e}", file=sys.stderr)
        else:
            print(f"Skip (not found): {path.relative_to(root)}")

    if errors:
        print(f"\n{len(errors)} file(s) could not be removed.", file=sys.stderr)
        return 1
    print(f"\nDone. Removed {removed} file(s).")
    return 0


if __name__ == "__main__":
    sys.exit(main())
