"""Code format, first-launch gate policy and storage backend."""

import questionary
from questionary import Choice

from referral.config_check import check_code_pattern
from referral.tracker import DEFAULT_CODE_PATTERN
from onboarding.state import WizardState
from onboarding.ui import STYLE

_STORAGE_PATHS = {
    "json": "data/referral_state.json",
    "sqlite": "data/referral_state.db",
}


def run_tracking_step(state: WizardState) -> bool:
    """Collect referral/launch_gate/storage sections. Returns False if cancelled."""
    pattern = _ask_pattern()
    if pattern is None:
        return False
    state.referral["code_pattern"] = pattern

    mode = questionary.select(
        "When may the clipboard be scanned?",
        choices=[
            Choice("Only on the very first launch", "once"),
            Choice("During a time window after first launch", "window"),
        ],
        style=STYLE,
    ).ask()
    if mode is None:
        return False
    state.launch_gate["mode"] = mode
    if mode == "window":
        hours = _ask_hours()
        if hours is None:
            return False
        state.launch_gate["window_hours"] = hours

    backend = questionary.select(
        "Where should referral state be stored?",
        choices=[
            Choice("JSON file", "json"),
            Choice("SQLite database", "sqlite"),
        ],
        style=STYLE,
    ).ask()
    if backend is None:
        return False
    state.storage["backend"] = backend
    state.storage["path"] = _STORAGE_PATHS[backend]
    return True


def _ask_pattern() -> str | None:
    while True:
        pattern = questionary.text(
            "Referral code pattern (regular expression):",
            default=DEFAULT_CODE_PATTERN,
            style=STYLE,
        ).ask()
        if pattern is None:
            return None
        pattern = pattern.strip()
        ok, reason = check_code_pattern(pattern)
        if ok:
            return pattern
        print(f"{reason}. Try again.\n")


def _ask_hours() -> float | None:
    while True:
        raw = questionary.text("Window length in hours:", default="24", style=STYLE).ask()
        if raw is None:
            return None
        try:
            hours = float(raw.strip())
        except ValueError:
            print("Enter a number of hours.\n")
            continue
        if hours > 0:
            return hours
        print("Window must be positive.\n")
