"""Backend verification step."""

import asyncio

from onboarding.backend_probe import probe_all
from onboarding.state import WizardState
from onboarding.ui import STYLE


def run_verify_step(state: WizardState) -> bool | None:
    """Probe the configured backend.

    Returns True to proceed (write config), False to re-enter backend settings,
    None when the user leaves to fix the backend and rerun setup later.
    """
    print("\nVerifying backend...\n")

    results = asyncio.run(probe_all(state.api["base_url"], state.auth_token))

    all_ok = True
    for name, (ok, msg) in results.items():
        symbol = "✓" if ok else "✗"
        print(f"  {symbol} {name} — {msg}")
        if not ok:
            all_ok = False

    if all_ok:
        print("\nBackend verified.")
        return True

    print("\nSome checks failed.")
    choice = _ask_after_failure()
    if choice == "skip":
        return True
    if choice == "later":
        return None
    return False


def _ask_after_failure() -> str:
    """Ask user: retry, skip and write anyway, or stop and rerun setup later."""
    try:
        from questionary import Choice, select

        choice = select(
            "What would you like to do?",
            choices=[
                Choice("Retry (re-enter backend settings)", "retry"),
                Choice("Skip verification and write config anyway", "skip"),
                Choice("Stop here and rerun setup once the backend is up", "later"),
            ],
            style=STYLE,
        ).ask()
    except Exception:
        return "skip"
    # Esc / Ctrl+C in questionary yields None.
    return choice or "later"
