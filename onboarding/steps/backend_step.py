"""Backend address and optional bearer token."""

import questionary

from referral.config_check import check_base_url
from onboarding.state import WizardState
from onboarding.ui import STYLE

_DEFAULT_BASE_URL = "http://localhost:3000"


def run_backend_step(state: WizardState) -> bool:
    """Collect api.base_url, api.timeout and the auth token. Returns False if cancelled."""
    print("\nReferral tracker setup\n")

    while True:
        base_url = questionary.text(
            "Referral API base URL:",
            default=state.api.get("base_url", _DEFAULT_BASE_URL),
            style=STYLE,
        ).ask()
        if base_url is None:
            return False
        base_url = base_url.strip().rstrip("/")
        ok, reason = check_base_url(base_url)
        if ok:
            break
        print(f"{reason}. Try again.\n")
    state.api["base_url"] = base_url

    timeout = _ask_timeout()
    if timeout is False:
        return False
    state.api["timeout"] = timeout

    token = questionary.password(
        "Bearer token for the referral link endpoint (leave empty to skip):",
        style=STYLE,
    ).ask()
    if token is None:
        return False
    state.auth_token = token.strip() or None
    return True


def _ask_timeout() -> float | None | bool:
    """Seconds, None for no timeout, or False when cancelled."""
    while True:
        raw = questionary.text(
            "HTTP timeout in seconds (empty = no timeout):",
            default="",
            style=STYLE,
        ).ask()
        if raw is None:
            return False
        raw = raw.strip()
        if not raw:
            return None
        try:
            value = float(raw)
        except ValueError:
            print("Enter a number of seconds.\n")
            continue
        if value > 0:
            return value
        print("Timeout must be positive.\n")
