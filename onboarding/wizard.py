"""Setup wizard orchestration."""

from dataclasses import dataclass
from pathlib import Path

from referral.settings import reload_settings
from onboarding.config_writer import write_config
from onboarding.state import WizardState
from onboarding.steps import run_backend_step, run_tracking_step, run_verify_step


@dataclass
class WizardResult:
    """Result of running the wizard."""

    success: bool
    retry: bool  # True if verification failed and user chose to rerun setup later


def run_wizard(project_root: Path | None = None) -> WizardResult:
    """Run the full setup wizard.

    Loops back to the backend step when verification fails and the user
    chooses to retry. Returns success=False, retry=True when the user stops
    to fix the backend, and success=False, retry=False on cancel.
    """
    root = project_root or Path.cwd()
    settings_path = root / "config" / "settings.yaml"
    env_path = root / ".env"

    state = WizardState()
    while True:
        if not run_backend_step(state):
            return WizardResult(success=False, retry=False)

        verified = run_verify_step(state)
        if verified is None:
            return WizardResult(success=False, retry=True)
        if not verified:
            continue

        if not run_tracking_step(state):
            return WizardResult(success=False, retry=False)

        write_config(state, settings_path, env_path)
        reload_settings()
        return WizardResult(success=True, retry=False)
