"""Tests for onboarding.wizard flow control."""

from pathlib import Path
from unittest.mock import patch

import yaml

from onboarding.state import WizardState
from onboarding.wizard import run_wizard


def _fill_backend(state: WizardState) -> bool:
    state.api["base_url"] = "https://api.example.test"
    return True


def _fill_tracking(state: WizardState) -> bool:
    state.launch_gate["mode"] = "once"
    return True


def test_wizard_writes_settings(tmp_path: Path) -> None:
    with (
        patch("onboarding.wizard.run_backend_step", side_effect=_fill_backend),
        patch("onboarding.wizard.run_verify_step", return_value=True),
        patch("onboarding.wizard.run_tracking_step", side_effect=_fill_tracking),
    ):
        result = run_wizard(project_root=tmp_path)

    assert result.success is True
    data = yaml.safe_load((tmp_path / "config" / "settings.yaml").read_text())
    assert data["api"]["base_url"] == "https://api.example.test"


def test_wizard_cancel_in_backend_step(tmp_path: Path) -> None:
    with patch("onboarding.wizard.run_backend_step", return_value=False):
        result = run_wizard(project_root=tmp_path)
    assert result.success is False
    assert result.retry is False
    assert not (tmp_path / "config" / "settings.yaml").exists()


def test_wizard_retries_after_failed_verification(tmp_path: Path) -> None:
    with (
        patch("onboarding.wizard.run_backend_step", side_effect=_fill_backend) as backend,
        patch("onboarding.wizard.run_verify_step", side_effect=[False, True]),
        patch("onboarding.wizard.run_tracking_step", side_effect=_fill_tracking),
    ):
        result = run_wizard(project_root=tmp_path)

    assert result.success is True
    assert backend.call_count == 2


def test_wizard_stop_after_failed_verification_requests_rerun(tmp_path: Path) -> None:
    with (
        patch("onboarding.wizard.run_backend_step", side_effect=_fill_backend),
        patch("onboarding.wizard.run_verify_step", return_value=None),
        patch("onboarding.wizard.run_tracking_step") as tracking,
    ):
        result = run_wizard(project_root=tmp_path)

    assert result.success is False
    assert result.retry is True
    tracking.assert_not_called()
    assert not (tmp_path / "config" / "settings.yaml").exists()


def test_main_exit_code_for_rerun() -> None:
    from onboarding.__main__ import main
    from onboarding.constants import SETUP_RETRY
    from onboarding.wizard import WizardResult

    with patch(
        "onboarding.__main__.run_wizard",
        return_value=WizardResult(success=False, retry=True),
    ):
        assert main() == SETUP_RETRY


def test_verify_step_maps_failure_choices() -> None:
    from unittest.mock import AsyncMock

    from onboarding.steps.verify_step import run_verify_step

    failing = AsyncMock(return_value={"validate": (False, "Connection refused")})
    state = WizardState()
    state.api["base_url"] = "https://api.example.test"
    expected = {"retry": False, "skip": True, "later": None}
    for choice, outcome in expected.items():
        with (
            patch("onboarding.steps.verify_step.probe_all", failing),
            patch("onboarding.steps.verify_step._ask_after_failure", return_value=choice),
        ):
            assert run_verify_step(state) is outcome
