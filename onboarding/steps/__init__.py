"""Setup wizard steps."""

from onboarding.steps.backend_step import run_backend_step
from onboarding.steps.tracking_step import run_tracking_step
from onboarding.steps.verify_step import run_verify_step

__all__ = ["run_backend_step", "run_tracking_step", "run_verify_step"]
