"""Interactive setup: backend address, code format, launch gate, storage."""

from onboarding.constants import SETUP_QUIT, SETUP_RETRY, SETUP_SUCCESS

__all__ = ["SETUP_SUCCESS", "SETUP_QUIT", "SETUP_RETRY"]
