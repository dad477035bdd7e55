"""Exit codes for `python -m onboarding`."""

SETUP_SUCCESS = 0  # settings.yaml written
SETUP_QUIT = 1  # User cancelled (Ctrl+C or Esc)
SETUP_RETRY = 2  # Backend unreachable, user will rerun setup later
