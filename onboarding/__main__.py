"""Entry point for the setup wizard: python -m onboarding."""

import sys
from pathlib import Path

from onboarding.constants import SETUP_QUIT, SETUP_RETRY, SETUP_SUCCESS
from onboarding.wizard import run_wizard


def main() -> int:
    """Run the setup wizard. Returns the process exit code."""
    project_root = Path(__file__).resolve().parent.parent

    try:
        result = run_wizard(project_root=project_root)

        if result.success:
            print("\n✅ Setup complete! Run `python -m referral check` to confirm.\n")
            return SETUP_SUCCESS

        if result.retry:
            print("\nNothing written. Run `python -m onboarding` again once the backend is reachable.")
            return SETUP_RETRY

        print("\nSetup cancelled.")
        return SETUP_QUIT

    except KeyboardInterrupt:
        print("\n\nSetup cancelled.")
        return SETUP_QUIT


if __name__ == "__main__":
    sys.exit(main())
