"""Allow running the tracker as a module: python -m referral <command>."""

import sys

from referral.runner import main

if __name__ == "__main__":
    sys.exit(main())
