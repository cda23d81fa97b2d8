"""Allow running pagequill as ``python -m pagequill``."""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
