"""Entry point for `python -m calendarcursor` command."""

import sys

from calendarcursor.cli import main

if __name__ == "__main__":
    sys.exit(main())
