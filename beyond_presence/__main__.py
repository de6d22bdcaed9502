"""CLI entry point for the Beyond Presence node."""

import sys

from beyond_presence.cli import main

if __name__ == "__main__":
    sys.exit(main())
