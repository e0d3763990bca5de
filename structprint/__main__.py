"""
CLI interface for the structural pretty printer.

Usage:
    python -m structprint data.json
    python -m structprint --help
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
