#!/usr/bin/env python3
"""Headless StreamProbe launcher.

Usage:
    python cli.py validate <url> [--timeout MS] [--no-follow-redirects] [--strict]
    python cli.py batch <url> [<url> ...] [--timeout MS] [--strict]
"""

import os
import sys

sys.path.insert(0, os.path.dirname(__file__))

from streamprobe.cli_runtime import main


if __name__ == "__main__":
    main()
