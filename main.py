#!/usr/bin/env python

"""
Work Time Tracker - Main Entry Point

Per-task stopwatches with a single running timer, save/restore across
sessions and plain-text export.

Usage:
    python main.py

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from worktime.ui import main


if __name__ == "__main__":
    sys.exit(main())
