#!/usr/bin/env python

"""
ptracker - Main Entry Point

A personal time tracker: create projects, start and stop sessions on them,
and see how your time is split between them.

Usage:
    python main.py [COMMAND] [OPTIONS]

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent))

from ptracker.cli import main


if __name__ == "__main__":
    sys.exit(main())
