#!/usr/bin/env python3
"""Simple script to run AI-authorship detection from a checkout."""

import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from authorship.cli import main

if __name__ == "__main__":
    sys.exit(main())
