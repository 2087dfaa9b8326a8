#!/usr/bin/env python3
"""
Lanes CLI

Run the lanes command line straight from a checkout, without installing
the package.
"""

import sys
from pathlib import Path

# Add the parent directory to sys.path to import from lanes
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))
from lanes.cli import main

if __name__ == "__main__":
    main()
