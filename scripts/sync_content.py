#!/usr/bin/env python3
"""
Content sync script.

Reads markdown posts from the content directory and pushes them to the
service's /sync endpoint. See postkv.sync_client for the options.
"""

import sys
from pathlib import Path

# Add parent directory to path to import postkv modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from postkv.sync_client import main

if __name__ == "__main__":
    sys.exit(main())
