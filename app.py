#!/usr/bin/env python3
"""
Atomic Tool - Main Application Entry Point.

============================================================
SINGLE ENTRYPOINT
============================================================
This is the ONE executable entry point of the tool.

- Loads `.env` before any configuration is read
- Hands the raw arguments to the orchestrator
- Exits with the orchestrator's exit code

============================================================
USAGE
============================================================
Direct execution:
    python app.py build MyGame

Environment-based configuration:
    ATOMIC_DEV_BUILD=1 ATOMIC_ROOT_SOURCE_DIR=~/src/atomic python app.py build MyGame
    ATOMIC_LICENSE_PATH=/tmp/license.json python app.py -activate ATOMIC-AB12-CD34-EF56-GH78
    ATOMIC_LOG_FORMAT=json python app.py build MyGame

============================================================
"""

import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.absolute()
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

load_dotenv()

from orchestrator.cli import main  # noqa: E402


if __name__ == "__main__":
    sys.exit(main())
