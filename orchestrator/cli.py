"""
Orchestrator - CLI.

============================================================
RESPONSIBILITY
============================================================
Process-level entry point of the tool.

- Loads configuration from the environment
- Sets up logging
- Runs the orchestrator on a fresh event loop
- Returns the exit code

============================================================
USAGE
============================================================
atomic-tool new MyGame
atomic-tool build MyGame -loglevel 0
atomic-tool publish MyGame web
atomic-tool -activate ATOMIC-XXXX-XXXX-XXXX-XXXX
atomic-tool -deactivate

============================================================
"""

import asyncio
import logging
import sys
from typing import List, Optional

from core.constants import EXIT_INTERRUPTED, TOOL_NAME, TOOL_VERSION
from toolcore.config import ToolConfig
from toolcore.context import create_context

from .core import ToolOrchestrator, setup_logging


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command line arguments (default: sys.argv[1:])

    Returns:
        Exit code
    """
    arguments = sys.argv[1:] if argv is None else list(argv)

    config = ToolConfig.from_env()
    log_format = config.log_format if config.log_format in ("text", "json") else "text"
    logger = setup_logging(level="INFO", log_format=log_format)
    logger.debug(f"{TOOL_NAME} {TOOL_VERSION} | arguments={arguments}")

    orchestrator = ToolOrchestrator(arguments, context=create_context(config))

    try:
        return asyncio.run(orchestrator.execute())
    except KeyboardInterrupt:
        logging.info("Interrupted by user")
        return EXIT_INTERRUPTED


# ============================================================
# MODULE EXECUTION
# ============================================================

if __name__ == "__main__":
    sys.exit(main())
