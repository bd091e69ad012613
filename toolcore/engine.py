"""
Tool Core - Engine.

============================================================
RESPONSIBILITY
============================================================
The runtime host of the tool.

- Consumes the engine parameters once, at initialization
- Freezes them for the rest of the invocation (log level excepted)
- Maps the host log scale onto the logging module
- Exit() marks the host as shutting down

============================================================
"""

import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from core.constants import (
    EP_HEADLESS,
    EP_LOG_LEVEL,
    LOG_DEBUG,
    LOG_ERROR,
    LOG_INFO,
    LOG_NONE,
    LOG_WARNING,
)


logger = logging.getLogger(__name__)


# ============================================================
# LOG LEVEL MAPPING
# ============================================================

HOST_LOG_LEVELS: Dict[int, int] = {
    LOG_DEBUG: logging.DEBUG,
    LOG_INFO: logging.INFO,
    LOG_WARNING: logging.WARNING,
    LOG_ERROR: logging.ERROR,
    LOG_NONE: logging.CRITICAL + 10,
}


def to_logging_level(host_level: int) -> int:
    """Convert a host log level (0-4) to a logging level, clamping out-of-range values."""
    clamped = min(max(int(host_level), LOG_DEBUG), LOG_NONE)
    return HOST_LOG_LEVELS[clamped]


# ============================================================
# ENGINE
# ============================================================

class Engine:
    """Headless runtime host."""

    def __init__(self):
        self._parameters: Optional[Mapping[str, Any]] = None
        self._log_level = LOG_INFO
        self._exiting = False

    @property
    def initialized(self) -> bool:
        return self._parameters is not None

    @property
    def parameters(self) -> Mapping[str, Any]:
        """Read-only engine parameters (empty before initialize)."""
        return self._parameters if self._parameters is not None else MappingProxyType({})

    @property
    def log_level(self) -> int:
        return self._log_level

    @property
    def exiting(self) -> bool:
        return self._exiting

    @property
    def headless(self) -> bool:
        return bool(self.parameters.get(EP_HEADLESS, True))

    def initialize(self, parameters: Mapping[str, Any]) -> bool:
        """Consume the engine parameters. Only the first call has any effect."""
        if self._parameters is not None:
            logger.warning("Engine already initialized")
            return False

        self._parameters = MappingProxyType(dict(parameters))
        self.set_log_level(self._parameters.get(EP_LOG_LEVEL, LOG_INFO))

        logger.debug(f"Engine initialized | parameters={dict(self._parameters)}")
        return True

    def set_log_level(self, level: int) -> None:
        self._log_level = int(level)
        logging.getLogger().setLevel(to_logging_level(self._log_level))

    def exit(self) -> None:
        if self._exiting:
            return
        self._exiting = True
        logger.debug("Engine exit requested")


__all__ = ["Engine", "HOST_LOG_LEVELS", "to_logging_level"]
