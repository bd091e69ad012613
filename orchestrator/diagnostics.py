"""
Orchestrator - Startup Diagnostics.

Startup error buffer: keeps error text produced before the event
loop starts dispatching, so a failure with no message of its own
still has something to show.
"""

import logging
from typing import List, Optional


class StartupDiagnostics(logging.Handler):
    """
    Logging handler collecting early error records.

    Records are captured until seal() is called. Text passed to
    record() is kept regardless.
    """

    def __init__(self, level: int = logging.ERROR):
        super().__init__(level)
        self._lines: List[str] = []
        self._sealed = False
        self._logger: Optional[logging.Logger] = None

    @property
    def sealed(self) -> bool:
        return self._sealed

    @property
    def text(self) -> str:
        """Buffered error text, one entry per line."""
        return "\n".join(self._lines)

    def emit(self, record: logging.LogRecord) -> None:
        if self._sealed:
            return
        self._lines.append(record.getMessage())

    def record(self, text: str) -> None:
        if text:
            self._lines.append(text)

    def seal(self) -> None:
        """Stop capturing log records: the event loop is running."""
        self._sealed = True

    def attach(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or logging.getLogger()
        self._logger.addHandler(self)

    def detach(self) -> None:
        if self._logger is not None:
            self._logger.removeHandler(self)
            self._logger = None


__all__ = ["StartupDiagnostics"]
