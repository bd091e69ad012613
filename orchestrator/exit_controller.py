"""
Orchestrator - Exit Controller.

============================================================
RESPONSIBILITY
============================================================
Single authority for how an invocation ends.

- error_exit(): engine shut down, exit code set to failure,
  message surfaced on stderr
- success_exit(): engine shut down, exit code zero
- The first call wins; later calls are ignored

============================================================
FALLBACK MESSAGE
============================================================
error_exit() without a message falls back to the startup
error buffer, or a generic message. The fallback is only
printed on Windows; elsewhere the same error has already been
reported through the log stream.

============================================================
"""

import logging
import sys
from typing import Optional, TextIO

from core.constants import EXIT_FAILURE, EXIT_SUCCESS, MSG_UNEXPECTED_ERROR
from toolcore.engine import Engine

from .diagnostics import StartupDiagnostics
from .models import TerminalAction


logger = logging.getLogger(__name__)


class ExitController:
    """Owns the process exit code."""

    def __init__(
        self,
        engine: Engine,
        diagnostics: StartupDiagnostics,
        platform: Optional[str] = None,
        stderr: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self._engine = engine
        self._diagnostics = diagnostics
        self._platform = platform or sys.platform
        self._stderr = stderr
        self._stdout = stdout

        self._exit_code = EXIT_SUCCESS
        self._terminated = False
        self._message = ""

    @property
    def exit_code(self) -> int:
        return self._exit_code

    @property
    def terminated(self) -> bool:
        return self._terminated

    @property
    def message(self) -> str:
        """Message of the failure exit, empty on success."""
        return self._message

    def error_exit(self, message: str = "") -> int:
        """
        End the invocation with a failure.

        Returns:
            The final exit code
        """
        if self._begin("error_exit"):
            # Close any engine session before reporting
            self._engine.exit()
            self._exit_code = EXIT_FAILURE

            if message:
                self._message = message
                self._write(self._stderr or sys.stderr, message)
            else:
                self._message = self._diagnostics.text or MSG_UNEXPECTED_ERROR
                if self._platform == "win32":
                    self._write(self._stderr or sys.stderr, self._message)
                else:
                    logger.debug(f"Fallback message not printed | platform={self._platform}")

            logger.debug(f"Error exit | exit_code={self._exit_code} | message={self._message.strip()}")

        return self._exit_code

    def success_exit(self, output: str = "") -> int:
        """End the invocation successfully."""
        if self._begin("success_exit"):
            self._engine.exit()
            self._exit_code = EXIT_SUCCESS
            if output:
                (self._stdout or sys.stdout).write(output)
            logger.debug("Success exit")

        return self._exit_code

    def apply(self, action: TerminalAction) -> int:
        if action.is_success:
            return self.success_exit(action.output)
        return self.error_exit(action.message)

    def _begin(self, caller: str) -> bool:
        if self._terminated:
            logger.debug(f"Ignoring {caller}: invocation already terminated | exit_code={self._exit_code}")
            return False
        self._terminated = True
        return True

    @staticmethod
    def _write(stream: TextIO, message: str) -> None:
        print(message, file=stream)


__all__ = ["ExitController"]
