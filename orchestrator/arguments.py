"""
Orchestrator - Argument Interpreter.

============================================================
RESPONSIBILITY
============================================================
Turns the raw argument list into an Invocation.

- scan_flags(): orchestrator-level flags and the engine parameters
- select_command(): delegates the FULL argument list to the
  command parser and applies command-dependent parameters

============================================================
FLAGS
============================================================
-toolbootstrap     bootstrap mode (no value)
-loglevel <n>      host log level 0-4
-activate <key>    activation only, skips the command
-deactivate        deactivation only, skips the command

Flags are matched case-insensitively. Any other -flag is left
for the command parser.

============================================================
"""

import logging
from typing import List

from core.constants import (
    CORE_DATA_DIR,
    EP_HEADLESS,
    EP_LOG_LEVEL,
    EP_RESOURCE_PATHS,
    EP_RESOURCE_PREFIX_PATHS,
    FLAG_ACTIVATE,
    FLAG_DEACTIVATE,
    FLAG_LOG_LEVEL,
    FLAG_TOOL_BOOTSTRAP,
    LOG_INFO,
    MSG_NO_COMMAND,
)
from core.exceptions import CommandParseError
from toolcore.environment import ToolEnvironment
from toolcore.parser import CommandParser, is_flag

from .models import Invocation


logger = logging.getLogger(__name__)


def default_engine_parameters() -> dict:
    return {
        EP_HEADLESS: True,
        EP_LOG_LEVEL: LOG_INFO,
    }


class ArgumentInterpreter:
    """Orchestrator-level view of the command line."""

    def __init__(self, parser: CommandParser, environment: ToolEnvironment):
        self._parser = parser
        self._environment = environment

    def scan_flags(self, arguments: List[str]) -> Invocation:
        """Extract orchestrator flags. Never fails."""
        invocation = Invocation(
            arguments=list(arguments),
            engine_parameters=default_engine_parameters(),
        )

        i = 0
        while i < len(arguments):
            token = arguments[i]
            if is_flag(token):
                flag = token[1:].lower()
                value = arguments[i + 1] if i + 1 < len(arguments) else ""
                # a following -flag is never a value
                if is_flag(value):
                    value = ""

                if flag == FLAG_TOOL_BOOTSTRAP:
                    invocation.bootstrap = True
                elif flag == FLAG_LOG_LEVEL:
                    invocation.engine_parameters[EP_LOG_LEVEL] = self._parse_log_level(value)
                    if value:
                        i += 1
                elif flag == FLAG_ACTIVATE:
                    if value:
                        invocation.activation_key = value
                        i += 1
                    else:
                        logger.warning("-activate given without an activation key")
                elif flag == FLAG_DEACTIVATE:
                    invocation.deactivate = True
            i += 1

        return invocation

    def select_command(self, invocation: Invocation) -> Invocation:
        """
        Select the command for the invocation.

        Raises:
            CommandParseError: no command found and no activation or
                deactivation was requested
        """
        command = self._parser.parse(invocation.arguments)

        if command is None:
            if invocation.license_request:
                logger.debug(f"No command selected for license request | reason={self._parser.error_message}")
                return invocation
            raise CommandParseError(
                self._parser.error_message or MSG_NO_COMMAND,
                arguments=invocation.arguments,
            )

        invocation.command = command

        # No default resources, the tool may run outside of the source tree
        invocation.engine_parameters[EP_RESOURCE_PATHS] = ""

        if command.requires_project_load() and self._environment.dev_build:
            invocation.engine_parameters[EP_RESOURCE_PREFIX_PATHS] = self._environment.get_resource_prefix_path()
            invocation.engine_parameters[EP_RESOURCE_PATHS] = CORE_DATA_DIR

        logger.debug(f"Invocation | {invocation.to_dict()}")
        return invocation

    @staticmethod
    def _parse_log_level(value: str) -> int:
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid -loglevel value '{value}', using default")
            return LOG_INFO


__all__ = ["ArgumentInterpreter", "default_engine_parameters"]
