"""
Tool Core - Command Parser.

Selects the single command of an invocation from the raw
argument list. `-flag` tokens belong to other layers and are
skipped, together with the value of flags known to take one.
"""

import logging
from typing import Dict, List, Optional, Type

from core.constants import VALUE_FLAGS

from .command import Command
from .commands import COMMANDS
from .context import ToolContext


logger = logging.getLogger(__name__)


def is_flag(argument: str) -> bool:
    return len(argument) > 1 and argument.startswith("-")


def positional_arguments(arguments: List[str]) -> List[str]:
    """
    Arguments with every -flag (and the value of value flags) removed.

    A value flag followed by another -flag has no value.
    """
    positional = []
    skip_next = False
    for argument in arguments:
        if is_flag(argument):
            skip_next = argument[1:].lower() in VALUE_FLAGS
            continue
        if skip_next:
            skip_next = False
            continue
        positional.append(argument)
    return positional


class CommandParser:
    """Maps `<command> [args...]` onto a Command instance."""

    def __init__(self, context: ToolContext, commands: Optional[Dict[str, Type[Command]]] = None):
        self._context = context
        self._commands = commands if commands is not None else COMMANDS
        self._error_message = ""

    @property
    def error_message(self) -> str:
        return self._error_message

    def parse(self, arguments: List[str]) -> Optional[Command]:
        """
        Parse arguments into a command.

        Returns:
            The selected command, or None with error_message set
            (empty when there simply was no command word)
        """
        self._error_message = ""
        positional = positional_arguments(arguments)
        if not positional:
            return None

        name = positional[0].lower()
        command_class = self._commands.get(name)
        if command_class is None:
            self._error_message = f"Unknown command: {positional[0]}"
            return None

        command = command_class(self._context)
        error = command.parse(positional[1:])
        if error:
            self._error_message = error
            return None

        logger.debug(f"Command selected | command={name} | arguments={positional[1:]}")
        return command


__all__ = ["CommandParser", "is_flag", "positional_arguments"]
