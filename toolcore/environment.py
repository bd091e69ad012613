"""
Tool Core - Tool Environment.

Knows where the tool is running from: an installed tool or a
source tree (dev build), and whether it is bootstrapping.
"""

import logging
from pathlib import Path
from typing import Optional

from core.constants import RESOURCES_DIR

from .config import ToolConfig


logger = logging.getLogger(__name__)


class ToolEnvironment:
    """Install/source-tree locations for the tool."""

    def __init__(self, config: ToolConfig):
        self._config = config
        self._bootstrapping = False
        self._initialized = False

    @property
    def dev_build(self) -> bool:
        return self._config.dev_build

    @property
    def root_source_dir(self) -> Optional[Path]:
        return self._config.root_source_dir

    @property
    def bootstrapping(self) -> bool:
        return self._bootstrapping

    @property
    def initialized(self) -> bool:
        return self._initialized

    def set_bootstrapping(self) -> None:
        """Enable bootstrap mode. Must happen before initialize()."""
        if not self._bootstrapping:
            logger.info("Tool bootstrap mode enabled")
        self._bootstrapping = True

    def initialize(self, cli: bool = True) -> bool:
        """
        Validate the environment.

        A dev build needs an existing source tree with a
        Resources folder, unless bootstrapping (the tree is
        being produced by this very run).
        """
        errors = self._config.validate()
        if errors:
            for error in errors:
                logger.error(f"Tool environment: {error}")
            return False

        if self.dev_build and not self._bootstrapping:
            resources = self.root_source_dir / RESOURCES_DIR
            if not resources.is_dir():
                logger.error(f"Tool environment: source tree resources missing | path={resources}")
                return False

        self._initialized = True
        logger.debug(
            f"Tool environment initialized | cli={cli} | dev_build={self.dev_build} "
            f"| bootstrapping={self._bootstrapping}"
        )
        return True

    def get_resource_prefix_path(self) -> str:
        """Source-tree Resources folder, with trailing separator."""
        return f"{(self.root_source_dir / RESOURCES_DIR).as_posix()}/"


__all__ = ["ToolEnvironment"]
