"""
Tool Core - Resource Cache.

Keeps the ordered resource-resolution search list.
"""

import logging
from pathlib import Path
from typing import List, Union


logger = logging.getLogger(__name__)


class ResourceCache:
    """Ordered list of directories searched when resolving resources."""

    def __init__(self):
        self._resource_dirs: List[Path] = []

    @property
    def resource_dirs(self) -> List[Path]:
        """Search directories in resolution order."""
        return list(self._resource_dirs)

    def add_resource_dir(self, path: Union[str, Path]) -> bool:
        """
        Append a directory to the search list.

        Returns:
            False if the directory was already registered
        """
        directory = Path(path)
        if directory in self._resource_dirs:
            logger.debug(f"Resource dir already registered | path={directory}")
            return False

        if not directory.is_dir():
            # Registered anyway: a project may create it later (e.g. Cache)
            logger.debug(f"Resource dir does not exist yet | path={directory}")

        self._resource_dirs.append(directory)
        logger.info(f"Added resource path | path={directory}")
        return True


__all__ = ["ResourceCache"]
