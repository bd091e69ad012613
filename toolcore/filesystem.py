"""
Tool Core - File System.

Thin wrapper around the filesystem primitives the orchestrator
needs, so they can be replaced in tests.
"""

import logging
from pathlib import Path
from typing import List, Union


logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class FileSystem:
    """Filesystem primitives."""

    def dir_exists(self, path: PathLike) -> bool:
        return Path(path).is_dir()

    def file_exists(self, path: PathLike) -> bool:
        return Path(path).is_file()

    def create_dir(self, path: PathLike) -> bool:
        """
        Create a directory (and missing parents).

        Failure is logged and reported through the return value;
        callers must still verify the directory exists.
        """
        try:
            Path(path).mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error(f"Failed to create directory | path={path} | error={e}")
            return False
        return True

    def scan_files(self, path: PathLike, suffix: str) -> List[Path]:
        """List files directly inside path with the given suffix, sorted."""
        directory = Path(path)
        if not directory.is_dir():
            return []
        return sorted(p for p in directory.iterdir() if p.is_file() and p.suffix == suffix)


__all__ = ["FileSystem"]
