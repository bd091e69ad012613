"""
Tool Core - Build System.

============================================================
RESPONSIBILITY
============================================================
Produces build output for a loaded project.

- Holds the build output directory set by the orchestrator
- Copies project resources into the build folder
- Writes a build manifest

Work runs in a worker thread; callers await the coroutine
from the event loop.

============================================================
"""

import asyncio
import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from core.exceptions import CommandError

from .project import Project


logger = logging.getLogger(__name__)

MANIFEST_FILE = "manifest.json"


class BuildSystem:
    """Build output management."""

    def __init__(self):
        self._build_path: Optional[Path] = None
        self._builds = 0

    @property
    def build_path(self) -> Optional[Path]:
        return self._build_path

    def set_build_path(self, path: Path) -> None:
        self._build_path = Path(path)
        logger.debug(f"Build path set | path={self._build_path}")

    async def build(self, project: Project, platform: str = "desktop") -> Dict[str, Any]:
        """
        Build project into the current build path.

        Returns:
            The written manifest

        Raises:
            CommandError: no build path set or the copy failed
        """
        if self._build_path is None:
            raise CommandError("Build path not set", command="build")

        self._builds += 1
        logger.info(f"Build started | project={project.name} | platform={platform}")
        try:
            manifest = await asyncio.to_thread(self._do_build, project, platform)
        except OSError as e:
            raise CommandError(f"Build failed: {e}", command="build", cause=e) from e

        logger.info(f"Build finished | project={project.name} | files={manifest['file_count']}")
        return manifest

    def _do_build(self, project: Project, platform: str) -> Dict[str, Any]:
        target = self._build_path / platform
        target.mkdir(parents=True, exist_ok=True)

        resources_target = target / project.resources_path.name
        if project.resources_path.is_dir():
            shutil.copytree(project.resources_path, resources_target, dirs_exist_ok=True)

        files = sorted(
            str(p.relative_to(target))
            for p in target.rglob("*")
            if p.is_file() and p.name != MANIFEST_FILE
        )
        manifest = {
            "project": project.name,
            "platform": platform,
            "built_at": datetime.now(timezone.utc).isoformat(),
            "file_count": len(files),
            "files": files,
        }
        (target / MANIFEST_FILE).write_text(json.dumps(manifest, indent=2), encoding="utf-8")
        return manifest


__all__ = ["BuildSystem", "MANIFEST_FILE"]
