"""
Tool Core - Configuration.

============================================================
PURPOSE
============================================================
Process-level settings that are not command-line flags.

Values come from the environment (a `.env` file is loaded by
the entry script) and are fixed for the whole invocation.

============================================================
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional


def _default_license_path() -> Path:
    return Path.home() / ".atomic" / "license.json"


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# ============================================================
# TOOL CONFIGURATION
# ============================================================

@dataclass
class ToolConfig:
    """Configuration for one tool invocation."""

    # Logging
    log_format: str = "text"
    """Log output format (text or json)."""

    # Development build
    dev_build: bool = False
    """Running from a source tree rather than an installed tool."""

    root_source_dir: Optional[Path] = None
    """Root of the source tree; required for dev builds."""

    # License
    license_path: Path = field(default_factory=_default_license_path)
    """Where the license record is stored."""

    @classmethod
    def from_env(cls) -> "ToolConfig":
        """Load configuration from environment variables."""
        root = os.getenv("ATOMIC_ROOT_SOURCE_DIR")
        license_path = os.getenv("ATOMIC_LICENSE_PATH")
        return cls(
            log_format=os.getenv("ATOMIC_LOG_FORMAT", "text").lower(),
            dev_build=_env_flag("ATOMIC_DEV_BUILD"),
            root_source_dir=Path(root) if root else None,
            license_path=Path(license_path).expanduser() if license_path else _default_license_path(),
        )

    def validate(self) -> List[str]:
        """Validate configuration, return list of errors."""
        errors = []

        if self.log_format not in ("text", "json"):
            errors.append(f"log_format must be 'text' or 'json', got '{self.log_format}'")

        if self.dev_build and self.root_source_dir is None:
            errors.append("root_source_dir required for dev builds")

        return errors


__all__ = ["ToolConfig"]
