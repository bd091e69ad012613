"""
Tool Core - Context.

All subsystems of one invocation, built once and passed
explicitly to every phase and command.
"""

from dataclasses import dataclass
from typing import Any, Optional

from .build import BuildSystem
from .config import ToolConfig
from .engine import Engine
from .environment import ToolEnvironment
from .events import EventBus
from .filesystem import FileSystem
from .license import LicenseSystem
from .resources import ResourceCache


@dataclass
class ToolContext:
    """Subsystems shared by the orchestrator and the selected command."""

    config: ToolConfig
    bus: EventBus
    engine: Engine
    environment: ToolEnvironment
    filesystem: FileSystem
    resource_cache: ResourceCache
    build_system: BuildSystem
    license_system: LicenseSystem


def create_context(config: Optional[ToolConfig] = None, **overrides: Any) -> ToolContext:
    """
    Build a context with default subsystems.

    Args:
        config: Tool configuration (default: from environment)
        **overrides: Replacement for any subsystem field

    Returns:
        ToolContext instance
    """
    config = config or ToolConfig.from_env()
    bus = overrides.pop("bus", None) or EventBus()

    context = ToolContext(
        config=config,
        bus=bus,
        engine=overrides.pop("engine", None) or Engine(),
        environment=overrides.pop("environment", None) or ToolEnvironment(config),
        filesystem=overrides.pop("filesystem", None) or FileSystem(),
        resource_cache=overrides.pop("resource_cache", None) or ResourceCache(),
        build_system=overrides.pop("build_system", None) or BuildSystem(),
        license_system=overrides.pop("license_system", None) or LicenseSystem(bus, config.license_path),
    )

    if overrides:
        raise TypeError(f"Unknown context fields: {', '.join(sorted(overrides))}")

    return context


__all__ = ["ToolContext", "create_context"]
