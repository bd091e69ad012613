"""
Orchestrator Package - Invocation Lifecycle Layer.

============================================================
PACKAGE OVERVIEW
============================================================
This package turns one command line into one exit code.
It is the SINGLE ENTRYPOINT of the tool.

============================================================
CORE PRINCIPLES
============================================================
1. The orchestrator has NO command logic
2. Exactly one command is selected and run per invocation
3. Every failure ends in the ExitController
4. The first terminal event wins

============================================================
ARCHITECTURE
============================================================

    +-----------------------------------------------------+
    |                   ToolOrchestrator                  |
    |-----------------------------------------------------|
    |  ArgumentInterpreter | flags + command selection    |
    |  EnvironmentPreparer | project, resources, Build/   |
    |  LicenseGate         | validation / (de)activation  |
    |  CommandRunner       | run() once, await outcome    |
    |  ExitController      | sole owner of the exit code  |
    |  StartupDiagnostics  | early error buffer           |
    +-----------------------------------------------------+

============================================================
PHASES
============================================================
 1. SETUP   - flags, tool environment, command, engine
 2. START   - activation | deactivation | prepare + gate/run
 3. RUN     - event loop until a terminal action
 4. STOP    - exit code

============================================================
QUICK START
============================================================
Command line usage::

    python app.py build MyGame
    python app.py publish MyGame -loglevel 0
    python app.py -activate ATOMIC-AB12-CD34-EF56-GH78

Programmatic usage::

    import asyncio
    from orchestrator import ToolOrchestrator
    from toolcore import create_context

    exit_code = asyncio.run(
        ToolOrchestrator(["build", "MyGame"], create_context()).execute()
    )

============================================================
"""

from .models import (
    InvocationFlow,
    TerminalAction,
    Step,
    Invocation,
)
from .arguments import ArgumentInterpreter
from .environment import EnvironmentPreparer, PreparedEnvironment
from .license_gate import LicenseGate, LicenseState
from .runner import CommandRunner, RunState
from .exit_controller import ExitController
from .diagnostics import StartupDiagnostics
from .core import ToolOrchestrator, setup_logging


__all__ = [
    # Models
    "InvocationFlow",
    "TerminalAction",
    "Step",
    "Invocation",

    # Phases
    "ArgumentInterpreter",
    "EnvironmentPreparer",
    "PreparedEnvironment",
    "LicenseGate",
    "LicenseState",
    "CommandRunner",
    "RunState",
    "ExitController",
    "StartupDiagnostics",

    # Orchestrator
    "ToolOrchestrator",
    "setup_logging",
]
