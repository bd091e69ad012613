"""
Core Module - Constants.

============================================================
RESPONSIBILITY
============================================================
Defines all tool-wide constants.

- Single source of truth for exit codes and fixed messages
- Project directory layout names
- Engine parameter keys and host log levels

============================================================
"""

# ============================================================
# TOOL IDENTIFICATION
# ============================================================

TOOL_NAME = "atomic-tool"
TOOL_VERSION = "0.1.0"


# ============================================================
# EXIT CODES
# ============================================================

EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


# ============================================================
# MESSAGES
# ============================================================

MSG_NO_COMMAND = "No command found"
MSG_COMMAND_ERROR = "Command Error"
MSG_ENVIRONMENT_INIT_FAILED = "Unable to initialize tool environment"
MSG_ACTIVATION_REQUIRED = "\nActivation Required: Please run: atomic-cli activate\n"
MSG_UNEXPECTED_ERROR = "Application has been terminated due to unexpected error."
MSG_ACTIVATION_SUCCESS = "\nActivation successful, thank you!\n\n"
MSG_DEACTIVATION_SUCCESS = "\nDeactivation successful\n\n"


# ============================================================
# PROJECT LAYOUT
# ============================================================

RESOURCES_DIR = "Resources"
CACHE_DIR = "Cache"
BUILD_DIR = "Build"
PROJECT_FILE_EXTENSION = ".atomic"
CORE_DATA_DIR = "CoreData"


# ============================================================
# ORCHESTRATOR FLAGS
# ============================================================

FLAG_TOOL_BOOTSTRAP = "toolbootstrap"
FLAG_LOG_LEVEL = "loglevel"
FLAG_ACTIVATE = "activate"
FLAG_DEACTIVATE = "deactivate"

# Flags whose following token is a value, not a positional argument
VALUE_FLAGS = frozenset({FLAG_LOG_LEVEL, FLAG_ACTIVATE})


# ============================================================
# ENGINE PARAMETERS
# ============================================================

EP_HEADLESS = "Headless"
EP_LOG_LEVEL = "LogLevel"
EP_RESOURCE_PATHS = "ResourcePaths"
EP_RESOURCE_PREFIX_PATHS = "ResourcePrefixPaths"


# ============================================================
# HOST LOG LEVELS
# ============================================================

LOG_DEBUG = 0
LOG_INFO = 1
LOG_WARNING = 2
LOG_ERROR = 3
LOG_NONE = 4
