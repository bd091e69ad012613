"""
Tests for the ArgumentInterpreter.

============================================================
TEST PRINCIPLES:
- scan_flags() never fails
- The parser always sees the full argument list
- License requests tolerate a missing command
============================================================
"""

import pytest

from core.constants import (
    CORE_DATA_DIR,
    EP_HEADLESS,
    EP_LOG_LEVEL,
    EP_RESOURCE_PATHS,
    EP_RESOURCE_PREFIX_PATHS,
    LOG_DEBUG,
    LOG_INFO,
    MSG_NO_COMMAND,
)
from core.exceptions import CommandParseError
from orchestrator.arguments import ArgumentInterpreter, default_engine_parameters
from toolcore.config import ToolConfig
from toolcore.environment import ToolEnvironment

from tests.helpers import FakeCommand, FakeParser, make_context


@pytest.fixture
def context(tmp_path):
    return make_context(tmp_path)


@pytest.fixture
def dev_environment(tmp_path):
    root = tmp_path / "source"
    (root / "Resources").mkdir(parents=True)
    return ToolEnvironment(ToolConfig(dev_build=True, root_source_dir=root))


# ============================================================
# FLAG SCANNING
# ============================================================

class TestScanFlags:
    """Tests for orchestrator flag extraction."""

    def test_defaults(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["build", "MyGame"])

        assert invocation.engine_parameters == default_engine_parameters()
        assert invocation.engine_parameters[EP_HEADLESS] is True
        assert invocation.engine_parameters[EP_LOG_LEVEL] == LOG_INFO
        assert not invocation.bootstrap
        assert invocation.activation_key is None
        assert not invocation.deactivate
        assert invocation.arguments == ["build", "MyGame"]

    def test_loglevel(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["build", "-loglevel", "0"])

        assert invocation.engine_parameters[EP_LOG_LEVEL] == LOG_DEBUG

    def test_invalid_loglevel_keeps_default(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["-loglevel", "verbose"])

        assert invocation.engine_parameters[EP_LOG_LEVEL] == LOG_INFO

    def test_flags_are_case_insensitive(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["-ToolBootstrap", "-ACTIVATE", "KEY", "-Deactivate"])

        assert invocation.bootstrap
        assert invocation.activation_key == "KEY"
        assert invocation.deactivate

    def test_activate_without_key(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["-activate"])

        assert invocation.activation_key is None
        assert not invocation.license_request

    def test_activate_key_is_not_a_flag(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["-activate", "ABC", "-toolbootstrap"])

        assert invocation.activation_key == "ABC"
        assert invocation.bootstrap

    def test_activate_followed_by_flag_has_no_key(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["-activate", "-deactivate"])

        assert invocation.activation_key is None
        assert invocation.deactivate

    def test_loglevel_followed_by_flag_keeps_default(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["-loglevel", "-toolbootstrap"])

        assert invocation.engine_parameters[EP_LOG_LEVEL] == LOG_INFO
        assert invocation.bootstrap

    def test_unknown_flags_ignored(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        invocation = interpreter.scan_flags(["-verbose", "build", "-", "x"])

        assert not invocation.bootstrap
        assert not invocation.license_request


# ============================================================
# COMMAND SELECTION
# ============================================================

class TestSelectCommand:
    """Tests for command selection."""

    def test_full_arguments_reach_parser(self, context):
        command = FakeCommand(context)
        parser = FakeParser(command)
        interpreter = ArgumentInterpreter(parser, context.environment)
        arguments = ["-loglevel", "0", "fake", "-toolbootstrap", "x"]

        invocation = interpreter.select_command(interpreter.scan_flags(arguments))

        assert parser.parsed_arguments == arguments
        assert invocation.command is command

    def test_resource_paths_cleared(self, context):
        interpreter = ArgumentInterpreter(FakeParser(FakeCommand(context)), context.environment)

        invocation = interpreter.select_command(interpreter.scan_flags(["fake"]))

        assert invocation.engine_parameters[EP_RESOURCE_PATHS] == ""
        assert EP_RESOURCE_PREFIX_PATHS not in invocation.engine_parameters

    def test_dev_build_project_command_gets_source_resources(self, context, dev_environment):
        command = FakeCommand(context, requires_project=True)
        interpreter = ArgumentInterpreter(FakeParser(command), dev_environment)

        invocation = interpreter.select_command(interpreter.scan_flags(["fake"]))

        assert invocation.engine_parameters[EP_RESOURCE_PATHS] == CORE_DATA_DIR
        prefix = invocation.engine_parameters[EP_RESOURCE_PREFIX_PATHS]
        assert prefix == dev_environment.get_resource_prefix_path()
        assert prefix.endswith("Resources/")

    def test_dev_build_without_project_gets_no_prefix(self, context, dev_environment):
        command = FakeCommand(context, requires_project=False)
        interpreter = ArgumentInterpreter(FakeParser(command), dev_environment)

        invocation = interpreter.select_command(interpreter.scan_flags(["fake"]))

        assert invocation.engine_parameters[EP_RESOURCE_PATHS] == ""
        assert EP_RESOURCE_PREFIX_PATHS not in invocation.engine_parameters

    def test_parse_error_uses_parser_message(self, context):
        interpreter = ArgumentInterpreter(FakeParser(error_message="Unknown command: foo"), context.environment)

        with pytest.raises(CommandParseError) as exc_info:
            interpreter.select_command(interpreter.scan_flags(["foo"]))

        assert exc_info.value.message == "Unknown command: foo"

    def test_parse_error_without_message(self, context):
        interpreter = ArgumentInterpreter(FakeParser(), context.environment)

        with pytest.raises(CommandParseError) as exc_info:
            interpreter.select_command(interpreter.scan_flags([]))

        assert exc_info.value.message == MSG_NO_COMMAND

    @pytest.mark.parametrize("arguments", [
        ["-activate", "ATOMIC-AB12-CD34-EF56-GH78"],
        ["-deactivate"],
    ])
    def test_license_request_tolerates_missing_command(self, context, arguments):
        interpreter = ArgumentInterpreter(FakeParser(error_message="ignored"), context.environment)

        invocation = interpreter.select_command(interpreter.scan_flags(arguments))

        assert invocation.command is None
        assert invocation.license_request
