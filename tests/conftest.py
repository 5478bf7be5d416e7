import pytest

from golang_mcp.discover import discover_tools_in_package
from golang_mcp.execution import CommandExecutor
from golang_mcp.tools.config import Config
from golang_mcp.tools.context import ToolContext

from fakes import RecordingStrategy


@pytest.fixture(scope="session", autouse=True)
def registered_tools():
    discover_tools_in_package("golang_mcp.tools")


@pytest.fixture
def test_config():
    return Config(_env_file=None)


@pytest.fixture
def strategy():
    return RecordingStrategy()


@pytest.fixture
def tool_context(test_config, strategy):
    """ToolContext whose executor records commands instead of spawning them."""
    executor = CommandExecutor(strategies=[strategy], platform="linux")
    return ToolContext(config=test_config, executor=executor)
