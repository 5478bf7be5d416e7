"""mcp-golang - Go toolchain operations exposed as MCP tools."""

from golang_mcp.context import get_tool_context, set_tool_context
from golang_mcp.discover import discover_tools_in_package
from golang_mcp.execution import (
    CommandExecutor,
    CommandSpec,
    ErrorKind,
    ExecutionResult,
)
from golang_mcp.function_schema import FunctionDescription
from golang_mcp.paths import is_absolute
from golang_mcp.registry import REGISTRY, register

__all__ = [
    # Execution
    "CommandExecutor",
    "CommandSpec",
    "ErrorKind",
    "ExecutionResult",
    "is_absolute",
    # Registry
    "register",
    "REGISTRY",
    "FunctionDescription",
    "discover_tools_in_package",
    # Context management
    "get_tool_context",
    "set_tool_context",
]
