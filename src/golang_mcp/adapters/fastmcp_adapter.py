"""FastMCP adapter for registered Go tools."""

import inspect
import json
import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from typing import Any

from fastmcp.exceptions import ToolError
from fastmcp.server import FastMCP

from golang_mcp.context import set_tool_context
from golang_mcp.execution import ExecutionResult
from golang_mcp.function_schema import FunctionDescription
from golang_mcp.registry import REGISTRY
from golang_mcp.tools.context import ToolContext

logger = logging.getLogger(__name__)

HELP_TEXT = """This is the {name} server. You can use the following Go tools:

1. go_analyze: Comprehensive code analysis using golangci-lint with customizable severity levels and auto-fix options
2. go_fix: Code cleanup tool that can run go mod tidy, goimports, and gofumpt in sequence
3. go_test: Enhanced test runner with coverage reports and benchmark support
4. go_mod_tidy: Dependency management tool that runs go mod tidy
5. go_vet, go_format, go_lint, go_find_dead_code: single-command checks

Each tool accepts a working directory (wd) parameter that must be an absolute path."""


def unwrap_result(result: Any) -> Any:
    """Turn an `ExecutionResult` into MCP text content or a `ToolError`."""
    if isinstance(result, ExecutionResult):
        if result.is_error:
            raise ToolError(result.text)
        return result.text
    return result


def context_fn(
    func_desc: FunctionDescription, ctx: ToolContext
) -> Callable[..., Awaitable[Any]]:
    async def wrapper(*args, **kwargs) -> Any:
        with set_tool_context(ctx):
            result = await func_desc.call_async(*args, **kwargs)
        return unwrap_result(result)

    # FastMCP builds the input schema from the signature, and the MCP result
    # is plain text rather than a structured ExecutionResult.
    wrapper.__name__ = func_desc.name
    wrapper.__doc__ = func_desc.function.__doc__
    wrapper.__signature__ = func_desc.sig.replace(return_annotation=str)  # type: ignore[attr-defined]
    wrapper.__annotations__ = {
        **{
            name: param.annotation
            for name, param in func_desc.sig.parameters.items()
            if param.annotation is not inspect.Parameter.empty
        },
        "return": str,
    }
    return wrapper


def create_fastmcp_server(context: ToolContext, name: str | None = None) -> FastMCP:
    """Create a FastMCP server that exposes every registered tool.

    Args:
        context: ToolContext installed around each tool call
        name: Server name, defaults to the configured server name

    Example:
        from golang_mcp.discover import discover_tools_in_package
        from golang_mcp.tools.context import ToolContext

        discover_tools_in_package("golang_mcp.tools")
        server = create_fastmcp_server(ToolContext())
        server.run()
    """
    config = context.config
    name = name or config.server_name

    @asynccontextmanager
    async def app_lifespan(server: FastMCP) -> AsyncIterator[Any]:
        yield context

    server = FastMCP(name=name, version=config.server_version, lifespan=app_lifespan)

    @server.resource("config://app")
    def app_config() -> str:
        """Server name, version and environment."""
        return json.dumps(
            {
                "name": name,
                "version": config.server_version,
                "environment": config.environment,
            },
            indent=2,
        )

    @server.prompt(name="help")
    def help_prompt() -> str:
        """Describe the available Go tools."""
        return HELP_TEXT.format(name=name)

    for func_desc in REGISTRY.functions:
        fn = context_fn(func_desc, context)
        try:
            server.tool(name=func_desc.name, description=func_desc.description, tags=set(func_desc.tags))(fn)
        except Exception:
            logger.exception(f"Failed to register {func_desc.name}")

    return server
