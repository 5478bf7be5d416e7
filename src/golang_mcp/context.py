"""Contextvar plumbing that hands the active `ToolContext` to tool handlers.

Adapters wrap each call in ``with set_tool_context(ctx):``; handlers fetch it
with `get_tool_context()`.
"""

from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING, Iterator

if TYPE_CHECKING:
    from golang_mcp.tools.context import ToolContext

_tool_context: ContextVar["ToolContext | None"] = ContextVar("tool_context", default=None)


def get_tool_context() -> "ToolContext":
    """Get the current tool context.

    Raises:
        RuntimeError: If called outside an adapter that installed a context
    """
    context = _tool_context.get()
    if context is None:
        raise RuntimeError(
            "No tool context available. Ensure tools are called within "
            "a properly configured adapter (FastMCP, CLI, etc.)"
        )
    return context


@contextmanager
def set_tool_context(context: "ToolContext") -> Iterator[None]:
    """Install `context` for the duration of the block."""
    token = _tool_context.set(context)
    try:
        yield
    finally:
        _tool_context.reset(token)
