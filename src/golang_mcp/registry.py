"""Tool registry shared by the MCP server and the CLI.

Tool modules decorate their handlers with `@register`; importing the module
(see `discover_tools_in_package`) is what adds them to `REGISTRY`. Both
adapters then build their surfaces from `REGISTRY.functions`, in the order
the handlers were imported.
"""

import inspect
import logging
from collections import OrderedDict
from collections.abc import Callable
from functools import wraps
from typing import Any, ParamSpec, TypeVar

from golang_mcp.function_schema import FunctionDescription, JSONSchema

logger = logging.getLogger(__name__)


class Registry:
    """Go tool handlers keyed by the name they are exposed under."""

    def __init__(self):
        self._tools: dict[str, FunctionDescription] = OrderedDict()

    def register(
        self,
        func: Callable,
        name: str | None = None,
        doc_override: str | None = None,
        description: str = "",
        tags: list[str] | None = None,
    ) -> None:
        """Describe `func` and add it under `name`.

        The first handler registered under a name wins; re-importing a tool
        module is a no-op.

        Args:
            func: Handler to expose
            name: Exposed tool name, defaults to the handler's ``__name__``
            doc_override: Docstring parsed in place of the handler's own
            description: Description shown to MCP clients
            tags: Categories such as "analysis" or "testing"
        """
        name = name or func.__name__
        if name in self._tools:
            logger.debug(f"Tool {name} already registered, skipping")
            return

        self._tools[name] = FunctionDescription(
            func,
            name=name,
            doc_override=doc_override,
            description=description,
            tags=tags,
        )
        logger.debug(f"Registered tool: {name} (tags={tags or []})")

    @property
    def functions(self) -> list[FunctionDescription]:
        return list(self._tools.values())

    def get_description(self, name: str) -> FunctionDescription | None:
        return self._tools.get(name)

    def get_function(self, name: str) -> Callable[..., Any]:
        if name not in self._tools:
            raise KeyError(f"Tool '{name}' not found")
        return self._tools[name].function

    def get_schemas(self) -> list[JSONSchema]:
        return [desc.function_schema for desc in self._tools.values()]


REGISTRY = Registry()

P = ParamSpec("P")
T = TypeVar("T")


def register(
    *,
    doc: str | None = None,
    name: str | None = None,
    description: str = "",
    tags: list[str] | None = None,
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Expose a handler as a Go tool.

    Coroutine handlers stay coroutines, so the MCP server can await them
    without a thread hop:

        @register(tags=["analysis"])
        async def go_vet(wd: str, path: str | None = None) -> ExecutionResult: ...

    Args:
        doc: Docstring to parse instead of the handler's own
        name: Exposed tool name
        description: Description shown to MCP clients
        tags: Categories for the tool
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        if inspect.iscoroutinefunction(func):

            @wraps(func)
            async def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                return await func(*args, **kwargs)

        else:

            @wraps(func)
            def wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
                return func(*args, **kwargs)

        if name:
            wrapper.__name__ = name
        REGISTRY.register(wrapper, name=name, doc_override=doc, description=description, tags=tags)
        return wrapper  # type: ignore[return-value]

    return decorator
