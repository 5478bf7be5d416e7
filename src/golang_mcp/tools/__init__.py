"""Go toolchain tools.

Modules here register their handlers on import; use
`golang_mcp.discover.discover_tools_in_package("golang_mcp.tools")`.
"""

from typing import TypeVar

T = TypeVar("T")


def resolve(value: T | None, default: T) -> T:
    """Return `value` unless the caller left it unset."""
    return default if value is None else value


def package_dir(path: str) -> str:
    """Turn a package pattern into the directory goimports/gofumpt expect."""
    if path == "./..." or path == "...":
        return "."
    if path.endswith("/..."):
        return path[: -len("/...")] or "."
    return path
