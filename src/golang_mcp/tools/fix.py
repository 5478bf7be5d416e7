"""Tools that rewrite code or module files: go_fix, go_format, go_mod_tidy."""

from golang_mcp.context import get_tool_context
from golang_mcp.execution import CommandSpec, ExecutionResult
from golang_mcp.registry import register
from golang_mcp.tools import package_dir, resolve

MOD_TIDY = CommandSpec("go mod tidy", "Dependencies cleaned up successfully")


def fix_steps(
    path: str, deps: bool, imports: bool, format: bool, extra: bool
) -> list[CommandSpec]:
    """Build the fix-up sequence: tidy, then imports, then formatting."""
    directory = package_dir(path)
    steps = []
    if deps:
        steps.append(MOD_TIDY)
    if imports:
        steps.append(CommandSpec(f"goimports -w {directory}", "Imports organized"))
    if format:
        extra_flag = " -extra" if extra else ""
        steps.append(
            CommandSpec(f"gofumpt -w{extra_flag} {directory}", "Code formatted with gofumpt")
        )
    return steps


@register(tags=["fix"])
async def go_fix(
    wd: str,
    path: str | None = None,
    deps: bool | None = None,
    imports: bool | None = None,
    format: bool | None = None,
    extra: bool | None = None,
) -> ExecutionResult:
    """Clean up code by running go mod tidy, goimports and gofumpt in sequence.

    Every enabled step runs even if an earlier one fails.

    Args:
        wd: Absolute path of the Go module to fix
        path: Package pattern to fix (default ./...)
        deps: Run go mod tidy (default true)
        imports: Run goimports -w (default true)
        format: Run gofumpt -w (default true)
        extra: Pass -extra to gofumpt (default false)
    """
    ctx = get_tool_context()
    defaults = ctx.config.defaults.fix
    steps = fix_steps(
        resolve(path, defaults.path),
        deps=resolve(deps, defaults.deps),
        imports=resolve(imports, defaults.imports),
        format=resolve(format, defaults.format),
        extra=resolve(extra, defaults.extra),
    )
    return await ctx.executor.execute_sequence(steps, wd, "No fixes were needed")


@register(tags=["fix"])
async def go_format(
    wd: str, path: str | None = None, write: bool | None = None
) -> ExecutionResult:
    """Format Go code with go fmt.

    Args:
        wd: Absolute path of the Go module to format
        path: Package pattern to format (default ./...)
        write: Pass -w (default false)
    """
    ctx = get_tool_context()
    defaults = ctx.config.defaults.format
    path = resolve(path, defaults.path)
    write_flag = " -w" if resolve(write, defaults.write) else ""
    return await ctx.executor.execute(
        f"go fmt{write_flag} {path}", wd, "No formatting changes needed"
    )


@register(tags=["fix"])
async def go_mod_tidy(wd: str) -> ExecutionResult:
    """Add missing and remove unused module dependencies with go mod tidy.

    Args:
        wd: Absolute path of the Go module to tidy
    """
    ctx = get_tool_context()
    return await ctx.executor.execute(MOD_TIDY.command, wd, MOD_TIDY.success_message)
