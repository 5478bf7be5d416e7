"""Static analysis tools: golangci-lint, go vet, golint and a dead code finder."""

from golang_mcp.context import get_tool_context
from golang_mcp.execution import ExecutionResult
from golang_mcp.registry import register
from golang_mcp.tools import resolve


def golangci_lint_command(
    path: str,
    config: str | None = None,
    fast: bool = False,
    fix: bool = False,
    severity: str | None = None,
) -> str:
    parts = ["golangci-lint run"]
    if config:
        parts.append(f"--config={config}")
    if fast:
        parts.append("--fast")
    if fix:
        parts.append("--fix")
    if severity:
        parts.append(f"--severity={severity}")
    parts.append("--out-format=colored-line-number")
    parts.append(path)
    return " ".join(parts)


@register(tags=["analysis"])
async def go_analyze(
    wd: str,
    path: str | None = None,
    config: str | None = None,
    fast: bool | None = None,
    fix: bool | None = None,
    severity: str | None = None,
) -> ExecutionResult:
    """Comprehensive code analysis using golangci-lint.

    Args:
        wd: Absolute path of the Go module to analyze
        path: Package pattern to analyze (default ./...)
        config: Path to a golangci-lint configuration file
        fast: Only run fast linters
        fix: Let linters apply their automatic fixes
        severity: Default severity reported for issues
    """
    ctx = get_tool_context()
    defaults = ctx.config.defaults.analyze
    command = golangci_lint_command(
        resolve(path, defaults.path),
        config=resolve(config, defaults.config),
        fast=resolve(fast, defaults.fast),
        fix=resolve(fix, defaults.fix),
        severity=resolve(severity, defaults.severity),
    )
    return await ctx.executor.execute(command, wd, "No issues found by golangci-lint")


@register(tags=["analysis"])
async def go_vet(wd: str, path: str | None = None) -> ExecutionResult:
    """Run go vet to report suspicious constructs.

    Args:
        wd: Absolute path of the Go module to vet
        path: Package pattern to vet (default ./...)
    """
    ctx = get_tool_context()
    path = resolve(path, ctx.config.defaults.vet.path)
    return await ctx.executor.execute(f"go vet {path}", wd, "No issues found by go vet")


@register(tags=["analysis"])
async def go_lint(wd: str, path: str | None = None) -> ExecutionResult:
    """Run golint for style mistakes.

    Args:
        wd: Absolute path of the Go module to lint
        path: Package pattern to lint (default ./...)
    """
    ctx = get_tool_context()
    path = resolve(path, ctx.config.defaults.lint.path)
    return await ctx.executor.execute(f"golint {path}", wd, "No lint issues found")


@register(tags=["analysis"])
async def go_find_dead_code(wd: str, path: str | None = None) -> ExecutionResult:
    """Find unused functions and declarations.

    Args:
        wd: Absolute path of the Go module to search
        path: Package pattern to search (default ./...)
    """
    ctx = get_tool_context()
    path = resolve(path, ctx.config.defaults.dead_code.path)
    command = f"{ctx.config.deadcode_command} {path}"
    return await ctx.executor.execute(command, wd, "No dead code found")
