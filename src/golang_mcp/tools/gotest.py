"""go test, optionally followed by a coverage summary."""

from golang_mcp.context import get_tool_context
from golang_mcp.execution import CommandSpec, ExecutionResult
from golang_mcp.registry import register
from golang_mcp.tools import resolve

TESTS_PASSED = "Tests passed with no output"


def go_test_command(
    path: str,
    verbose: bool = True,
    race: bool = False,
    coverprofile: str | None = None,
    bench: str | None = None,
) -> str:
    parts = ["go test"]
    if verbose:
        parts.append("-v")
    if race:
        parts.append("-race")
    if coverprofile:
        parts.append(f"-coverprofile={coverprofile}")
    if bench:
        # -run=^$ skips unit tests so only benchmarks run
        parts.extend([f"-bench={bench}", "-run=^$"])
    parts.append(path)
    return " ".join(parts)


@register(tags=["test"])
async def go_test(
    wd: str,
    path: str | None = None,
    verbose: bool | None = None,
    race: bool | None = None,
    coverage: bool | None = None,
    coverprofile: str | None = None,
    bench: str | None = None,
) -> ExecutionResult:
    """Run Go tests with optional race detection, coverage and benchmarks.

    With coverage enabled the coverage profile is summarized per function
    with go tool cover after the tests run.

    Args:
        wd: Absolute path of the Go module to test
        path: Package pattern to test (default ./...)
        verbose: Pass -v (default true)
        race: Enable the race detector
        coverage: Write a coverage profile and summarize it
        coverprofile: Coverage profile file name (default coverage.out)
        bench: Benchmark regexp; when set only benchmarks run
    """
    ctx = get_tool_context()
    defaults = ctx.config.defaults.test
    path = resolve(path, defaults.path)
    profile = resolve(coverprofile, defaults.coverprofile)
    with_coverage = resolve(coverage, defaults.coverage)

    command = go_test_command(
        path,
        verbose=resolve(verbose, defaults.verbose),
        race=resolve(race, defaults.race),
        coverprofile=profile if with_coverage else None,
        bench=resolve(bench, defaults.bench),
    )
    if not with_coverage:
        return await ctx.executor.execute(command, wd, TESTS_PASSED)

    steps = [
        CommandSpec(command, TESTS_PASSED),
        CommandSpec(f"go tool cover -func={profile}", "No coverage data"),
    ]
    return await ctx.executor.execute_sequence(steps, wd, TESTS_PASSED)
