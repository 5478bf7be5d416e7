"""Tests for the Go tool handlers, run against a recording strategy."""

import pytest

from golang_mcp.context import set_tool_context
from golang_mcp.errors import CommandError
from golang_mcp.execution import SEQUENCE_DELIMITER, CommandExecutor, ErrorKind
from golang_mcp.registry import REGISTRY
from golang_mcp.strategies import CommandOutput
from golang_mcp.tools import package_dir, resolve
from golang_mcp.tools.analysis import golangci_lint_command
from golang_mcp.tools.config import Config, FixDefaults, ToolDefaults
from golang_mcp.tools.context import ToolContext
from golang_mcp.tools.fix import fix_steps
from golang_mcp.tools.gotest import go_test_command

from fakes import RecordingStrategy

TOOL_NAMES = [
    "go_analyze",
    "go_fix",
    "go_test",
    "go_vet",
    "go_format",
    "go_lint",
    "go_mod_tidy",
    "go_find_dead_code",
]


def call_tool(context, name, **kwargs):
    with set_tool_context(context):
        return REGISTRY.get_description(name).call(**kwargs)


def context_with(outcomes, config=None):
    strategy = RecordingStrategy(outcomes)
    executor = CommandExecutor(strategies=[strategy], platform="linux")
    return ToolContext(config=config or Config(_env_file=None), executor=executor), strategy


def test_all_tools_registered():
    names = {desc.name for desc in REGISTRY.functions}
    assert set(TOOL_NAMES) <= names


@pytest.mark.parametrize("name", TOOL_NAMES)
def test_relative_working_dir_rejected_without_spawning(tool_context, strategy, name):
    result = call_tool(tool_context, name, wd="relative/path")

    assert result.is_error
    assert result.error_kind == ErrorKind.VALIDATION
    assert "is not an absolute path" in result.text
    assert strategy.calls == []


@pytest.mark.parametrize("name", TOOL_NAMES)
def test_absolute_working_dir_accepted(tool_context, strategy, name):
    result = call_tool(tool_context, name, wd="/some/absolute/path")

    assert "is not an absolute path" not in result.text
    assert all(call.cwd == "/some/absolute/path" for call in strategy.calls)


class TestGoVet:
    def test_clean_run(self, tool_context, strategy):
        result = call_tool(tool_context, "go_vet", wd="/abs/project", path="./...")

        assert result.text == "No issues found by go vet"
        assert not result.is_error
        assert result.to_mcp() == {
            "content": [{"type": "text", "text": "No issues found by go vet"}]
        }
        assert strategy.commands == ["go vet ./..."]

    def test_issues_reported(self):
        context, _ = context_with(
            {"go vet": CommandError("exit 1", stderr="main.go:3: unreachable code", returncode=1)}
        )
        result = call_tool(context, "go_vet", wd="/abs/project")

        assert result.is_error
        assert "unreachable code" in result.text


def test_go_lint_default_path(tool_context, strategy):
    result = call_tool(tool_context, "go_lint", wd="/abs")
    assert strategy.commands == ["golint ./..."]
    assert result.text == "No lint issues found"


def test_go_find_dead_code(tool_context, strategy):
    result = call_tool(tool_context, "go_find_dead_code", wd="/abs", path="./cmd/...")
    assert strategy.commands == ["go run github.com/remyoudompheng/go-misc/deadcode ./cmd/..."]
    assert result.text == "No dead code found"


def test_go_find_dead_code_configured_command():
    config = Config(_env_file=None, deadcode_command="deadcode")
    context, strategy = context_with({}, config=config)
    call_tool(context, "go_find_dead_code", wd="/abs")
    assert strategy.commands == ["deadcode ./..."]


class TestGoFormat:
    def test_without_write(self, tool_context, strategy):
        result = call_tool(tool_context, "go_format", wd="/abs")
        assert strategy.commands == ["go fmt ./..."]
        assert result.text == "No formatting changes needed"

    def test_with_write(self, tool_context, strategy):
        call_tool(tool_context, "go_format", wd="/abs", path="./pkg/...", write=True)
        assert strategy.commands == ["go fmt -w ./pkg/..."]

    def test_changed_files_listed(self):
        context, _ = context_with({"go fmt": CommandOutput(stdout="main.go\n")})
        result = call_tool(context, "go_format", wd="/abs")
        assert "main.go" in result.text


def test_go_mod_tidy(tool_context, strategy):
    result = call_tool(tool_context, "go_mod_tidy", wd="/abs")
    assert strategy.commands == ["go mod tidy"]
    assert result.text == "Dependencies cleaned up successfully"


class TestGoAnalyze:
    def test_default_command(self, tool_context, strategy):
        result = call_tool(tool_context, "go_analyze", wd="/abs")
        assert strategy.commands == ["golangci-lint run --out-format=colored-line-number ./..."]
        assert result.text == "No issues found by golangci-lint"

    def test_all_flags(self, tool_context, strategy):
        call_tool(
            tool_context,
            "go_analyze",
            wd="/abs",
            path="./internal/...",
            config=".golangci.yml",
            fast=True,
            fix=True,
            severity="warning",
        )
        assert strategy.commands == [
            "golangci-lint run --config=.golangci.yml --fast --fix --severity=warning "
            "--out-format=colored-line-number ./internal/..."
        ]

    def test_command_builder(self):
        assert golangci_lint_command("./...", fast=True) == (
            "golangci-lint run --fast --out-format=colored-line-number ./..."
        )


class TestGoTest:
    def test_default_is_verbose(self, tool_context, strategy):
        result = call_tool(tool_context, "go_test", wd="/abs")
        assert strategy.commands == ["go test -v ./..."]
        assert result.text == "Tests passed with no output"

    def test_race_and_quiet(self, tool_context, strategy):
        call_tool(tool_context, "go_test", wd="/abs", verbose=False, race=True)
        assert strategy.commands == ["go test -race ./..."]

    def test_bench_skips_unit_tests(self, tool_context, strategy):
        call_tool(tool_context, "go_test", wd="/abs", bench=".", verbose=False)
        assert strategy.commands == ["go test -bench=. -run=^$ ./..."]

    def test_coverage_runs_two_steps(self):
        context, strategy = context_with(
            {
                "go test": CommandOutput(stdout="ok  \texample.com/pkg\t0.1s\n"),
                "go tool cover": CommandOutput(stdout="total:\t(statements)\t81.2%\n"),
            }
        )
        result = call_tool(context, "go_test", wd="/abs", coverage=True)

        assert strategy.commands == [
            "go test -v -coverprofile=coverage.out ./...",
            "go tool cover -func=coverage.out",
        ]
        assert not result.is_error
        test_block, cover_block = result.text.split(SEQUENCE_DELIMITER)
        assert test_block.startswith("[go test -v -coverprofile=coverage.out ./...]:\nok")
        assert cover_block.startswith("[go tool cover -func=coverage.out]:\ntotal:")

    def test_failing_tests_still_report_coverage(self):
        context, strategy = context_with(
            {
                "go test": CommandError("exit 1", stdout="--- FAIL: TestX", returncode=1),
                "go tool cover": CommandOutput(stdout="total: 40.0%"),
            }
        )
        result = call_tool(context, "go_test", wd="/abs", coverage=True, coverprofile="c.out")

        assert result.is_error
        assert "--- FAIL: TestX" in result.text
        assert "total: 40.0%" in result.text
        assert len(strategy.calls) == 2

    def test_command_builder(self):
        assert go_test_command("./x", verbose=False) == "go test ./x"


class TestGoFix:
    def test_all_steps_in_order(self, tool_context, strategy):
        result = call_tool(tool_context, "go_fix", wd="/abs")

        assert strategy.commands == ["go mod tidy", "goimports -w .", "gofumpt -w ."]
        assert not result.is_error

    def test_imports_before_format_without_deps(self, tool_context, strategy):
        result = call_tool(
            tool_context, "go_fix", wd="/abs", deps=False, imports=True, format=True
        )

        assert strategy.commands == ["goimports -w .", "gofumpt -w ."]
        assert "go mod tidy" not in result.text
        assert result.text.index("[goimports") < result.text.index("[gofumpt")

    def test_extra_flag(self, tool_context, strategy):
        call_tool(tool_context, "go_fix", wd="/abs", deps=False, imports=False, extra=True)
        assert strategy.commands == ["gofumpt -w -extra ."]

    def test_nothing_enabled(self, tool_context, strategy):
        result = call_tool(
            tool_context, "go_fix", wd="/abs", deps=False, imports=False, format=False
        )
        assert strategy.commands == []
        assert result.text == "No fixes were needed"

    def test_failed_step_does_not_hide_later_steps(self):
        context, strategy = context_with(
            {"goimports": CommandError("exit 2", stderr="goimports: not found", returncode=127)}
        )
        result = call_tool(context, "go_fix", wd="/abs")

        assert result.is_error
        assert len(strategy.calls) == 3
        assert "[goimports -w .] failed:\ngoimports: not found" in result.text
        assert "[gofumpt -w .]:\nCode formatted with gofumpt" in result.text

    def test_fix_steps_uses_package_directory(self):
        steps = fix_steps("./internal/...", deps=False, imports=True, format=False, extra=False)
        assert [step.command for step in steps] == ["goimports -w ./internal"]


def test_configured_defaults_apply():
    config = Config(
        _env_file=None,
        defaults=ToolDefaults(fix=FixDefaults(deps=False, path="./cmd/...")),
    )
    context, strategy = context_with({}, config=config)

    call_tool(context, "go_fix", wd="/abs")

    assert strategy.commands == ["goimports -w ./cmd", "gofumpt -w ./cmd"]


@pytest.mark.parametrize(
    "pattern,expected",
    [("./...", "."), ("./pkg/...", "./pkg"), ("pkg", "pkg"), ("/...", ".")],
)
def test_package_dir(pattern, expected):
    assert package_dir(pattern) == expected


def test_resolve_keeps_falsy_values():
    assert resolve(False, True) is False
    assert resolve(None, True) is True
