"""Command execution and sequential orchestration.

Every path through `CommandExecutor` ends in an `ExecutionResult`; nothing
raised by a spawned process reaches the caller.
"""

import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from golang_mcp.errors import CommandError, CommandTimeoutError
from golang_mcp.paths import is_absolute, not_absolute_message, windows_cd_command
from golang_mcp.strategies import (
    CommandOutput,
    ExecutionStrategy,
    PreparedCommand,
    build_strategies,
    default_strategy_names,
    is_windows,
)

logger = logging.getLogger(__name__)

SEQUENCE_DELIMITER = "\n\n---\n\n"


class ErrorKind(str, Enum):
    VALIDATION = "validation"
    EXECUTION = "execution"
    TIMEOUT = "timeout"


class ExecutionResult(BaseModel):
    """Normalized outcome of running one command or a sequence of them."""

    text: str = Field(min_length=1, description="Command output or error description")
    is_error: bool = Field(default=False, description="Whether the command failed")
    error_kind: ErrorKind | None = Field(default=None, description="Category of failure")

    @classmethod
    def failure(cls, text: str, kind: ErrorKind = ErrorKind.EXECUTION) -> "ExecutionResult":
        return cls(text=text, is_error=True, error_kind=kind)

    def to_mcp(self) -> dict[str, Any]:
        """Render as an MCP tool result payload."""
        payload: dict[str, Any] = {"content": [{"type": "text", "text": self.text}]}
        if self.is_error:
            payload["isError"] = True
        return payload


@dataclass(frozen=True)
class CommandSpec:
    command: str
    success_message: str


def validate_working_dir(working_dir: str) -> ExecutionResult | None:
    """Return a validation failure for a relative `working_dir`, else None."""
    if is_absolute(working_dir):
        return None
    return ExecutionResult.failure(not_absolute_message(working_dir), ErrorKind.VALIDATION)


def _success_text(output: CommandOutput, command: str, success_message: str) -> str:
    return output.stdout or output.stderr or success_message or f"{command} completed"


def _failure_text(error: BaseException) -> str:
    captured = [
        part
        for part in (getattr(error, "stdout", ""), getattr(error, "stderr", ""))
        if isinstance(part, str) and part
    ]
    if captured:
        text = "\n".join(captured)
        if isinstance(error, CommandTimeoutError):
            return f"{error}\n{text}"
        return text
    return str(error) or repr(error)


class CommandExecutor:
    """Runs shell commands against a working directory.

    Args:
        strategies: Spawning strategies, tried in order until one succeeds
        timeout: Seconds before a command is killed; None waits forever
        platform: Platform identifier, defaults to ``sys.platform``
    """

    def __init__(
        self,
        strategies: Sequence[ExecutionStrategy] | None = None,
        timeout: float | None = None,
        platform: str | None = None,
    ):
        self.platform = platform or sys.platform
        self.strategies = list(
            strategies or build_strategies(default_strategy_names(self.platform))
        )
        self.timeout = timeout

    def prepare(self, command: str, working_dir: str) -> PreparedCommand:
        if is_windows(self.platform):
            return PreparedCommand(windows_cd_command(command, working_dir))
        return PreparedCommand(command, cwd=working_dir)

    async def _run_strategies(self, prepared: PreparedCommand) -> CommandOutput:
        last_error: CommandError | None = None
        for strategy in self.strategies:
            try:
                return await strategy.run(prepared, timeout=self.timeout)
            except CommandTimeoutError:
                logger.warning(f"{strategy.name}: timed out after {self.timeout}s: {prepared.command}")
                raise
            except CommandError as e:
                logger.info(f"{strategy.name} strategy failed for {prepared.command!r}: {e}")
                last_error = e

        if last_error is None:
            raise CommandError(f"No execution strategy ran {prepared.command!r}")
        raise last_error

    async def execute(
        self, command: str, working_dir: str, success_message: str
    ) -> ExecutionResult:
        """Run one command and normalize its output."""
        invalid = validate_working_dir(working_dir)
        if invalid:
            return invalid

        try:
            prepared = self.prepare(command, working_dir)
            logger.debug(f"Running {prepared.command!r} (cwd={prepared.cwd})")
            output = await self._run_strategies(prepared)
        except CommandTimeoutError as e:
            return ExecutionResult.failure(_failure_text(e), ErrorKind.TIMEOUT)
        except CommandError as e:
            return ExecutionResult.failure(_failure_text(e))
        except Exception as e:
            logger.exception(f"Unexpected error running {command!r}")
            return ExecutionResult.failure(_failure_text(e))

        return ExecutionResult(text=_success_text(output, command, success_message))

    async def execute_sequence(
        self,
        commands: Sequence[CommandSpec],
        working_dir: str,
        combined_success_message: str,
    ) -> ExecutionResult:
        """Run `commands` in order, continuing past failures.

        Each step contributes a ``[<command>]:`` block to the output; failed
        steps are labeled ``[<command>] failed:`` and mark the whole result
        as an error.
        """
        invalid = validate_working_dir(working_dir)
        if invalid:
            return invalid

        blocks: list[str] = []
        failed = False
        timed_out = False

        for spec in commands:
            try:
                result = await self.execute(spec.command, working_dir, spec.success_message)
            except Exception as e:
                logger.exception(f"Step {spec.command!r} raised")
                result = ExecutionResult.failure(_failure_text(e))

            if result.is_error:
                failed = True
                timed_out = timed_out or result.error_kind == ErrorKind.TIMEOUT
                blocks.append(f"[{spec.command}] failed:\n{result.text}")
            else:
                blocks.append(f"[{spec.command}]:\n{result.text}")

        text = (
            SEQUENCE_DELIMITER.join(blocks) or combined_success_message or "All commands completed"
        )
        if not failed:
            return ExecutionResult(text=text)
        return ExecutionResult.failure(
            text, ErrorKind.TIMEOUT if timed_out else ErrorKind.EXECUTION
        )
