"""Ways of spawning a shell command.

A strategy takes a `PreparedCommand` and either returns the captured output
of a zero exit or raises `CommandError`. The executor tries its strategies
in order, so a command line that trips over one spawning primitive still
gets a chance with the next.

Each command starts in its own process group so that a timeout kills the
shell together with everything it started.
"""

import asyncio
import logging
import os
import signal
import subprocess
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

from golang_mcp.errors import CommandError, CommandTimeoutError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PreparedCommand:
    """A shell command line plus the native cwd to run it in, if any."""

    command: str
    cwd: str | None = None


@dataclass(frozen=True)
class CommandOutput:
    stdout: str = ""
    stderr: str = ""
    returncode: int = 0


class ExecutionStrategy(Protocol):
    name: str

    async def run(
        self, prepared: PreparedCommand, timeout: float | None = None
    ) -> CommandOutput: ...


def is_windows(platform: str | None = None) -> bool:
    return (platform or sys.platform).startswith("win")


def _group_options() -> dict[str, Any]:
    if is_windows():
        return {"creationflags": subprocess.CREATE_NEW_PROCESS_GROUP}
    return {"start_new_session": True}


def kill_process_tree(pid: int) -> None:
    """Kill the process group led by `pid`."""
    if is_windows():
        subprocess.run(
            ["taskkill", "/F", "/T", "/PID", str(pid)],
            capture_output=True,
            check=False,
        )
        return
    try:
        os.killpg(pid, signal.SIGKILL)
    except ProcessLookupError:
        pass


def _decode(data: bytes | str | None) -> str:
    if data is None:
        return ""
    if isinstance(data, bytes):
        return data.decode("utf-8", errors="replace")
    return data


def _exit_message(command: str, returncode: int | None) -> str:
    return f"Command failed with exit code {returncode}: {command}"


def _timeout_message(command: str, timeout: float | None) -> str:
    return f"Command timed out after {timeout}s: {command}"


def _start_failure(command: str, error: OSError) -> CommandError:
    return CommandError(f"Failed to start command {command!r}: {error}")


class SyncStrategy:
    """Blocking `subprocess.Popen`, moved off the event loop with `to_thread`."""

    name = "sync"

    def _run_blocking(
        self, prepared: PreparedCommand, timeout: float | None
    ) -> CommandOutput:
        try:
            process = subprocess.Popen(
                prepared.command,
                shell=True,
                cwd=prepared.cwd,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors="replace",
                **_group_options(),
            )
        except OSError as e:
            raise _start_failure(prepared.command, e) from e

        try:
            stdout, stderr = process.communicate(timeout=timeout)
        except subprocess.TimeoutExpired as e:
            kill_process_tree(process.pid)
            stdout, stderr = process.communicate()
            raise CommandTimeoutError(
                _timeout_message(prepared.command, timeout),
                stdout=_decode(stdout),
                stderr=_decode(stderr),
            ) from e

        if process.returncode != 0:
            raise CommandError(
                _exit_message(prepared.command, process.returncode),
                stdout=_decode(stdout),
                stderr=_decode(stderr),
                returncode=process.returncode,
            )

        return CommandOutput(
            stdout=_decode(stdout),
            stderr=_decode(stderr),
            returncode=process.returncode,
        )

    async def run(
        self, prepared: PreparedCommand, timeout: float | None = None
    ) -> CommandOutput:
        return await asyncio.to_thread(self._run_blocking, prepared, timeout)


class AsyncStrategy:
    """`asyncio.create_subprocess_shell`, awaited until the child exits."""

    name = "async"

    async def run(
        self, prepared: PreparedCommand, timeout: float | None = None
    ) -> CommandOutput:
        try:
            process = await asyncio.create_subprocess_shell(
                prepared.command,
                cwd=prepared.cwd,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                **_group_options(),
            )
        except OSError as e:
            raise _start_failure(prepared.command, e) from e

        # Readers outlive a timeout so partial output survives the kill.
        readers = asyncio.gather(process.stdout.read(), process.stderr.read())
        try:
            await asyncio.wait_for(process.wait(), timeout)
        except asyncio.TimeoutError as e:
            kill_process_tree(process.pid)
            await process.wait()
            stdout, stderr = await readers
            raise CommandTimeoutError(
                _timeout_message(prepared.command, timeout),
                stdout=_decode(stdout),
                stderr=_decode(stderr),
            ) from e

        stdout, stderr = await readers
        if process.returncode != 0:
            raise CommandError(
                _exit_message(prepared.command, process.returncode),
                stdout=_decode(stdout),
                stderr=_decode(stderr),
                returncode=process.returncode,
            )

        return CommandOutput(
            stdout=_decode(stdout),
            stderr=_decode(stderr),
            returncode=process.returncode,
        )


STRATEGIES: dict[str, type[ExecutionStrategy]] = {
    SyncStrategy.name: SyncStrategy,
    AsyncStrategy.name: AsyncStrategy,
}

# Both spawning primitives exist everywhere; on Windows they differ in how
# cmd.exe quoting and `cd` prefixes behave, which is why both are tried.
PLATFORM_STRATEGIES: dict[str, tuple[str, ...]] = {
    "win32": ("sync", "async"),
}
DEFAULT_STRATEGIES: tuple[str, ...] = ("sync", "async")


def default_strategy_names(platform: str | None = None) -> tuple[str, ...]:
    return PLATFORM_STRATEGIES.get(platform or sys.platform, DEFAULT_STRATEGIES)


def build_strategies(names: Sequence[str]) -> list[ExecutionStrategy]:
    """Instantiate strategies by name, keeping the given order."""
    strategies = []
    for name in names:
        if name not in STRATEGIES:
            raise ValueError(
                f"Unknown execution strategy {name!r}; expected one of {sorted(STRATEGIES)}"
            )
        strategies.append(STRATEGIES[name]())
    if not strategies:
        raise ValueError("At least one execution strategy is required")
    logger.debug(f"Execution strategies: {[s.name for s in strategies]}")
    return strategies
