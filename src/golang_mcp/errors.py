"""Exceptions raised by execution strategies."""


class CommandError(RuntimeError):
    """An external command could not be started or exited non-zero."""

    def __init__(
        self,
        message: str,
        stdout: str = "",
        stderr: str = "",
        returncode: int | None = None,
    ):
        super().__init__(message)
        self.stdout = stdout
        self.stderr = stderr
        self.returncode = returncode


class CommandTimeoutError(CommandError):
    """An external command exceeded the configured timeout."""
