"""Working directory checks and Windows path translation."""

import re

_DRIVE_LETTER = re.compile(r"^[A-Za-z]:")
# \s\Projects\x as written by MSYS-style tooling for s:\Projects\x
_MOUNTED_DRIVE = re.compile(r"^\\([A-Za-z])(?:\\(.*))?$")
_DRIVE_PATH = re.compile(r"^([A-Za-z]:)(.*)$")


def is_absolute(path: str) -> bool:
    """Return True if `path` looks absolute.

    Accepts a drive letter prefix (``C:``) or a leading forward or backward
    slash. The filesystem is never consulted.
    """
    return bool(_DRIVE_LETTER.match(path)) or path.startswith(("/", "\\"))


def not_absolute_message(path: str) -> str:
    return f'Working directory "{path}" is not an absolute path'


def to_windows_separators(path: str) -> str:
    return path.replace("/", "\\")


def split_drive(path: str) -> tuple[str, str]:
    """Split a path into a Windows drive and the directory on that drive.

    Both ``/s/Projects/x`` and ``s:\\Projects\\x`` yield
    ``("s:", "\\Projects\\x")``. Paths without a drive return an empty drive.
    """
    native = to_windows_separators(path)

    match = _MOUNTED_DRIVE.match(native)
    if match:
        return f"{match.group(1)}:", "\\" + (match.group(2) or "")

    match = _DRIVE_PATH.match(native)
    if match:
        return match.group(1), match.group(2) or "\\"

    return "", native


def windows_cd_command(command: str, working_dir: str) -> str:
    """Prefix `command` so cmd.exe switches drive and directory first."""
    drive, directory = split_drive(working_dir)
    if drive:
        return f'{drive} && cd "{directory}" && {command}'
    return f'cd "{directory}" && {command}'
