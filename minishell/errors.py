"""Human-readable error messages for shell commands."""

from __future__ import annotations

import errno

_MESSAGES = {
    errno.ENOENT: "no such file or directory",
    errno.EISDIR: "is a directory",
    errno.ENOTDIR: "is not a directory",
    errno.EEXIST: "file exists",
    errno.ENOSPC: "memory is full",
    errno.EBADF: "bad file descriptor",
    errno.EMFILE: "too many open files",
    errno.EFAULT: "bad address",
    errno.E2BIG: "too many arguments",
}

BUILTIN_PREFIX = "-bash: "


def error_message(err_code: int) -> str:
    """Return the short description the shell prints for an errno value."""
    return _MESSAGES.get(err_code, f"unknown error ({err_code})")


def format_shell_error(
    command: str | None,
    operand: str | None,
    err_code: int,
    builtin: bool = False,
) -> str:
    """Build a full error line such as ``cat: notes: no such file or directory``.

    Builtin errors (redirections and ``cd``) carry the ``-bash: `` prefix.
    """
    parts = []
    if builtin:
        parts.append(BUILTIN_PREFIX)
    if command is not None:
        parts.append(f"{command}: ")
    if operand is not None:
        parts.append(f"{operand}: ")
    parts.append(error_message(err_code))
    parts.append("\n")
    return "".join(parts)