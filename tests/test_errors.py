import errno

import pytest

from minishell.errors import error_message, format_shell_error


@pytest.mark.parametrize(
    "code, message",
    [
        (errno.ENOENT, "no such file or directory"),
        (errno.EISDIR, "is a directory"),
        (errno.ENOTDIR, "is not a directory"),
        (errno.EEXIST, "file exists"),
        (errno.ENOSPC, "memory is full"),
        (errno.EBADF, "bad file descriptor"),
        (errno.EMFILE, "too many open files"),
        (errno.EFAULT, "bad address"),
        (errno.E2BIG, "too many arguments"),
    ],
)
def test_known_messages(code, message):
    assert error_message(code) == message


def test_unknown_code_mentions_value():
    assert error_message(9999) == "unknown error (9999)"


def test_command_and_operand():
    line = format_shell_error("cat", "notes", errno.ENOENT)
    assert line == "cat: notes: " + error_message(errno.ENOENT) + "\n"


def test_builtin_prefix_without_command():
    line = format_shell_error(None, "out", errno.EISDIR, True)
    assert line == "-bash: out: is a directory\n"


def test_builtin_without_operand():
    line = format_shell_error("cd", None, errno.E2BIG, builtin=True)
    assert line == "-bash: cd: too many arguments\n"


def test_non_builtin_has_no_prefix():
    line = format_shell_error("rm", "dir", errno.EISDIR, builtin=False)
    assert not line.startswith("-bash")
    assert line.endswith("\n")