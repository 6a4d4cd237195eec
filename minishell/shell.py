"""The interactive shell: line editing, parsing, redirections and built-in commands."""

from __future__ import annotations

import argparse
import errno
from dataclasses import dataclass, field
from typing import Callable

from .console import Console
from .errors import format_shell_error
from .filesystem import FileSystem, FileSystemError, FileType, OpenFlags

MAX_LINE = 4096
END_OF_TRANSMISSION = "\x04"
_ERASE_CHARS = ("\b", "\x7f")

_TRUNCATE_FLAGS = OpenFlags.WRONLY | OpenFlags.CREAT | OpenFlags.TRUNC
_APPEND_FLAGS = OpenFlags.WRONLY | OpenFlags.CREAT | OpenFlags.APPEND


def _is_printable(char: str) -> bool:
    return " " <= char < "\x7f"


@dataclass
class ParsedCommand:
    """A command line split into its name, arguments and redirections.

    Each redirection is ``(target_fd, file_name, open_flags)``, in the order written.
    """

    command: str | None = None
    args: list[str] = field(default_factory=list)
    redirections: list[tuple[int, str, OpenFlags]] = field(default_factory=list)


class Shell:
    """A small shell over an in-memory file system."""

    def __init__(self, console: Console | None = None, filesystem: FileSystem | None = None):
        self.console = console if console is not None else Console()
        self.filesystem = filesystem if filesystem is not None else FileSystem(self.console)
        self.path: list[str] = []
        self._commands: dict[str, Callable[[list[str]], None]] = {
            "cat": self.cat,
            "ls": self.ls,
            "rm": self.rm,
            "mkdir": self.mkdir,
            "cd": self.cd,
        }

    # -- output helpers -------------------------------------------------------

    def _out(self, data: str | bytes) -> None:
        self.filesystem.write(1, data)

    def _err(self, text: str) -> None:
        self.filesystem.write(2, text)

    def _report(
        self,
        command: str | None,
        operand: str | None,
        err_code: int,
        builtin: bool = False,
    ) -> None:
        self._err(format_shell_error(command, operand, err_code, builtin))

    # -- input ----------------------------------------------------------------

    def prompt(self) -> str:
        """The prompt showing the current directory, such as ``/docs$ ``."""
        return "/" + "/".join(self.path) + "$ "

    def read_command(self) -> str:
        """Read one edited line from the console, echoing what is typed."""
        buffer: list[str] = []
        while True:
            char = self.console.read_char()
            if char in ("\r", "\n"):
                self.console.write_char("\n")
                break
            if char in _ERASE_CHARS and buffer:
                self.console.backspace()
                buffer.pop()
            elif len(buffer) < MAX_LINE and _is_printable(char):
                self.console.write_char(char)
                buffer.append(char)
        return "".join(buffer)

    def parse(self, line: str) -> ParsedCommand:
        """Split a line into words, picking out ``>``, ``>>``, ``2>``, ``2>>`` and ``<``."""
        parsed = ParsedCommand()
        tokens = iter([word for word in line.split(" ") if word])
        for token in tokens:
            if token.startswith(">") or token.startswith("2>"):
                target_fd = 2 if token.startswith("2") else 1
                rest = token[2:] if target_fd == 2 else token[1:]
                if rest.startswith(">"):
                    flags = _APPEND_FLAGS
                    rest = rest[1:]
                else:
                    flags = _TRUNCATE_FLAGS
                name = rest or next(tokens, "")
                parsed.redirections.append((target_fd, name, flags))
            elif token.startswith("<"):
                name = token[1:] or next(tokens, "")
                parsed.redirections.append((0, name, OpenFlags.RDONLY))
            elif parsed.command is None:
                parsed.command = token
            else:
                parsed.args.append(token)
        return parsed

    # -- running --------------------------------------------------------------

    def execute(self, line: str) -> None:
        """Apply the line's redirections, then run its command."""
        self.filesystem.reset_redirections()
        try:
            parsed = self.parse(line)
            for target_fd, name, flags in parsed.redirections:
                try:
                    self.filesystem.redirect(target_fd, name, flags)
                except FileSystemError as exc:
                    self._report(None, name, exc.err_code, builtin=True)
                    return
            if parsed.command is None:
                return
            handler = self._commands.get(parsed.command)
            if handler is None:
                self._err(f"{parsed.command}: command not found\n")
                return
            handler(parsed.args)
        finally:
            self.filesystem.reset_redirections()

    def run(self) -> None:
        """Prompt, read and execute commands until the console input ends."""
        while True:
            self.filesystem.reset_redirections()
            self.console.write(self.prompt())
            try:
                line = self.read_command()
            except EOFError:
                return
            self.execute(line)

    # -- commands -------------------------------------------------------------

    def ls(self, args: list[str]) -> None:
        """List the current directory; arguments are ignored."""
        self._out("".join(f"{name} " for name in self.filesystem.listdir()) + "\n")

    def _copy_to_stdout(self, fd: int) -> None:
        while True:
            chunk = self.filesystem.read(fd, MAX_LINE)
            if not chunk:
                return
            self._out(chunk)

    def _cat_interactive(self) -> None:
        while True:
            buffer: list[str] = []
            try:
                while True:
                    char = self.console.read_char()
                    if not buffer and char == END_OF_TRANSMISSION:
                        return
                    if char in ("\r", "\n", END_OF_TRANSMISSION):
                        if char != END_OF_TRANSMISSION and len(buffer) < MAX_LINE:
                            self.console.write_char("\n")
                            buffer.append("\n")
                        break
                    if char in _ERASE_CHARS and buffer:
                        self.console.backspace()
                        buffer.pop()
                    elif len(buffer) < MAX_LINE and _is_printable(char):
                        self.console.write_char(char)
                        buffer.append(char)
            except EOFError:
                if buffer:
                    self._out("".join(buffer))
                return
            self._out("".join(buffer))

    def cat(self, args: list[str]) -> None:
        """Print files, redirected input, or typed lines up to Ctrl+D."""
        if args:
            for name in args:
                try:
                    fd = self.filesystem.open(name, OpenFlags.RDONLY)
                except FileSystemError as exc:
                    self._report("cat", name, exc.err_code)
                    continue
                try:
                    self._copy_to_stdout(fd)
                except FileSystemError as exc:
                    self._report("cat", name, exc.err_code)
                finally:
                    self.filesystem.close(fd)
            return
        source = self.filesystem.redirected(0)
        if source is not None:
            try:
                self._copy_to_stdout(0)
            except FileSystemError as exc:
                self._report("cat", source.name, exc.err_code)
            return
        self._cat_interactive()

    def rm(self, args: list[str]) -> None:
        """Delete regular files; missing names are ignored."""
        if not args:
            self._err("rm: missing operand\n")
            return
        for name in args:
            try:
                self.filesystem.remove(name)
            except FileSystemError as exc:
                self._report("rm", name, exc.err_code)

    def mkdir(self, args: list[str]) -> None:
        """Create directories in the current directory."""
        if not args:
            self._err("mkdir: missing operand\n")
            return
        for name in args:
            if self.filesystem.find(name) is not None:
                self._report("mkdir", name, errno.EEXIST)
                continue
            try:
                self.filesystem.create(name, FileType.DIRECTORY)
            except FileSystemError as exc:
                self._report("mkdir", name, exc.err_code)

    def cd(self, args: list[str]) -> None:
        """Change into a child directory, or to the parent with ``..``."""
        if not args:
            self._err("-bash: cd: missing operand\n")
            return
        if len(args) > 1:
            self._report("cd", None, errno.E2BIG, builtin=True)
            return
        target = args[0]
        if target == "..":
            current = self.filesystem.cwd
            self.filesystem.cwd = current.parent if current.parent is not None else self.filesystem.root
            if self.path:
                self.path.pop()
            return
        entry = self.filesystem.find(target)
        if entry is None:
            self._report("cd", target, errno.ENOENT, builtin=True)
            return
        if not entry.is_dir:
            self._report("cd", target, errno.ENOTDIR, builtin=True)
            return
        self.filesystem.cwd = entry
        self.path.append(entry.name)


def main(argv: list[str] | None = None) -> int:
    """Start an interactive shell on the terminal."""
    parser = argparse.ArgumentParser(
        prog="minishell",
        description="A small shell over an in-memory file system.",
    )
    parser.parse_args(argv)
    console = Console()
    Shell(console, FileSystem(console)).run()
    return 0