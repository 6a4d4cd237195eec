"""Character-oriented terminal used as the shell's serial line."""

from __future__ import annotations

import sys
from typing import TextIO


class Console:
    """Reads and writes single characters on a pair of text streams."""

    def __init__(self, input_stream: TextIO | None = None, output_stream: TextIO | None = None):
        self.input_stream = input_stream if input_stream is not None else sys.stdin
        self.output_stream = output_stream if output_stream is not None else sys.stdout

    def read_char(self) -> str:
        """Return the next character; raise EOFError when the input is exhausted."""
        char = self.input_stream.read(1)
        if not char:
            raise EOFError("console input closed")
        return char

    def write_char(self, char: str) -> None:
        """Write one character."""
        self.write(char)

    def write(self, text: str) -> None:
        """Write text and flush it out immediately."""
        if not text:
            return
        self.output_stream.write(text)
        flush = getattr(self.output_stream, "flush", None)
        if flush is not None:
            flush()

    def backspace(self) -> None:
        """Erase the character before the cursor."""
        self.write("\b \b")