from __future__ import annotations

from contextlib import contextmanager
from io import StringIO
from typing import Iterator


class Formatter:
    """Text sink that prefixes each line with the current indentation."""

    def __init__(self, indent_size: int):
        if indent_size < 0:
            raise ValueError(f"indent size must be non-negative, got {indent_size}")
        self.indent_size = indent_size
        self.level = 0
        self._buf = StringIO()
        self._line_start = True

    def write(self, text: str) -> None:
        for chunk in text.splitlines(keepends=True):
            # blank lines never carry indentation
            if self._line_start and chunk != "\n":
                self._buf.write(" " * (self.indent_size * self.level))
            self._buf.write(chunk)
            self._line_start = chunk.endswith("\n")

    def writeln(self, text: str = "") -> None:
        self.write(text + "\n")

    @contextmanager
    def indent(self) -> Iterator["Formatter"]:
        self.level += 1
        try:
            yield self
        finally:
            self.level -= 1

    @contextmanager
    def block(self, heading: str, semicolon: bool = False) -> Iterator["Formatter"]:
        """Write ``heading {``, indent the body, then close the brace."""
        self.writeln(f"{heading} {{")
        with self.indent():
            yield self
        self.writeln("};" if semicolon else "}")

    def getvalue(self) -> str:
        return self._buf.getvalue()
