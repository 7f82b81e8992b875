from __future__ import annotations

import pytest

from schemadump.output.formatter import Formatter


def test_block_indents_body() -> None:
    fmt = Formatter(4)
    with fmt.block("namespace a"):
        fmt.writeln("int x;")
        with fmt.block("struct b", semicolon=True):
            fmt.writeln("int y;")
    assert fmt.getvalue() == (
        "namespace a {\n"
        "    int x;\n"
        "    struct b {\n"
        "        int y;\n"
        "    };\n"
        "}\n"
    )


def test_blank_lines_have_no_indent() -> None:
    fmt = Formatter(2)
    with fmt.indent():
        fmt.writeln("a")
        fmt.writeln()
        fmt.write("b\n\nc\n")
    assert fmt.getvalue() == "  a\n\n  b\n\n  c\n"


def test_partial_writes_share_a_line() -> None:
    fmt = Formatter(3)
    with fmt.indent():
        fmt.write("a")
        fmt.write("b")
        fmt.writeln(";")
    assert fmt.getvalue() == "   ab;\n"


def test_negative_indent_rejected() -> None:
    with pytest.raises(ValueError):
        Formatter(-1)
