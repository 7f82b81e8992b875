from __future__ import annotations

from typing import List

from ..analysis.types import Button
from .common import (
    CPP_NAMESPACE,
    CS_NAMESPACE,
    RS_NAMESPACE,
    to_json_text,
    write_hpp_preamble,
    write_rs_preamble,
)
from .formatter import Formatter
from .naming import MODULE_SUFFIX, hex_literal, sanitize_name

# buttons are always read out of the client module
BUTTONS_MODULE = "client" + (MODULE_SUFFIX or "")


def to_cs(buttons: List[Button], results, indent_size: int) -> str:
    fmt = Formatter(indent_size)
    with fmt.block(f"namespace {CS_NAMESPACE}"):
        fmt.writeln(f"// Module: {BUTTONS_MODULE}")
        with fmt.block("public static class Buttons"):
            for button in buttons:
                fmt.writeln(
                    f"public const nint {sanitize_name(button.name)} = {hex_literal(button.value)};"
                )
    return fmt.getvalue()


def to_hpp(buttons: List[Button], results, indent_size: int) -> str:
    fmt = Formatter(indent_size)
    write_hpp_preamble(fmt)
    with fmt.block(f"namespace {CPP_NAMESPACE}"):
        fmt.writeln(f"// Module: {BUTTONS_MODULE}")
        with fmt.block("namespace buttons"):
            for button in buttons:
                fmt.writeln(
                    f"constexpr std::ptrdiff_t {sanitize_name(button.name)} = {hex_literal(button.value)};"
                )
    return fmt.getvalue()


def to_json(buttons: List[Button], results, indent_size: int) -> str:
    content = {button.name: button.value for button in buttons}
    return to_json_text({BUTTONS_MODULE: content})


def to_rs(buttons: List[Button], results, indent_size: int) -> str:
    fmt = Formatter(indent_size)
    write_rs_preamble(fmt)
    with fmt.block(f"pub mod {RS_NAMESPACE}"):
        fmt.writeln(f"// Module: {BUTTONS_MODULE}")
        with fmt.block("pub mod buttons"):
            for button in buttons:
                fmt.writeln(
                    f"pub const {sanitize_name(button.name)}: usize = {hex_literal(button.value)};"
                )
    return fmt.getvalue()
