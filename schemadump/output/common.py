from __future__ import annotations

import json
from typing import Any, Mapping, Sequence

from ..core.errors import SerializationError
from .formatter import Formatter
from .naming import format_module_name, hex_literal, sanitize_name, to_pascal_case

CS_NAMESPACE = "SchemaDump"
CPP_NAMESPACE = "schema_dump"
RS_NAMESPACE = "schema_dump"

RS_ALLOW = "#![allow(non_upper_case_globals, non_camel_case_types, non_snake_case, unused)]"


def write_hpp_preamble(fmt: Formatter, *includes: str) -> None:
    fmt.writeln("#pragma once")
    fmt.writeln()
    for include in ("cstddef",) + includes:
        fmt.writeln(f"#include <{include}>")
    fmt.writeln()


def write_rs_preamble(fmt: Formatter) -> None:
    fmt.writeln(RS_ALLOW)
    fmt.writeln()


def cs_module_ident(module_name: str) -> str:
    return to_pascal_case(sanitize_name(format_module_name(module_name)))


def module_ident(module_name: str) -> str:
    return sanitize_name(format_module_name(module_name))


def to_json_text(obj: Any) -> str:
    try:
        return json.dumps(obj, indent=2, ensure_ascii=False) + "\n"
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"unable to encode json: {exc}") from exc


def constants_to_cs(section: str, mapping: Mapping[str, Sequence[Any]], indent_size: int) -> str:
    fmt = Formatter(indent_size)
    with fmt.block(f"namespace {CS_NAMESPACE}.{to_pascal_case(section)}"):
        for i, (module_name, entries) in enumerate(mapping.items()):
            if i:
                fmt.writeln()
            fmt.writeln(f"// Module: {module_name}")
            with fmt.block(f"public static class {cs_module_ident(module_name)}"):
                for entry in entries:
                    fmt.writeln(
                        f"public const nint {sanitize_name(entry.name)} = {hex_literal(entry.value)};"
                    )
    return fmt.getvalue()


def constants_to_hpp(section: str, mapping: Mapping[str, Sequence[Any]], indent_size: int) -> str:
    fmt = Formatter(indent_size)
    write_hpp_preamble(fmt)
    with fmt.block(f"namespace {CPP_NAMESPACE}"):
        with fmt.block(f"namespace {section}"):
            for i, (module_name, entries) in enumerate(mapping.items()):
                if i:
                    fmt.writeln()
                fmt.writeln(f"// Module: {module_name}")
                with fmt.block(f"namespace {module_ident(module_name)}"):
                    for entry in entries:
                        fmt.writeln(
                            f"constexpr std::ptrdiff_t {sanitize_name(entry.name)} = {hex_literal(entry.value)};"
                        )
    return fmt.getvalue()


def constants_to_json(mapping: Mapping[str, Sequence[Any]]) -> str:
    content = {
        module_name: {entry.name: entry.value for entry in entries}
        for module_name, entries in mapping.items()
    }
    return to_json_text(content)


def constants_to_rs(section: str, mapping: Mapping[str, Sequence[Any]], indent_size: int) -> str:
    fmt = Formatter(indent_size)
    write_rs_preamble(fmt)
    with fmt.block(f"pub mod {RS_NAMESPACE}"):
        with fmt.block(f"pub mod {section}"):
            for i, (module_name, entries) in enumerate(mapping.items()):
                if i:
                    fmt.writeln()
                fmt.writeln(f"// Module: {module_name}")
                with fmt.block(f"pub mod {module_ident(module_name)}"):
                    for entry in entries:
                        fmt.writeln(
                            f"pub const {sanitize_name(entry.name)}: usize = {hex_literal(entry.value)};"
                        )
    return fmt.getvalue()
