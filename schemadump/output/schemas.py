from __future__ import annotations

from typing import Dict, NamedTuple

from ..analysis.types import Class, ClassMetadataKind, Enum, SchemaMap, SchemaModule
from ..core.errors import SerializationError
from .common import (
    CPP_NAMESPACE,
    CS_NAMESPACE,
    RS_NAMESPACE,
    cs_module_ident,
    module_ident,
    to_json_text,
    write_hpp_preamble,
    write_rs_preamble,
)
from .formatter import Formatter
from .naming import hex_literal, sanitize_name


class EnumType(NamedTuple):
    bits: int
    cs: str
    hpp: str
    rs: str
    json: str


_ENUM_TYPES: Dict[int, EnumType] = {
    1: EnumType(8, "byte", "uint8_t", "u8", "uint8"),
    2: EnumType(16, "ushort", "uint16_t", "u16", "uint16"),
    4: EnumType(32, "uint", "uint32_t", "u32", "uint32"),
    8: EnumType(64, "ulong", "uint64_t", "u64", "uint64"),
}


def enum_type(enum: Enum) -> EnumType:
    try:
        return _ENUM_TYPES[enum.alignment]
    except KeyError:
        raise SerializationError(
            f"enum {enum.name} has unsupported alignment {enum.alignment}"
        ) from None


def enum_value(value: int, bits: int) -> str:
    """Render a member value as an unsigned literal of the enum's width."""
    return hex_literal(value & ((1 << bits) - 1))


def _write_module_header(fmt: Formatter, module_name: str, module: SchemaModule) -> None:
    fmt.writeln(f"// Module: {module_name}")
    fmt.writeln(f"// Class count: {len(module.classes)}")
    fmt.writeln(f"// Enum count: {len(module.enums)}")


def _write_enum_header(fmt: Formatter, enum: Enum) -> None:
    fmt.writeln(f"// Alignment: {enum.alignment}")
    fmt.writeln(f"// Members count: {len(enum.members)}")


def _write_class_header(fmt: Formatter, cls: Class) -> None:
    fmt.writeln(f"// Parent: {cls.parent if cls.parent else 'None'}")
    fmt.writeln(f"// Fields count: {len(cls.fields)}")

    if not cls.metadata:
        return

    fmt.writeln("//")
    fmt.writeln("// Metadata:")
    for metadata in cls.metadata:
        if metadata.kind is ClassMetadataKind.NETWORK_VAR_NAMES:
            fmt.writeln(f"// NetworkVarNames: {metadata.name} ({metadata.type_name})")
        elif metadata.kind is ClassMetadataKind.NETWORK_CHANGE_CALLBACK:
            fmt.writeln(f"// NetworkChangeCallback: {metadata.name}")
        else:
            fmt.writeln(f"// {metadata.name}")


def _write_enum_members(fmt: Formatter, enum: Enum, bits: int) -> None:
    last = len(enum.members) - 1
    for i, member in enumerate(enum.members):
        sep = "," if i < last else ""
        fmt.writeln(f"{sanitize_name(member.name)} = {enum_value(member.value, bits)}{sep}")


def _write_rs_enum_members(fmt: Formatter, enum: Enum, bits: int) -> None:
    # rust rejects two variants with the same discriminant, first name wins
    seen = set()
    for member in enum.members:
        literal = enum_value(member.value, bits)
        if literal in seen:
            continue
        seen.add(literal)
        fmt.writeln(f"{sanitize_name(member.name)} = {literal},")


def _iter_entries(module: SchemaModule):
    # enums first so source formats declare them before the classes using them
    for enum in module.enums:
        yield enum
    for cls in module.classes:
        yield cls


def to_cs(schemas: SchemaMap, results, indent_size: int) -> str:
    fmt = Formatter(indent_size)
    with fmt.block(f"namespace {CS_NAMESPACE}.Schemas"):
        for i, (module_name, module) in enumerate(schemas.items()):
            if i:
                fmt.writeln()
            _write_module_header(fmt, module_name, module)
            with fmt.block(f"public static class {cs_module_ident(module_name)}"):
                for j, entry in enumerate(_iter_entries(module)):
                    if j:
                        fmt.writeln()
                    if isinstance(entry, Enum):
                        ty = enum_type(entry)
                        _write_enum_header(fmt, entry)
                        with fmt.block(f"public enum {sanitize_name(entry.name)} : {ty.cs}"):
                            _write_enum_members(fmt, entry, ty.bits)
                    else:
                        _write_class_header(fmt, entry)
                        with fmt.block(f"public static class {sanitize_name(entry.name)}"):
                            for field in entry.fields:
                                fmt.writeln(
                                    f"public const nint {sanitize_name(field.name)} = "
                                    f"{hex_literal(field.offset)}; // {field.type_name}"
                                )
    return fmt.getvalue()


def to_hpp(schemas: SchemaMap, results, indent_size: int) -> str:
    fmt = Formatter(indent_size)
    write_hpp_preamble(fmt, "cstdint")
    with fmt.block(f"namespace {CPP_NAMESPACE}"):
        with fmt.block("namespace schemas"):
            for i, (module_name, module) in enumerate(schemas.items()):
                if i:
                    fmt.writeln()
                _write_module_header(fmt, module_name, module)
                with fmt.block(f"namespace {module_ident(module_name)}"):
                    for j, entry in enumerate(_iter_entries(module)):
                        if j:
                            fmt.writeln()
                        if isinstance(entry, Enum):
                            ty = enum_type(entry)
                            _write_enum_header(fmt, entry)
                            with fmt.block(
                                f"enum class {sanitize_name(entry.name)} : {ty.hpp}",
                                semicolon=True,
                            ):
                                _write_enum_members(fmt, entry, ty.bits)
                        else:
                            _write_class_header(fmt, entry)
                            with fmt.block(f"namespace {sanitize_name(entry.name)}"):
                                for field in entry.fields:
                                    fmt.writeln(
                                        f"constexpr std::ptrdiff_t {sanitize_name(field.name)} = "
                                        f"{hex_literal(field.offset)}; // {field.type_name}"
                                    )
    return fmt.getvalue()


def to_json(schemas: SchemaMap, results, indent_size: int) -> str:
    content = {}
    for module_name, module in schemas.items():
        classes = {
            cls.name: {
                "parent": cls.parent,
                "fields": {field.name: field.offset for field in cls.fields},
                "metadata": [metadata.to_dict() for metadata in cls.metadata],
            }
            for cls in module.classes
        }
        enums = {
            enum.name: {
                "alignment": enum.alignment,
                "type": enum_type(enum).json,
                "members": {member.name: member.value for member in enum.members},
            }
            for enum in module.enums
        }
        content[module_name] = {"classes": classes, "enums": enums}
    return to_json_text(content)


def to_rs(schemas: SchemaMap, results, indent_size: int) -> str:
    fmt = Formatter(indent_size)
    write_rs_preamble(fmt)
    with fmt.block(f"pub mod {RS_NAMESPACE}"):
        with fmt.block("pub mod schemas"):
            for i, (module_name, module) in enumerate(schemas.items()):
                if i:
                    fmt.writeln()
                _write_module_header(fmt, module_name, module)
                with fmt.block(f"pub mod {module_ident(module_name)}"):
                    for j, entry in enumerate(_iter_entries(module)):
                        if j:
                            fmt.writeln()
                        if isinstance(entry, Enum):
                            ty = enum_type(entry)
                            _write_enum_header(fmt, entry)
                            # repr is not allowed on a zero-variant enum
                            if entry.members:
                                fmt.writeln(f"#[repr({ty.rs})]")
                            with fmt.block(f"pub enum {sanitize_name(entry.name)}"):
                                _write_rs_enum_members(fmt, entry, ty.bits)
                        else:
                            _write_class_header(fmt, entry)
                            with fmt.block(f"pub mod {sanitize_name(entry.name)}"):
                                for field in entry.fields:
                                    fmt.writeln(
                                        f"pub const {sanitize_name(field.name)}: usize = "
                                        f"{hex_literal(field.offset)}; // {field.type_name}"
                                    )
    return fmt.getvalue()
