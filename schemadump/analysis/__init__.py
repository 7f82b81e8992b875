from .types import (
    Button,
    Class,
    ClassField,
    ClassMetadata,
    ClassMetadataKind,
    Enum,
    EnumMember,
    Interface,
    InterfaceMap,
    Offset,
    OffsetMap,
    SchemaMap,
    SchemaModule,
)

__all__ = [
    "Button",
    "Class",
    "ClassField",
    "ClassMetadata",
    "ClassMetadataKind",
    "Enum",
    "EnumMember",
    "Interface",
    "InterfaceMap",
    "Offset",
    "OffsetMap",
    "SchemaMap",
    "SchemaModule",
]
