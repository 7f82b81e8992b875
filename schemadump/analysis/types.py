from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum as _Enum
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Button:
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Button":
        return cls(name=str(data["name"]), value=int(data["value"]))


@dataclass(frozen=True)
class Interface:
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Interface":
        return cls(name=str(data["name"]), value=int(data["value"]))


@dataclass(frozen=True)
class Offset:
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Offset":
        return cls(name=str(data["name"]), value=int(data["value"]))


class ClassMetadataKind(_Enum):
    UNKNOWN = "unknown"
    NETWORK_CHANGE_CALLBACK = "network_change_callback"
    NETWORK_VAR_NAMES = "network_var_names"


@dataclass(frozen=True)
class ClassMetadata:
    kind: ClassMetadataKind
    name: str
    type_name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind.value, "name": self.name, "type_name": self.type_name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassMetadata":
        type_name = data.get("type_name")
        return cls(
            kind=ClassMetadataKind(data.get("kind", "unknown")),
            name=str(data["name"]),
            type_name=None if type_name is None else str(type_name),
        )


@dataclass(frozen=True)
class ClassField:
    name: str
    type_name: str
    offset: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "type_name": self.type_name, "offset": self.offset}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ClassField":
        return cls(
            name=str(data["name"]),
            type_name=str(data["type_name"]),
            offset=int(data["offset"]),
        )


@dataclass
class Class:
    name: str
    module_name: str
    parent: Optional[str] = None
    metadata: List[ClassMetadata] = field(default_factory=list)
    fields: List[ClassField] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "module_name": self.module_name,
            "parent": self.parent,
            "metadata": [m.to_dict() for m in self.metadata],
            "fields": [f.to_dict() for f in self.fields],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Class":
        parent = data.get("parent")
        return cls(
            name=str(data["name"]),
            module_name=str(data["module_name"]),
            parent=None if parent is None else str(parent),
            metadata=[ClassMetadata.from_dict(m) for m in data.get("metadata", [])],
            fields=[ClassField.from_dict(f) for f in data.get("fields", [])],
        )


@dataclass(frozen=True)
class EnumMember:
    name: str
    value: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EnumMember":
        return cls(name=str(data["name"]), value=int(data["value"]))


@dataclass
class Enum:
    name: str
    alignment: int
    size: int
    members: List[EnumMember] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "alignment": self.alignment,
            "size": self.size,
            "members": [m.to_dict() for m in self.members],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Enum":
        return cls(
            name=str(data["name"]),
            alignment=int(data["alignment"]),
            size=int(data.get("size", 0)),
            members=[EnumMember.from_dict(m) for m in data.get("members", [])],
        )


@dataclass
class SchemaModule:
    """Classes and enums registered by one module's type scope."""

    classes: List[Class] = field(default_factory=list)
    enums: List[Enum] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "classes": [c.to_dict() for c in self.classes],
            "enums": [e.to_dict() for e in self.enums],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaModule":
        return cls(
            classes=[Class.from_dict(c) for c in data.get("classes", [])],
            enums=[Enum.from_dict(e) for e in data.get("enums", [])],
        )


InterfaceMap = Dict[str, List[Interface]]
OffsetMap = Dict[str, List[Offset]]
SchemaMap = Dict[str, SchemaModule]
