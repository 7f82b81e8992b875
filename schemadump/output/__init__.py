from __future__ import annotations

import json
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

import msgpack
from redlog import field as log_field
from redlog import get_logger

from ..analysis.types import Button, Interface, InterfaceMap, Offset, OffsetMap, SchemaMap, SchemaModule
from ..core.errors import (
    DumperError,
    MemoryReadError,
    ModuleLookupError,
    OutputError,
    SerializationError,
    UnreachableFormatError,
)
from . import buttons, interfaces, offsets, schemas
from .common import to_json_text
from .formatter import Formatter
from .naming import format_module_name, sanitize_name

ATTRIBUTION = "Generated using schemadump"

BUILD_NUMBER_OFFSET = "dwBuildNumber"

INFO_FILE_STEM = "info"


class ItemKind(Enum):
    BUTTONS = "buttons"
    INTERFACES = "interfaces"
    OFFSETS = "offsets"
    SCHEMAS = "schemas"


class FileFormat(Enum):
    CS = "cs"
    HPP = "hpp"
    JSON = "json"
    RS = "rs"


# line comment used for the banner, None suppresses it
BANNER_COMMENTS: Dict[FileFormat, Optional[str]] = {
    FileFormat.CS: "//",
    FileFormat.HPP: "//",
    FileFormat.JSON: None,
    FileFormat.RS: "//",
}

Generator = Callable[[Any, "Results", int], str]

_ENCODERS = {
    ItemKind.BUTTONS: buttons,
    ItemKind.INTERFACES: interfaces,
    ItemKind.OFFSETS: offsets,
    ItemKind.SCHEMAS: schemas,
}

_GENERATORS: Dict[ItemKind, Dict[FileFormat, Generator]] = {
    kind: {
        FileFormat.CS: encoder.to_cs,
        FileFormat.HPP: encoder.to_hpp,
        FileFormat.JSON: encoder.to_json,
        FileFormat.RS: encoder.to_rs,
    }
    for kind, encoder in _ENCODERS.items()
}


def resolve_format(file_ext: Union[str, FileFormat]) -> FileFormat:
    if isinstance(file_ext, FileFormat):
        return file_ext
    try:
        return FileFormat(file_ext)
    except ValueError:
        raise UnreachableFormatError(f"unknown output format: {file_ext!r}") from None


@dataclass(frozen=True)
class Item:
    """Borrowed view over one collection of a :class:`Results`."""

    kind: ItemKind
    collection: Any

    @classmethod
    def buttons(cls, collection: List[Button]) -> "Item":
        return cls(ItemKind.BUTTONS, collection)

    @classmethod
    def interfaces(cls, collection: InterfaceMap) -> "Item":
        return cls(ItemKind.INTERFACES, collection)

    @classmethod
    def offsets(cls, collection: OffsetMap) -> "Item":
        return cls(ItemKind.OFFSETS, collection)

    @classmethod
    def schemas(cls, collection: SchemaMap) -> "Item":
        return cls(ItemKind.SCHEMAS, collection)

    def generate(
        self, results: "Results", indent_size: int, file_ext: Union[str, FileFormat]
    ) -> str:
        file_format = resolve_format(file_ext)
        generator = _GENERATORS[self.kind][file_format]
        content = generator(self.collection, results, indent_size)
        return results.banner(file_format) + content


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


_FRACTION = re.compile(r"\.(\d+)")


def parse_timestamp(text: str) -> datetime:
    """Parse an RFC 3339 timestamp, including the `Z` and nanosecond forms."""
    text = text.strip()
    if text[-1:] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    # fromisoformat only takes 3 or 6 fraction digits before 3.11
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    return datetime.fromisoformat(text)


@dataclass
class Results:
    """Everything captured in one run, plus the time it was captured."""

    buttons: List[Button] = field(default_factory=list)
    interfaces: InterfaceMap = field(default_factory=dict)
    offsets: OffsetMap = field(default_factory=dict)
    schemas: SchemaMap = field(default_factory=dict)
    timestamp: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        if self.timestamp.tzinfo is None:
            self.timestamp = self.timestamp.replace(tzinfo=timezone.utc)
        else:
            self.timestamp = self.timestamp.astimezone(timezone.utc)
        self.log = get_logger("schemadump.output")

    def items(self) -> List[Tuple[str, Item]]:
        return [
            (ItemKind.BUTTONS.value, Item.buttons(self.buttons)),
            (ItemKind.INTERFACES.value, Item.interfaces(self.interfaces)),
            (ItemKind.OFFSETS.value, Item.offsets(self.offsets)),
            (ItemKind.SCHEMAS.value, Item.schemas(self.schemas)),
        ]

    def banner(self, file_format: FileFormat) -> str:
        prefix = BANNER_COMMENTS[file_format]
        if prefix is None:
            return ""
        stamp = self.timestamp.strftime("%Y-%m-%d %H:%M:%S.%f UTC")
        return f"{prefix} {ATTRIBUTION}\n{prefix} {stamp}\n\n"

    def dump_all(self, process, out_dir: Union[str, Path], indent_size: int) -> List[Path]:
        """Write every collection in every format, then ``info.json``.

        Stops at the first failure; files already written are left in place.
        """
        out_dir = Path(out_dir)
        written: List[Path] = []

        self.log.inf(
            "dumping results",
            log_field("out_dir", str(out_dir)),
            log_field("indent", indent_size),
        )

        for file_name, item in self.items():
            for file_format in FileFormat:
                try:
                    content = item.generate(self, indent_size, file_format)
                    path = self.dump_file(out_dir, file_name, file_format.value, content)
                except (DumperError, OSError, ValueError) as exc:
                    raise OutputError(f"{file_name}.{file_format.value}", exc) from exc
                written.append(path)

        written.append(self.dump_info_file(process, out_dir))

        self.log.inf("dump complete", log_field("files", len(written)))
        return written

    def dump_file(self, out_dir: Union[str, Path], file_name: str, file_ext: str, content: str) -> Path:
        file_path = Path(out_dir) / f"{file_name}.{file_ext}"
        tmp_path = file_path.with_name(file_path.name + ".tmp")

        try:
            with open(tmp_path, "w", encoding="utf-8", newline="\n") as handle:
                handle.write(content)
            os.replace(tmp_path, file_path)
        except OSError:
            if tmp_path.exists():
                tmp_path.unlink()
            raise

        self.log.dbg("wrote file", log_field("path", str(file_path)), log_field("bytes", len(content)))
        return file_path

    def dump_info_file(self, process, out_dir: Union[str, Path]) -> Path:
        file_name = f"{INFO_FILE_STEM}.json"
        try:
            info = {
                "timestamp": self.timestamp.isoformat(),
                "build_number": self.read_build_number(process),
            }
            return self.dump_file(out_dir, INFO_FILE_STEM, "json", to_json_text(info))
        except (DumperError, OSError) as exc:
            raise OutputError(file_name, exc) from exc

    def read_build_number(self, process) -> int:
        """Read ``dwBuildNumber`` from the target, or 0 when it cannot be found."""
        for module_name, module_offsets in self.offsets.items():
            offset = next((o for o in module_offsets if o.name == BUILD_NUMBER_OFFSET), None)
            if offset is None:
                continue

            try:
                module = process.module_by_name(module_name)
                build_number = process.read_u32(module.base + offset.value)
            except (ModuleLookupError, MemoryReadError) as exc:
                self.log.dbg(
                    "build number unavailable",
                    log_field("module", module_name),
                    log_field("reason", str(exc)),
                )
                continue

            self.log.dbg("build number", log_field("module", module_name), log_field("value", build_number))
            return build_number

        self.log.wrn("unable to read build number, defaulting to 0")
        return 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp.isoformat(),
            "buttons": [b.to_dict() for b in self.buttons],
            "interfaces": {
                name: [i.to_dict() for i in entries] for name, entries in self.interfaces.items()
            },
            "offsets": {
                name: [o.to_dict() for o in entries] for name, entries in self.offsets.items()
            },
            "schemas": {name: module.to_dict() for name, module in self.schemas.items()},
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Results":
        timestamp = data.get("timestamp")
        return cls(
            buttons=[Button.from_dict(b) for b in data.get("buttons", [])],
            interfaces={
                str(name): [Interface.from_dict(i) for i in entries]
                for name, entries in data.get("interfaces", {}).items()
            },
            offsets={
                str(name): [Offset.from_dict(o) for o in entries]
                for name, entries in data.get("offsets", {}).items()
            },
            schemas={
                str(name): SchemaModule.from_dict(module)
                for name, module in data.get("schemas", {}).items()
            },
            timestamp=parse_timestamp(timestamp) if timestamp else _utcnow(),
        )

    def save(self, path: Union[str, Path]) -> Path:
        """Persist the capture; ``.json`` paths are JSON, anything else msgpack."""
        path = Path(path)
        if path.suffix.lower() == ".json":
            path.write_text(to_json_text(self.to_dict()), encoding="utf-8")
        else:
            try:
                path.write_bytes(msgpack.packb(self.to_dict(), use_bin_type=True))
            except (TypeError, ValueError, OverflowError) as exc:
                raise SerializationError(f"unable to encode msgpack: {exc}") from exc
        return path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "Results":
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"results file not found: {path}")

        if path.suffix.lower() == ".json":
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as exc:
                raise ValueError(f"results parse error: {exc}") from exc
        else:
            try:
                data = msgpack.unpackb(path.read_bytes(), raw=False, strict_map_key=False)
            except Exception as exc:
                raise ValueError(f"results parse error: {exc}") from exc

        if not isinstance(data, dict):
            raise ValueError("results payload is not a map")
        return cls.from_dict(data)


__all__ = [
    "ATTRIBUTION",
    "BANNER_COMMENTS",
    "BUILD_NUMBER_OFFSET",
    "FileFormat",
    "Formatter",
    "Item",
    "ItemKind",
    "Results",
    "format_module_name",
    "parse_timestamp",
    "resolve_format",
    "sanitize_name",
]