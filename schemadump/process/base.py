from __future__ import annotations

import struct
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol

from redlog import field as log_field
from redlog import get_logger

from ..core.errors import MemoryReadError, ModuleLookupError
from ..core.memory import MemoryMap


@dataclass(frozen=True)
class Module:
    name: str
    base: int
    size: int = 0


class ProcessHandle(Protocol):
    """Memory source backing the live reads a dump performs."""

    def module_by_name(self, name: str) -> Module: ...

    def read(self, address: int, size: int) -> bytes: ...

    def read_u32(self, address: int) -> int: ...


@dataclass
class ProcessSnapshot:
    """Process handle backed by a captured module list and memory map."""

    name: str
    modules: List[Module]
    memory_map: MemoryMap
    metadata: Dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.log = get_logger("schemadump.process")

    def __repr__(self) -> str:
        return (
            f"ProcessSnapshot(name={self.name!r}, modules={len(self.modules)}, "
            f"regions={len(self.memory_map)})"
        )

    def module_by_name(self, name: str) -> Module:
        for module in self.modules:
            if module.name == name:
                return module
        raise ModuleLookupError(f"module not found: {name}")

    def read(self, address: int, size: int) -> bytes:
        data = self.memory_map.read(address, size)
        if data is None:
            self.log.dbg(
                "unreadable address",
                log_field("address", f"0x{address:x}"),
                log_field("size", size),
            )
            raise MemoryReadError(f"unable to read {size} bytes at 0x{address:x}")
        return data

    def read_u32(self, address: int) -> int:
        return struct.unpack("<I", self.read(address, 4))[0]


class NullProcess:
    """Handle for dumps made without a live target; every lookup fails."""

    name = "<none>"

    def module_by_name(self, name: str) -> Module:
        raise ModuleLookupError(f"no process attached, cannot resolve {name}")

    def read(self, address: int, size: int) -> bytes:
        raise MemoryReadError(f"no process attached, cannot read 0x{address:x}")

    def read_u32(self, address: int) -> int:
        return struct.unpack("<I", self.read(address, 4))[0]
