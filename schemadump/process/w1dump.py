from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List

import msgpack
from redlog import field, get_logger

from ..core.memory import MemoryMap, MemoryRegion
from .base import Module, ProcessSnapshot


def load_w1dump(path: str) -> ProcessSnapshot:
    """Load a msgpack w1dump capture as a process handle."""
    log = get_logger("schemadump.process.w1dump")

    dump_path = Path(path)
    if not dump_path.exists():
        raise FileNotFoundError(f"w1dump file not found: {dump_path}")

    data = dump_path.read_bytes()
    if not data:
        raise ValueError("w1dump file is empty")

    try:
        payload = msgpack.unpackb(data, raw=False, strict_map_key=False)
    except msgpack.exceptions.ExtraData as exc:
        raise ValueError(f"w1dump contains extra data: {exc}") from exc
    except Exception as exc:
        raise ValueError(f"w1dump parse error: {exc}") from exc

    if not isinstance(payload, dict):
        raise ValueError("w1dump payload is not a map")

    required_keys = {"metadata", "regions", "modules"}
    missing = required_keys - set(payload.keys())
    if missing:
        raise ValueError(f"w1dump missing required keys: {sorted(missing)}")

    metadata = dict(payload["metadata"])
    modules = _parse_modules(payload["modules"])
    memory_map = MemoryMap(_parse_regions(payload["regions"]))
    name = str(metadata.get("process_name", dump_path.stem))

    log.dbg(
        "loaded w1dump",
        field("process", name),
        field("pid", metadata.get("pid")),
        field("modules", len(modules)),
        field("regions", len(memory_map)),
    )

    return ProcessSnapshot(
        name=name, modules=modules, memory_map=memory_map, metadata=metadata
    )


def _parse_modules(raw_modules: Iterable[Dict[str, Any]]) -> List[Module]:
    modules: List[Module] = []
    for entry in raw_modules:
        modules.append(
            Module(
                name=str(entry["name"]),
                base=int(entry["base_address"]),
                size=int(entry.get("size", 0)),
            )
        )
    return modules


def _parse_regions(raw_regions: Iterable[Dict[str, Any]]) -> List[MemoryRegion]:
    regions: List[MemoryRegion] = []
    for entry in raw_regions:
        data = entry.get("data")
        if data is not None:
            data = bytes(data)
        regions.append(
            MemoryRegion(
                start=int(entry["start"]),
                end=int(entry["end"]),
                permissions=int(entry.get("permissions", 0)),
                module_name=str(entry.get("module_name", "")),
                data=data,
            )
        )
    return regions
