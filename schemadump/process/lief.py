from __future__ import annotations

from pathlib import Path
from typing import List, Tuple

import lief
from redlog import field, get_logger

from ..core.memory import PERM_EXECUTE, PERM_READ, PERM_WRITE, MemoryMap, MemoryRegion
from .base import Module, ProcessSnapshot

_PE_MEM_EXECUTE = 0x20000000
_PE_MEM_READ = 0x40000000
_PE_MEM_WRITE = 0x80000000


def load_binary(path: str) -> ProcessSnapshot:
    """Map a single module image at its preferred base address."""
    log = get_logger("schemadump.process.lief")

    binary_path = Path(path)
    if not binary_path.exists():
        raise FileNotFoundError(f"binary not found: {binary_path}")

    binary = lief.parse(str(binary_path))
    if binary is None:
        raise ValueError(f"failed to parse binary: {binary_path}")

    base = int(binary.imagebase)
    regions = _extract_regions(binary, base, binary_path.name)
    if not regions:
        raise ValueError(f"no loadable segments in {binary_path}")

    memory_map = MemoryMap(regions)
    size = max(region.end for region in regions) - base
    module = Module(name=binary_path.name, base=base, size=size)

    log.dbg(
        "mapped module",
        field("module", module.name),
        field("base", f"0x{base:x}"),
        field("regions", len(regions)),
    )

    return ProcessSnapshot(
        name=binary_path.name,
        modules=[module],
        memory_map=memory_map,
        metadata={"path": str(binary_path), "format": binary.format.name.lower()},
    )


def _extract_regions(binary, base: int, module_name: str) -> List[MemoryRegion]:
    if isinstance(binary, lief.ELF.Binary):
        return _extract_elf_regions(binary, module_name)
    if isinstance(binary, lief.PE.Binary):
        return _extract_pe_regions(binary, base, module_name)
    if isinstance(binary, lief.MachO.Binary):
        return _extract_macho_regions(binary, module_name)
    raise ValueError(f"unsupported binary format: {binary.format}")


def _extract_elf_regions(binary, module_name: str) -> List[MemoryRegion]:
    regions: List[MemoryRegion] = []
    for seg in binary.segments:
        if seg.type != lief.ELF.Segment.TYPE.LOAD:
            continue
        perms = 0
        if seg.has(lief.ELF.Segment.FLAGS.R):
            perms |= PERM_READ
        if seg.has(lief.ELF.Segment.FLAGS.W):
            perms |= PERM_WRITE
        if seg.has(lief.ELF.Segment.FLAGS.X):
            perms |= PERM_EXECUTE
        start, data = _padded(int(seg.virtual_address), bytes(seg.content), int(seg.virtual_size))
        regions.append(
            MemoryRegion(
                start=start,
                end=start + len(data),
                permissions=perms,
                module_name=module_name,
                data=data,
            )
        )
    return regions


def _extract_pe_regions(binary, base: int, module_name: str) -> List[MemoryRegion]:
    regions: List[MemoryRegion] = []
    for section in binary.sections:
        characteristics = int(section.characteristics)
        perms = 0
        if characteristics & _PE_MEM_READ:
            perms |= PERM_READ
        if characteristics & _PE_MEM_WRITE:
            perms |= PERM_WRITE
        if characteristics & _PE_MEM_EXECUTE:
            perms |= PERM_EXECUTE
        start, data = _padded(
            base + int(section.virtual_address),
            bytes(section.content),
            int(section.virtual_size),
        )
        if not data:
            continue
        regions.append(
            MemoryRegion(
                start=start,
                end=start + len(data),
                permissions=perms,
                module_name=module_name,
                data=data,
            )
        )
    return regions


def _extract_macho_regions(binary, module_name: str) -> List[MemoryRegion]:
    regions: List[MemoryRegion] = []
    for seg in binary.segments:
        init_prot = int(seg.init_protection)
        perms = 0
        if init_prot & 1:
            perms |= PERM_READ
        if init_prot & 2:
            perms |= PERM_WRITE
        if init_prot & 4:
            perms |= PERM_EXECUTE
        start, data = _padded(int(seg.virtual_address), bytes(seg.content), int(seg.virtual_size))
        if not data:
            continue
        regions.append(
            MemoryRegion(
                start=start,
                end=start + len(data),
                permissions=perms,
                module_name=module_name,
                data=data,
            )
        )
    return regions


def _padded(start: int, content: bytes, virtual_size: int) -> Tuple[int, bytes]:
    # zero-fill the tail the loader would reserve (bss and friends)
    if virtual_size > len(content):
        content = content + b"\x00" * (virtual_size - len(content))
    return start, content
