from __future__ import annotations

import struct
import sys
from pathlib import Path

import msgpack
import pytest

from schemadump.core.errors import MemoryReadError, ModuleLookupError
from schemadump.core.memory import PERM_READ, PERM_WRITE, MemoryMap, MemoryRegion
from schemadump.process import NullProcess, load_binary, load_w1dump, open_process

from .conftest import BUILD_NUMBER, ENGINE_BASE


def _write_w1dump(path: Path, engine_module: str) -> Path:
    data = bytearray(0x40)
    data[0x10:0x14] = struct.pack("<I", BUILD_NUMBER)
    payload = {
        "metadata": {"process_name": "cs2", "pid": 4242, "arch": "x86_64", "os": "linux"},
        "thread": {},
        "modules": [{"name": engine_module, "base_address": ENGINE_BASE, "size": len(data)}],
        "regions": [
            {
                "start": ENGINE_BASE,
                "end": ENGINE_BASE + len(data),
                "permissions": PERM_READ | PERM_WRITE,
                "module_name": engine_module,
                "data": bytes(data),
            },
            {"start": 0x1000, "end": 0x2000, "permissions": 0, "data": None},
        ],
    }
    path.write_bytes(msgpack.packb(payload, use_bin_type=True))
    return path


def test_read_u32(process) -> None:
    assert process.read_u32(ENGINE_BASE + 0x10) == BUILD_NUMBER


def test_read_outside_regions_fails(process) -> None:
    with pytest.raises(MemoryReadError):
        process.read(0x10, 4)


def test_read_across_region_end_fails(process) -> None:
    with pytest.raises(MemoryReadError):
        process.read(ENGINE_BASE + 0xFE, 4)


def test_module_lookup(process, engine_module: str) -> None:
    assert process.module_by_name(engine_module).base == ENGINE_BASE
    with pytest.raises(ModuleLookupError):
        process.module_by_name("missing")


def test_unreadable_region() -> None:
    region = MemoryRegion(0x1000, 0x2000, permissions=0, data=b"\x00" * 0x1000)
    assert MemoryMap([region]).read(0x1000, 4) is None
    assert not region.readable


def test_null_process() -> None:
    null = NullProcess()
    with pytest.raises(ModuleLookupError):
        null.module_by_name("client.dll")
    with pytest.raises(MemoryReadError):
        null.read_u32(0x1000)


def test_load_w1dump(tmp_path: Path, engine_module: str) -> None:
    path = _write_w1dump(tmp_path / "cs2.w1dump", engine_module)
    snapshot = load_w1dump(str(path))
    assert snapshot.name == "cs2"
    assert snapshot.metadata["pid"] == 4242
    module = snapshot.module_by_name(engine_module)
    assert snapshot.read_u32(module.base + 0x10) == BUILD_NUMBER
    with pytest.raises(MemoryReadError):
        snapshot.read(0x1000, 4)


def test_open_process_picks_w1dump(tmp_path: Path, engine_module: str) -> None:
    path = _write_w1dump(tmp_path / "capture.w1dump", engine_module)
    assert len(open_process(str(path)).modules) == 1


def test_load_w1dump_missing_keys(tmp_path: Path) -> None:
    path = tmp_path / "bad.w1dump"
    path.write_bytes(msgpack.packb({"metadata": {}}))
    with pytest.raises(ValueError, match="missing required keys"):
        load_w1dump(str(path))


def test_load_w1dump_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_w1dump(str(tmp_path / "nope.w1dump"))


def test_load_w1dump_empty(tmp_path: Path) -> None:
    path = tmp_path / "empty.w1dump"
    path.write_bytes(b"")
    with pytest.raises(ValueError, match="empty"):
        load_w1dump(str(path))


@pytest.mark.skipif(not sys.platform.startswith("linux"), reason="needs an ELF interpreter")
def test_load_binary_maps_elf_header() -> None:
    snapshot = load_binary(sys.executable)
    module = snapshot.modules[0]
    assert module.name == Path(sys.executable).name
    assert snapshot.module_by_name(module.name) is module
    assert snapshot.read(module.base, 4) == b"\x7fELF"
