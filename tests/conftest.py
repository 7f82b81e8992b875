from __future__ import annotations

import struct
from datetime import datetime, timezone

import pytest

from schemadump.analysis import (
    Button,
    Class,
    ClassField,
    ClassMetadata,
    ClassMetadataKind,
    Enum,
    EnumMember,
    Interface,
    Offset,
    SchemaModule,
)
from schemadump.core.memory import PERM_READ, MemoryMap, MemoryRegion
from schemadump.output import Results
from schemadump.output.naming import MODULE_SUFFIX
from schemadump.process import Module, ProcessSnapshot

TIMESTAMP = datetime(2024, 3, 7, 12, 34, 56, 789000, tzinfo=timezone.utc)
ENGINE_BASE = 0x7FF600000000
BUILD_NUMBER = 14001


@pytest.fixture
def suffix() -> str:
    if MODULE_SUFFIX is None:
        pytest.skip("host platform has no module suffix")
    return MODULE_SUFFIX


@pytest.fixture
def engine_module(suffix) -> str:
    return "engine2" + suffix


@pytest.fixture
def client_module(suffix) -> str:
    return "client" + suffix


@pytest.fixture
def results(engine_module, client_module) -> Results:
    return Results(
        buttons=[Button("attack", 0x1A2B)],
        interfaces={engine_module: [Interface("Source2EngineToClient001", 0x5A0)]},
        offsets={engine_module: [Offset("dwBuildNumber", 0x10)]},
        schemas={},
        timestamp=TIMESTAMP,
    )


@pytest.fixture
def schema_results(client_module) -> Results:
    player = Class(
        name="C_CSPlayerPawn",
        module_name=client_module,
        parent="C_BasePlayerPawn",
        metadata=[
            ClassMetadata(ClassMetadataKind.NETWORK_VAR_NAMES, "m_iHealth", "int32"),
            ClassMetadata(ClassMetadataKind.NETWORK_CHANGE_CALLBACK, "OnHealthChanged"),
        ],
        fields=[ClassField("m_iHealth", "int32", 0x344)],
    )
    team = Enum(
        name="TeamNum",
        alignment=1,
        size=2,
        members=[EnumMember("TEAM_NONE", -1), EnumMember("TEAM_CT", 3)],
    )
    return Results(
        schemas={client_module: SchemaModule(classes=[player], enums=[team])},
        timestamp=TIMESTAMP,
    )


@pytest.fixture
def process(engine_module) -> ProcessSnapshot:
    data = bytearray(0x100)
    data[0x10:0x14] = struct.pack("<I", BUILD_NUMBER)
    region = MemoryRegion(
        start=ENGINE_BASE,
        end=ENGINE_BASE + len(data),
        permissions=PERM_READ,
        module_name=engine_module,
        data=bytes(data),
    )
    return ProcessSnapshot(
        name="cs2",
        modules=[Module(engine_module, ENGINE_BASE, len(data))],
        memory_map=MemoryMap([region]),
    )
