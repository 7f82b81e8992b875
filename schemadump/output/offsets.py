"""Offsets are u32 displacements from the base of the module that owns them."""

from __future__ import annotations

from ..analysis.types import OffsetMap
from .common import constants_to_cs, constants_to_hpp, constants_to_json, constants_to_rs

SECTION = "offsets"


def to_cs(offsets: OffsetMap, results, indent_size: int) -> str:
    return constants_to_cs(SECTION, offsets, indent_size)


def to_hpp(offsets: OffsetMap, results, indent_size: int) -> str:
    return constants_to_hpp(SECTION, offsets, indent_size)


def to_json(offsets: OffsetMap, results, indent_size: int) -> str:
    return constants_to_json(offsets)


def to_rs(offsets: OffsetMap, results, indent_size: int) -> str:
    return constants_to_rs(SECTION, offsets, indent_size)
