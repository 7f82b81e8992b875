from __future__ import annotations

from ..analysis.types import InterfaceMap
from .common import constants_to_cs, constants_to_hpp, constants_to_json, constants_to_rs

SECTION = "interfaces"


def to_cs(interfaces: InterfaceMap, results, indent_size: int) -> str:
    return constants_to_cs(SECTION, interfaces, indent_size)


def to_hpp(interfaces: InterfaceMap, results, indent_size: int) -> str:
    return constants_to_hpp(SECTION, interfaces, indent_size)


def to_json(interfaces: InterfaceMap, results, indent_size: int) -> str:
    return constants_to_json(interfaces)


def to_rs(interfaces: InterfaceMap, results, indent_size: int) -> str:
    return constants_to_rs(SECTION, interfaces, indent_size)
