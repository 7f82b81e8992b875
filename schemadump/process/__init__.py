from __future__ import annotations

from pathlib import Path

from .base import Module, NullProcess, ProcessHandle, ProcessSnapshot
from .lief import load_binary
from .w1dump import load_w1dump


def open_process(path: str) -> ProcessSnapshot:
    """Open a captured process (``.w1dump``) or a single module image."""
    if Path(path).suffix.lower() == ".w1dump":
        return load_w1dump(path)
    return load_binary(path)


__all__ = [
    "Module",
    "NullProcess",
    "ProcessHandle",
    "ProcessSnapshot",
    "load_binary",
    "load_w1dump",
    "open_process",
]
