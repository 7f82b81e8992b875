from .errors import (
    DumperError,
    MemoryReadError,
    ModuleLookupError,
    OutputError,
    SerializationError,
    UnreachableFormatError,
    UnsupportedPlatformError,
)
from .memory import PERM_EXECUTE, PERM_READ, PERM_WRITE, MemoryMap, MemoryRegion

__all__ = [
    "DumperError",
    "MemoryReadError",
    "ModuleLookupError",
    "OutputError",
    "SerializationError",
    "UnreachableFormatError",
    "UnsupportedPlatformError",
    "MemoryMap",
    "MemoryRegion",
    "PERM_EXECUTE",
    "PERM_READ",
    "PERM_WRITE",
]
