from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional

PERM_READ = 0b001
PERM_WRITE = 0b010
PERM_EXECUTE = 0b100


@dataclass(frozen=True)
class MemoryRegion:
    start: int
    end: int
    permissions: int = PERM_READ
    module_name: str = ""
    data: Optional[bytes] = None

    @property
    def size(self) -> int:
        return max(0, self.end - self.start)

    @property
    def readable(self) -> bool:
        return bool(self.permissions & PERM_READ) and self.data is not None

    def contains(self, address: int, size: int = 1) -> bool:
        if size <= 0:
            return False
        return self.start <= address and (address + size) <= self.end

    def slice(self, address: int, size: int) -> Optional[bytes]:
        """Return ``size`` bytes at ``address`` if fully backed by this region."""
        if not self.readable or not self.contains(address, size):
            return None
        offset = address - self.start
        if offset + size > len(self.data):
            return None
        return self.data[offset : offset + size]


class MemoryMap:
    """Regions sorted by start address."""

    def __init__(self, regions: Iterable[MemoryRegion]):
        self._regions: List[MemoryRegion] = sorted(regions, key=lambda r: r.start)

    def __iter__(self) -> Iterator[MemoryRegion]:
        return iter(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def find(self, address: int) -> Optional[MemoryRegion]:
        for region in self._regions:
            if region.contains(address, 1):
                return region
        return None

    def read(self, address: int, size: int) -> Optional[bytes]:
        region = self.find(address)
        if region is None:
            return None
        return region.slice(address, size)
