from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

DEFAULT_INDENT_SIZE = 4
DEFAULT_OUTPUT_DIR = "output"


@dataclass
class DumpConfig:
    out_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    indent_size: int = DEFAULT_INDENT_SIZE
    process_path: Optional[Path] = None

    def __post_init__(self) -> None:
        self.out_dir = Path(self.out_dir)
        if self.process_path is not None:
            self.process_path = Path(self.process_path)
        if self.indent_size < 1:
            raise ValueError(f"indent size must be at least 1, got {self.indent_size}")
