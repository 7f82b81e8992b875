from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from .config import DumpConfig
from .output import FileFormat, Item, ItemKind, Results
from .process import NullProcess, ProcessHandle, load_binary, load_w1dump, open_process


def load_results(path: str) -> Results:
    return Results.load(path)


def dump(
    results: Results, config: DumpConfig, process: Optional[ProcessHandle] = None
) -> List[Path]:
    """Create the output directory and write every artifact into it."""
    if process is None:
        if config.process_path is not None:
            process = open_process(str(config.process_path))
        else:
            process = NullProcess()
    config.out_dir.mkdir(parents=True, exist_ok=True)
    return results.dump_all(process, config.out_dir, config.indent_size)


__all__ = [
    "DumpConfig",
    "FileFormat",
    "Item",
    "ItemKind",
    "Results",
    "dump",
    "load_binary",
    "load_results",
    "load_w1dump",
    "open_process",
]
