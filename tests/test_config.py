from __future__ import annotations

from pathlib import Path

import pytest

from schemadump import DumpConfig, dump
from schemadump.config import DEFAULT_INDENT_SIZE, DEFAULT_OUTPUT_DIR


def test_defaults() -> None:
    config = DumpConfig()
    assert config.indent_size == DEFAULT_INDENT_SIZE
    assert config.out_dir == Path(DEFAULT_OUTPUT_DIR)
    assert config.process_path is None


def test_rejects_zero_indent() -> None:
    with pytest.raises(ValueError):
        DumpConfig(indent_size=0)


def test_dump_creates_output_directory(results, process, tmp_path: Path) -> None:
    out_dir = tmp_path / "nested" / "out"
    written = dump(results, DumpConfig(out_dir=out_dir), process)
    assert len(written) == 17
    assert all(path.parent == out_dir for path in written)
