from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from schemadump.cli import app

from .conftest import BUILD_NUMBER
from .test_process import _write_w1dump

runner = CliRunner()


def test_generate_writes_all_files(results, tmp_path: Path) -> None:
    capture = results.save(tmp_path / "capture.json")
    out_dir = tmp_path / "out"

    result = runner.invoke(app, ["generate", "-r", str(capture), "-o", str(out_dir), "-i", "2"])

    assert result.exit_code == 0, result.output
    assert len(list(out_dir.iterdir())) == 17
    assert "\n  // Module:" in (out_dir / "buttons.cs").read_text(encoding="utf-8")
    info = json.loads((out_dir / "info.json").read_text(encoding="utf-8"))
    assert info["build_number"] == 0


def test_generate_reads_build_number_from_w1dump(results, tmp_path: Path, engine_module: str) -> None:
    capture = results.save(tmp_path / "capture.bin")
    dump = _write_w1dump(tmp_path / "cs2.w1dump", engine_module)
    out_dir = tmp_path / "out"

    result = runner.invoke(
        app, ["generate", "-r", str(capture), "-p", str(dump), "-o", str(out_dir)]
    )

    assert result.exit_code == 0, result.output
    info = json.loads((out_dir / "info.json").read_text(encoding="utf-8"))
    assert info["build_number"] == BUILD_NUMBER


def test_generate_missing_results(tmp_path: Path) -> None:
    result = runner.invoke(app, ["generate", "-r", str(tmp_path / "nope.json")])
    assert result.exit_code != 0


def test_generate_rejects_zero_indent(results, tmp_path: Path) -> None:
    capture = results.save(tmp_path / "capture.json")
    result = runner.invoke(app, ["generate", "-r", str(capture), "-i", "0"])
    assert result.exit_code != 0
