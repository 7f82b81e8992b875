"""Re-emit a saved capture as C#, C++, JSON and Rust sources."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from redlog import Level, field, get_logger, set_level

from . import DumpConfig, dump, load_results
from .config import DEFAULT_INDENT_SIZE, DEFAULT_OUTPUT_DIR
from .core.errors import DumperError
from .process import NullProcess, open_process


CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"])
APP_NAME = "schemadump"
app = typer.Typer(
    name=APP_NAME,
    help=f"{APP_NAME}: generate offset and schema sources from a capture",
    no_args_is_help=True,
    context_settings=CONTEXT_SETTINGS,
    pretty_exceptions_short=True,
    pretty_exceptions_show_locals=False,
)


def configure_logging(verbosity: int) -> None:
    level = Level(min(Level.INFO + verbosity, Level.ANNOYING))
    set_level(level)


@app.command()
def generate(
    results_file: Path = typer.Option(
        ..., "--results", "-r", help="Saved capture (.json or msgpack)"
    ),
    process_file: Optional[Path] = typer.Option(
        None,
        "--process",
        "-p",
        help="Process snapshot (.w1dump) or module image used to read the build number",
    ),
    output: Path = typer.Option(
        Path(DEFAULT_OUTPUT_DIR), "--output", "-o", help="Output directory"
    ),
    indent: int = typer.Option(
        DEFAULT_INDENT_SIZE, "--indent", "-i", min=1, help="Spaces per indent level"
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help="Increase log verbosity"
    ),
):
    """Write every collection in every format plus info.json."""

    configure_logging(verbose)
    log = get_logger("schemadump.cli")

    results_path = results_file.expanduser()
    if not results_path.exists():
        raise typer.BadParameter(f"results file not found: {results_path}")

    results = load_results(str(results_path))
    log.inf(
        "loaded results",
        field("path", str(results_path)),
        field("timestamp", results.timestamp.isoformat()),
        field("buttons", len(results.buttons)),
        field("interface_modules", len(results.interfaces)),
        field("offset_modules", len(results.offsets)),
        field("schema_modules", len(results.schemas)),
    )

    if process_file is not None:
        process_path = process_file.expanduser()
        if not process_path.exists():
            raise typer.BadParameter(f"process file not found: {process_path}")
        process = open_process(str(process_path))
        log.inf("attached process", field("process", repr(process)))
    else:
        process = NullProcess()

    config = DumpConfig(out_dir=output.expanduser(), indent_size=indent)
    try:
        written = dump(results, config, process)
    except DumperError as exc:
        log.err(f"dump failed: {exc}")
        raise typer.Exit(code=1) from exc

    log.inf("done", field("files", len(written)), field("out_dir", str(config.out_dir)))


@app.callback()
def main() -> None:
    """schemadump command line."""


if __name__ == "__main__":
    app()
