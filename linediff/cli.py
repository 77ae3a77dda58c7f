from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from linediff import render
from linediff.config import ConfigError, ConfigStack, DiffConfig, ParseError
from linediff.diff import anchored_diff, diff
from linediff.errors import ResourceExhausted
from linediff.record import DiffRecord, Kind
from linediff.setup_logging import setup_logging

log = logging.getLogger(__name__)

CONTEXT_SETTINGS = {
    "help_option_names": ["-h", "--help"],
    "max_content_width": 120,
}

EXIT_SAME = 0
EXIT_DIFFERENT = 1
EXIT_RESOURCES = 3


def read_lines(path: Path) -> list[str]:
    try:
        return path.read_text(encoding="utf-8").split("\n")
    except UnicodeDecodeError as e:
        raise click.UsageError(f"cannot decode {path} as UTF-8: {e.reason}") from e


def load_config(path: Optional[Path]) -> DiffConfig:
    try:
        return DiffConfig.from_config(ConfigStack(path))
    except (ParseError, ConfigError) as e:
        raise click.UsageError(str(e)) from e


def use_color(mode: str) -> bool:
    if mode == "always":
        return True
    if mode == "never":
        return False
    return click.get_text_stream("stdout").isatty()


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("file_a", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.argument("file_b", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "-f",
    "--format",
    "fmt",
    type=click.Choice(["text", "html"]),
    default=None,
    help="Output format (default: text, or diff.format).",
)
@click.option(
    "-a",
    "--anchored/--optimal",
    "anchored",
    default=None,
    help="Match only lines unique to both files, or compute the optimal alignment.",
)
@click.option(
    "--recursive",
    is_flag=True,
    help="Look for further unique lines inside unmatched blocks (implies --anchored).",
)
@click.option(
    "--color",
    "color",
    type=click.Choice(["auto", "always", "never"]),
    default=None,
    help="Colour the text output.",
)
@click.option(
    "--max-cells",
    "max_cells",
    type=click.IntRange(min=0),
    default=None,
    metavar="N",
    help="Refuse optimal alignments needing more than N matrix cells (0 disables).",
)
@click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from this file after the global ones.",
)
@click.option("-v", "--verbose", is_flag=True, help="Log debugging output.")
@click.option(
    "--log-file",
    "log_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write log records to this file.",
)
def cli(
    file_a: Path,
    file_b: Path,
    fmt: Optional[str],
    anchored: Optional[bool],
    recursive: bool,
    color: Optional[str],
    max_cells: Optional[int],
    config_path: Optional[Path],
    verbose: bool,
    log_file: Optional[Path],
) -> None:
    """Show the line-by-line differences between FILE_A and FILE_B."""
    setup_logging(level=logging.DEBUG if verbose else logging.WARNING, log_file=log_file)

    config = load_config(config_path)

    if fmt is not None:
        config.format = fmt
    if color is not None:
        config.color = color
    if max_cells is not None:
        config.max_cells = max_cells or None
    if recursive:
        config.recursive = True
        config.algorithm = "anchored"
    if anchored is not None:
        config.algorithm = "anchored" if anchored else "optimal"

    a, b = read_lines(file_a), read_lines(file_b)
    log.debug(f"{file_a}: {len(a)} lines, {file_b}: {len(b)} lines")

    records: list[DiffRecord]
    if config.algorithm == "anchored":
        records = anchored_diff(a, b, recursive=config.recursive)
    else:
        try:
            records = diff(a, b, max_cells=config.max_cells)
        except ResourceExhausted as e:
            click.echo(f"error: {e}; try --anchored", err=True)
            sys.exit(EXIT_RESOURCES)

    if config.format == "html":
        click.echo(render.html(records), nl=False)
    else:
        style = config.styles if use_color(config.color) else None
        click.echo(render.pp(records, style), nl=False, color=style is not None)

    same = all(record.kind is Kind.COMMON for record in records)
    sys.exit(EXIT_SAME if same else EXIT_DIFFERENT)


if __name__ == "__main__":
    cli()
