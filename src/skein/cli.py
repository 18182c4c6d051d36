"""skein command line."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn

import click

from skein import __version__
from skein.config import Config, find_config, load_config, normalize_config
from skein.errors import SkeinError, SourceDecodeError
from skein.loader import load_reports
from skein.report import ReportKind
from skein.source import IndexType, Source, SourceCache

_INDEX_CHOICE = click.Choice([t.value for t in IndexType])


def _read_source(path: str) -> str:
    # Decode bytes directly; text mode would fold CR+LF and shift offsets.
    try:
        return Path(path).read_bytes().decode("utf-8")
    except UnicodeDecodeError as e:
        raise SourceDecodeError(path, e.start, e.reason) from e


def _fail(error: SkeinError) -> NoReturn:
    click.echo(f"error: {error}", err=True)
    raise SystemExit(1)


def _resolve_config(config_path: str | None, source: str) -> Config:
    """Explicit --config wins, then the skein.toml nearest SOURCE, then the cwd's."""
    if config_path is not None:
        return load_config(Path(config_path))
    try:
        return load_config(find_config(Path(source), Path.cwd()))
    except FileNotFoundError:
        return Config()


@click.group()
@click.version_option(__version__, prog_name="skein")
def main() -> None:
    """Render source-code diagnostics as annotated text."""


@main.command()
@click.argument("source", type=click.Path(exists=True, dir_okay=False))
@click.argument("diagnostics", type=click.Path(exists=True, dir_okay=False))
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False),
              help="Read render options from this skein.toml.")
@click.option("--ascii", "use_ascii", is_flag=True, help="Draw with ASCII glyphs only.")
@click.option("--no-color", is_flag=True, help="Emit plain text without ANSI escapes.")
@click.option("--index-type", type=_INDEX_CHOICE, default=None,
              help="Unit of the offsets in DIAGNOSTICS.")
@click.option("--attach", type=click.Choice(["start", "middle", "end"]), default=None,
              help="Where label arrows leave the underline.")
@click.option("--tab-width", type=click.IntRange(min=1), default=None)
@click.option("--line-offset", type=int, default=0, help="Bias added to printed line numbers.")
@click.option("-v", "--verbose", is_flag=True, help="Log dropped labels to stderr.")
def render(
    source: str,
    diagnostics: str,
    config_path: str | None,
    use_ascii: bool,
    no_color: bool,
    index_type: str | None,
    attach: str | None,
    tab_width: int | None,
    line_offset: int,
    verbose: bool,
) -> None:
    """Render the reports in DIAGNOSTICS against SOURCE."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    overrides: dict[str, object] = {}
    if use_ascii:
        overrides["char_set"] = "ascii"
    if no_color:
        overrides["color"] = False
        overrides["ansi_mode"] = "off"
    if index_type is not None:
        overrides["index_type"] = index_type
    if attach is not None:
        overrides["label_attach"] = attach
    if tab_width is not None:
        overrides["tab_width"] = tab_width

    try:
        config = normalize_config(_resolve_config(config_path, source), **overrides)
        text = _read_source(source)
        src = Source(text)
        src.set_display_line_offset(line_offset)
        cache = SourceCache([(source, src)])
        reports = load_reports(diagnostics, source, config)
        rendered = [report.render(cache) for report in reports]
    except SkeinError as e:
        _fail(e)

    click.echo("\n\n".join(rendered))
    if any(report.kind is ReportKind.ERROR for report in reports):
        raise SystemExit(1)


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
def lines(file: str) -> None:
    """Dump the line table of FILE."""
    try:
        src = Source(_read_source(file))
    except SkeinError as e:
        _fail(e)
    click.echo(f"{len(src.lines)} lines, {src.len} chars, {src.byte_len} bytes")
    for idx, line in enumerate(src.lines):
        click.echo(
            f"{idx:>4}  char {line.offset}+{line.char_len}  "
            f"byte {line.byte_offset}+{line.byte_len}  {src.line_text(line)!r}"
        )


@main.command()
@click.argument("file", type=click.Path(exists=True, dir_okay=False))
@click.argument("offset", type=int)
@click.option("--index-type", type=_INDEX_CHOICE, default="char")
def locate(file: str, offset: int, index_type: str) -> None:
    """Print the 1-based line:column of OFFSET in FILE."""
    try:
        src = Source(_read_source(file))
    except SkeinError as e:
        _fail(e)
    found = src.line_at(offset, IndexType(index_type))
    if found is None:
        click.echo("?:?")
        return
    _, idx, col = found
    click.echo(f"{src.display_line_no(idx)}:{col + 1}")
