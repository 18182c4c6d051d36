"""Read diagnostics described in TOML files into reports."""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

from skein.config import Config
from skein.draw import parse_color
from skein.errors import DiagnosticFileError
from skein.label import Label, create_label
from skein.report import BasicStyle, Report, ReportKind, ReportStyle, create_report
from skein.source import Span, span

_KINDS = {kind.value.lower(): kind for kind in ReportKind}


def _span(path: str, where: str, value: Any, source_id: str) -> Span:
    if (
        not isinstance(value, list)
        or len(value) != 2
        or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)
    ):
        raise DiagnosticFileError(path, f"{where}: span must be [start, end]")
    return span(source_id, value[0], value[1])


def _kind(path: str, where: str, entry: dict[str, Any]) -> ReportStyle:
    name = entry.get("kind", "Error")
    if not isinstance(name, str):
        raise DiagnosticFileError(path, f"{where}: kind must be a string")
    if "color" in entry:
        try:
            return BasicStyle(name, parse_color(entry["color"]))
        except ValueError as e:
            raise DiagnosticFileError(path, f"{where}: {e}") from e
    return _KINDS.get(name.lower(), name)


def _int(path: str, where: str, entry: dict[str, Any], key: str) -> int:
    value = entry.get(key, 0)
    if isinstance(value, bool) or not isinstance(value, int):
        raise DiagnosticFileError(path, f"{where}: {key} must be an integer")
    return value


def _text(path: str, where: str, entry: dict[str, Any], key: str) -> str | None:
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        raise DiagnosticFileError(path, f"{where}: {key} must be a string")
    return value


def _label(path: str, where: str, entry: Any, source_id: str) -> Label:
    if not isinstance(entry, dict):
        raise DiagnosticFileError(path, f"{where}: label must be a table")
    color = None
    if "color" in entry:
        try:
            color = parse_color(entry["color"])
        except ValueError as e:
            raise DiagnosticFileError(path, f"{where}: {e}") from e
    return create_label(
        _span(path, where, entry.get("span"), source_id),
        _text(path, where, entry, "msg"),
        color=color,
        order=_int(path, where, entry, "order"),
        priority=_int(path, where, entry, "priority"),
    )


def _strings(path: str, where: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise DiagnosticFileError(path, f"{where}: expected a list of strings")
    return value


def load_reports(
    path: str | Path, source_id: str, config: Config | None = None
) -> list[Report]:
    """Build one report per ``[[report]]`` table in ``path``.

    Every span is attached to ``source_id``. Raises DiagnosticFileError for
    malformed files and LabelError for labels whose start is after their end.
    """
    name = str(path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise DiagnosticFileError(name, str(e)) from e

    entries = data.get("report", [])
    if not isinstance(entries, list):
        raise DiagnosticFileError(name, "'report' must be an array of tables")

    reports: list[Report] = []
    for i, entry in enumerate(entries):
        where = f"report {i + 1}"
        if not isinstance(entry, dict):
            raise DiagnosticFileError(name, f"{where}: must be a table")
        labels = [
            _label(name, f"{where}, label {j + 1}", label, source_id)
            for j, label in enumerate(entry.get("labels", []))
        ]
        reports.append(
            create_report(
                _span(name, where, entry.get("span"), source_id),
                kind=_kind(name, where, entry),
                code=_text(name, where, entry, "code"),
                msg=_text(name, where, entry, "msg"),
                notes=_strings(name, f"{where}, notes", entry.get("notes", [])),
                help=_strings(name, f"{where}, help", entry.get("help", [])),
                labels=labels,
                config=config,
            )
        )
    return reports
