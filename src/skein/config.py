"""Render options and skein.toml loading."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any

from skein.draw import AnsiMode, CharSet
from skein.errors import ConfigError
from skein.label import LabelAttach
from skein.source import IndexType

CONFIG_FILENAME = "skein.toml"


@dataclass(frozen=True)
class Config:
    """Resolved render options.

    Only ``label_attach``, ``char_set``, ``index_type``, ``color``,
    ``ansi_mode`` and ``tab_width`` drive the current layout; the other
    fields are accepted so configs written for richer layouts still load.
    """

    cross_gap: bool = True
    label_attach: LabelAttach = LabelAttach.MIDDLE
    compact: bool = False
    underlines: bool = True
    multiline_arrows: bool = True
    color: bool = True
    tab_width: int = 4
    char_set: CharSet = CharSet.UNICODE
    index_type: IndexType = IndexType.CHAR
    minimise_crossings: bool = False
    context_lines: int = 0
    ansi_mode: AnsiMode = AnsiMode.ON
    enumerate_notes: bool = True
    enumerate_helps: bool = True


_FIELD_TYPES: dict[str, Any] = {
    "label_attach": LabelAttach,
    "char_set": CharSet,
    "index_type": IndexType,
    "ansi_mode": AnsiMode,
    "tab_width": int,
    "context_lines": int,
}


def _coerce(key: str, value: Any) -> Any:
    kind = _FIELD_TYPES.get(key, bool)
    if isinstance(kind, type) and issubclass(kind, Enum):
        if isinstance(value, kind):
            return value
        try:
            return kind(str(value).lower())
        except ValueError:
            choices = ", ".join(m.value for m in kind)
            raise ConfigError(
                f"invalid value {value!r} for {key} (expected one of: {choices})"
            ) from None
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(f"{key} must be an integer, got {value!r}")
        return value
    if not isinstance(value, bool):
        raise ConfigError(f"{key} must be a boolean, got {value!r}")
    return value


def normalize_config(
    config: Config | Mapping[str, Any] | None = None, **overrides: Any
) -> Config:
    """Overlay user options onto the defaults, returning a complete Config."""
    if isinstance(config, Config):
        base = config
        values: dict[str, Any] = {}
    else:
        base = Config()
        values = dict(config or {})
    values.update(overrides)

    known = {f.name for f in fields(Config)}
    unknown = sorted(set(values) - known)
    if unknown:
        raise ConfigError(f"unknown config option(s): {', '.join(unknown)}")

    resolved = replace(base, **{k: _coerce(k, v) for k, v in values.items()})
    if resolved.tab_width < 1:
        raise ConfigError(f"tab_width must be at least 1, got {resolved.tab_width}")
    if resolved.context_lines < 0:
        raise ConfigError(
            f"context_lines must not be negative, got {resolved.context_lines}"
        )
    return resolved


def char_width(char: str, col: int, tab_width: int) -> tuple[str, int]:
    """Glyph and display width of ``char`` when drawn at display column ``col``."""
    if char == "\t":
        tab_end = (col // tab_width + 1) * tab_width
        return " ", tab_end - col
    if char.isspace():
        return " ", 1
    return char, 1


def find_config(*starts: Path) -> Path:
    """Return the skein.toml nearest the first of ``starts`` that has one above it.

    Each start may be a file or a directory; with no starts the cwd is
    searched. Raises FileNotFoundError when no start has a config above it.
    """
    for start in starts or (Path.cwd(),):
        start = start.resolve()
        directory = start.parent if start.is_file() else start
        for candidate in (d / CONFIG_FILENAME for d in (directory, *directory.parents)):
            if candidate.is_file():
                return candidate
    raise FileNotFoundError(f"No {CONFIG_FILENAME} found in any parent directory")


def load_config(path: Path) -> Config:
    """Parse the ``[render]`` table of a skein.toml file into a Config."""
    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"{path}: {e}") from e

    render = data.get("render", {})
    if not isinstance(render, dict):
        raise ConfigError(f"{path}: [render] must be a table")
    return normalize_config(render)
