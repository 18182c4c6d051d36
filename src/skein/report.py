"""Report builder: accumulates one diagnostic before it is rendered."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from skein.config import Config, normalize_config
from skein.draw import Color, advice_color, error_color, warning_color
from skein.errors import ReportFieldError
from skein.label import Label
from skein.source import Span

if TYPE_CHECKING:
    from skein.source import SourceCache


class ReportKind(Enum):
    ERROR = "Error"
    WARNING = "Warning"
    ADVICE = "Advice"


@dataclass(frozen=True)
class BasicStyle:
    """A caller-named report kind with its own header colour."""

    name: str
    color: Color


ReportStyle = Union[ReportKind, BasicStyle, str]


def create_basic_style(name: str, color: Color) -> BasicStyle:
    return BasicStyle(name, color)


def resolve_style(style: ReportStyle, color: bool) -> tuple[str, Color | None]:
    """Display name and header colour for a report style."""
    if isinstance(style, BasicStyle):
        return style.name, style.color if color else None
    if isinstance(style, ReportKind):
        if style is ReportKind.ERROR:
            return style.value, error_color(color)
        if style is ReportKind.WARNING:
            return style.value, warning_color(color)
        return style.value, advice_color(color)
    return str(style), None


@dataclass(frozen=True)
class ReportSnapshot:
    """Immutable view of a report, taken when rendering starts."""

    kind: ReportStyle
    code: str | None
    msg: str | None
    notes: tuple[str, ...]
    help: tuple[str, ...]
    span: Span
    labels: tuple[Label, ...]
    config: Config


@dataclass
class Report:
    """A diagnostic under construction.

    ``notes``, ``help`` and ``labels`` only grow. Rendering reads a
    snapshot, so a report can be rendered, extended and rendered again.
    """

    span: Span
    kind: ReportStyle = ReportKind.ERROR
    code: str | None = None
    msg: str | None = None
    notes: list[str] = field(default_factory=list)
    help: list[str] = field(default_factory=list)
    labels: list[Label] = field(default_factory=list)
    config: Config = field(default_factory=Config)

    def __post_init__(self) -> None:
        self.config = normalize_config(self.config)

    def set_field(self, key: str, value: Any) -> Report:
        """Append to a list field or replace a scalar one. Returns self."""
        if key == "config":
            raise ReportFieldError("config cannot be set as a field; use set_config()")
        if key not in _SETTABLE:
            raise ReportFieldError(f"unknown report field: {key!r}")
        current = getattr(self, key)
        if isinstance(current, list):
            current.append(value)
        else:
            setattr(self, key, value)
        return self

    def add_label(self, label: Label) -> Report:
        self.labels.append(label)
        return self

    def add_labels(self, labels: Iterable[Label]) -> Report:
        for label in labels:
            self.set_field("labels", label)
        return self

    def with_note(self, note: str) -> Report:
        return self.set_field("notes", note)

    def with_help(self, help_text: str) -> Report:
        return self.set_field("help", help_text)

    def set_config(self, config: Config | Mapping[str, Any] | None) -> Report:
        self.config = normalize_config(config)
        return self

    def snapshot(self) -> ReportSnapshot:
        return ReportSnapshot(
            kind=self.kind,
            code=self.code,
            msg=self.msg,
            notes=tuple(self.notes),
            help=tuple(self.help),
            span=self.span,
            labels=tuple(self.labels),
            config=self.config,
        )

    def render(self, cache: SourceCache) -> str:
        from skein.render import render_report

        return render_report(self.snapshot(), cache)

    write_to_string = render


_SETTABLE = frozenset({"span", "kind", "code", "msg", "notes", "help", "labels"})


def create_report(
    span: Span,
    *,
    kind: ReportStyle = ReportKind.ERROR,
    code: str | None = None,
    msg: str | None = None,
    notes: Iterable[str] = (),
    help: Iterable[str] = (),
    labels: Iterable[Label] = (),
    config: Config | Mapping[str, Any] | None = None,
) -> Report:
    """Start a report; ``config`` is normalized immediately."""
    return Report(
        span=span,
        kind=kind,
        code=code,
        msg=msg,
        notes=list(notes),
        help=list(help),
        labels=list(labels),
        config=normalize_config(config),
    )
