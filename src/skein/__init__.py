"""skein: render compiler diagnostics as annotated source snippets.

Typical use::

    from skein import Source, SourceCache, create_label, create_report, span, RED

    cache = SourceCache([("main.src", Source("let a = 1;"))])
    report = create_report(span("main.src", 0, 10), msg="syntax error")
    report.add_label(create_label(span("main.src", 4, 5), "here", color=RED))
    print(report.render(cache))
"""

from __future__ import annotations

__version__ = "0.1.0"

from skein.config import Config, normalize_config
from skein.draw import (
    BLACK,
    BLUE,
    CYAN,
    GREEN,
    MAGENTA,
    RED,
    WHITE,
    YELLOW,
    AnsiMode,
    CharSet,
    Color,
    ColorKind,
    bg,
    fg,
    fixed_color,
    strip_ansi,
)
from skein.errors import (
    ConfigError,
    DiagnosticFileError,
    LabelError,
    ReportFieldError,
    SkeinError,
    SourceDecodeError,
    SourceNotFoundError,
)
from skein.label import Label, LabelAttach, create_label
from skein.render import render, render_report
from skein.report import BasicStyle, Report, ReportKind, create_basic_style, create_report
from skein.source import IndexType, Source, SourceCache, Span, span

__all__ = [
    "BLACK",
    "BLUE",
    "CYAN",
    "GREEN",
    "MAGENTA",
    "RED",
    "WHITE",
    "YELLOW",
    "AnsiMode",
    "BasicStyle",
    "CharSet",
    "Color",
    "ColorKind",
    "Config",
    "ConfigError",
    "DiagnosticFileError",
    "IndexType",
    "Label",
    "LabelAttach",
    "LabelError",
    "Report",
    "ReportFieldError",
    "ReportKind",
    "SkeinError",
    "Source",
    "SourceCache",
    "SourceDecodeError",
    "SourceNotFoundError",
    "Span",
    "__version__",
    "bg",
    "create_basic_style",
    "create_label",
    "create_report",
    "fg",
    "fixed_color",
    "normalize_config",
    "render",
    "render_report",
    "span",
    "strip_ansi",
]
