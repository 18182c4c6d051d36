"""One-call rendering for parsers that report a single offending token."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from skein.config import Config
from skein.draw import RED
from skein.label import create_label
from skein.report import ReportKind, ReportStyle, create_report
from skein.source import Source, SourceCache, span


def report_error(
    filename: str,
    source: str,
    message: str,
    start: int,
    end: int,
    *,
    label: str | None = None,
    label_start: int | None = None,
    label_end: int | None = None,
    kind: ReportStyle = ReportKind.ERROR,
    config: Config | Mapping[str, Any] | None = None,
) -> str:
    """Render a one-label diagnostic over ``source`` and return the text.

    The primary span is ``[start, end)``. The label covers
    ``[label_start, label_end)`` and defaults to the primary span.
    """
    cache = SourceCache([(filename, Source(source))])
    report = create_report(span(filename, start, end), kind=kind, msg=message, config=config)
    report.add_label(
        create_label(
            span(
                filename,
                start if label_start is None else label_start,
                end if label_end is None else label_end,
            ),
            label,
            color=RED,
        )
    )
    return report.render(cache)
