"""Shared test helpers for the skein test suite."""

from __future__ import annotations

from skein import Source, SourceCache, create_report, span


def render_text(text: str, start: int, end: int, labels=(), **fields) -> str:
    """Render a report over ``text`` registered as ``main.src``, without colour."""
    cache = SourceCache([("main.src", Source(text))])
    fields.setdefault("config", {"color": False, "ansi_mode": "off"})
    report = create_report(span("main.src", start, end), labels=labels, **fields)
    return report.render(cache)


def body_rows(output: str) -> list[str]:
    """Rows between the header box and the bottom border."""
    return output.split("\n")[3:-1]
