"""Layout engine turning a report and its sources into annotated text.

Output shape, for a single label on line 3::

    Error[E01]: syntax error
      ╭─[main.src:3:5]
      │
    3 │ let a = 1;
      │     ┬
      │     ╰──────────────────── here
    ──╯
    note: ...

Labels are projected onto display columns (tabs expanded, byte offsets
mapped onto characters) fresh on every call. Labels on another source or
spanning more than one line are dropped rather than failing the render.
"""

from __future__ import annotations

import logging

from skein.config import Config, char_width
from skein.draw import (
    AnsiMode,
    characters,
    fg,
    margin_color,
    note_color,
    skipped_margin_color,
    strip_ansi,
)
from skein.label import Label, LabelLineInfo, attach_column
from skein.report import Report, ReportSnapshot, resolve_style
from skein.source import Source, SourceCache

logger = logging.getLogger(__name__)

MESSAGE_COLUMN = 25
ELISION_MIN_SKIPPED = 2
ELLIPSIS = "..."
UNKNOWN_SOURCE = "<unknown>"


def expand_line(text: str, tab_width: int) -> tuple[str, list[int]]:
    """Expand ``text`` for display.

    Returns the expanded text and, for every character index (plus one
    past the end), the display column it starts at.
    """
    out: list[str] = []
    columns: list[int] = []
    col = 0
    for ch in text:
        columns.append(col)
        glyph, width = char_width(ch, col, tab_width)
        out.append(glyph * width)
        col += width
    columns.append(col)
    return "".join(out), columns


class _LineCache:
    """Per-render cache of expanded line text and column maps."""

    def __init__(self, src: Source, tab_width: int) -> None:
        self._src = src
        self._tab_width = tab_width
        self._lines: dict[int, tuple[str, list[int]]] = {}

    def get(self, index: int) -> tuple[str, list[int]]:
        if index not in self._lines:
            line = self._src.line(index)
            text = (self._src.line_text(line) if line else None) or ""
            self._lines[index] = expand_line(text, self._tab_width)
        return self._lines[index]


def _project_label(
    label: Label, src: Source, lines: _LineCache, config: Config
) -> LabelLineInfo | None:
    unit = config.index_type
    start = src.line_at(label.span.start, unit)
    end = src.line_at(max(label.span.end - 1, label.span.start), unit)
    if start is None or end is None:
        logger.debug("dropping label %s: offset outside source", label.span)
        return None
    if start[1] != end[1]:
        logger.debug("dropping label %s: spans lines %d-%d", label.span, start[1], end[1])
        return None

    line, line_index, raw_start = start
    raw_end = label.span.end - line.start(unit)
    _, columns = lines.get(line_index)
    start_char = src.column_to_char(line, raw_start, unit)
    end_char = src.column_to_char(line, raw_end, unit)
    start_col = columns[min(start_char, len(columns) - 1)]
    end_col = max(start_col + 1, columns[min(end_char, len(columns) - 1)])

    return LabelLineInfo(
        line_index=line_index,
        start_col=start_col,
        end_col=end_col,
        attach_col=attach_column(start_col, end_col, config.label_attach),
        msg=label.msg,
        order=label.order,
        color=label.color if config.color else None,
    )


def _underline(length: int, marker_index: int, bar: str, marker: str) -> str:
    if length <= 0:
        return ""
    chars = [bar] * length
    chars[max(0, min(length - 1, marker_index))] = marker
    return "".join(chars)


def render_report(
    report: Report | ReportSnapshot,
    cache: SourceCache,
    *,
    elide_after: int = ELISION_MIN_SKIPPED,
) -> str:
    """Render ``report`` against the sources in ``cache``.

    Raises SourceNotFoundError if the primary span's source is not cached.
    A ``...`` row is emitted when at least ``elide_after`` unlabelled lines
    separate two labelled ones.
    """
    snap = report.snapshot() if isinstance(report, Report) else report
    config = snap.config
    unit = config.index_type
    use_color = config.color
    draw = characters(config.char_set)
    margin = margin_color(use_color)

    src_id = snap.span.source_id or UNKNOWN_SOURCE
    src = cache.fetch(src_id)
    lines = _LineCache(src, config.tab_width)

    location = src.line_at(snap.span.start, unit)
    if location is None:
        line_no: int | str = "?"
        col_no: int | str = "?"
    else:
        line_no = src.display_line_no(location[1])
        col_no = location[2] + 1
    line_ref = f"{src_id}:{line_no}:{col_no}"

    infos: list[LabelLineInfo] = []
    for label in snap.labels:
        if label.span.source_id != snap.span.source_id:
            logger.debug("dropping label %s: not on source %s", label.span, src_id)
            continue
        info = _project_label(label, src, lines, config)
        if info is not None:
            infos.append(info)
    infos.sort(key=lambda i: (i.order, i.line_index))

    line_indices = sorted({i.line_index for i in infos})
    width = max([1] + [len(str(src.display_line_no(i))) for i in line_indices])
    indent = " " * (width + 1)
    gutter = f"{indent}{fg(draw.vbar, margin)}"

    name, style_color = resolve_style(snap.kind, use_color)
    header_label = f"{name}[{snap.code}]" if snap.code else name
    out = [
        f"{fg(header_label, style_color)}: {snap.msg or ''}",
        f"{indent}{fg(draw.ltop + draw.hbar + '[', margin)}{line_ref}{fg(']', margin)}",
        gutter,
    ]

    last_index: int | None = None
    for line_index in line_indices:
        if last_index is not None and line_index - last_index - 1 >= elide_after:
            out.append(fg(ELLIPSIS, skipped_margin_color(use_color)))
        text, _ = lines.get(line_index)
        number = str(src.display_line_no(line_index)).rjust(width)
        out.append(f"{fg(f'{number} {draw.vbar}', margin)} {text.rstrip()}")

        for info in infos:
            if info.line_index != line_index:
                continue
            underline = _underline(
                info.end_col - info.start_col,
                info.attach_col - info.start_col,
                draw.underline,
                draw.munderbar,
            )
            out.append(f"{gutter} {' ' * info.start_col}{fg(underline, info.color)}")
            if info.msg:
                tail = max(1, MESSAGE_COLUMN - info.attach_col - 1)
                arrow = fg(draw.lbot + draw.hbar * tail, info.color)
                out.append(f"{gutter} {' ' * info.attach_col}{arrow} {info.msg}")
        last_index = line_index

    out.append(fg(draw.hbar * (width + 1) + draw.rbot, margin))

    notes = note_color(use_color)
    for note in snap.notes:
        out.append(f"{fg('note', notes)}: {note}")
    for help_text in snap.help:
        out.append(f"{fg('help', notes)}: {help_text}")

    result = "\n".join(out)
    if config.ansi_mode is AnsiMode.OFF:
        return strip_ansi(result)
    return result


def render(report: Report | ReportSnapshot, cache: SourceCache) -> str:
    """``render_report`` with the default elision boundary."""
    return render_report(report, cache)
