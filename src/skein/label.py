"""Labels: spans annotated with a message, colour and ordering key."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from skein.draw import Color
from skein.errors import LabelError
from skein.source import Span


class LabelAttach(Enum):
    """Where under a label's underline its message arrow starts."""

    START = "start"
    MIDDLE = "middle"
    END = "end"


@dataclass(frozen=True)
class Label:
    """A span plus how to display it.

    ``order`` sorts labels sharing a line; ``priority`` is carried for
    crossing resolution and not used by the base layout.
    """

    span: Span
    msg: str | None = None
    color: Color | None = None
    order: int = 0
    priority: int = 0

    def __post_init__(self) -> None:
        if self.span.start > self.span.end:
            raise LabelError(self.span.start, self.span.end)


@dataclass(frozen=True)
class LabelLineInfo:
    """A label projected onto one source line, in display columns.

    Built fresh on every render since the index unit and attach policy
    may differ between renders of the same report.
    """

    line_index: int
    start_col: int
    end_col: int
    attach_col: int
    msg: str | None
    order: int
    color: Color | None


def create_label(
    span: Span,
    msg: str | None = None,
    *,
    color: Color | None = None,
    order: int = 0,
    priority: int = 0,
) -> Label:
    """Build a label, raising LabelError if ``span.start > span.end``."""
    return Label(span, msg=msg, color=color, order=order, priority=priority)


def attach_column(start_col: int, end_col: int, attach: LabelAttach) -> int:
    """Column where the message arrow leaves the underline, within ``[start, end)``."""
    if attach is LabelAttach.START:
        col = start_col
    elif attach is LabelAttach.END:
        col = max(start_col, end_col - 1)
    else:
        col = (start_col + end_col) // 2
    return max(start_col, min(col, max(start_col, end_col - 1)))
