"""Source text indexing, spans, and the source cache used by the renderer.

A ``Source`` splits its text into ``Line`` records once, at construction,
and answers offset lookups in either character or UTF-8 byte units.
Lookups always take the unit explicitly; a ``Span`` carries no unit of
its own and is interpreted by whoever resolves it.
"""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from skein.errors import SourceNotFoundError

LINE_TERMINATORS = frozenset("\n\r\u000b\u000c\u0085\u2028\u2029")


class IndexType(Enum):
    """Unit in which span offsets are counted."""

    BYTE = "byte"
    CHAR = "char"


@dataclass(frozen=True)
class Span:
    """Half-open range ``[start, end)`` over one source's offsets."""

    source_id: str | None
    start: int
    end: int

    def __len__(self) -> int:
        return max(0, self.end - self.start)

    def __str__(self) -> str:
        return f"{self.source_id or '<unknown>'}:{self.start}..{self.end}"


def span(source_id: str | None, start: int, end: int) -> Span:
    """Build a span. Ordering of ``start``/``end`` is checked by labels, not here."""
    return Span(source_id, start, end)


@dataclass(frozen=True)
class Line:
    """One line of a source, terminator included, in both unit spaces."""

    offset: int
    char_len: int
    byte_offset: int
    byte_len: int

    def start(self, unit: IndexType) -> int:
        return self.offset if unit is IndexType.CHAR else self.byte_offset

    def length(self, unit: IndexType) -> int:
        return self.char_len if unit is IndexType.CHAR else self.byte_len


def byte_len(text: str) -> int:
    """Length of ``text`` once encoded as UTF-8."""
    return len(text.encode("utf-8", "surrogatepass"))


def split_lines(text: str) -> list[str]:
    """Split ``text`` keeping each line's terminator.

    CR+LF counts as a single terminator. A trailing terminator yields one
    extra empty line, and empty text yields a single empty line.
    """
    if not text:
        return [""]
    lines: list[str] = []
    start = 0
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == "\r" and i + 1 < n and text[i + 1] == "\n":
            i += 2
            lines.append(text[start:i])
            start = i
            continue
        i += 1
        if ch in LINE_TERMINATORS:
            lines.append(text[start:i])
            start = i
    # Either the unterminated tail or the empty line after a final terminator.
    lines.append(text[start:])
    return lines


class Source:
    """An indexed, immutable source text.

    Only ``display_line_offset`` may change after construction; it biases
    the line numbers shown to users and never affects lookups.
    """

    def __init__(self, text: str) -> None:
        self._text = text
        self.display_line_offset = 0

        lines: list[Line] = []
        char_offset = 0
        byte_offset = 0
        for raw in split_lines(text):
            line = Line(char_offset, len(raw), byte_offset, byte_len(raw))
            lines.append(line)
            char_offset += line.char_len
            byte_offset += line.byte_len
        self._lines = tuple(lines)
        self._len = char_offset
        self._byte_len = byte_offset
        self._char_starts = [line.offset for line in lines]
        self._byte_starts = [line.byte_offset for line in lines]

    def __repr__(self) -> str:
        return f"Source(lines={len(self._lines)}, len={self._len})"

    @property
    def text(self) -> str:
        return self._text

    @property
    def lines(self) -> tuple[Line, ...]:
        return self._lines

    @property
    def len(self) -> int:
        """Total length in characters."""
        return self._len

    @property
    def byte_len(self) -> int:
        """Total length in UTF-8 bytes."""
        return self._byte_len

    def total(self, unit: IndexType) -> int:
        return self._len if unit is IndexType.CHAR else self._byte_len

    def line_at(self, offset: int, unit: IndexType) -> tuple[Line, int, int] | None:
        """Resolve ``offset`` to ``(line, line_index, column)`` in ``unit``.

        The end-of-text position is valid and maps onto the last line.
        Returns None for offsets outside ``[0, total]``.
        """
        if offset < 0 or offset > self.total(unit):
            return None
        starts = self._char_starts if unit is IndexType.CHAR else self._byte_starts
        idx = bisect_right(starts, offset) - 1
        line = self._lines[idx]
        return line, idx, offset - line.start(unit)

    def line_range(self, start: int, end: int, unit: IndexType) -> tuple[int, int]:
        """Half-open range of line indices touched by ``[start, end)``."""
        first = self.line_at(start, unit)
        # end is exclusive; resolving end - 1 keeps a range that stops
        # exactly on a line boundary from claiming the next line.
        last = self.line_at(max(start, end - 1), unit)
        first_idx = first[1] if first else 0
        last_idx = last[1] + 1 if last else len(self._lines)
        return first_idx, last_idx

    def line(self, index: int) -> Line | None:
        if 0 <= index < len(self._lines):
            return self._lines[index]
        return None

    def line_text(self, line: Line) -> str | None:
        """Raw text of ``line`` including its terminator, or None if unknown."""
        idx = bisect_right(self._char_starts, line.offset) - 1
        if idx < 0 or self._lines[idx] != line:
            return None
        return self._text[line.offset : line.offset + line.char_len]

    def column_to_char(self, line: Line, col: int, unit: IndexType) -> int:
        """Map a raw column of ``line`` in ``unit`` onto a character column."""
        if unit is IndexType.CHAR:
            return max(0, min(col, line.char_len))
        text = self.line_text(line) or ""
        consumed = 0
        for i, ch in enumerate(text):
            if consumed >= col:
                return i
            consumed += byte_len(ch)
        return len(text)

    def set_display_line_offset(self, offset: int) -> None:
        self.display_line_offset = offset

    def display_line_no(self, index: int) -> int:
        """1-based line number shown to users for the line at ``index``."""
        return index + 1 + self.display_line_offset


class SourceCache:
    """Maps source ids to pre-registered ``Source`` objects."""

    def __init__(self, entries: Iterable[tuple[str, Source]] = ()) -> None:
        self._sources: dict[str, Source] = dict(entries)

    def __contains__(self, source_id: object) -> bool:
        return source_id in self._sources

    def __len__(self) -> int:
        return len(self._sources)

    def add(self, source_id: str, source: Source) -> None:
        self._sources[source_id] = source

    def fetch(self, source_id: str) -> Source:
        """Return the source registered as ``source_id``.

        Raises SourceNotFoundError; there is no fallback source.
        """
        try:
            return self._sources[source_id]
        except KeyError:
            raise SourceNotFoundError(source_id) from None
