"""Exception types raised by the diagnostic engine."""

from __future__ import annotations


class SkeinError(Exception):
    """Base class for every error raised by skein."""


class LabelError(SkeinError, ValueError):
    """A label was built over a span whose start lies after its end."""

    def __init__(self, start: int, end: int) -> None:
        self.start = start
        self.end = end
        super().__init__(
            f"label start ({start}) must not be after its end ({end})"
        )


class SourceNotFoundError(SkeinError, LookupError):
    """A source id was requested that was never registered with the cache."""

    def __init__(self, source_id: str) -> None:
        self.source_id = source_id
        super().__init__(f"Failed to fetch source '{source_id}'")


class ConfigError(SkeinError, ValueError):
    """A render option is unknown or carries an invalid value."""


class ReportFieldError(SkeinError, ValueError):
    """``Report.set_field`` was called with a key it cannot update."""


class DiagnosticFileError(SkeinError, ValueError):
    """A diagnostics file could not be turned into reports."""

    def __init__(self, path: str, message: str) -> None:
        self.path = path
        super().__init__(f"{path}: {message}")


class SourceDecodeError(SkeinError, ValueError):
    """A source file is not valid UTF-8."""

    def __init__(self, path: str, position: int, reason: str) -> None:
        self.path = path
        self.position = position
        super().__init__(f"{path}: not valid UTF-8 at byte {position} ({reason})")
