"""Tests for the one-call error renderer."""

from __future__ import annotations

from skein import ReportKind
from skein.convenience import report_error


class TestReportError:
    def test_label_defaults_to_primary_span(self):
        out = report_error(
            "main.src", "let 1 = a;", "invalid binding", 4, 5,
            label="expected an identifier", config={"color": False},
        )
        assert out.split("\n") == [
            "Error: invalid binding",
            "  ╭─[main.src:1:5]",
            "  │",
            "1 │ let 1 = a;",
            "  │     ┬",
            "  │     ╰" + "─" * 20 + " expected an identifier",
            "──╯",
        ]

    def test_separate_label_span(self):
        out = report_error(
            "main.src", "let = 1;", "missing name", 3, 6,
            label="name goes here", label_start=3, label_end=4,
            config={"color": False, "label_attach": "start"},
        )
        assert "  │    ┬" in out.split("\n")

    def test_label_is_red(self):
        out = report_error("main.src", "x", "bad", 0, 1)
        assert "\x1b[31m┬\x1b[0m" in out

    def test_kind(self):
        out = report_error(
            "main.src", "x", "odd", 0, 1, kind=ReportKind.WARNING, config={"color": False},
        )
        assert out.startswith("Warning: odd")
