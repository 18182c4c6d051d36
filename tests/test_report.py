"""Tests for the report builder."""

from __future__ import annotations

import pytest

from skein import (
    MAGENTA,
    BasicStyle,
    CharSet,
    Config,
    ReportFieldError,
    ReportKind,
    create_basic_style,
    create_label,
    create_report,
    span,
)
from skein.report import Report, resolve_style


class TestCreateReport:
    def test_defaults(self):
        report = create_report(span("main.src", 0, 3))
        assert report.kind is ReportKind.ERROR
        assert report.code is None
        assert report.msg is None
        assert report.notes == []
        assert report.help == []
        assert report.labels == []
        assert report.config == Config()

    def test_config_normalized_eagerly(self):
        report = create_report(span("main.src", 0, 3), config={"char_set": "ascii"})
        assert isinstance(report.config, Config)
        assert report.config.char_set is CharSet.ASCII

    def test_report_normalizes_mapping_config(self):
        report = Report(span("main.src", 0, 3), config={"color": False})
        assert report.config.color is False

    def test_fields_overlay_defaults(self):
        report = create_report(
            span("main.src", 0, 3),
            kind=ReportKind.WARNING,
            code="W1",
            msg="careful",
            notes=["n"],
        )
        assert (report.kind, report.code, report.msg) == (ReportKind.WARNING, "W1", "careful")
        assert report.notes == ["n"]


class TestSetField:
    def test_list_fields_append(self):
        report = create_report(span("main.src", 0, 3))
        report.set_field("notes", "first").set_field("notes", "second")
        report.set_field("help", "try this")
        assert report.notes == ["first", "second"]
        assert report.help == ["try this"]

    def test_scalar_fields_replace(self):
        report = create_report(span("main.src", 0, 3), msg="old")
        report.set_field("msg", "new").set_field("code", "E2")
        report.set_field("kind", ReportKind.ADVICE)
        assert report.msg == "new"
        assert report.code == "E2"
        assert report.kind is ReportKind.ADVICE

    def test_labels_accumulate(self):
        report = create_report(span("main.src", 0, 3))
        a = create_label(span("main.src", 0, 1))
        b = create_label(span("main.src", 1, 2))
        report.set_field("labels", a)
        report.add_labels([b])
        assert report.labels == [a, b]

    def test_config_is_not_a_field(self):
        report = create_report(span("main.src", 0, 3))
        with pytest.raises(ReportFieldError, match="set_config"):
            report.set_field("config", Config())

    def test_unknown_field(self):
        report = create_report(span("main.src", 0, 3))
        with pytest.raises(ReportFieldError, match="unknown report field"):
            report.set_field("severity", "high")

    def test_helpers(self):
        report = create_report(span("main.src", 0, 3))
        report.with_note("a note").with_help("a hint")
        assert report.notes == ["a note"]
        assert report.help == ["a hint"]

    def test_set_config(self):
        report = create_report(span("main.src", 0, 3))
        report.set_config({"char_set": "ascii"})
        assert report.config.char_set is CharSet.ASCII


class TestSnapshot:
    def test_snapshot_is_detached(self):
        report = create_report(span("main.src", 0, 3), notes=["a"])
        snap = report.snapshot()
        report.with_note("b")
        assert snap.notes == ("a",)
        assert report.notes == ["a", "b"]


class TestStyle:
    def test_fixed_kinds(self):
        assert resolve_style(ReportKind.ERROR, True)[0] == "Error"
        assert resolve_style(ReportKind.WARNING, True)[0] == "Warning"
        assert resolve_style(ReportKind.ADVICE, True)[0] == "Advice"

    def test_fixed_kind_colour_gated(self):
        assert resolve_style(ReportKind.ERROR, True)[1] is not None
        assert resolve_style(ReportKind.ERROR, False)[1] is None

    def test_named_style(self):
        style = create_basic_style("Lint", MAGENTA)
        assert style == BasicStyle("Lint", MAGENTA)
        assert resolve_style(style, True) == ("Lint", MAGENTA)
        assert resolve_style(style, False) == ("Lint", None)

    def test_plain_string(self):
        assert resolve_style("Hint", True) == ("Hint", None)
