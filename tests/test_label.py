"""Tests for labels and attach columns."""

from __future__ import annotations

import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from skein import RED, Label, LabelAttach, LabelError, create_label, span
from skein.label import attach_column


class TestCreateLabel:
    def test_defaults(self):
        label = create_label(span("f", 1, 3))
        assert label.msg is None
        assert label.color is None
        assert label.order == 0
        assert label.priority == 0

    def test_display_fields(self):
        label = create_label(span("f", 1, 3), "here", color=RED, order=2, priority=5)
        assert (label.msg, label.color, label.order, label.priority) == ("here", RED, 2, 5)

    def test_empty_span_allowed(self):
        assert create_label(span("f", 4, 4)).span.start == 4

    def test_start_after_end_fails(self):
        with pytest.raises(LabelError, match="must not be after"):
            create_label(span("f", 5, 4))

    def test_direct_construction_is_checked(self):
        with pytest.raises(ValueError):
            Label(span("f", 2, 1))

    def test_frozen(self):
        label = create_label(span("f", 1, 2))
        with pytest.raises(dataclasses.FrozenInstanceError):
            label.order = 3  # type: ignore[misc]

    @given(st.integers(), st.integers())
    def test_order_of_bounds_decides(self, a, b):
        if a > b:
            with pytest.raises(LabelError):
                create_label(span("f", a, b))
        else:
            assert create_label(span("f", a, b)).span == span("f", a, b)


class TestAttachColumn:
    def test_start(self):
        assert attach_column(2, 7, LabelAttach.START) == 2

    def test_end(self):
        assert attach_column(2, 7, LabelAttach.END) == 6

    def test_middle(self):
        assert attach_column(2, 7, LabelAttach.MIDDLE) == 4
        assert attach_column(2, 6, LabelAttach.MIDDLE) == 4

    def test_single_column(self):
        for attach in LabelAttach:
            assert attach_column(3, 4, attach) == 3

    @given(st.integers(0, 200), st.integers(1, 200), st.sampled_from(list(LabelAttach)))
    def test_always_inside_label(self, start, width, attach):
        col = attach_column(start, start + width, attach)
        assert start <= col < start + width
