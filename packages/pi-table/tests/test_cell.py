"""Tests for cells, rows and the value types they carry."""

from __future__ import annotations

import pytest

from pi.table.cell import Cell, Row, as_row
from pi.table.style import STYLES, BorderChars, border_chars, check_style
from pi.table.types import (
    Fixed,
    Max,
    Min,
    Padding,
    Proportional,
    Wrap,
    check_alignment,
    check_vertical_alignment,
)


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------


class TestValueTypes:
    def test_padding_defaults(self) -> None:
        padding = Padding()
        assert (padding.left, padding.right, padding.top, padding.bottom) == (1, 1, 0, 0)
        assert padding.horizontal == 2

    def test_uniform_padding(self) -> None:
        assert Padding.uniform(3) == Padding(left=3, right=3)

    def test_negative_padding_rejected(self) -> None:
        with pytest.raises(ValueError, match="Padding.left"):
            Padding(left=-1)

    @pytest.mark.parametrize("constraint", [Fixed, Min, Max, Wrap])
    def test_negative_width_rejected(self, constraint: type) -> None:
        with pytest.raises(ValueError):
            constraint(-1)

    def test_proportional_range(self) -> None:
        assert Proportional(0).percent == 0
        assert Proportional(100).percent == 100
        with pytest.raises(ValueError):
            Proportional(101)

    def test_unknown_alignment_rejected(self) -> None:
        assert check_alignment("center") == "center"
        with pytest.raises(ValueError, match="justify"):
            check_alignment("justify")

    def test_unknown_vertical_alignment_rejected(self) -> None:
        assert check_vertical_alignment("middle") == "middle"
        with pytest.raises(ValueError):
            check_vertical_alignment("baseline")


class TestStyles:
    @pytest.mark.parametrize("style", STYLES)
    def test_every_style_has_glyphs(self, style: str) -> None:
        assert isinstance(border_chars(check_style(style)), BorderChars)

    def test_unknown_style_rejected(self) -> None:
        with pytest.raises(ValueError, match="fancy"):
            check_style("fancy")

    def test_markdown_draws_a_delimiter_row(self) -> None:
        chars = border_chars("markdown")
        assert chars.delimiter_row
        assert not chars.outer_border
        assert not chars.merge_spans


# ---------------------------------------------------------------------------
# Cell
# ---------------------------------------------------------------------------


class TestCell:
    def test_defaults(self) -> None:
        cell = Cell()
        assert cell.content == ""
        assert cell.alignment is None
        assert cell.span == 1

    def test_span_below_one_rejected(self) -> None:
        with pytest.raises(ValueError, match="span"):
            Cell("x", span=0)
        cell = Cell("x")
        with pytest.raises(ValueError):
            cell.span = 0
        assert cell.span == 1

    def test_tabs_expand_to_three_spaces(self) -> None:
        assert Cell("a\tb").text == "a   b"

    def test_wrap_is_cached_per_width(self) -> None:
        cell = Cell("hello world")
        first = cell.wrap(5)
        assert first == ["hello", "world"]
        assert cell.wrap(5) == first
        assert cell.wrap(20) == ["hello world"]

    def test_wrap_result_is_a_copy(self) -> None:
        cell = Cell("hello world")
        cell.wrap(5).append("mutated")
        assert cell.wrap(5) == ["hello", "world"]

    def test_content_change_invalidates_cache(self) -> None:
        cell = Cell("hello world")
        cell.wrap(5)
        cell.content = "abc def"
        assert cell.wrap(5) == ["abc", "def"]

    def test_equality_and_copy(self) -> None:
        cell = Cell("x", alignment="right", span=2)
        clone = cell.copy()
        assert clone == cell
        assert clone is not cell
        assert repr(cell) == "Cell('x', alignment='right', span=2)"


# ---------------------------------------------------------------------------
# Row
# ---------------------------------------------------------------------------


class TestRow:
    def test_strings_become_cells(self) -> None:
        row = Row(["a", Cell("b", alignment="right")])
        assert row.contents() == ["a", "b"]
        assert row[1].alignment == "right"

    def test_width_sums_spans(self) -> None:
        row = Row([Cell("a", span=2), "b"])
        assert len(row) == 2
        assert row.width == 3

    def test_cell_at_follows_spans(self) -> None:
        row = Row([Cell("a", span=2), "b"])
        assert row.cell_at(0) is row[0]
        assert row.cell_at(1) is row[0]
        assert row.cell_at(2) is row[1]
        assert row.cell_at(3) is None

    def test_push_insert_remove(self) -> None:
        row = Row(["a"])
        row.push("c")
        row.insert(1, "b")
        assert row.contents() == ["a", "b", "c"]
        removed = row.remove(0)
        assert removed is not None and removed.content == "a"
        assert row.remove(10) is None
        assert row.contents() == ["b", "c"]

    def test_str_joins_contents(self) -> None:
        assert str(Row(["a", "b"])) == "a | b"

    def test_as_row_copies(self) -> None:
        cell = Cell("a")
        row = as_row([cell])
        row[0].content = "changed"
        assert cell.content == "a"

    def test_as_row_wraps_a_bare_string(self) -> None:
        assert as_row("solo").contents() == ["solo"]
