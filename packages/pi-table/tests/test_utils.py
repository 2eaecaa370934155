"""Tests for pi.table.utils -- cell text measurement, wrapping, truncation."""

from __future__ import annotations

from pi.table.utils import (
    max_line_width,
    pad_to_width,
    split_lines,
    truncate_text,
    truncate_to_width,
    visible_width,
    wrap_text,
)


# ---------------------------------------------------------------------------
# visible_width
# ---------------------------------------------------------------------------


class TestVisibleWidth:
    """Measure the display width of cell text."""

    def test_plain_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty_string(self) -> None:
        assert visible_width("") == 0

    def test_ansi_codes_do_not_count(self) -> None:
        assert visible_width("\x1b[1mhi\x1b[0m") == 2

    def test_wide_characters_count_as_two(self) -> None:
        assert visible_width("日本") == 4

    def test_tab_counts_as_three(self) -> None:
        assert visible_width("a\tb") == 5

    def test_max_line_width_uses_widest_line(self) -> None:
        assert max_line_width("ab\nabcd\nabc") == 4

    def test_split_lines_normalizes_line_endings(self) -> None:
        assert split_lines("a\r\nb\rc\nd") == ["a", "b", "c", "d"]


# ---------------------------------------------------------------------------
# wrap_text
# ---------------------------------------------------------------------------


class TestWrapText:
    """Word wrapping within a column width."""

    def test_short_text_is_unchanged(self) -> None:
        assert wrap_text("hello", 10) == ["hello"]

    def test_wraps_at_word_boundary(self) -> None:
        assert wrap_text("hello world foo", 11) == ["hello world", "foo"]

    def test_every_line_fits(self) -> None:
        text = "the quick brown fox jumps over the lazy dog"
        for width in range(3, 20):
            for line in wrap_text(text, width):
                assert visible_width(line) <= width

    def test_words_are_preserved_in_order(self) -> None:
        text = "the quick brown fox jumps over the lazy dog"
        lines = wrap_text(text, 9)
        assert " ".join(lines).split() == text.split()

    def test_long_word_is_hard_split(self) -> None:
        assert wrap_text("Supercalifragilistic", 5) == ["Super", "calif", "ragil", "istic"]

    def test_embedded_newlines_are_mandatory_breaks(self) -> None:
        assert wrap_text("a\nb", 10) == ["a", "b"]

    def test_zero_width_yields_single_empty_line(self) -> None:
        assert wrap_text("abc", 0) == [""]

    def test_empty_text_yields_single_empty_line(self) -> None:
        assert wrap_text("", 5) == [""]

    def test_wide_characters_are_split_by_columns(self) -> None:
        lines = wrap_text("日本語", 4)
        assert lines == ["日本", "語"]

    def test_style_is_carried_across_lines(self) -> None:
        lines = wrap_text("\x1b[31mred text here\x1b[0m", 8)
        assert lines == ["\x1b[31mred text\x1b[0m", "\x1b[31mhere\x1b[0m"]


# ---------------------------------------------------------------------------
# Truncation
# ---------------------------------------------------------------------------


class TestTruncateText:
    """Character-limit truncation of cell content."""

    def test_short_text_is_unchanged(self) -> None:
        assert truncate_text("abc", 5) == "abc"

    def test_long_text_gets_ellipsis(self) -> None:
        assert truncate_text("Hello world", 5) == "Hello..."

    def test_extra_lines_are_dropped(self) -> None:
        assert truncate_text("hello\nworld", 10) == "hello..."

    def test_blank_trailing_lines_are_not_a_cut(self) -> None:
        assert truncate_text("hello\n  ", 10) == "hello"


class TestTruncateToWidth:
    """Fitting text into a fixed number of columns."""

    def test_fits(self) -> None:
        assert truncate_to_width("hello", 5) == "hello"

    def test_ellipsis_counts_towards_width(self) -> None:
        result = truncate_to_width("hello world", 8)
        assert result == "hello..."
        assert visible_width(result) == 8

    def test_zero_width(self) -> None:
        assert truncate_to_width("hello", 0) == ""

    def test_narrower_than_ellipsis(self) -> None:
        assert truncate_to_width("hello", 2) == ".."

    def test_ansi_is_reset_after_cut(self) -> None:
        result = truncate_to_width("\x1b[31mhello world\x1b[0m", 8)
        assert result == "\x1b[31mhello\x1b[0m..."


class TestPadToWidth:
    def test_pads_right(self) -> None:
        assert pad_to_width("ab", 4) == "ab  "

    def test_pads_left(self) -> None:
        assert pad_to_width("ab", 4, left=True) == "  ab"

    def test_measures_visible_width(self) -> None:
        assert pad_to_width("\x1b[1mab\x1b[0m", 3) == "\x1b[1mab\x1b[0m "

    def test_wide_text_unchanged(self) -> None:
        assert pad_to_width("abcdef", 3) == "abcdef"
