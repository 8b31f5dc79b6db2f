"""Tests for lineedit.layout -- wrapping and cursor placement."""

from __future__ import annotations

from lineedit.layout import grapheme_width, layout_input, visible_width


class TestVisibleWidth:
    def test_ascii(self) -> None:
        assert visible_width("hello") == 5
        assert visible_width("") == 0

    def test_wide_characters(self) -> None:
        assert visible_width("中文") == 4

    def test_combining_mark(self) -> None:
        assert visible_width("é") == 1

    def test_control_character_has_no_width(self) -> None:
        assert grapheme_width("\x07") == 0


class TestLayoutInput:
    def test_fits_on_one_row(self) -> None:
        layout = layout_input("> ", "abc", 3, 80)
        assert layout.rows == ["> abc"]
        assert (layout.cursor_row, layout.cursor_col) == (0, 5)

    def test_cursor_inside_text(self) -> None:
        layout = layout_input("> ", "abc", 1, 80)
        assert (layout.cursor_row, layout.cursor_col) == (0, 3)

    def test_wraps_at_width(self) -> None:
        layout = layout_input("> ", "abcdef", 2, 4)
        assert layout.rows == ["> ab", "cdef"]
        assert (layout.cursor_row, layout.cursor_col) == (1, 0)

    def test_cursor_on_right_margin_moves_to_next_row(self) -> None:
        layout = layout_input("> ", "abc", 3, 5)
        assert layout.rows == ["> abc", ""]
        assert (layout.cursor_row, layout.cursor_col) == (1, 0)

    def test_wide_character_is_not_split(self) -> None:
        layout = layout_input("> ", "中文", 2, 5)
        assert layout.rows == ["> 中", "文"]
        assert (layout.cursor_row, layout.cursor_col) == (1, 2)

    def test_zero_width_is_clamped_to_one_column(self) -> None:
        layout = layout_input("", "ab", 2, 0)
        assert layout.rows == ["a", "b", ""]
        assert (layout.cursor_row, layout.cursor_col) == (2, 0)
