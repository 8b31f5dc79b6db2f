"""Layout of a prompt plus the edited line at a given console width.

The driver paints; these helpers only say which text lands on which row and
where the cursor goes. Widths are measured per grapheme cluster so wide
(CJK, emoji) and zero-width (combining) characters are placed correctly.
"""

from __future__ import annotations

import unicodedata
from dataclasses import dataclass

import grapheme
import wcwidth as _wcwidth

_width_cache: dict[str, int] = {}
_WIDTH_CACHE_MAX = 512


def _cache_width(key: str, value: int) -> int:
    if len(_width_cache) >= _WIDTH_CACHE_MAX:
        _width_cache.clear()
    _width_cache[key] = value
    return value


def grapheme_width(g: str) -> int:
    """Return the terminal display width of a single grapheme cluster."""
    if not g:
        return 0

    if len(g) == 1:
        cp = ord(g)
        if cp < 0x20 or (0x7F <= cp <= 0x9F):
            return 0
        return max(_wcwidth.wcwidth(g), 0)

    for ch in g:
        cp = ord(ch)
        if cp in (0xFE0F, 0x200D):  # VS16, ZWJ
            return 2
        if 0x1F3FB <= cp <= 0x1F3FF or 0x1F1E6 <= cp <= 0x1F1FF:
            return 2

    first_cp = ord(g[0])
    if first_cp >= 0x1F000 or 0x2600 <= first_cp <= 0x27BF:
        return 2

    cat = unicodedata.category(g[0])
    if cat.startswith("M") or cat == "Cf":
        return 0
    return max(_wcwidth.wcwidth(g[0]), 0)


def visible_width(text: str) -> int:
    """Calculate the display width of *text* (no escape sequences expected)."""
    if not text:
        return 0
    if all(0x20 <= ord(ch) <= 0x7E for ch in text):
        return len(text)

    cached = _width_cache.get(text)
    if cached is not None:
        return cached
    total = sum(grapheme_width(g) for g in grapheme.graphemes(text))
    return _cache_width(text, total)


@dataclass
class InputLayout:
    """Rows to paint and the cursor's row/column within them."""

    rows: list[str]
    cursor_row: int
    cursor_col: int


def layout_input(prompt: str, text: str, insert_pos: int, width: int) -> InputLayout:
    """Wrap ``prompt + text`` into rows of at most *width* columns.

    The cursor sits before the grapheme that contains ``insert_pos``. A cursor
    that would fall exactly on the right margin moves to column 0 of the next
    row, which is then present (possibly empty) in ``rows``.
    """
    width = max(1, width)
    rows: list[str] = [""]
    row_width = 0
    cursor: tuple[int, int] | None = None

    def place(g: str, *, mark_cursor: bool = False) -> None:
        nonlocal row_width, cursor
        w = grapheme_width(g)
        if w and row_width + w > width:
            rows.append("")
            row_width = 0
        if mark_cursor:
            cursor = (len(rows) - 1, row_width)
        rows[-1] += g
        row_width += w

    for g in grapheme.graphemes(prompt):
        place(g)

    offset = 0
    for g in grapheme.graphemes(text):
        place(g, mark_cursor=cursor is None and offset + len(g) > insert_pos)
        offset += len(g)

    if cursor is None:
        if row_width >= width:
            rows.append("")
            cursor = (len(rows) - 1, 0)
        else:
            cursor = (len(rows) - 1, row_width)
    return InputLayout(rows=rows, cursor_row=cursor[0], cursor_col=cursor[1])
