"""Edit buffer for a single input line, plus word boundary helpers."""

from __future__ import annotations


def is_space(char: str) -> bool:
    return char == " "


def find_word_boundary(text: str, start: int, forward: bool) -> int:
    """Return the index reached by a word jump from *start*.

    Forward skips the rest of the current word and then any spaces, landing
    on the next word start (or the end of the line). Backward skips spaces
    and then the preceding word, landing on that word's first character.
    """
    pos = max(0, min(start, len(text)))
    if forward:
        while pos < len(text) and not is_space(text[pos]):
            pos += 1
        while pos < len(text) and is_space(text[pos]):
            pos += 1
    else:
        while pos > 0 and is_space(text[pos - 1]):
            pos -= 1
        while pos > 0 and not is_space(text[pos - 1]):
            pos -= 1
    return pos


def word_extent(text: str, pos: int) -> tuple[int, int]:
    """Return ``(start, end)`` of the run of non-space characters touching *pos*.

    The range is empty (``start == end == pos``) when *pos* sits between two
    spaces or at an edge next to a space.
    """
    pos = max(0, min(pos, len(text)))
    start = pos
    while start > 0 and not is_space(text[start - 1]):
        start -= 1
    end = pos
    while end < len(text) and not is_space(text[end]):
        end += 1
    return start, end


class EditBuffer:
    """The current line and its insertion point.

    All operations clamp or ignore out-of-range positions instead of raising.
    """

    def __init__(self, text: str = "") -> None:
        self._text: str = text
        self._insert_pos: int = len(text)

    @property
    def text(self) -> str:
        return self._text

    @property
    def insert_pos(self) -> int:
        return self._insert_pos

    def __len__(self) -> int:
        return len(self._text)

    def insert_char(self, char: str) -> None:
        self.insert_text(char)

    def insert_text(self, text: str) -> None:
        if not text:
            return
        pos = self._insert_pos
        self._text = self._text[:pos] + text + self._text[pos:]
        self._insert_pos = pos + len(text)

    def move_cursor(self, delta: int) -> bool:
        """Move the insertion point by *delta*. Returns whether it moved."""
        return self.set_cursor(self._insert_pos + delta)

    def set_cursor(self, pos: int) -> bool:
        new_pos = max(0, min(pos, len(self._text)))
        moved = new_pos != self._insert_pos
        self._insert_pos = new_pos
        return moved

    def delete_range(self, start: int, end: int) -> bool:
        """Remove ``[start, end)`` and put the insertion point at *start*.

        Returns False (and changes nothing) for an empty or out-of-range span.
        """
        if start >= end or start < 0 or end > len(self._text):
            return False
        self._text = self._text[:start] + self._text[end:]
        self._insert_pos = start
        return True

    def replace_range(self, start: int, end: int, text: str) -> None:
        """Replace ``[start, end)`` with *text*; insertion point goes after it."""
        start = max(0, min(start, len(self._text)))
        end = max(start, min(end, len(self._text)))
        self._text = self._text[:start] + text + self._text[end:]
        self._insert_pos = start + len(text)

    def set_text(self, text: str) -> None:
        self._text = text
        self._insert_pos = len(text)

    def clear(self) -> None:
        self._text = ""
        self._insert_pos = 0

    def take(self) -> str:
        """Return the current text and reset to an empty line."""
        text = self._text
        self.clear()
        return text

    # -- Word navigation -----------------------------------------------------

    def word_boundary(self, forward: bool) -> int:
        return find_word_boundary(self._text, self._insert_pos, forward)

    def move_word(self, forward: bool) -> bool:
        return self.set_cursor(self.word_boundary(forward))

    def delete_word(self, forward: bool) -> bool:
        boundary = self.word_boundary(forward)
        if forward:
            return self.delete_range(self._insert_pos, boundary)
        return self.delete_range(boundary, self._insert_pos)
