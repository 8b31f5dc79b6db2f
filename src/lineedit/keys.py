"""Keyboard input parsing for line editing.

Turns one raw terminal key sequence (xterm/VT escape sequences, control
characters, ESC-prefixed meta keys) into a key identifier such as
``"ctrl+r"`` or ``"alt+left"``, and matches input against identifiers.

Key identifiers are ``+``-joined modifiers followed by a key name. Modifier
order does not matter when matching: ``"alt+ctrl+x"`` and ``"ctrl+alt+x"``
name the same key.
"""

from __future__ import annotations

KeyId = str


class Key:
    """Named key constants and modifier combinators."""

    escape = "escape"
    enter = "enter"
    tab = "tab"
    space = "space"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pageUp"
    page_down = "pageDown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def shift(key: str) -> str:
        return f"shift+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


# Same bit values xterm encodes as (1 + mask) in modified sequences
MODIFIERS: dict[str, int] = {
    "shift": 1,
    "alt": 2,
    "ctrl": 4,
}

# ---------------------------------------------------------------------------
# Escape sequence table
# ---------------------------------------------------------------------------

# ESC [ <letter> and ESC O <letter>
_CURSOR_KEYS: dict[str, str] = {
    "A": "up",
    "B": "down",
    "C": "right",
    "D": "left",
    "H": "home",
    "F": "end",
}

# ESC [ <code> ~
_TILDE_KEYS: dict[int, str] = {
    1: "home",
    2: "insert",
    3: "delete",
    4: "end",
    5: "pageUp",
    6: "pageDown",
    7: "home",
    8: "end",
}

# Sequences outside the xterm scheme (rxvt and friends)
_EXTRA_SEQUENCES: dict[str, str] = {
    "\x1b[Z": "shift+tab",
    "\x1b[a": "shift+up",
    "\x1b[b": "shift+down",
    "\x1b[c": "shift+right",
    "\x1b[d": "shift+left",
    "\x1bOa": "ctrl+up",
    "\x1bOb": "ctrl+down",
    "\x1bOc": "ctrl+right",
    "\x1bOd": "ctrl+left",
    "\x1b\x1b[A": "alt+up",
    "\x1b\x1b[B": "alt+down",
    "\x1b\x1b[C": "alt+right",
    "\x1b\x1b[D": "alt+left",
}

# Unmodified single-character keys
_SINGLE_KEYS: dict[str, str] = {
    "\x1b": "escape",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    " ": "space",
    "\x7f": "backspace",
    "\x08": "backspace",
    "\x00": "ctrl+space",
    "\x1f": "ctrl+-",
}


def _modifier_prefix(mask: int) -> str:
    return "".join(f"{name}+" for name in ("ctrl", "shift", "alt") if mask & MODIFIERS[name])


def _build_sequences() -> dict[str, str]:
    table: dict[str, str] = {}
    for letter, name in _CURSOR_KEYS.items():
        table[f"\x1b[{letter}"] = name
        table[f"\x1bO{letter}"] = name
    for code, name in _TILDE_KEYS.items():
        table[f"\x1b[{code}~"] = name

    for mask in range(1, 8):
        prefix = _modifier_prefix(mask)
        param = mask + 1
        for letter, name in _CURSOR_KEYS.items():
            table[f"\x1b[1;{param}{letter}"] = prefix + name
        for code, name in _TILDE_KEYS.items():
            table[f"\x1b[{code};{param}~"] = prefix + name

    table.update(_EXTRA_SEQUENCES)
    return table


ESCAPE_SEQUENCES: dict[str, str] = _build_sequences()


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse_key_id(key_id: str) -> tuple[int, str] | None:
    """Split a key identifier into ``(modifier mask, key name)``.

    Single-letter key names are lowercased. Returns None when no key name is
    left after the modifiers.
    """
    if not key_id:
        return None

    mask = 0
    rest = key_id
    while "+" in rest:
        head, tail = rest.split("+", 1)
        bit = MODIFIERS.get(head.lower())
        if bit is None or not tail:
            break
        mask |= bit
        rest = tail

    if rest.lower() in MODIFIERS:
        return None
    if len(rest) == 1:
        rest = rest.lower()
    return mask, rest


def _control_letter(ch: str) -> str | None:
    """Letter for a Ctrl+letter control byte (0x01..0x1a)."""
    code = ord(ch)
    if 1 <= code <= 26:
        return chr(code + ord("a") - 1)
    return None


def _parse_meta(ch: str) -> str | None:
    """Key id for ESC followed by *ch* (the terminal's Meta/Alt encoding)."""
    if ch == "\x1b":
        return "alt+escape"
    base = _SINGLE_KEYS.get(ch)
    if base in ("enter", "backspace"):
        return f"alt+{base}"
    letter = _control_letter(ch)
    if letter is not None:
        return f"ctrl+alt+{letter}"
    if ch.isupper():
        return f"shift+alt+{ch.lower()}"
    if ch.isprintable():
        return f"alt+{ch.lower()}"
    return None


def parse_key(data: str) -> str | None:
    """Parse one raw key sequence and return its key identifier, or ``None``.

    Plain printable characters come back unchanged (``"a"``, ``"A"``).
    """
    if not data:
        return None

    known = ESCAPE_SEQUENCES.get(data) or _SINGLE_KEYS.get(data)
    if known is not None:
        return known

    if len(data) == 1:
        letter = _control_letter(data)
        if letter is not None:
            return f"ctrl+{letter}"
        return data if data.isprintable() else None

    if len(data) == 2 and data[0] == "\x1b":
        return _parse_meta(data[1])
    return None


def matches_key(data: str, key_id: KeyId) -> bool:
    """Return ``True`` if *data* (raw terminal input) is the named *key_id*."""
    parsed = parse_key(data)
    if parsed is None:
        return False
    if parsed == key_id:
        return True

    expected = parse_key_id(key_id)
    if expected is None:
        return False
    # An uppercase letter is shift + the letter
    if len(parsed) == 1 and parsed.isupper():
        return expected == (MODIFIERS["shift"], parsed.lower())
    return parse_key_id(parsed) == expected


def _is_control(ch: str) -> bool:
    code = ord(ch)
    return code < 0x20 or 0x7F <= code <= 0x9F


def is_printable_input(data: str) -> bool:
    """True when *data* holds no control characters and can be inserted as text."""
    return bool(data) and not any(_is_control(ch) for ch in data)


# ---------------------------------------------------------------------------
# Splitting raw input
# ---------------------------------------------------------------------------

ESC = "\x1b"

_LONGEST_SEQUENCE = max(len(seq) for seq in ESCAPE_SEQUENCES)


def _escape_length(data: str) -> int:
    """Length of the escape sequence at the start of *data*."""
    for length in range(min(len(data), _LONGEST_SEQUENCE), 1, -1):
        if data[:length] in ESCAPE_SEQUENCES:
            return length
    if len(data) == 1:
        return 1

    introducer = data[1]
    if introducer == "[":
        # CSI: parameters up to a final byte in 0x40..0x7e
        for end in range(2, len(data)):
            if 0x40 <= ord(data[end]) <= 0x7E:
                return end + 1
        return len(data)
    if introducer == "O":
        return min(3, len(data))
    # Meta key: ESC plus one character
    return 2


def split_key_sequences(data: str) -> list[str]:
    """Split a chunk of raw input into single key sequences.

    A fast typist or an unbracketed paste can deliver several keys in one
    read (``"ls\\r"``). Escape sequences stay whole; everything else is one
    character per key. A truncated escape sequence at the end is returned
    as is.
    """
    sequences: list[str] = []
    pos = 0
    while pos < len(data):
        length = _escape_length(data[pos:]) if data[pos] == ESC else 1
        sequences.append(data[pos : pos + length])
        pos += length
    return sequences
