"""Tests for lineedit.keys -- raw key sequence parsing and matching."""

from __future__ import annotations

import pytest

from lineedit.keys import (
    Key,
    is_printable_input,
    matches_key,
    parse_key,
    parse_key_id,
    split_key_sequences,
)


class TestParseKey:
    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b[A", "up"),
            ("\x1bOB", "down"),
            ("\x1b[5~", "pageUp"),
            ("\x1b[6~", "pageDown"),
            ("\x1b[3~", "delete"),
            ("\x1b[1;5D", "ctrl+left"),
            ("\x1b[1;3C", "alt+right"),
            ("\x1b[Z", "shift+tab"),
            ("\x1b\x1b[D", "alt+left"),
            ("\x1bOc", "ctrl+right"),
            ("\x1b[1;6A", "ctrl+shift+up"),
            ("\x1b[5;3~", "alt+pageUp"),
            ("\x1b[1;8D", "ctrl+shift+alt+left"),
        ],
    )
    def test_escape_sequences(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    @pytest.mark.parametrize(
        "data,expected",
        [
            ("\x1b", "escape"),
            ("\r", "enter"),
            ("\t", "tab"),
            ("\x7f", "backspace"),
            ("\x12", "ctrl+r"),
            ("\x17", "ctrl+w"),
            (" ", "space"),
        ],
    )
    def test_single_byte_keys(self, data: str, expected: str) -> None:
        assert parse_key(data) == expected

    def test_meta_prefix(self) -> None:
        assert parse_key("\x1bb") == "alt+b"
        assert parse_key("\x1b<") == "alt+<"
        assert parse_key("\x1b\x7f") == "alt+backspace"
        assert parse_key("\x1bD") == "shift+alt+d"

    def test_printable_passes_through(self) -> None:
        assert parse_key("a") == "a"
        assert parse_key("Z") == "Z"

    def test_unknown(self) -> None:
        assert parse_key("") is None
        assert parse_key("\x1b[99~") is None


class TestParseKeyId:
    def test_modifier_order_does_not_matter(self) -> None:
        assert parse_key_id("ctrl+alt+x") == parse_key_id("alt+ctrl+x")

    def test_modifier_only_is_invalid(self) -> None:
        assert parse_key_id("ctrl") is None
        assert parse_key_id("") is None


class TestMatchesKey:
    def test_exact_identifier(self) -> None:
        assert matches_key("\x12", Key.ctrl("r"))
        assert not matches_key("\x13", Key.ctrl("r"))

    def test_uppercase_is_shift(self) -> None:
        assert matches_key("A", "shift+a")
        assert not matches_key("A", "a")

    def test_reordered_modifiers(self) -> None:
        assert matches_key("\x1b\x18", "alt+ctrl+x")

    def test_unparseable_input(self) -> None:
        assert not matches_key("\x1b[99~", "up")


class TestPrintableInput:
    def test_text(self) -> None:
        assert is_printable_input("hello")
        assert is_printable_input("é中")

    def test_control_characters(self) -> None:
        assert not is_printable_input("")
        assert not is_printable_input("\x1b[A")
        assert not is_printable_input("a\x07")


class TestSplitKeySequences:
    """A read may carry several keys; each comes out whole."""

    def test_text_and_terminator(self) -> None:
        assert split_key_sequences("ls\r") == ["l", "s", "\r"]

    def test_known_sequences_stay_whole(self) -> None:
        data = "a\x1b[1;5Db\x1b[3~\x1b\x1b[C"
        assert split_key_sequences(data) == ["a", "\x1b[1;5D", "b", "\x1b[3~", "\x1b\x1b[C"]

    def test_unknown_csi_is_one_sequence(self) -> None:
        assert split_key_sequences("\x1b[15~x") == ["\x1b[15~", "x"]

    def test_meta_and_lone_escape(self) -> None:
        assert split_key_sequences("\x1bbq\x1b") == ["\x1bb", "q", "\x1b"]

    def test_empty(self) -> None:
        assert split_key_sequences("") == []
