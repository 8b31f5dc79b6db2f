"""Tests for lineedit.console -- key sequences through to completed lines."""

from __future__ import annotations

import json
from pathlib import Path

from lineedit.autocomplete import Command, CommandSyntax
from lineedit.console import ConsoleSession
from lineedit.history import History, save_history
from lineedit.keybindings import LineKeybindingsManager
from lineedit.model import SearchMode
from lineedit.settings import LineEditorSettings


def feed(session: ConsoleSession, *chunks: str) -> None:
    for chunk in chunks:
        session.handle_input(chunk)


class TestTyping:
    def test_type_and_submit(self) -> None:
        session = ConsoleSession()
        feed(session, "l", "s", "\r")
        assert session.poll_line() == "ls"
        assert session.poll_line() is None

    def test_editing_keys(self) -> None:
        session = ConsoleSession()
        feed(session, "a", "c", "\x1b[D", "b", "\x1b[F", "\x7f")
        assert session.model.line == "ab"

    def test_unbound_sequence_is_ignored(self) -> None:
        session = ConsoleSession()
        feed(session, "x", "\x1b[15~")
        assert session.model.line == "x"


    def test_chunk_with_several_keys(self) -> None:
        session = ConsoleSession()
        session.handle_input("s\x1b[Dl\x1b[F\r")
        assert session.poll_line() == "ls"

    def test_chunk_with_two_lines(self) -> None:
        session = ConsoleSession()
        session.handle_input("ls\rpwd\r")
        assert session.model.pending_newlines == 2
        assert session.poll_line() == "ls"
        assert session.poll_line() == "pwd"


class TestBracketedPaste:
    def test_paste_with_newlines(self) -> None:
        session = ConsoleSession()
        session.handle_input("\x1b[200~a\nb\x1b[201~")
        assert session.poll_line() == "a"
        assert session.poll_line() is None
        assert session.model.line == "b"

    def test_paste_split_across_chunks(self) -> None:
        session = ConsoleSession()
        feed(session, "\x1b[200~hel", "lo\t", "x\x1b[201~")
        assert session.model.line == "hello\tx"

    def test_keys_before_paste_start(self) -> None:
        session = ConsoleSession()
        session.handle_input("> \x1b[200~ab\x1b[201~")
        assert session.model.line == "> ab"

    def test_input_after_paste_end(self) -> None:
        session = ConsoleSession()
        session.handle_input("\x1b[200~ab\x1b[201~\r")
        assert session.poll_line() == "ab"


class TestHistorySearch:
    def test_ctrl_r_shows_search_prompt(self) -> None:
        session = ConsoleSession(prompt="$ ")
        feed(session, "m", "a", "k", "e", "\r")
        session.poll_line()
        feed(session, "\x12", "k")
        assert isinstance(session.model.mode, SearchMode)
        layout = session.render()
        assert layout.rows == ["(reverse-i-search)'k': make"]

        feed(session, "\x01")
        assert session.render().rows == ["$ make"]


class TestAutocomplete:
    def test_tab_cycles_commands(self) -> None:
        syntax = CommandSyntax(commands=[Command("status"), Command("stop")])
        settings = LineEditorSettings(autocomplete_style="unix")
        session = ConsoleSession(settings=settings, syntax=syntax)
        feed(session, "s", "t", "\t")
        assert session.model.line == "status"
        feed(session, "\t")
        assert session.model.line == "stop"
        feed(session, "\x1b[Z")
        assert session.model.line == "status"


class TestSettings:
    def test_echo_off_hides_line(self) -> None:
        session = ConsoleSession(settings=LineEditorSettings(echo=False))
        feed(session, "s", "e", "c", "\r")
        assert session.render().rows == ["> "]
        assert session.poll_line() == "sec"
        assert session.output_history() == []

    def test_echo_off_hides_search_query(self) -> None:
        session = ConsoleSession(settings=LineEditorSettings(echo=False))
        feed(session, "\x12", "hunter2")
        rows = session.render().rows
        assert not any("hunter2" in row for row in rows)
        assert rows[0].startswith("(failed reverse-i-search)'': ")

    def test_keybindings_from_settings(self) -> None:
        settings = LineEditorSettings(keybindings={"clearLine": "ctrl+g"})
        session = ConsoleSession(settings=settings)
        feed(session, "a", "\x07")
        assert session.model.line == ""

    def test_explicit_keybindings_win(self) -> None:
        manager = LineKeybindingsManager({"clearLine": "ctrl+t"})
        settings = LineEditorSettings(keybindings={"clearLine": "ctrl+g"})
        session = ConsoleSession(settings=settings, keybindings=manager)
        feed(session, "a", "\x14")
        assert session.model.line == ""


class TestHistoryFile:
    def test_history_loaded_and_saved(self, tmp_path: Path) -> None:
        path = tmp_path / "history.json"
        save_history(path, History(["old"]))

        session = ConsoleSession(settings=LineEditorSettings(history_file=str(path)))
        feed(session, "\x1b[A")
        assert session.model.line == "old"

        feed(session, "\x1b[F", "!", "\r")
        assert session.poll_line() == "old!"
        assert json.loads(path.read_text(encoding="utf-8")) == ["old", "old!"]

    def test_output_history_is_numbered_oldest_first(self) -> None:
        session = ConsoleSession()
        feed(session, "a", "\r", "b", "\r")
        session.poll_line()
        session.poll_line()
        assert session.output_history() == ["1: a", "2: b"]
