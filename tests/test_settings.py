"""Tests for lineedit.settings -- JSON settings with validation."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import pytest

from lineedit.settings import (
    LineEditorSettings,
    SettingsError,
    deep_merge_settings,
    load_settings,
    save_settings,
)


def write_settings(path: Path, data: object) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestLoadSettings:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        settings = load_settings(tmp_path / "settings.json")
        assert settings.echo is True
        assert settings.history_file is None
        assert settings.keybindings == {}
        assert settings.autocomplete_style in ("unix", "windows")

    def test_values_from_file(self, tmp_path: Path) -> None:
        path = write_settings(
            tmp_path / "settings.json",
            {
                "echo": False,
                "autocompleteStyle": "windows",
                "historyFile": "~/hist.json",
                "keybindings": {"historySearchBackward": ["ctrl+r", "ctrl+t"]},
            },
        )
        settings = load_settings(path)
        assert settings.echo is False
        assert settings.autocomplete_style == "windows"
        assert settings.history_file == os.path.expanduser("~/hist.json")
        assert settings.keybindings == {"historySearchBackward": ["ctrl+r", "ctrl+t"]}

    def test_overrides_win(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path / "settings.json", {"autocompleteStyle": "windows"})
        settings = load_settings(path, {"autocompleteStyle": "unix"})
        assert settings.autocomplete_style == "unix"

    def test_malformed_file_is_logged_and_ignored(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "settings.json"
        path.write_text("{oops", encoding="utf-8")
        with caplog.at_level(logging.WARNING, logger="lineedit.settings"):
            settings = load_settings(path)
        assert settings.echo is True
        assert "Ignoring settings file" in caplog.text

    def test_non_object_is_ignored(self, tmp_path: Path) -> None:
        path = write_settings(tmp_path / "settings.json", ["echo"])
        assert load_settings(path).echo is True


class TestValidation:
    @pytest.mark.parametrize(
        "data",
        [
            {"echo": "yes"},
            {"autocompleteStyle": "vms"},
            {"historyFile": 3},
            {"keybindings": ["ctrl+r"]},
            {"keybindings": {"launch": "ctrl+l"}},
            {"keybindings": {"paste": [1]}},
        ],
    )
    def test_invalid_values_raise(self, data: dict) -> None:
        with pytest.raises(SettingsError):
            LineEditorSettings.from_dict(data)

    def test_settings_error_is_value_error(self) -> None:
        assert issubclass(SettingsError, ValueError)


class TestDeepMerge:
    def test_nested_dicts_merge(self) -> None:
        base = {"keybindings": {"paste": "ctrl+v"}, "echo": True}
        merged = deep_merge_settings(base, {"keybindings": {"clearLine": "ctrl+g"}})
        assert merged["keybindings"] == {"paste": "ctrl+v", "clearLine": "ctrl+g"}
        assert merged["echo"] is True

    def test_none_is_skipped(self) -> None:
        assert deep_merge_settings({"echo": False}, {"echo": None}) == {"echo": False}


class TestSaveSettings:
    def test_save_then_load(self, tmp_path: Path) -> None:
        path = tmp_path / "nested" / "settings.json"
        save_settings(path, LineEditorSettings(echo=False, autocomplete_style="unix"))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data == {"echo": False, "autocompleteStyle": "unix", "keybindings": {}}
        assert load_settings(path).echo is False
