"""Line editor settings with JSON persistence.

Settings files use camelCase keys::

    {
      "echo": true,
      "autocompleteStyle": "unix",
      "historyFile": "~/.lineedit_history.json",
      "keybindings": {"historySearchBackward": ["ctrl+r", "f8"]}
    }
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, get_args

from lineedit.autocomplete import CompletionStyle, default_completion_style
from lineedit.keybindings import LINE_EDIT_ACTIONS, LineKeybindingsConfig

logger = logging.getLogger(__name__)


class SettingsError(ValueError):
    """A settings value has the wrong type or an unknown value."""


@dataclass
class LineEditorSettings:
    echo: bool = True
    autocomplete_style: CompletionStyle = field(default_factory=default_completion_style)
    history_file: str | None = None
    keybindings: LineKeybindingsConfig = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LineEditorSettings:
        """Build settings from a parsed settings file, validating each field."""
        merged = deep_merge_settings(_settings_defaults(), data)

        echo = merged["echo"]
        if not isinstance(echo, bool):
            raise SettingsError(f"echo must be a boolean, got {echo!r}")

        style = merged["autocompleteStyle"]
        if style is None:
            style = default_completion_style()
        if style not in get_args(CompletionStyle):
            raise SettingsError(f"autocompleteStyle must be 'unix' or 'windows', got {style!r}")

        history_file = merged["historyFile"]
        if history_file is not None and not isinstance(history_file, str):
            raise SettingsError(f"historyFile must be a string, got {history_file!r}")

        keybindings = merged["keybindings"] or {}
        if not isinstance(keybindings, dict):
            raise SettingsError("keybindings must be an object")
        for action, keys in keybindings.items():
            if action not in LINE_EDIT_ACTIONS:
                raise SettingsError(f"unknown line editing action {action!r}")
            key_list = keys if isinstance(keys, list) else [keys]
            if not all(isinstance(k, str) for k in key_list):
                raise SettingsError(f"keys for {action!r} must be strings")

        return cls(
            echo=echo,
            autocomplete_style=style,
            history_file=os.path.expanduser(history_file) if history_file else None,
            keybindings=keybindings,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "echo": self.echo,
            "autocompleteStyle": self.autocomplete_style,
            "historyFile": self.history_file,
            "keybindings": dict(self.keybindings),
        }


def _settings_defaults() -> dict[str, Any]:
    """Default settings values."""
    return {
        "echo": True,
        "autocompleteStyle": None,
        "historyFile": None,
        "keybindings": None,
    }


def deep_merge_settings(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge overrides into base settings.

    For nested dicts, merge recursively. For primitives and arrays,
    override value wins completely. None values in overrides are skipped.
    """
    result = dict(base)
    for key, value in overrides.items():
        if value is None:
            continue
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge_settings(result[key], value)
        else:
            result[key] = value
    return result


def _load_from_file(path: str | Path) -> tuple[dict[str, Any], Exception | None]:
    """Load settings from a JSON file. Returns (settings, error)."""
    if not os.path.exists(path):
        return {}, None
    try:
        content = Path(path).read_text(encoding="utf-8")
        settings = json.loads(content)
    except (OSError, json.JSONDecodeError) as e:
        return {}, e
    if not isinstance(settings, dict):
        return {}, SettingsError(f"{path} does not contain a JSON object")
    return settings, None


def load_settings(
    path: str | Path, overrides: dict[str, Any] | None = None
) -> LineEditorSettings:
    """Load settings from *path*, then apply *overrides* on top.

    An unreadable or malformed file is logged and ignored; invalid values
    raise ``SettingsError``.
    """
    data, error = _load_from_file(path)
    if error is not None:
        logger.warning("Ignoring settings file %s: %s", path, error)
    if overrides:
        data = deep_merge_settings(data, overrides)
    return LineEditorSettings.from_dict(data)


def save_settings(path: str | Path, settings: LineEditorSettings) -> None:
    data = {k: v for k, v in settings.to_dict().items() if v is not None}
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(data, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
