"""Line editing actions and the keybindings that trigger them."""

from __future__ import annotations

from typing import Literal, get_args

from lineedit.keys import KeyId, matches_key

LineEditAction = Literal[
    # Cursor movement
    "cursorLeft",
    "cursorRight",
    "cursorLineStart",
    "cursorLineEnd",
    "cursorWordLeft",
    "cursorWordRight",
    # History
    "historyUp",
    "historyDown",
    "historyStart",
    "historyEnd",
    "historySearchForward",
    "historySearchBackward",
    # Deletion
    "clearLine",
    "deleteCharBackward",
    "deleteCharForward",
    "deleteWordBackward",
    "deleteWordForward",
    # Clipboard
    "paste",
    # Autocomplete
    "autocompleteForward",
    "autocompleteBackward",
]

LINE_EDIT_ACTIONS: tuple[LineEditAction, ...] = get_args(LineEditAction)

LineKeybindingsConfig = dict[LineEditAction, KeyId | list[KeyId]]

DEFAULT_LINE_KEYBINDINGS: dict[LineEditAction, KeyId | list[KeyId]] = {
    # Cursor movement
    "cursorLeft": ["left", "ctrl+b"],
    "cursorRight": ["right", "ctrl+f"],
    "cursorLineStart": ["home", "ctrl+a"],
    "cursorLineEnd": ["end", "ctrl+e"],
    "cursorWordLeft": ["ctrl+left", "alt+left", "alt+b"],
    "cursorWordRight": ["ctrl+right", "alt+right", "alt+f"],
    # History
    "historyUp": ["up", "ctrl+p"],
    "historyDown": ["down", "ctrl+n"],
    "historyStart": ["pageUp", "alt+<"],
    "historyEnd": ["pageDown", "alt+>"],
    "historySearchForward": "ctrl+s",
    "historySearchBackward": "ctrl+r",
    # Deletion
    "clearLine": ["escape", "ctrl+u"],
    "deleteCharBackward": "backspace",
    "deleteCharForward": ["delete", "ctrl+d"],
    "deleteWordBackward": ["ctrl+w", "alt+backspace"],
    "deleteWordForward": ["alt+d", "ctrl+delete"],
    # Clipboard
    "paste": "ctrl+v",
    # Autocomplete
    "autocompleteForward": "tab",
    "autocompleteBackward": "shift+tab",
}


def _as_list(keys: KeyId | list[KeyId]) -> list[KeyId]:
    return list(keys) if isinstance(keys, list) else [keys]


class LineKeybindingsManager:
    """Maps raw key input to line editing actions.

    A user config replaces the default keys of each action it names; actions
    it leaves out keep their defaults.
    """

    def __init__(self, config: LineKeybindingsConfig | None = None) -> None:
        self._bindings: dict[LineEditAction, list[KeyId]] = {}
        self.set_config(config or {})

    def set_config(self, config: LineKeybindingsConfig) -> None:
        merged = {**DEFAULT_LINE_KEYBINDINGS, **config}
        self._bindings = {
            action: _as_list(merged[action]) for action in LINE_EDIT_ACTIONS if action in merged
        }

    def matches(self, data: str, action: LineEditAction) -> bool:
        return any(matches_key(data, key) for key in self._bindings.get(action, ()))

    def interpret(self, data: str) -> LineEditAction | None:
        """Return the action bound to *data*, if any.

        Actions are checked in declaration order, so the first binding wins
        when a key is bound twice.
        """
        for action in self._bindings:
            if self.matches(data, action):
                return action
        return None

    def get_keys(self, action: LineEditAction) -> list[KeyId]:
        return list(self._bindings.get(action, []))


_global_line_keybindings: LineKeybindingsManager | None = None


def get_line_keybindings() -> LineKeybindingsManager:
    global _global_line_keybindings
    if _global_line_keybindings is None:
        _global_line_keybindings = LineKeybindingsManager()
    return _global_line_keybindings


def set_line_keybindings(manager: LineKeybindingsManager) -> None:
    global _global_line_keybindings
    _global_line_keybindings = manager
