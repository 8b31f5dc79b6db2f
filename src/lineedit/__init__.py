"""lineedit: terminal-independent line editing with history, search and completion."""

# Autocomplete support
from lineedit.autocomplete import (
    AutocompleteBridge,
    AutocompleteState,
    Command,
    CommandSyntax,
    CommandSyntaxEngine,
    CompletionEngine,
    CompletionStyle,
    default_completion_style,
)

# Edit buffer
from lineedit.buffer import EditBuffer, find_word_boundary, word_extent

# Console session
from lineedit.console import ConsoleSession

# History
from lineedit.history import (
    MAX_HISTORY_ENTRIES,
    Entered,
    History,
    NotEntered,
    load_history,
    save_history,
)

# Keybindings
from lineedit.keybindings import (
    DEFAULT_LINE_KEYBINDINGS,
    LineEditAction,
    LineKeybindingsManager,
    get_line_keybindings,
    set_line_keybindings,
)

# Keyboard input handling
from lineedit.keys import Key, KeyId, matches_key, parse_key

# Layout
from lineedit.layout import InputLayout, layout_input, visible_width

# Line editor model
from lineedit.model import (
    AutocompleteMode,
    HistoryMode,
    LineEditorModel,
    Mode,
    NormalMode,
    SearchMode,
)

# Search
from lineedit.search import SearchState

# Settings
from lineedit.settings import LineEditorSettings, SettingsError, load_settings, save_settings

__all__ = [
    # Autocomplete
    "AutocompleteBridge",
    "AutocompleteState",
    "Command",
    "CommandSyntax",
    "CommandSyntaxEngine",
    "CompletionEngine",
    "CompletionStyle",
    "default_completion_style",
    # Buffer
    "EditBuffer",
    "find_word_boundary",
    "word_extent",
    # Console
    "ConsoleSession",
    # History
    "MAX_HISTORY_ENTRIES",
    "Entered",
    "History",
    "NotEntered",
    "load_history",
    "save_history",
    # Keybindings
    "DEFAULT_LINE_KEYBINDINGS",
    "LineEditAction",
    "LineKeybindingsManager",
    "get_line_keybindings",
    "set_line_keybindings",
    # Keys
    "Key",
    "KeyId",
    "matches_key",
    "parse_key",
    # Layout
    "InputLayout",
    "layout_input",
    "visible_width",
    # Model
    "AutocompleteMode",
    "HistoryMode",
    "LineEditorModel",
    "Mode",
    "NormalMode",
    "SearchMode",
    # Search
    "SearchState",
    # Settings
    "LineEditorSettings",
    "SettingsError",
    "load_settings",
    "save_settings",
]
