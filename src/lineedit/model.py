"""Line editor state machine.

The console driver feeds characters through ``add_input_char`` and discrete
editing actions through ``perform_line_editing_action``. The model updates
the line, raises ``redraw_needed`` / ``newline_needed`` for the driver, and
queues each terminated line until the driver collects it with
``check_for_completed_input_line``.

Exactly one mode is active at a time. Entering a mode other than by its own
continuation actions leaves the current mode first, keeping whatever text it
put on the line.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, replace
from typing import Callable

from lineedit import search
from lineedit.autocomplete import (
    AutocompleteBridge,
    AutocompleteState,
    CompletionEngine,
    CompletionStyle,
)
from lineedit.buffer import EditBuffer
from lineedit.history import (
    Entered,
    History,
    HistoryCursor,
    NotEntered,
    RecallDirection,
    RecallExtreme,
    recall,
    recall_extreme,
)
from lineedit.keybindings import LineEditAction
from lineedit.search import SearchState

logger = logging.getLogger(__name__)

LINE_TERMINATORS = frozenset({"\r", "\n"})


# ---------------------------------------------------------------------------
# Modes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NormalMode:
    """Plain editing."""


@dataclass(frozen=True)
class HistoryMode:
    """Recalling history entries with up/down/start/end."""

    cursor: Entered


@dataclass(frozen=True)
class SearchMode:
    """Incremental history search; typed characters extend the query."""

    state: SearchState


@dataclass(frozen=True)
class AutocompleteMode:
    """Cycling through completion candidates for one token."""

    state: AutocompleteState


Mode = NormalMode | HistoryMode | SearchMode | AutocompleteMode

HISTORY_ACTIONS: frozenset[str] = frozenset(
    {"historyUp", "historyDown", "historyStart", "historyEnd"}
)
SEARCH_ACTIONS: frozenset[str] = frozenset(
    {"historySearchForward", "historySearchBackward"}
)
AUTOCOMPLETE_ACTIONS: frozenset[str] = frozenset(
    {"autocompleteForward", "autocompleteBackward"}
)


class LineEditorModel:
    """Editing state for one interactive input line."""

    def __init__(
        self,
        *,
        history: History | None = None,
        echo: bool = True,
        completion_engine: CompletionEngine | None = None,
        autocomplete_syntax: object = None,
        autocomplete_style: CompletionStyle | None = None,
        clipboard: Callable[[], str] | None = None,
    ) -> None:
        self._buffer = EditBuffer()
        self._history = history if history is not None else History()
        self._mode: Mode = NormalMode()
        # Each line keeps the echo state it was typed under
        self._completed: deque[tuple[str, bool]] = deque()
        self._echo = echo
        self._autocomplete = AutocompleteBridge(
            completion_engine, autocomplete_syntax, autocomplete_style
        )
        self._clipboard = clipboard
        self._console_width: int = 80
        # A "\r\n" pair ends one line, not two
        self._after_cr = False
        self._handlers = self._build_handlers()

        # Cleared by the driver once it has acted on them
        self.redraw_needed: bool = False
        self.newline_needed: bool = False

    # -- Read access ---------------------------------------------------------

    @property
    def line(self) -> str:
        return self._buffer.text

    @property
    def insert_pos(self) -> int:
        return self._buffer.insert_pos

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def history(self) -> History:
        return self._history

    @property
    def pending_newlines(self) -> int:
        return len(self._completed)

    @property
    def console_width(self) -> int:
        return self._console_width

    @property
    def echo_enabled(self) -> bool:
        return self._echo

    @property
    def autocomplete_style(self) -> CompletionStyle:
        return self._autocomplete.style

    def visible_line(self) -> str:
        """The text a driver may paint. Always empty while echo is off."""
        return self._buffer.text if self._echo else ""

    def visible_insert_pos(self) -> int:
        return self._buffer.insert_pos if self._echo else 0

    def prompt_prefix(self) -> str:
        """Extra prompt text for the current mode (the search indicator).

        With echo off the query is left out.
        """
        if isinstance(self._mode, SearchMode):
            state = self._mode.state
            if not self._echo:
                state = replace(state, query="")
            return search.search_prompt(state)
        return ""

    # -- Configuration -------------------------------------------------------

    def set_echo_enabled(self, echo: bool) -> None:
        self._echo = echo
        self.redraw_needed = True

    def set_autocomplete_style(self, style: CompletionStyle) -> None:
        self._autocomplete.style = style

    def set_autocomplete_syntax(self, syntax: object) -> None:
        self._autocomplete.syntax = syntax

    def set_completion_engine(self, engine: CompletionEngine) -> None:
        self._autocomplete.engine = engine

    def set_clipboard(self, clipboard: Callable[[], str] | None) -> None:
        self._clipboard = clipboard

    # -- Input ---------------------------------------------------------------

    def add_input_char(self, char: str) -> None:
        """Accept one character from the console driver."""
        if char == "\n" and self._after_cr:
            self._after_cr = False
            return
        self._after_cr = char == "\r"

        if char in LINE_TERMINATORS:
            self._leave_mode()
            self._completed.append((self._buffer.take(), self._echo))
            logger.debug("Line terminated, %d pending", len(self._completed))
            self.newline_needed = True
            self.redraw_needed = True
            return

        if isinstance(self._mode, SearchMode):
            self._apply_search(search.append_char(self._history, self._mode.state, char))
            return

        self._leave_mode()
        self._buffer.insert_char(char)
        self._changed()

    def paste(self, text: str) -> None:
        """Insert *text* as a run of single characters; newlines end lines."""
        for char in text:
            self.add_input_char(char)

    def perform_line_editing_action(
        self, action: LineEditAction, console_width: int = 80
    ) -> None:
        """Apply a discrete editing action.

        ``console_width`` is only remembered for layout; editing ignores it.
        """
        self._console_width = console_width
        handler = self._handlers.get(action)
        if handler is None:
            logger.debug("Ignoring unknown line editing action %r", action)
            return

        if action not in self._continuations():
            self._leave_mode()
        handler()
        self._changed()

    # -- Output --------------------------------------------------------------

    def check_for_completed_input_line(self) -> str | None:
        """Return the oldest terminated line, or None when none is waiting."""
        if not self._completed:
            return None
        text, echoed = self._completed.popleft()
        self.submit_line(text, echo=echoed)
        return text

    def is_line_ready(self) -> bool:
        return bool(self._completed)

    def take_completed_line(self) -> str | None:
        return self.check_for_completed_input_line()

    def submit_line(self, text: str, *, echo: bool | None = None) -> None:
        """Record a finished line in history (only with echo on, never empty).

        *echo* is the echo state the line was typed under; defaults to the
        current one.
        """
        if echo is None:
            echo = self._echo
        if echo and text:
            self._history.append(text)

    def needs_redraw(self) -> bool:
        needed = self.redraw_needed
        self.redraw_needed = False
        return needed

    def needs_newline_before_output(self) -> bool:
        needed = self.newline_needed
        self.newline_needed = False
        return needed

    # -- Mode handling -------------------------------------------------------

    def _continuations(self) -> frozenset[str]:
        mode = self._mode
        if isinstance(mode, HistoryMode):
            return HISTORY_ACTIONS | SEARCH_ACTIONS
        if isinstance(mode, SearchMode):
            return SEARCH_ACTIONS | {"deleteCharBackward"}
        if isinstance(mode, AutocompleteMode):
            return AUTOCOMPLETE_ACTIONS
        return frozenset()

    def _leave_mode(self) -> None:
        mode = self._mode
        if isinstance(mode, NormalMode):
            return
        if isinstance(mode, SearchMode):
            # The matched entry is already on the line and stays there.
            logger.debug("Leaving history search, match=%s", mode.state.match_index)
        else:
            logger.debug("Leaving %s", type(mode).__name__)
        self._mode = NormalMode()

    def _changed(self) -> None:
        if self._echo:
            self.redraw_needed = True

    def _build_handlers(self) -> dict[str, Callable[[], None]]:
        buf = self._buffer
        return {
            "cursorLeft": lambda: buf.move_cursor(-1),
            "cursorRight": lambda: buf.move_cursor(1),
            "cursorLineStart": lambda: buf.set_cursor(0),
            "cursorLineEnd": lambda: buf.set_cursor(len(buf)),
            "cursorWordLeft": lambda: buf.move_word(forward=False),
            "cursorWordRight": lambda: buf.move_word(forward=True),
            "historyUp": lambda: self._recall("up"),
            "historyDown": lambda: self._recall("down"),
            "historyStart": lambda: self._recall_extreme("oldest"),
            "historyEnd": lambda: self._recall_extreme("newest"),
            "historySearchForward": lambda: self._search(forward=True),
            "historySearchBackward": lambda: self._search(forward=False),
            "clearLine": buf.clear,
            "deleteCharBackward": self._delete_char_backward,
            "deleteCharForward": lambda: buf.delete_range(buf.insert_pos, buf.insert_pos + 1),
            "deleteWordBackward": lambda: buf.delete_word(forward=False),
            "deleteWordForward": lambda: buf.delete_word(forward=True),
            "paste": self._paste_clipboard,
            "autocompleteForward": lambda: self._complete(forward=True),
            "autocompleteBackward": lambda: self._complete(forward=False),
        }

    # -- History -------------------------------------------------------------

    def _history_cursor(self) -> HistoryCursor:
        if isinstance(self._mode, HistoryMode):
            return self._mode.cursor
        return NotEntered()

    def _enter_history(self, result: tuple[HistoryCursor, str] | None) -> None:
        if result is None:
            return
        cursor, text = result
        if isinstance(cursor, Entered):
            self._mode = HistoryMode(cursor)
        self._buffer.set_text(text)

    def _recall(self, direction: RecallDirection) -> None:
        self._enter_history(
            recall(self._history, self._history_cursor(), self._buffer.text, direction)
        )

    def _recall_extreme(self, extreme: RecallExtreme) -> None:
        self._enter_history(
            recall_extreme(self._history, self._history_cursor(), self._buffer.text, extreme)
        )

    # -- Search --------------------------------------------------------------

    def _search(self, forward: bool) -> None:
        mode = self._mode
        if isinstance(mode, SearchMode):
            self._apply_search(search.repeat(self._history, mode.state, forward))
            return

        start = 0
        if isinstance(mode, HistoryMode) and mode.cursor.index is not None:
            start = mode.cursor.index
        logger.debug("Entering history search (forward=%s)", forward)
        self._mode = SearchMode(SearchState(forward=forward, start_index=start))
        self.redraw_needed = True

    def _apply_search(self, state: SearchState) -> None:
        self._mode = SearchMode(state)
        if state.match_index is not None:
            self._buffer.set_text(self._history[state.match_index])
        # The search prompt changes even when echo is off
        self.redraw_needed = True

    def _delete_char_backward(self) -> None:
        mode = self._mode
        if isinstance(mode, SearchMode):
            self._apply_search(search.delete_chars(self._history, mode.state, 1))
            return
        pos = self._buffer.insert_pos
        self._buffer.delete_range(pos - 1, pos)

    # -- Clipboard / autocomplete -------------------------------------------

    def _paste_clipboard(self) -> None:
        if self._clipboard is None:
            return
        self.paste(self._clipboard())

    def _complete(self, forward: bool) -> None:
        mode = self._mode
        if isinstance(mode, AutocompleteMode):
            state = self._autocomplete.step(self._buffer, mode.state, forward)
        else:
            state = self._autocomplete.begin(self._buffer, forward)
            if state is None:
                return
        self._mode = AutocompleteMode(state)
