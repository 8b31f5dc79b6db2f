"""Console session: raw key sequences in, edited lines out.

``ConsoleSession`` sits between a terminal reader and ``LineEditorModel``.
It maps each key sequence to an action through the keybindings, routes
bracketed pastes, persists history when a history file is configured, and
lays out the prompt and line for the driver to paint.
"""

from __future__ import annotations

import logging
from typing import Callable

from lineedit.autocomplete import CompletionEngine
from lineedit.history import History, load_history, save_history
from lineedit.keybindings import (
    LineKeybindingsManager,
    get_line_keybindings,
)
from lineedit.keys import is_printable_input, split_key_sequences
from lineedit.layout import InputLayout, layout_input
from lineedit.model import LINE_TERMINATORS, LineEditorModel
from lineedit.settings import LineEditorSettings

logger = logging.getLogger(__name__)

BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"


class ConsoleSession:
    """One interactive input session."""

    def __init__(
        self,
        *,
        prompt: str = "> ",
        settings: LineEditorSettings | None = None,
        syntax: object = None,
        completion_engine: CompletionEngine | None = None,
        keybindings: LineKeybindingsManager | None = None,
        clipboard: Callable[[], str] | None = None,
        width: int = 80,
    ) -> None:
        self.settings = settings or LineEditorSettings()
        self.prompt = prompt
        self.width = width

        history = History()
        if self.settings.history_file:
            history, _ = load_history(self.settings.history_file)

        self.model = LineEditorModel(
            history=history,
            echo=self.settings.echo,
            completion_engine=completion_engine,
            autocomplete_syntax=syntax,
            autocomplete_style=self.settings.autocomplete_style,
            clipboard=clipboard,
        )

        if keybindings is not None:
            self._keybindings = keybindings
        elif self.settings.keybindings:
            self._keybindings = LineKeybindingsManager(self.settings.keybindings)
        else:
            self._keybindings = get_line_keybindings()

        # Bracketed paste mode
        self._paste_buffer: str = ""
        self._is_in_paste: bool = False

    def handle_input(self, data: str) -> None:
        """Feed a chunk of raw terminal input.

        The chunk may hold several keys, and a bracketed paste may start or
        end anywhere inside it.
        """
        if not self._is_in_paste:
            start = data.find(BRACKETED_PASTE_START)
            if start == -1:
                for sequence in split_key_sequences(data):
                    self._handle_key(sequence)
                return
            for sequence in split_key_sequences(data[:start]):
                self._handle_key(sequence)
            self._is_in_paste = True
            self._paste_buffer = ""
            data = data[start + len(BRACKETED_PASTE_START) :]

        self._paste_buffer += data
        end_index = self._paste_buffer.find(BRACKETED_PASTE_END)
        if end_index != -1:
            paste_content = self._paste_buffer[:end_index]
            self.model.paste(paste_content)
            self._is_in_paste = False
            remaining = self._paste_buffer[end_index + len(BRACKETED_PASTE_END) :]
            self._paste_buffer = ""
            if remaining:
                self.handle_input(remaining)

    def _handle_key(self, sequence: str) -> None:
        action = self._keybindings.interpret(sequence)
        if action is not None:
            self.model.perform_line_editing_action(action, self.width)
            return

        if sequence in LINE_TERMINATORS or is_printable_input(sequence):
            for ch in sequence:
                self.model.add_input_char(ch)
            return

        logger.debug("Ignoring unbound key sequence %r", sequence)

    def poll_line(self) -> str | None:
        """Return the next completed line, saving history when configured."""
        line = self.model.check_for_completed_input_line()
        if line and self.settings.history_file:
            try:
                save_history(self.settings.history_file, self.model.history)
            except OSError as e:
                logger.warning("Failed to save history to %s: %s", self.settings.history_file, e)
        return line

    def set_echo(self, echo: bool) -> None:
        self.model.set_echo_enabled(echo)

    def update_prompt(self, prompt: str) -> None:
        self.prompt = prompt
        self.model.redraw_needed = True

    def render(self, width: int | None = None) -> InputLayout:
        """Lay out prompt and line; uses the last known width by default."""
        if width is not None:
            self.width = width
        prompt = self.model.prompt_prefix() or self.prompt
        return layout_input(
            prompt, self.model.visible_line(), self.model.visible_insert_pos(), self.width
        )

    def output_history(self) -> list[str]:
        """Numbered history lines, oldest first."""
        return [
            f"{i}: {entry}"
            for i, entry in enumerate(self.model.history.oldest_first(), start=1)
        ]
