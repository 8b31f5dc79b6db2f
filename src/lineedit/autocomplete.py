"""Autocomplete support: candidate cycling and a command-syntax completion engine.

The bridge asks a ``CompletionEngine`` for candidates once, when completion
starts, and then only cycles through the cached list. ``CommandSyntaxEngine``
is the default engine; hosts can supply their own.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import dataclass, field, replace
from typing import Callable, Literal, Protocol, Sequence

from lineedit.buffer import EditBuffer, word_extent

logger = logging.getLogger(__name__)

CompletionStyle = Literal["unix", "windows"]


def default_completion_style() -> CompletionStyle:
    """Completion style matching the current platform."""
    return "windows" if sys.platform == "win32" else "unix"


class CompletionEngine(Protocol):
    """Supplies completion candidates for the token under the cursor."""

    def request_candidates(
        self,
        partial_token: str,
        syntax: object,
        style: CompletionStyle,
        *,
        words_before: Sequence[str] = (),
    ) -> Sequence[str] | None:
        """Return full replacements for *partial_token*, in display order.

        ``words_before`` holds the words preceding the token on the line.
        Returns None (or an empty sequence) when nothing applies.
        """
        ...


# ---------------------------------------------------------------------------
# Command syntax
# ---------------------------------------------------------------------------

ArgumentCompleter = Sequence[str] | Callable[[str], Sequence[str] | None]


@dataclass
class Command:
    """A command name and the completers for its positional arguments."""

    name: str
    arguments: list[ArgumentCompleter] = field(default_factory=list)
    description: str | None = None


@dataclass
class CommandSyntax:
    """The set of commands a console understands."""

    commands: list[Command] = field(default_factory=list)

    def find(self, name: str) -> Command | None:
        for command in self.commands:
            if command.name == name:
                return command
        return None

    def names(self) -> list[str]:
        return [command.name for command in self.commands]


def filter_candidates(
    words: Sequence[str], prefix: str, style: CompletionStyle
) -> list[str]:
    """Keep the words starting with *prefix* and order them for *style*.

    Unix matching is case-sensitive; Windows matching ignores case.
    """
    if style == "windows":
        folded = prefix.casefold()
        matches = [w for w in words if w.casefold().startswith(folded)]
        return sorted(dict.fromkeys(matches), key=lambda w: (w.casefold(), w))
    return sorted(dict.fromkeys(w for w in words if w.startswith(prefix)))


class CommandSyntaxEngine:
    """Completes command names, then each command's positional arguments."""

    def request_candidates(
        self,
        partial_token: str,
        syntax: object,
        style: CompletionStyle,
        *,
        words_before: Sequence[str] = (),
    ) -> list[str] | None:
        if not isinstance(syntax, CommandSyntax):
            return None

        if not words_before:
            return filter_candidates(syntax.names(), partial_token, style)

        command = syntax.find(words_before[0])
        if command is None:
            return None

        position = len(words_before) - 1
        if position >= len(command.arguments):
            return None

        completer = command.arguments[position]
        words = completer(partial_token) if callable(completer) else completer
        if not words:
            return None
        return filter_candidates(words, partial_token, style)


# ---------------------------------------------------------------------------
# Bridge
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AutocompleteState:
    candidates: tuple[str, ...]
    cursor: int
    original_token: str
    token_start: int
    style: CompletionStyle

    @property
    def current(self) -> str:
        return self.candidates[self.cursor]


def _validated(candidates: Sequence[object] | None) -> tuple[str, ...]:
    if not candidates:
        return ()
    if not isinstance(candidates, (list, tuple)):
        logger.debug("Discarding candidates of type %s", type(candidates).__name__)
        return ()
    if not all(isinstance(c, str) for c in candidates):
        logger.debug("Discarding candidate list with non-string entries")
        return ()
    return tuple(candidates)  # type: ignore[arg-type]


class AutocompleteBridge:
    """Starts and cycles completions against an ``EditBuffer``."""

    def __init__(
        self,
        engine: CompletionEngine | None = None,
        syntax: object = None,
        style: CompletionStyle | None = None,
    ) -> None:
        self.engine: CompletionEngine = engine or CommandSyntaxEngine()
        self.syntax: object = syntax
        self.style: CompletionStyle = style or default_completion_style()

    def begin(self, buffer: EditBuffer, forward: bool) -> AutocompleteState | None:
        """Look up candidates for the token under the cursor and insert the first.

        Returns None and leaves the buffer alone when there are no candidates.
        """
        text = buffer.text
        start, end = word_extent(text, buffer.insert_pos)
        token = text[start:end]
        words_before = text[:start].split()

        candidates = _validated(
            self.engine.request_candidates(
                token, self.syntax, self.style, words_before=words_before
            )
        )
        logger.debug("Completion offered %d candidates", len(candidates))
        if not candidates:
            return None

        state = AutocompleteState(
            candidates=candidates,
            cursor=0 if forward else len(candidates) - 1,
            original_token=token,
            token_start=start,
            style=self.style,
        )
        buffer.replace_range(start, end, state.current)
        return state

    def step(
        self, buffer: EditBuffer, state: AutocompleteState, forward: bool
    ) -> AutocompleteState:
        """Replace the inserted candidate with the next (or previous) one."""
        previous_end = state.token_start + len(state.current)
        delta = 1 if forward else -1
        state = replace(state, cursor=(state.cursor + delta) % len(state.candidates))
        buffer.replace_range(state.token_start, previous_end, state.current)
        return state
