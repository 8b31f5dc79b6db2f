"""Incremental search over the input history.

Backward searches walk toward older entries (increasing index), forward
searches toward newer ones. Every operation returns a new ``SearchState``;
the caller decides what to do with the matched entry.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from lineedit.history import History

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchState:
    forward: bool = False
    query: str = ""
    match_index: int | None = None
    # Set when the last scan found nothing; the previous match is kept.
    failed: bool = False
    # Where the first scan begins when nothing has matched yet.
    start_index: int = 0


def scan(history: History, query: str, start: int, forward: bool) -> int | None:
    """Return the first index from *start* (inclusive) whose entry contains *query*."""
    step = -1 if forward else 1
    index = start
    while 0 <= index < len(history):
        if query in history[index]:
            return index
        index += step
    return None


def _found(state: SearchState, index: int | None) -> SearchState:
    if index is None:
        logger.debug("History search failed (query length %d)", len(state.query))
        return replace(state, failed=True)
    return replace(state, match_index=index, failed=False)


def append_char(history: History, state: SearchState, char: str) -> SearchState:
    """Grow the query and rescan from the current match."""
    state = replace(state, query=state.query + char)
    start = state.match_index if state.match_index is not None else state.start_index
    return _found(state, scan(history, state.query, start, state.forward))


def delete_chars(history: History, state: SearchState, n: int = 1) -> SearchState:
    """Trim *n* characters from the query and rescan the whole history."""
    if n <= 0 or not state.query:
        return state
    query = state.query[: max(0, len(state.query) - n)]
    state = replace(state, query=query)
    if not query:
        return replace(state, failed=False)
    return _found(state, scan(history, query, 0, forward=False))


def repeat(history: History, state: SearchState, forward: bool) -> SearchState:
    """Find the next match in the *forward* direction, flipping if needed.

    The scan starts one step past the current match, so the entry already
    selected is never reported again.
    """
    if forward != state.forward:
        state = replace(state, forward=forward)

    if state.match_index is None:
        start = state.start_index
    else:
        start = state.match_index + (-1 if forward else 1)
    return _found(state, scan(history, state.query, start, forward))


def search_prompt(state: SearchState) -> str:
    label = "i-search" if state.forward else "reverse-i-search"
    prefix = "failed " if state.failed else ""
    return f"({prefix}{label})'{state.query}': "
