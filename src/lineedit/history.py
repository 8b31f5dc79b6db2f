"""Bounded input history, the recall cursor, and JSON persistence."""

from __future__ import annotations

import json
import logging
import os
from collections import deque
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Literal

logger = logging.getLogger(__name__)

MAX_HISTORY_ENTRIES = 20

RecallDirection = Literal["up", "down"]
RecallExtreme = Literal["oldest", "newest"]


class History:
    """Most-recent-first log of submitted lines.

    Index 0 is the newest entry. Appending past ``max_entries`` evicts the
    oldest one.
    """

    def __init__(
        self,
        entries: Iterable[str] | None = None,
        *,
        max_entries: int = MAX_HISTORY_ENTRIES,
    ) -> None:
        self._max_entries = max_entries
        self._entries: deque[str] = deque(maxlen=max_entries)
        for entry in entries or ():
            self.append(entry)

    @property
    def max_entries(self) -> int:
        return self._max_entries

    def append(self, line: str) -> bool:
        """Record *line* as the newest entry. Empty lines are ignored."""
        if not line:
            return False
        if len(self._entries) == self._max_entries:
            logger.debug("History full, evicting oldest entry")
        self._entries.appendleft(line)
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index: int) -> str:
        return self._entries[index]

    def entries(self) -> list[str]:
        """Entries newest first."""
        return list(self._entries)

    def oldest_first(self) -> list[str]:
        return list(reversed(self._entries))

    def clear(self) -> None:
        self._entries.clear()


# ---------------------------------------------------------------------------
# Recall cursor
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NotEntered:
    """History navigation has not started for the current line."""


@dataclass(frozen=True)
class Entered:
    """History navigation is in progress.

    ``snapshot`` is the line as it was before the first recall; ``index`` is
    the selected entry, or None when the snapshot itself is shown.
    """

    snapshot: str
    index: int | None


HistoryCursor = NotEntered | Entered


def recall(
    history: History, cursor: HistoryCursor, current: str, direction: RecallDirection
) -> tuple[HistoryCursor, str] | None:
    """Step through *history* one entry toward older (up) or newer (down).

    Returns the new cursor and the text to show, or None when nothing changes
    (empty history, or moving down before any recall).
    """
    if not len(history):
        return None

    if isinstance(cursor, NotEntered):
        if direction == "down":
            return None
        return Entered(snapshot=current, index=0), history[0]

    index = cursor.index
    if direction == "up":
        new_index = 0 if index is None else min(index + 1, len(history) - 1)
    elif index is None or index == 0:
        new_index = None
    else:
        new_index = min(index - 1, len(history) - 1)

    new_cursor = Entered(snapshot=cursor.snapshot, index=new_index)
    if new_index is None:
        return new_cursor, cursor.snapshot
    return new_cursor, history[new_index]


def recall_extreme(
    history: History, cursor: HistoryCursor, current: str, extreme: RecallExtreme
) -> tuple[HistoryCursor, str] | None:
    """Jump straight to the oldest or the newest entry."""
    if not len(history):
        return None
    snapshot = cursor.snapshot if isinstance(cursor, Entered) else current
    index = len(history) - 1 if extreme == "oldest" else 0
    return Entered(snapshot=snapshot, index=index), history[index]


# ---------------------------------------------------------------------------
# Persistence
# ---------------------------------------------------------------------------


def load_history(
    path: str | Path, *, max_entries: int = MAX_HISTORY_ENTRIES
) -> tuple[History, Exception | None]:
    """Load a history file (JSON array of strings, oldest first).

    A missing file gives an empty history. A malformed file gives an empty
    history and the error that was hit.
    """
    history = History(max_entries=max_entries)
    if not os.path.exists(path):
        return history, None
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Failed to load history from %s: %s", path, e)
        return history, e

    if not isinstance(data, list):
        error = ValueError(f"history file {path} does not contain a list")
        logger.warning("%s", error)
        return history, error

    for entry in data[-max_entries:]:
        if isinstance(entry, str):
            history.append(entry)
    return history, None


def save_history(path: str | Path, history: History) -> None:
    """Write *history* to *path*, oldest first."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        json.dumps(history.oldest_first(), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    logger.debug("Saved %d history entries to %s", len(history), target)
