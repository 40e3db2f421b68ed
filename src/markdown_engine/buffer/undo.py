"""Undo/redo history; one entry per closed edit group."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .state import Caret


@dataclass(slots=True)
class UndoEntry:
    label: str
    before_text: str
    after_text: str
    caret_before: Caret
    caret_after: Caret


class UndoTimeline:
    """Linear undo/redo history."""

    def __init__(self, max_entries: int = 500) -> None:
        self._entries: List[UndoEntry] = []
        self._index: int = -1
        self._max_entries = max_entries

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: UndoEntry) -> None:
        if self._index < len(self._entries) - 1:
            self._entries = self._entries[: self._index + 1]
        self._entries.append(entry)
        if len(self._entries) > self._max_entries:
            self._entries.pop(0)
        self._index = len(self._entries) - 1

    def can_undo(self) -> bool:
        return self._index >= 0

    def can_redo(self) -> bool:
        return self._index < len(self._entries) - 1

    def undo(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        entry = self._entries[self._index]
        self._index -= 1
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self.can_redo():
            return None
        self._index += 1
        return self._entries[self._index]

    def peek(self) -> Optional[UndoEntry]:
        if not self.can_undo():
            return None
        return self._entries[self._index]


__all__ = ["UndoEntry", "UndoTimeline"]
