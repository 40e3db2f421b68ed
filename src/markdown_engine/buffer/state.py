"""Cursor, selection, and caret values tracked by a buffer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

Cursor = Tuple[int, int]  # (row, column)
Selection = Tuple[Cursor, Cursor]  # (anchor, active end)


@dataclass(frozen=True, slots=True)
class Caret:
    """Immutable cursor plus optional selection anchor.

    Editing operations take a caret and hand a new one back, so their effect on
    the cursor can be checked without a live widget.
    """

    position: Cursor = (0, 0)
    anchor: Optional[Cursor] = None

    @classmethod
    def at(cls, row: int, col: int) -> "Caret":
        return cls(position=(row, col))

    @classmethod
    def selecting(cls, anchor: Cursor, position: Cursor) -> "Caret":
        return cls(position=position, anchor=anchor)

    @property
    def has_selection(self) -> bool:
        return self.anchor is not None and self.anchor != self.position

    @property
    def start(self) -> Cursor:
        if self.has_selection:
            assert self.anchor is not None
            return min(self.anchor, self.position)
        return self.position

    @property
    def end(self) -> Cursor:
        if self.has_selection:
            assert self.anchor is not None
            return max(self.anchor, self.position)
        return self.position

    @property
    def row(self) -> int:
        return self.position[0]

    @property
    def column(self) -> int:
        return self.position[1]


@dataclass(slots=True)
class BufferState:
    """Mutable caret storage tied to a buffer."""

    cursor: Cursor = (0, 0)
    anchor: Optional[Cursor] = None
    last_change_tick: int = 0

    @property
    def selection(self) -> Optional[Selection]:
        if self.anchor is None or self.anchor == self.cursor:
            return None
        return (self.anchor, self.cursor)

    @property
    def caret(self) -> Caret:
        anchor = self.anchor if self.anchor != self.cursor else None
        return Caret(position=self.cursor, anchor=anchor)

    def set_cursor(self, row: int, col: int) -> None:
        self.cursor = (row, col)
        self.anchor = None

    def clear_selection(self) -> None:
        self.anchor = None

    def set_selection(self, anchor: Cursor, cursor: Cursor) -> None:
        self.anchor = anchor
        self.cursor = cursor

    def apply(self, caret: Caret) -> None:
        self.cursor = caret.position
        self.anchor = caret.anchor if caret.has_selection else None


__all__ = ["Caret", "Cursor", "Selection", "BufferState"]
