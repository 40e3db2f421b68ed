"""Line storage for Markdown buffers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from .state import Cursor


@dataclass(slots=True)
class BufferDocument:
    """List-of-lines text storage with a version counter.

    Lines carry no identity beyond their index; inserting or removing a line
    renumbers everything after it. Every edit produces a new document with a
    bumped version instead of mutating in place.
    """

    _lines: List[str] = field(default_factory=lambda: [""])
    version: int = 0

    @classmethod
    def from_text(cls, text: str, *, version: int = 0) -> "BufferDocument":
        return cls(_lines=text.split("\n"), version=version)

    @property
    def text(self) -> str:
        return "\n".join(self._lines)

    @property
    def line_count(self) -> int:
        return len(self._lines)

    def snapshot(self) -> Sequence[str]:
        """Return the current lines without exposing internal mutability."""

        return tuple(self._lines)

    def get_line(self, index: int) -> str:
        return self._lines[index]

    def replace(self, *, lines: Iterable[str]) -> "BufferDocument":
        """Return a new document holding ``lines`` with a bumped version."""

        updated = list(lines) or [""]
        return BufferDocument(_lines=updated, version=self.version + 1)

    def with_text(self, text: str) -> "BufferDocument":
        return BufferDocument.from_text(text, version=self.version + 1)

    def offset_of(self, cursor: Cursor) -> int:
        row, col = cursor
        return sum(len(self._lines[i]) + 1 for i in range(row)) + col

    def cursor_at(self, offset: int) -> Cursor:
        running = 0
        for row, line in enumerate(self._lines):
            if offset <= running + len(line):
                return (row, max(0, offset - running))
            running += len(line) + 1
        last = len(self._lines) - 1
        return (last, len(self._lines[last]))

    def end_cursor(self) -> Cursor:
        last = len(self._lines) - 1
        return (last, len(self._lines[last]))


__all__ = ["BufferDocument"]
