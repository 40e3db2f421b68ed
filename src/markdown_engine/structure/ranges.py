"""Resolve which lines a block-level command operates on."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Protocol

from markdown_engine.buffer.state import Caret


class LineSource(Protocol):
    def line_count(self) -> int: ...


@dataclass(frozen=True, slots=True)
class LineRange:
    """Inclusive range of line indices; never empty."""

    first: int
    last: int

    def __post_init__(self) -> None:
        if self.first > self.last:
            raise ValueError(f"empty line range {self.first}..{self.last}")

    @property
    def stop(self) -> int:
        """One past the last line, for ``range()`` style iteration."""

        return self.last + 1

    def __iter__(self) -> Iterator[int]:
        return iter(range(self.first, self.stop))

    def __len__(self) -> int:
        return self.stop - self.first

    def __contains__(self, row: object) -> bool:
        return isinstance(row, int) and self.first <= row <= self.last


def resolve_block_range(caret: Caret, buffer: LineSource) -> LineRange:
    """Lines touched by ``caret``.

    With a selection: from the line holding the selection start through the
    line holding its end. Without one: the caret's own line.
    """

    max_row = max(0, buffer.line_count() - 1)
    if caret.has_selection:
        first, last = caret.start[0], caret.end[0]
    else:
        first = last = caret.row
    first = max(0, min(first, max_row))
    last = max(first, min(last, max_row))
    return LineRange(first, last)


__all__ = ["LineRange", "LineSource", "resolve_block_range"]
