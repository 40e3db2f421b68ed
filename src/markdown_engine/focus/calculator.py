"""Focus mode: which text around the caret stays sharp and which fades."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence, Tuple

from .boundaries import RegexSentenceBoundaryFinder, SentenceBoundaryFinder

Position = Tuple[int, int]


class FocusMode(str, Enum):
    """Focus granularity."""

    DISABLED = "disabled"
    LINE = "line"
    THREE_LINES = "three_lines"
    PARAGRAPH = "paragraph"
    SENTENCE = "sentence"

    @classmethod
    def parse(cls, value: "FocusMode | str") -> "FocusMode":
        if isinstance(value, FocusMode):
            return value
        key = str(value).strip().lower().replace("-", "_")
        for mode in cls:
            if mode.value == key:
                return mode
        raise ValueError(f"Unknown focus mode '{value}'.")


@dataclass(frozen=True, slots=True)
class TextSpan:
    start: Position
    end: Position

    @property
    def is_empty(self) -> bool:
        return self.start >= self.end


@dataclass(frozen=True, slots=True)
class FocusRange:
    """Spans to fade before and after the sharp region; both None when disabled."""

    before: Optional[TextSpan] = None
    after: Optional[TextSpan] = None
    sharp: Optional[TextSpan] = None

    @property
    def is_empty(self) -> bool:
        return self.before is None and self.after is None

    def faded(self) -> Tuple[TextSpan, ...]:
        return tuple(span for span in (self.before, self.after) if span is not None)


def _is_blank(line: str) -> bool:
    return not line.strip()


def _paragraph_rows(lines: Sequence[str], row: int) -> Tuple[int, int]:
    if _is_blank(lines[row]):
        return row, row
    first = row
    while first > 0 and not _is_blank(lines[first - 1]):
        first -= 1
    last = row
    while last < len(lines) - 1 and not _is_blank(lines[last + 1]):
        last += 1
    return first, last


def compute_focus_ranges(
    lines: Sequence[str],
    cursor: Position,
    mode: FocusMode | str,
    *,
    boundary_finder: Optional[SentenceBoundaryFinder] = None,
) -> FocusRange:
    """Compute the faded spans for ``mode`` with the caret at ``cursor``.

    Line-based modes keep whole lines sharp: the caret's line (``LINE``), the
    caret's line and the two above it (``THREE_LINES``), or the blank-line
    delimited paragraph (``PARAGRAPH``). ``SENTENCE`` keeps the sentence around
    the caret sharp inside its line; a boundary lookup that finds nothing
    falls back to the start or end of the line.

    Nothing before the caret fades when the sharp region starts the document.
    """

    mode = FocusMode.parse(mode)
    if mode is FocusMode.DISABLED or not lines:
        return FocusRange()

    last_row = len(lines) - 1
    row = max(0, min(cursor[0], last_row))
    col = max(0, min(cursor[1], len(lines[row])))
    document_end = (last_row, len(lines[last_row]))

    def line_end(index: int) -> Position:
        return (index, len(lines[index]))

    if mode is FocusMode.SENTENCE:
        finder = boundary_finder or RegexSentenceBoundaryFinder()
        text = lines[row]
        previous = finder.previous_boundary(text, col)
        following = finder.next_boundary(text, col)
        sharp = TextSpan(
            (row, previous if previous >= 0 else 0),
            (row, following if following >= 0 else len(text)),
        )
        before = TextSpan((0, 0), sharp.start) if sharp.start != (0, 0) else None
        return FocusRange(
            before=before, after=TextSpan(sharp.end, document_end), sharp=sharp
        )

    if mode is FocusMode.LINE:
        first, last = row, row
    elif mode is FocusMode.THREE_LINES:
        first, last = max(0, row - 2), row
    else:
        first, last = _paragraph_rows(lines, row)

    sharp = TextSpan((first, 0), line_end(last))
    before = TextSpan((0, 0), line_end(first - 1)) if first > 0 else None
    after = TextSpan(sharp.end, document_end)
    return FocusRange(before=before, after=after, sharp=sharp)


__all__ = ["FocusMode", "FocusRange", "TextSpan", "compute_focus_ranges"]
