"""Inline formatting commands: emphasis markup, comments, hard breaks."""

from __future__ import annotations

from typing import Optional

from markdown_engine.buffer import Buffer, Caret

from .results import EditResult

BOLD = "**"
ITALIC = "*"
STRIKETHROUGH = "~~"
COMMENT_OPEN = "<!-- "
COMMENT_CLOSE = " -->"
HARD_LINE_BREAK = "  "


def _caret(buffer: Buffer, caret: Optional[Caret]) -> Caret:
    if caret is None:
        return buffer.caret
    return buffer.set_caret(caret)


def insert_formatting_markup(
    buffer: Buffer, markup: str, caret: Optional[Caret] = None
) -> EditResult:
    """Wrap the selection in ``markup``, or insert an empty pair around the caret.

    The selection, when present, keeps covering the original text.
    """

    caret = _caret(buffer, caret)
    width = len(markup)
    if caret.has_selection:
        start, end = caret.start, caret.end
        with buffer.edit_group("format_markup"):
            buffer.insert_text(end, markup)
            buffer.insert_text(start, markup)
            shifted_end = (end[0], end[1] + width) if end[0] == start[0] else end
            buffer.set_cursor(shifted_end, anchor=(start[0], start[1] + width))
        return EditResult.done(buffer.caret, status="wrapped", message=markup)

    row, col = caret.position
    with buffer.edit_group("format_markup"):
        buffer.insert_text((row, col), markup * 2)
        buffer.set_cursor((row, col + width))
    return EditResult.done(buffer.caret, status="inserted", message=markup)


def bold(buffer: Buffer, caret: Optional[Caret] = None) -> EditResult:
    return insert_formatting_markup(buffer, BOLD, caret)


def italic(buffer: Buffer, caret: Optional[Caret] = None) -> EditResult:
    return insert_formatting_markup(buffer, ITALIC, caret)


def strikethrough(buffer: Buffer, caret: Optional[Caret] = None) -> EditResult:
    return insert_formatting_markup(buffer, STRIKETHROUGH, caret)


def insert_comment(buffer: Buffer, caret: Optional[Caret] = None) -> EditResult:
    """Comment out the selection, or open an empty HTML comment at the caret."""

    caret = _caret(buffer, caret)
    if caret.has_selection:
        start, end = caret.start, caret.end
        text = buffer.get_text_range(start, end)
        with buffer.edit_group("insert_comment"):
            buffer.replace_range(start, end, f"{COMMENT_OPEN}{text}{COMMENT_CLOSE}")
        return EditResult.done(buffer.caret, status="commented")

    row, col = caret.position
    with buffer.edit_group("insert_comment"):
        buffer.insert_text((row, col), COMMENT_OPEN + COMMENT_CLOSE)
        buffer.set_cursor((row, col + len(COMMENT_OPEN)))
    return EditResult.done(buffer.caret, status="comment_opened")


def insert_hard_line_break(buffer: Buffer, caret: Optional[Caret] = None) -> EditResult:
    """Put Markdown's two-space hard break at the caret, replacing any selection."""

    caret = _caret(buffer, caret)
    start = caret.start
    with buffer.edit_group("hard_line_break"):
        buffer.replace_range(start, caret.end, HARD_LINE_BREAK)
        buffer.set_cursor((start[0], start[1] + len(HARD_LINE_BREAK)))
    return EditResult.done(buffer.caret)


def insert_raw_newline(buffer: Buffer, caret: Optional[Caret] = None) -> EditResult:
    """Break the line with no list or quote continuation."""

    caret = _caret(buffer, caret)
    with buffer.edit_group("raw_newline"):
        buffer.replace_range(caret.start, caret.end, "\n")
        buffer.set_cursor((caret.start[0] + 1, 0))
    return EditResult.done(buffer.caret)


__all__ = [
    "BOLD",
    "ITALIC",
    "STRIKETHROUGH",
    "bold",
    "italic",
    "strikethrough",
    "insert_comment",
    "insert_formatting_markup",
    "insert_hard_line_break",
    "insert_raw_newline",
]
