"""Markdown-aware structural editing.

Each operation reads the caret (explicitly passed, or the buffer's current
one), classifies the lines it touches, and applies its edits inside exactly
one edit group. The returned :class:`EditResult` carries the caret the buffer
ends up with.
"""

from __future__ import annotations

import re
from typing import Optional

from markdown_engine.buffer import Buffer, Caret
from markdown_engine.runtime import telemetry
from markdown_engine.runtime.settings import EditorSettings
from markdown_engine.structure import (
    Blockquote,
    BulletListItem,
    NumberedListItem,
    TaskListItem,
    classify,
    leading_whitespace,
    resolve_block_range,
)

from .pairs import PairedDelimiterEngine
from .results import EditResult

BULLET_CYCLE_FORWARD = {"*": "-", "-": "+", "+": "*"}
BULLET_CYCLE_BACKWARD = {"*": "+", "+": "-", "-": "*"}

_DIGITS = re.compile(r"\d+")
_MARKED_KINDS = (NumberedListItem, BulletListItem, TaskListItem, Blockquote)


def _swap_marker(buffer: Buffer, row: int, item: BulletListItem, marker: str) -> None:
    caret = buffer.caret
    column = item.marker_start
    buffer.replace_range((row, column), (row, column + 1), marker)
    buffer.set_caret(caret)


class StructuralEditEngine:
    """Block prefixing, list continuation, indentation and task toggling."""

    def __init__(
        self,
        settings: EditorSettings,
        pairs: Optional[PairedDelimiterEngine] = None,
    ) -> None:
        self.settings = settings
        self.pairs = pairs
        self.logger = telemetry.get_logger("markdown_engine.editing.structural")

    @staticmethod
    def _caret(buffer: Buffer, caret: Optional[Caret]) -> Caret:
        if caret is None:
            return buffer.caret
        return buffer.set_caret(caret)

    # -- block creation ----------------------------------------------------

    def insert_prefix_for_blocks(
        self, buffer: Buffer, prefix: str, caret: Optional[Caret] = None
    ) -> EditResult:
        caret = self._caret(buffer, caret)
        with buffer.edit_group("insert_prefix"):
            for row in resolve_block_range(caret, buffer):
                buffer.insert_text((row, 0), prefix)
        return EditResult.done(buffer.caret)

    def create_bullet_list(
        self, buffer: Buffer, marker: str = "*", caret: Optional[Caret] = None
    ) -> EditResult:
        if marker not in BULLET_CYCLE_FORWARD:
            raise ValueError(f"unsupported bullet marker {marker!r}")
        return self.insert_prefix_for_blocks(buffer, f"{marker} ", caret)

    def create_task_list(
        self, buffer: Buffer, caret: Optional[Caret] = None
    ) -> EditResult:
        return self.insert_prefix_for_blocks(buffer, "- [ ] ", caret)

    def create_blockquote(
        self, buffer: Buffer, caret: Optional[Caret] = None
    ) -> EditResult:
        return self.insert_prefix_for_blocks(buffer, "> ", caret)

    def create_numbered_list(
        self, buffer: Buffer, delimiter: str = ".", caret: Optional[Caret] = None
    ) -> EditResult:
        """Prefix every line in range with ``1.``, ``2.``, ... regardless of content."""

        caret = self._caret(buffer, caret)
        with buffer.edit_group("numbered_list"):
            for number, row in enumerate(resolve_block_range(caret, buffer), start=1):
                buffer.insert_text((row, 0), f"{number}{delimiter} ")
        return EditResult.done(buffer.caret)

    def remove_blockquote(
        self, buffer: Buffer, caret: Optional[Caret] = None
    ) -> EditResult:
        """Strip one leading ``>`` and the spaces right after it from each line."""

        caret = self._caret(buffer, caret)
        with buffer.edit_group("remove_blockquote"):
            for row in resolve_block_range(caret, buffer):
                line = buffer.line_at(row)
                if not line.startswith(">"):
                    continue
                end = 1
                while end < len(line) and line[end] == " ":
                    end += 1
                buffer.delete_range((row, 0), (row, end))
        return EditResult.done(buffer.caret)

    # -- indentation -------------------------------------------------------

    def indent(self, buffer: Buffer, caret: Optional[Caret] = None) -> EditResult:
        caret = self._caret(buffer, caret)
        if caret.has_selection:
            unit = self.settings.indent_unit()
            with buffer.edit_group("indent"):
                for row in resolve_block_range(caret, buffer):
                    buffer.insert_text((row, 0), unit)
            return EditResult.done(buffer.caret)

        row, col = caret.position
        line = buffer.line_at(row)
        kind = classify(line)
        with buffer.edit_group("indent"):
            if isinstance(kind, NumberedListItem):
                # A nested list restarts at 1.
                buffer.replace_line(row, _DIGITS.sub("1", line, count=1))
                position = (row, 0)
                text = self.settings.indent_unit()
            elif isinstance(kind, TaskListItem):
                position = (row, 0)
                text = self.settings.indent_unit()
            elif isinstance(kind, BulletListItem):
                if self.settings.bullet_cycling_enabled:
                    marker = BULLET_CYCLE_FORWARD[kind.marker]
                    _swap_marker(buffer, row, kind, marker)
                    telemetry.record_event(
                        "structure.bullet_cycled",
                        data={"from": kind.marker, "to": marker, "direction": "in"},
                    )
                position = (row, 0)
                text = self.settings.indent_unit()
            else:
                position = (row, col)
                text = self.settings.partial_indent(col)
            buffer.set_cursor(position)
            buffer.insert_text(position, text)
        return EditResult.done(buffer.caret)

    def unindent(self, buffer: Buffer, caret: Optional[Caret] = None) -> EditResult:
        caret = self._caret(buffer, caret)
        tab_width = self.settings.tab_width
        with buffer.edit_group("unindent"):
            for row in resolve_block_range(caret, buffer):
                line = buffer.line_at(row)
                if line.startswith("\t"):
                    buffer.delete_range((row, 0), (row, 1))
                    continue
                count = 0
                while count < tab_width and count < len(line) and line[count] == " ":
                    count += 1
                if count:
                    buffer.delete_range((row, 0), (row, count))

            if not caret.has_selection and self.settings.bullet_cycling_enabled:
                row = caret.row
                line = buffer.line_at(row)
                kind = classify(line)
                if isinstance(kind, BulletListItem):
                    marker = BULLET_CYCLE_BACKWARD[kind.marker]
                    _swap_marker(buffer, row, kind, marker)
                    telemetry.record_event(
                        "structure.bullet_cycled",
                        data={"from": kind.marker, "to": marker, "direction": "out"},
                    )
        return EditResult.done(buffer.caret)

    # -- tasks -------------------------------------------------------------

    def toggle_task_complete(
        self, buffer: Buffer, caret: Optional[Caret] = None
    ) -> EditResult:
        caret = self._caret(buffer, caret)
        toggled = 0
        with buffer.edit_group("toggle_task"):
            for row in resolve_block_range(caret, buffer):
                kind = classify(buffer.line_at(row))
                if not isinstance(kind, TaskListItem):
                    continue
                column = kind.checkbox_column
                buffer.replace_range(
                    (row, column), (row, column + 1), " " if kind.checked else "x"
                )
                toggled += 1
            buffer.set_caret(caret)
        return EditResult.done(buffer.caret, message=str(toggled))

    # -- keys --------------------------------------------------------------

    def continuation_prefix(self, line: str, column: int) -> tuple[str, bool]:
        """Text to start the next line with, and whether the list ends here.

        Mid-line breaks only carry the leading whitespace (cut at the caret).
        At end of line the structural kind decides; an empty list item ends
        the list and carries nothing forward.
        """

        if column < len(line):
            return leading_whitespace(line)[:column], False

        kind = classify(line)
        if isinstance(kind, NumberedListItem):
            if kind.is_empty:
                return "", True
            return _DIGITS.sub(str(kind.number + 1), kind.prefix, count=1), False
        if isinstance(kind, TaskListItem):
            if kind.is_empty:
                return "", True
            return kind.unchecked_prefix(), False
        if isinstance(kind, BulletListItem):
            if kind.is_empty:
                return "", True
            return kind.prefix, False
        if isinstance(kind, Blockquote):
            return kind.prefix, False
        return kind.indent, False

    def handle_carriage_return(
        self, buffer: Buffer, caret: Optional[Caret] = None
    ) -> EditResult:
        caret = self._caret(buffer, caret)
        if caret.has_selection:
            return EditResult.unhandled(caret, status="selection")

        row, col = caret.position
        line = buffer.line_at(row)
        prefix, end_list = self.continuation_prefix(line, col)
        with buffer.edit_group("carriage_return"):
            if end_list:
                indent = leading_whitespace(line)
                buffer.replace_line(row, indent)
                buffer.set_cursor((row, len(indent)))
                telemetry.record_event("structure.list_terminated", data={"row": row})
            buffer.insert_text(buffer.cursor_position(), "\n" + prefix)
        status = "list_terminated" if end_list else "continued"
        return EditResult.done(buffer.caret, status=status, message=prefix)

    def handle_backspace_key(
        self, buffer: Buffer, caret: Optional[Caret] = None
    ) -> EditResult:
        """Remove a whole list/quote marker in one keystroke.

        When the caret sits past the marker's first character and within the
        prefix, the line is cut from that character to the end of the line, so
        any text after the marker goes with it. A caret in the indentation or
        at column 0 is left to the default deletion. Otherwise an empty
        auto-matched pair around the caret is deleted as a unit. Anything else
        is left to the caller.
        """

        caret = self._caret(buffer, caret)
        if caret.has_selection:
            return EditResult.unhandled(caret, status="selection")

        row, col = caret.position
        line = buffer.line_at(row)
        kind = classify(line)
        if isinstance(kind, _MARKED_KINDS):
            if kind.marker_start < col <= len(kind.prefix):
                start = kind.marker_start
                with buffer.edit_group("remove_marker"):
                    buffer.delete_range((row, start), (row, len(line)))
                    buffer.set_cursor((row, start))
                return EditResult.done(buffer.caret, status="marker_removed")

        if self.pairs is not None:
            result = self.pairs.delete_pair_at(buffer, caret)
            if result is not None:
                return result
        return EditResult.unhandled(caret)


__all__ = [
    "BULLET_CYCLE_BACKWARD",
    "BULLET_CYCLE_FORWARD",
    "StructuralEditEngine",
]
