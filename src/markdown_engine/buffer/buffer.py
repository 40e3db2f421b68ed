"""Buffer façade: lines, caret, edit groups, and undo."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, List, Optional, Sequence, Tuple

from markdown_engine.runtime import telemetry

from .document import BufferDocument
from .state import BufferState, Caret, Cursor, Selection
from .sync import BufferMirror, EditGroupError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_cursor


@dataclass(slots=True)
class BufferView:
    version: int
    text: str
    cursor: Cursor
    selection: Optional[Selection]


@dataclass(slots=True)
class BufferDelta:
    version: int
    start: Cursor
    end: Cursor
    text: str
    caret: Caret
    label: str


class Buffer:
    """Ordered lines plus the caret and undo history of one editing session.

    Every mutation funnels through :meth:`replace_range`. Mutations issued
    while an edit group is open are recorded as a single undo entry when the
    outermost group closes; a mutation issued outside any group gets an
    implicit group of its own.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[BufferDocument] = None,
        state: Optional[BufferState] = None,
        undo: Optional[UndoTimeline] = None,
    ) -> None:
        self.name = name
        self.document = document or BufferDocument()
        self.state = state or BufferState()
        self.undo = undo or UndoTimeline()
        self._groups: List[Transaction] = []

    @classmethod
    def from_text(
        cls,
        text: str,
        *,
        name: str = "default",
        caret: Optional[Caret] = None,
    ) -> "Buffer":
        buffer = cls(name=name, document=BufferDocument.from_text(text))
        if caret is not None:
            buffer.set_caret(caret)
        return buffer

    # -- reading -----------------------------------------------------------

    @property
    def text(self) -> str:
        return self.document.text

    def lines(self) -> Sequence[str]:
        return self.document.snapshot()

    def line_count(self) -> int:
        return self.document.line_count

    def line_at(self, index: int) -> str:
        ensure_cursor(self.document, (index, 0))
        return self.document.get_line(index)

    def cursor_position(self) -> Cursor:
        return self.state.cursor

    def selection_range(self) -> Optional[Tuple[Cursor, Cursor]]:
        caret = self.state.caret
        if not caret.has_selection:
            return None
        return caret.start, caret.end

    @property
    def caret(self) -> Caret:
        return self.state.caret

    def get_text_range(self, start: Cursor, end: Cursor) -> str:
        start = ensure_cursor(self.document, start)
        end = ensure_cursor(self.document, end)
        if start > end:
            start, end = end, start
        text = self.document.text
        return text[self.document.offset_of(start) : self.document.offset_of(end)]

    def snapshot(self) -> BufferView:
        return BufferView(
            version=self.document.version,
            text=self.document.text,
            cursor=self.state.cursor,
            selection=self.state.selection,
        )

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            cursor=self.state.cursor,
            selection=self.state.selection,
            attributes=dict(attributes or {}),
        )

    # -- caret -------------------------------------------------------------

    def set_cursor(self, position: Cursor, *, anchor: Optional[Cursor] = None) -> Caret:
        ensure_cursor(self.document, position)
        if anchor is not None:
            ensure_cursor(self.document, anchor)
        self.state.apply(Caret(position=position, anchor=anchor))
        return self.state.caret

    def set_caret(self, caret: Caret) -> Caret:
        return self.set_cursor(caret.position, anchor=caret.anchor)

    # -- edit groups -------------------------------------------------------

    @property
    def in_edit_group(self) -> bool:
        return bool(self._groups)

    def edit_group(self, label: str = "edit") -> "Transaction":
        """Scoped edit group: ``with buffer.edit_group("indent"): ...``."""

        return Transaction(self, label)

    def begin_edit_group(self, label: str = "edit") -> "Transaction":
        transaction = Transaction(self, label)
        transaction.__enter__()
        return transaction

    def end_edit_group(self) -> None:
        if not self._groups:
            raise EditGroupError("end_edit_group() called without an open group")
        self._groups[-1].__exit__(None, None, None)

    def _open_group(self, transaction: "Transaction") -> None:
        if not self._groups:
            transaction.before_text = self.document.text
            transaction.caret_before = self.state.caret
        self._groups.append(transaction)

    def _close_group(self, transaction: "Transaction") -> None:
        if not self._groups or self._groups[-1] is not transaction:
            raise EditGroupError(
                f"edit group '{transaction.label}' closed out of order"
            )
        self._groups.pop()
        if self._groups:
            return
        after_text = self.document.text
        if transaction.before_text is None or transaction.before_text == after_text:
            return
        self.undo.push(
            UndoEntry(
                label=transaction.label,
                before_text=transaction.before_text,
                after_text=after_text,
                caret_before=transaction.caret_before or Caret(),
                caret_after=self.state.caret,
            )
        )

    # -- mutation ----------------------------------------------------------

    def replace_range(
        self, start: Cursor, end: Cursor, text: str, *, label: str = "replace_range"
    ) -> BufferDelta:
        start = ensure_cursor(self.document, start)
        end = ensure_cursor(self.document, end)
        if start > end:
            start, end = end, start
        if not self._groups:
            with self.edit_group(label):
                return self.replace_range(start, end, text, label=label)

        document = self.document
        before_text = document.text
        start_offset = document.offset_of(start)
        end_offset = document.offset_of(end)
        new_text = before_text[:start_offset] + text + before_text[end_offset:]
        self.document = document.with_text(new_text)

        def track(position: Cursor) -> Cursor:
            offset = document.offset_of(position)
            if offset >= end_offset:
                offset += len(text) - (end_offset - start_offset)
            elif offset >= start_offset:
                offset = start_offset + len(text)
            return self.document.cursor_at(offset)

        cursor = track(self.state.cursor)
        anchor = track(self.state.anchor) if self.state.anchor is not None else None
        self.state.apply(Caret(position=cursor, anchor=anchor))
        self.state.last_change_tick = self.document.version
        return BufferDelta(
            version=self.document.version,
            start=start,
            end=self.document.cursor_at(start_offset + len(text)),
            text=text,
            caret=self.state.caret,
            label=self._groups[-1].label,
        )

    def insert_text(self, position: Cursor, text: str) -> BufferDelta:
        return self.replace_range(position, position, text, label="insert_text")

    def delete_range(self, start: Cursor, end: Cursor) -> BufferDelta:
        return self.replace_range(start, end, "", label="delete_range")

    def replace_line(self, row: int, text: str) -> BufferDelta:
        line = self.line_at(row)
        end = (row, len(line))
        return self.replace_range((row, 0), end, text, label="replace_line")

    # -- history -----------------------------------------------------------

    def undo_edit(self) -> bool:
        if self._groups:
            raise EditGroupError("cannot undo while an edit group is open")
        entry = self.undo.undo()
        if entry is None:
            return False
        self._restore(entry.before_text, entry.caret_before)
        return True

    def redo_edit(self) -> bool:
        if self._groups:
            raise EditGroupError("cannot redo while an edit group is open")
        entry = self.undo.redo()
        if entry is None:
            return False
        self._restore(entry.after_text, entry.caret_after)
        return True

    def _restore(self, text: str, caret: Caret) -> None:
        self.document = self.document.with_text(text)
        self.state.apply(caret)
        self.state.last_change_tick = self.document.version


class Transaction(AbstractContextManager["Transaction"]):
    """One edit group; closes on every exit path of its ``with`` block."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.before_text: Optional[str] = None
        self.caret_before: Optional[Caret] = None
        self._span_cm: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        self.buffer._open_group(self)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        try:
            self.buffer._close_group(self)
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
                self._span_cm = None
        return False


__all__ = ["Buffer", "BufferDelta", "BufferView", "Transaction"]
