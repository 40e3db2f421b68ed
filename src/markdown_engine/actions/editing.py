"""Key-driven editing commands and the plain-text fallbacks behind them."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from markdown_engine.editing import EditResult, markup

if TYPE_CHECKING:
    from markdown_engine.keymaps.models import KeyInput
    from markdown_engine.session import EditorSession


def carriage_return(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.handle_carriage_return(session.buffer)


def hard_break_return(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    """Shift+Enter: two-space hard break, then the usual continuation."""

    del key
    buffer = session.buffer
    with buffer.edit_group("hard_break_return"):
        markup.insert_hard_line_break(buffer)
        result = session.structure.handle_carriage_return(buffer)
    return result


def raw_newline(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return markup.insert_raw_newline(session.buffer)


def backspace(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.handle_backspace_key(session.buffer)


def indent(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.indent(session.buffer)


def unindent(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.unindent(session.buffer)


def toggle_task(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.toggle_task_complete(session.buffer)


def swallow(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    """Consume the key without editing (Hemingway mode's Backspace/Delete)."""

    del key
    return EditResult.done(session.buffer.caret, status="swallowed")


def undo(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    if session.buffer.undo_edit():
        return EditResult.done(session.buffer.caret, status="undo")
    return EditResult.done(session.buffer.caret, status="nothing_to_undo")


def redo(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    if session.buffer.redo_edit():
        return EditResult.done(session.buffer.caret, status="redo")
    return EditResult.done(session.buffer.caret, status="nothing_to_redo")


# -- fallbacks -------------------------------------------------------------
#
# Plain single-character edits applied when no structural command took the
# key. Each replaces the selection when there is one.


def _delete_selection(session: EditorSession, label: str) -> EditResult:
    buffer = session.buffer
    caret = buffer.caret
    with buffer.edit_group(label):
        buffer.delete_range(caret.start, caret.end)
        buffer.set_cursor(caret.start)
    return EditResult.done(buffer.caret, status="deleted")


def default_insert(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    buffer = session.buffer
    caret = buffer.caret
    text = key.text if key is not None else None
    if not text:
        return EditResult.unhandled(caret, status="no_text")
    start = caret.start
    with buffer.edit_group("insert"):
        buffer.replace_range(start, caret.end, text)
        buffer.set_cursor((start[0], start[1] + len(text)))
    return EditResult.done(buffer.caret, status="inserted")


def default_newline(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return markup.insert_raw_newline(session.buffer)


def default_backspace(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    buffer = session.buffer
    caret = buffer.caret
    if caret.has_selection:
        return _delete_selection(session, "backspace")
    row, col = caret.position
    if col > 0:
        start = (row, col - 1)
    elif row > 0:
        start = (row - 1, len(buffer.line_at(row - 1)))
    else:
        return EditResult.unhandled(caret, status="at_start")
    with buffer.edit_group("backspace"):
        buffer.delete_range(start, (row, col))
        buffer.set_cursor(start)
    return EditResult.done(buffer.caret, status="deleted")


def default_delete(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    buffer = session.buffer
    caret = buffer.caret
    if caret.has_selection:
        return _delete_selection(session, "delete")
    row, col = caret.position
    if col < len(buffer.line_at(row)):
        end = (row, col + 1)
    elif row < buffer.line_count() - 1:
        end = (row + 1, 0)
    else:
        return EditResult.unhandled(caret, status="at_end")
    with buffer.edit_group("delete"):
        buffer.delete_range((row, col), end)
    return EditResult.done(buffer.caret, status="deleted")


__all__ = [
    "carriage_return",
    "hard_break_return",
    "raw_newline",
    "backspace",
    "indent",
    "unindent",
    "toggle_task",
    "swallow",
    "undo",
    "redo",
    "default_insert",
    "default_newline",
    "default_backspace",
    "default_delete",
]
