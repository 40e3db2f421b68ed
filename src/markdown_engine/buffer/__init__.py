"""Buffer abstractions: lines, caret state, edit groups and undo."""

from .buffer import Buffer, BufferDelta, BufferView, Transaction
from .document import BufferDocument
from .state import BufferState, Caret, Cursor, Selection
from .sync import BufferMirror, BufferSync, BufferValidationError, EditGroupError
from .undo import UndoEntry, UndoTimeline
from .validation import clamp_cursor, ensure_cursor

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferView",
    "Transaction",
    "BufferDocument",
    "BufferState",
    "Caret",
    "Cursor",
    "Selection",
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "EditGroupError",
    "UndoEntry",
    "UndoTimeline",
    "clamp_cursor",
    "ensure_cursor",
]
