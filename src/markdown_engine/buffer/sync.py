"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol

from .state import Cursor, Selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: Cursor
    selection: Optional[Selection]
    attributes: dict[str, str] = field(default_factory=dict)


class BufferSync(Protocol):
    """How host adapters exchange whole-buffer state with the engine."""

    def pull_buffer(self) -> BufferMirror:
        """Return the latest buffer snapshot that the host should render."""
        ...

    def push_host_edit(self, mirror: BufferMirror) -> None:
        """Apply an edit made on the host side (paste, IME commit)."""
        ...


class BufferValidationError(RuntimeError):
    """Raised when a caller hands the buffer an out-of-range position."""

    def __init__(self, message: str, *, cursor: Cursor | None = None) -> None:
        super().__init__(message)
        self.cursor = cursor


class EditGroupError(RuntimeError):
    """Raised when edit groups are closed or undone out of order."""


__all__ = [
    "BufferMirror",
    "BufferSync",
    "BufferValidationError",
    "EditGroupError",
]
