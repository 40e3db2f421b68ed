"""Result value returned by every editing operation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from markdown_engine.buffer.state import Caret


@dataclass(frozen=True, slots=True)
class EditResult:
    """Outcome of one editing operation.

    ``handled`` is False when the caller should fall back to its default
    single-character edit; ``caret`` is the caret after the operation either
    way.
    """

    handled: bool
    caret: Caret
    status: str = "ok"
    message: Optional[str] = None

    @classmethod
    def done(
        cls, caret: Caret, status: str = "ok", message: Optional[str] = None
    ) -> "EditResult":
        return cls(handled=True, caret=caret, status=status, message=message)

    @classmethod
    def unhandled(cls, caret: Caret, status: str = "unhandled") -> "EditResult":
        return cls(handled=False, caret=caret, status=status)


__all__ = ["EditResult"]
