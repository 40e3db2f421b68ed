"""Editing session: one buffer, its settings, engines and notifications."""

from __future__ import annotations

from typing import Callable, Dict, Optional

from markdown_engine.buffer import Buffer, Caret
from markdown_engine.editing import (
    PairedDelimiterEngine,
    PairedDelimiterTable,
    StructuralEditEngine,
)
from markdown_engine.focus import (
    FocusMode,
    FocusRange,
    RegexSentenceBoundaryFinder,
    SentenceBoundaryFinder,
    compute_focus_ranges,
)
from markdown_engine.runtime import telemetry
from markdown_engine.runtime.settings import EditorSettings


class EventBus:
    """Minimal event bus letting the session notify hosts with structured signals."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def unsubscribe(self, event: str, callback: Callable[[object], None]) -> None:
        callbacks = self._subscribers.get(event, [])
        if callback in callbacks:
            callbacks.remove(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in list(self._subscribers.get(event, [])):
            callback(payload)


class TypingMonitor:
    """Turns text changes and idle-timer ticks into resumed/paused signals.

    The host owns the timer and calls :meth:`tick` every
    ``typing_pause_interval_ms``; a tick with no change since the previous one
    ends the typing burst.
    """

    def __init__(self, bus: EventBus) -> None:
        self.bus = bus
        self._typing = False
        self._changed_since_tick = False

    @property
    def is_typing(self) -> bool:
        return self._typing

    def on_text_changed(self) -> None:
        self._changed_since_tick = True
        if not self._typing:
            self._typing = True
            self.bus.emit("typing.resumed")

    def tick(self) -> bool:
        """Return True when this tick ended a typing burst."""

        if self._changed_since_tick:
            self._changed_since_tick = False
            return False
        if not self._typing:
            return False
        self._typing = False
        self.bus.emit("typing.paused")
        return True


class EditorSession:
    """Everything one editor widget needs, shared by commands and adapters.

    Engines hold the same :class:`EditorSettings` and delimiter table, so
    configuration changes apply to the next command.
    """

    def __init__(
        self,
        buffer: Optional[Buffer] = None,
        *,
        settings: Optional[EditorSettings] = None,
        pairs: Optional[PairedDelimiterTable] = None,
        bus: Optional[EventBus] = None,
        boundary_finder: Optional[SentenceBoundaryFinder] = None,
    ) -> None:
        self.buffer = buffer or Buffer()
        self.settings = settings or EditorSettings()
        self.pairs = pairs or PairedDelimiterTable()
        self.bus = bus or EventBus()
        self.boundary_finder = boundary_finder or RegexSentenceBoundaryFinder()
        self.delimiters = PairedDelimiterEngine(self.pairs, self.settings)
        self.structure = StructuralEditEngine(self.settings, self.delimiters)
        self.typing = TypingMonitor(self.bus)
        self.logger = telemetry.get_logger("markdown_engine.session")
        self._seen_version = self.buffer.document.version
        self._seen_selection: Optional[Caret] = None

    @classmethod
    def from_text(cls, text: str, **kwargs: object) -> "EditorSession":
        return cls(Buffer.from_text(text), **kwargs)  # type: ignore[arg-type]

    def flags(self) -> Dict[str, bool]:
        """Session state visible to keymap ``when`` clauses."""

        return {
            "has_selection": self.buffer.caret.has_selection,
            "hemingway": self.settings.hemingway_mode_enabled,
            "auto_match": self.settings.auto_match_enabled,
            "bullet_cycling": self.settings.bullet_cycling_enabled,
        }

    def focus_ranges(self) -> FocusRange:
        return compute_focus_ranges(
            self.buffer.lines(),
            self.buffer.cursor_position(),
            self.settings.focus_mode,
            boundary_finder=self.boundary_finder,
        )

    def after_edit(self) -> None:
        """Publish what changed since the previous call.

        Emits ``buffer.changed`` and feeds the typing monitor when the text
        changed, ``selection.changed``/``selection.cleared`` when the selection
        did, and ``focus.changed`` whenever focus mode is on.
        """

        version = self.buffer.document.version
        if version != self._seen_version:
            self._seen_version = version
            self.typing.on_text_changed()
            self.bus.emit("buffer.changed", self.buffer.snapshot())

        caret = self.buffer.caret
        if caret.has_selection:
            if caret != self._seen_selection:
                self._seen_selection = caret
                self.bus.emit(
                    "selection.changed",
                    {
                        "text": self.buffer.get_text_range(caret.start, caret.end),
                        "start": caret.start,
                        "end": caret.end,
                    },
                )
        elif self._seen_selection is not None:
            self._seen_selection = None
            self.bus.emit("selection.cleared")

        if self.settings.focus_mode is not FocusMode.DISABLED:
            self.bus.emit("focus.changed", self.focus_ranges())


__all__ = ["EditorSession", "EventBus", "TypingMonitor"]
