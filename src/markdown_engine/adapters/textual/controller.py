"""Textual adapter that wires session events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from markdown_engine.buffer import BufferMirror
from markdown_engine.focus import FocusRange
from markdown_engine.keymaps import DispatchResult, KeyDispatcher, KeyInput
from markdown_engine.runtime import telemetry
from markdown_engine.session import EditorSession

_RELAYED_EVENTS = (
    "selection.changed",
    "selection.cleared",
    "typing.paused",
    "typing.resumed",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    update_focus: Callable[[FocusRange], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class MarkdownTextualAdapter:
    """Bridges KeyDispatcher + session events to a Textual-friendly surface."""

    def __init__(
        self,
        session: EditorSession,
        hooks: TextualUIHooks,
        *,
        dispatcher: KeyDispatcher | None = None,
    ) -> None:
        self.session = session
        self.hooks = hooks
        self.dispatcher = dispatcher or KeyDispatcher(session)
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_focus()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> DispatchResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).lower() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        result = self.dispatcher.handle_key(
            KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        )
        self._after_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            command=result.command,
            status=result.status,
        )
        return result

    def run_command(self, command_id: str) -> DispatchResult:
        result = self.dispatcher.run_command(command_id)
        self._after_result(result)
        return result

    def tick(self) -> bool:
        """Forward the host's idle timer to the typing monitor."""

        return self.session.typing.tick()

    def pull_buffer(self) -> BufferMirror:
        return self.session.buffer.mirror()

    def push_host_edit(self, mirror: BufferMirror) -> None:
        """Adopt text the host changed on its own (paste, IME) as one edit group."""

        buffer = self.session.buffer
        with telemetry.span(
            name="adapter::push_host_edit",
            component="adapter",
            metadata={"buffer": buffer.name},
        ):
            with buffer.edit_group("host_edit"):
                if mirror.text != buffer.text:
                    end = buffer.document.end_cursor()
                    buffer.replace_range((0, 0), end, mirror.text)
                anchor = mirror.selection[0] if mirror.selection else None
                buffer.set_cursor(mirror.cursor, anchor=anchor)
        self.session.after_edit()
        self._refresh_buffer()
        self._refresh_focus()

    def _after_result(self, result: DispatchResult) -> None:
        status = result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()
        self._refresh_focus()

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in _RELAYED_EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.pull_buffer())

    def _refresh_focus(self) -> None:
        self.hooks.update_focus(self.session.focus_ranges())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.session.buffer
        return {
            "cursor": buffer.state.cursor,
            "selection": buffer.state.selection,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
            "focus": self.session.settings.focus_mode.value,
        }


__all__ = ["MarkdownTextualAdapter", "TextualUIHooks"]
