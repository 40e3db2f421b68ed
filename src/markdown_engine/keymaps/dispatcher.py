"""Routes key input to bound commands, delimiter handling and plain edits."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from markdown_engine.actions import editing as editing_actions
from markdown_engine.editing import EditResult
from markdown_engine.runtime import telemetry
from markdown_engine.session import EditorSession

from .defaults import load_default_keymaps
from .models import KeyInput
from .registry import KeymapRegistry

Fallback = Callable[[EditorSession, Optional[KeyInput]], EditResult]

_FALLBACKS: Dict[str, Fallback] = {
    "enter": editing_actions.default_newline,
    "backspace": editing_actions.default_backspace,
    "delete": editing_actions.default_delete,
}


@dataclass(slots=True)
class DispatchResult:
    """Outcome of one key press or command run."""

    consumed: bool
    command: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None


class KeyDispatcher:
    """Key-press routing for one :class:`EditorSession`.

    Order: the bound command (if it handles the key), then for printable
    characters the closing-delimiter skip and the opening-delimiter pair, and
    last the plain edit for the key.
    """

    def __init__(
        self,
        session: EditorSession,
        *,
        registry: KeymapRegistry | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.session = session
        self.registry = registry or KeymapRegistry(
            logger_name="markdown_engine.keymaps"
        )
        if load_defaults and registry is None:
            load_default_keymaps(self.registry)

    def handle_key(self, key: KeyInput) -> DispatchResult:
        with telemetry.span(
            name="keymaps::dispatch",
            logger_name="markdown_engine.keymaps",
            component="keymaps",
            metadata={"key": key.token},
        ) as handle:
            result = self._dispatch(key)
            handle.add_metadata("status", result.status)
            if result.command:
                handle.add_metadata("command", result.command)
        self.session.after_edit()
        return result

    def run_command(self, command_id: str) -> DispatchResult:
        """Run a registered command by id; unknown ids raise ``KeyError``."""

        command = self.registry.get_command(command_id)
        with telemetry.span(
            name="keymaps::run_command",
            logger_name="markdown_engine.keymaps",
            component="keymaps",
            metadata={"command": command_id},
        ):
            outcome = command(self.session, None)
        self.session.after_edit()
        return _from_edit(outcome, command_id)

    def _dispatch(self, key: KeyInput) -> DispatchResult:
        binding = self.registry.resolve(key.stroke, self.session.flags())
        if binding is not None:
            command = self.registry.get_command(binding.command_id)
            outcome = command(self.session, key)
            if outcome.handled:
                return _from_edit(outcome, command.id)

        buffer = self.session.buffer
        if key.is_printable:
            assert key.text is not None
            delimiters = self.session.delimiters
            outcome = delimiters.handle_end_pair_character_typed(buffer, key.text)
            if not outcome.handled:
                outcome = delimiters.insert_paired_characters(buffer, key.text)
            if outcome.handled:
                return _from_edit(outcome)
            return _from_edit(editing_actions.default_insert(self.session, key))

        fallback = _FALLBACKS.get(key.token)
        if fallback is None:
            return DispatchResult(consumed=False, status="unbound")
        return _from_edit(fallback(self.session, key))


def _from_edit(outcome: object, command: Optional[str] = None) -> DispatchResult:
    if not isinstance(outcome, EditResult):
        return DispatchResult(consumed=True, command=command)
    return DispatchResult(
        consumed=outcome.handled,
        command=command,
        status=outcome.status,
        message=outcome.message,
    )


__all__ = ["DispatchResult", "KeyDispatcher"]
