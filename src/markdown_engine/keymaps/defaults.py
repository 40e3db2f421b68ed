"""Built-in commands and the key bindings that seed every session."""

from __future__ import annotations

from typing import Iterable, Sequence

from markdown_engine.actions import editing as editing_actions
from markdown_engine.actions import formatting as formatting_actions

from .models import Binding, CommandRef, KeyStroke, WhenClause
from .registry import KeymapRegistry

DEFAULT_COMMANDS: tuple[CommandRef, ...] = (
    CommandRef(
        id="edit.carriage_return",
        handler=editing_actions.carriage_return,
        description="New line continuing the current list or quote",
    ),
    CommandRef(
        id="edit.hard_break_return",
        handler=editing_actions.hard_break_return,
        description="Hard line break, then continue the list",
    ),
    CommandRef(
        id="edit.raw_newline",
        handler=editing_actions.raw_newline,
        description="New line without continuation",
    ),
    CommandRef(
        id="edit.backspace",
        handler=editing_actions.backspace,
        description="Remove a list marker or an empty delimiter pair",
    ),
    CommandRef(
        id="edit.swallow",
        handler=editing_actions.swallow,
        description="Ignore the key",
    ),
    CommandRef(
        id="edit.indent",
        handler=editing_actions.indent,
        description="Indent the line or selection",
    ),
    CommandRef(
        id="edit.unindent",
        handler=editing_actions.unindent,
        description="Unindent the line or selection",
    ),
    CommandRef(
        id="edit.undo",
        handler=editing_actions.undo,
        description="Undo the last edit group",
    ),
    CommandRef(
        id="edit.redo",
        handler=editing_actions.redo,
        description="Redo the last undone edit group",
    ),
    CommandRef(
        id="structure.toggle_task",
        handler=editing_actions.toggle_task,
        description="Toggle task completion",
    ),
    CommandRef(
        id="format.bold",
        handler=formatting_actions.bold,
        description="Bold",
    ),
    CommandRef(
        id="format.italic",
        handler=formatting_actions.italic,
        description="Italic",
    ),
    CommandRef(
        id="format.strikethrough",
        handler=formatting_actions.strikethrough,
        description="Strikethrough",
    ),
    CommandRef(
        id="format.comment",
        handler=formatting_actions.comment,
        description="Wrap in an HTML comment",
    ),
    CommandRef(
        id="structure.bullet_list_star",
        handler=formatting_actions.bullet_list_star,
        description="Bullet list with '*'",
    ),
    CommandRef(
        id="structure.bullet_list_dash",
        handler=formatting_actions.bullet_list_dash,
        description="Bullet list with '-'",
    ),
    CommandRef(
        id="structure.bullet_list_plus",
        handler=formatting_actions.bullet_list_plus,
        description="Bullet list with '+'",
    ),
    CommandRef(
        id="structure.numbered_list_period",
        handler=formatting_actions.numbered_list_period,
        description="Numbered list with '.'",
    ),
    CommandRef(
        id="structure.numbered_list_parenthesis",
        handler=formatting_actions.numbered_list_parenthesis,
        description="Numbered list with ')'",
    ),
    CommandRef(
        id="structure.task_list",
        handler=formatting_actions.task_list,
        description="Task list",
    ),
    CommandRef(
        id="structure.blockquote",
        handler=formatting_actions.blockquote,
        description="Blockquote",
    ),
    CommandRef(
        id="structure.remove_blockquote",
        handler=formatting_actions.remove_blockquote,
        description="Remove one blockquote level",
    ),
)

_HEMINGWAY = (WhenClause("hemingway"),)

DEFAULT_BINDINGS: tuple[Binding, ...] = (
    Binding(
        id="enter",
        stroke=KeyStroke("enter"),
        command_id="edit.carriage_return",
    ),
    Binding(
        id="shift_enter",
        stroke=KeyStroke("enter", ("shift",)),
        command_id="edit.hard_break_return",
    ),
    Binding(
        id="ctrl_enter",
        stroke=KeyStroke("enter", ("ctrl",)),
        command_id="edit.raw_newline",
    ),
    Binding(
        id="backspace",
        stroke=KeyStroke("backspace"),
        command_id="edit.backspace",
    ),
    Binding(
        id="hemingway.backspace",
        stroke=KeyStroke("backspace"),
        command_id="edit.swallow",
        description="Hemingway mode: no deleting",
        when=_HEMINGWAY,
    ),
    Binding(
        id="hemingway.delete",
        stroke=KeyStroke("delete"),
        command_id="edit.swallow",
        description="Hemingway mode: no deleting",
        when=_HEMINGWAY,
    ),
    Binding(
        id="tab",
        stroke=KeyStroke("tab"),
        command_id="edit.indent",
    ),
    Binding(
        id="shift_tab",
        stroke=KeyStroke("tab", ("shift",)),
        command_id="edit.unindent",
    ),
    Binding(
        id="backtab",
        stroke=KeyStroke("backtab"),
        command_id="edit.unindent",
    ),
    Binding(
        id="undo",
        stroke=KeyStroke("z", ("ctrl",)),
        command_id="edit.undo",
    ),
    Binding(
        id="redo",
        stroke=KeyStroke("z", ("ctrl", "shift")),
        command_id="edit.redo",
    ),
    Binding(
        id="bold",
        stroke=KeyStroke("b", ("ctrl",)),
        command_id="format.bold",
    ),
    Binding(
        id="italic",
        stroke=KeyStroke("i", ("ctrl", "shift")),
        command_id="format.italic",
    ),
    Binding(
        id="strikethrough",
        stroke=KeyStroke("x", ("ctrl", "shift")),
        command_id="format.strikethrough",
    ),
    Binding(
        id="toggle_task",
        stroke=KeyStroke("t", ("ctrl",)),
        command_id="structure.toggle_task",
    ),
    Binding(
        id="comment",
        stroke=KeyStroke("c", ("ctrl", "shift")),
        command_id="format.comment",
    ),
)


def load_default_keymaps(
    registry: KeymapRegistry,
    *,
    replace: bool = False,
    include_bindings: Sequence[str] | None = None,
    exclude_bindings: Sequence[str] | None = None,
    extra_bindings: Iterable[Binding] | None = None,
) -> None:
    """Register built-in commands and bindings.

    Every command is always registered; ``include_bindings`` and
    ``exclude_bindings`` filter the default bindings by id.
    """

    allowed_bindings = _build_filters(include_bindings, exclude_bindings)

    for command in DEFAULT_COMMANDS:
        registry.register_command(command, replace=replace)

    for binding in DEFAULT_BINDINGS:
        if not _selected(binding.id, allowed_bindings):
            continue
        registry.register_binding(binding, replace=replace)

    if extra_bindings:
        for binding in extra_bindings:
            registry.register_binding(binding, replace=replace)


def _build_filters(
    include: Sequence[str] | None, exclude: Sequence[str] | None
) -> tuple[set[str] | None, set[str]]:
    include_set = set(include) if include else None
    exclude_set = set(exclude or ())
    return include_set, exclude_set


def _selected(item_id: str, filters: tuple[set[str] | None, set[str]]) -> bool:
    include, exclude = filters
    if include is not None and item_id not in include:
        return False
    if item_id in exclude:
        return False
    return True


__all__ = ["load_default_keymaps", "DEFAULT_COMMANDS", "DEFAULT_BINDINGS"]
