"""Inline markup and block-creation commands."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from markdown_engine.editing import EditResult, markup

if TYPE_CHECKING:
    from markdown_engine.keymaps.models import KeyInput
    from markdown_engine.session import EditorSession


def bold(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return markup.bold(session.buffer)


def italic(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return markup.italic(session.buffer)


def strikethrough(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return markup.strikethrough(session.buffer)


def comment(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return markup.insert_comment(session.buffer)


def bullet_list_star(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.create_bullet_list(session.buffer, "*")


def bullet_list_dash(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.create_bullet_list(session.buffer, "-")


def bullet_list_plus(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.create_bullet_list(session.buffer, "+")


def numbered_list_period(
    session: EditorSession, key: Optional[KeyInput]
) -> EditResult:
    del key
    return session.structure.create_numbered_list(session.buffer, ".")


def numbered_list_parenthesis(
    session: EditorSession, key: Optional[KeyInput]
) -> EditResult:
    del key
    return session.structure.create_numbered_list(session.buffer, ")")


def task_list(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.create_task_list(session.buffer)


def blockquote(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.create_blockquote(session.buffer)


def remove_blockquote(session: EditorSession, key: Optional[KeyInput]) -> EditResult:
    del key
    return session.structure.remove_blockquote(session.buffer)


__all__ = [
    "bold",
    "italic",
    "strikethrough",
    "comment",
    "bullet_list_star",
    "bullet_list_dash",
    "bullet_list_plus",
    "numbered_list_period",
    "numbered_list_parenthesis",
    "task_list",
    "blockquote",
    "remove_blockquote",
]
