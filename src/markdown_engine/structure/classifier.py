"""Line-level Markdown classification.

``classify`` tags a single line with its structural kind. The result is a
plain value carrying everything the editing engines need (marker text,
number, checkbox column...), so no pattern object state is read after the
match call.

Precedence: numbered list, task list, bullet list, blockquote, plain. A task
item is never reported as a plain bullet.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Optional, Union

NUMBERED_LIST_PATTERN = re.compile(r"^\s*(\d+)([.)])\s+")
TASK_LIST_PATTERN = re.compile(r"^\s*(-)\s\[([x ])\]\s+")
BULLET_LIST_PATTERN = re.compile(r"^\s*([+*-])\s+")
BLOCKQUOTE_PATTERN = re.compile(r"^\s{0,3}(>\s*)+")

_LEADING_WHITESPACE = re.compile(r"^\s*")


def leading_whitespace(line: str) -> str:
    match = _LEADING_WHITESPACE.match(line)
    return match.group(0) if match else ""


@dataclass(frozen=True, slots=True)
class Plain:
    indent: str = ""

    @property
    def prefix(self) -> str:
        return ""


@dataclass(frozen=True, slots=True)
class NumberedListItem:
    number: int
    delimiter: str
    indent: str
    prefix: str
    content: str

    @property
    def marker_start(self) -> int:
        return len(self.indent)

    @property
    def is_empty(self) -> bool:
        return not self.content


@dataclass(frozen=True, slots=True)
class BulletListItem:
    marker: str
    indent: str
    prefix: str
    content: str

    @property
    def marker_start(self) -> int:
        return len(self.indent)

    @property
    def is_empty(self) -> bool:
        return not self.content


@dataclass(frozen=True, slots=True)
class TaskListItem:
    marker: str
    indent: str
    checked: bool
    prefix: str
    content: str
    checkbox_column: int

    @property
    def marker_start(self) -> int:
        return len(self.indent)

    @property
    def is_empty(self) -> bool:
        return not self.content

    def unchecked_prefix(self) -> str:
        column = self.checkbox_column
        return self.prefix[:column] + " " + self.prefix[column + 1 :]


@dataclass(frozen=True, slots=True)
class Blockquote:
    depth: int
    indent: str
    prefix: str
    content: str

    @property
    def marker_start(self) -> int:
        return len(self.indent)


StructuralKind = Union[
    Plain, NumberedListItem, BulletListItem, TaskListItem, Blockquote
]
ListItem = Union[NumberedListItem, BulletListItem, TaskListItem]


def _match_numbered(line: str) -> Optional[NumberedListItem]:
    match = NUMBERED_LIST_PATTERN.match(line)
    if match is None:
        return None
    return NumberedListItem(
        number=int(match.group(1)),
        delimiter=match.group(2),
        indent=line[: match.start(1)],
        prefix=match.group(0),
        content=line[match.end() :],
    )


def _match_task(line: str) -> Optional[TaskListItem]:
    match = TASK_LIST_PATTERN.match(line)
    if match is None:
        return None
    return TaskListItem(
        marker=match.group(1),
        indent=line[: match.start(1)],
        checked=match.group(2) == "x",
        prefix=match.group(0),
        content=line[match.end() :],
        checkbox_column=match.start(2),
    )


def _match_bullet(line: str) -> Optional[BulletListItem]:
    match = BULLET_LIST_PATTERN.match(line)
    if match is None:
        return None
    return BulletListItem(
        marker=match.group(1),
        indent=line[: match.start(1)],
        prefix=match.group(0),
        content=line[match.end() :],
    )


def _match_blockquote(line: str) -> Optional[Blockquote]:
    match = BLOCKQUOTE_PATTERN.match(line)
    if match is None:
        return None
    prefix = match.group(0)
    return Blockquote(
        depth=prefix.count(">"),
        indent=line[: prefix.index(">")],
        prefix=prefix,
        content=line[match.end() :],
    )


def classify(line: str) -> StructuralKind:
    """Return the structural kind of ``line``; unmatched text is :class:`Plain`."""

    for matcher in (_match_numbered, _match_task, _match_bullet, _match_blockquote):
        kind = matcher(line)
        if kind is not None:
            return kind
    return Plain(indent=leading_whitespace(line))


__all__ = [
    "BLOCKQUOTE_PATTERN",
    "BULLET_LIST_PATTERN",
    "NUMBERED_LIST_PATTERN",
    "TASK_LIST_PATTERN",
    "Blockquote",
    "BulletListItem",
    "ListItem",
    "NumberedListItem",
    "Plain",
    "StructuralKind",
    "TaskListItem",
    "classify",
    "leading_whitespace",
]
