"""Line classification and block range resolution."""

from .classifier import (
    Blockquote,
    BulletListItem,
    NumberedListItem,
    Plain,
    StructuralKind,
    TaskListItem,
    classify,
    leading_whitespace,
)
from .ranges import LineRange, resolve_block_range

__all__ = [
    "Blockquote",
    "BulletListItem",
    "NumberedListItem",
    "Plain",
    "StructuralKind",
    "TaskListItem",
    "classify",
    "leading_whitespace",
    "LineRange",
    "resolve_block_range",
]
