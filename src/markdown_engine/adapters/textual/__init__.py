"""Textual host adapter; the runnable demo lives in ``.app``."""

from .controller import MarkdownTextualAdapter, TextualUIHooks

__all__ = ["MarkdownTextualAdapter", "TextualUIHooks"]
