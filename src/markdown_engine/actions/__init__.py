"""Command handlers invoked through the keymap registry."""

from . import editing, formatting

__all__ = ["editing", "formatting"]
