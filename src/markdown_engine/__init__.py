"""UI-agnostic Markdown editing engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "editing",
    "focus",
    "keymaps",
    "runtime",
    "session",
    "structure",
]

__version__ = "0.1.0"
