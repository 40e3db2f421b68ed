"""Declarative keymap registry, default bindings and key dispatch."""

from .models import Binding, CommandRef, KeyInput, KeyStroke, WhenClause
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .defaults import DEFAULT_BINDINGS, DEFAULT_COMMANDS, load_default_keymaps
from .dispatcher import DispatchResult, KeyDispatcher

__all__ = [
    "Binding",
    "CommandRef",
    "KeyInput",
    "KeyStroke",
    "WhenClause",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "load_default_keymaps",
    "DispatchResult",
    "KeyDispatcher",
]
