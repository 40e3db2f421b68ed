"""Editing engines: structural commands, paired delimiters, inline markup."""

from . import markup
from .pairs import DEFAULT_PAIRS, PairedDelimiterEngine, PairedDelimiterTable
from .results import EditResult
from .structural import (
    BULLET_CYCLE_BACKWARD,
    BULLET_CYCLE_FORWARD,
    StructuralEditEngine,
)

__all__ = [
    "markup",
    "DEFAULT_PAIRS",
    "PairedDelimiterEngine",
    "PairedDelimiterTable",
    "EditResult",
    "BULLET_CYCLE_BACKWARD",
    "BULLET_CYCLE_FORWARD",
    "StructuralEditEngine",
]
