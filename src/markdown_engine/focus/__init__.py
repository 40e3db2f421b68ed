"""Focus-mode range computation."""

from .boundaries import NOT_FOUND, RegexSentenceBoundaryFinder, SentenceBoundaryFinder
from .calculator import FocusMode, FocusRange, TextSpan, compute_focus_ranges

__all__ = [
    "NOT_FOUND",
    "RegexSentenceBoundaryFinder",
    "SentenceBoundaryFinder",
    "FocusMode",
    "FocusRange",
    "TextSpan",
    "compute_focus_ranges",
]
