"""Sentence boundary lookup used by sentence-granularity focus."""

from __future__ import annotations

import re
from typing import List, Protocol

NOT_FOUND = -1

# Terminal punctuation, optional closing quotes/brackets, then whitespace.
_SENTENCE_END = re.compile(r"[.!?…]+[\"'”’)\]]*\s+")


class SentenceBoundaryFinder(Protocol):
    """Text segmentation collaborator.

    Both lookups return a column in ``text`` or ``NOT_FOUND`` (-1).
    """

    def previous_boundary(self, text: str, pos: int) -> int: ...

    def next_boundary(self, text: str, pos: int) -> int: ...


class RegexSentenceBoundaryFinder:
    """Boundaries sit at the start of text and after each sentence terminator."""

    def boundaries(self, text: str) -> List[int]:
        found = [0]
        found.extend(match.end() for match in _SENTENCE_END.finditer(text))
        if found[-1] != len(text):
            found.append(len(text))
        return found

    def previous_boundary(self, text: str, pos: int) -> int:
        """Closest sentence start at or before ``pos``.

        The end of the text is not a sentence start, so a caret at the very end
        still belongs to the last sentence.
        """

        candidates = [
            b for b in self.boundaries(text) if b <= pos and (b < len(text) or b == 0)
        ]
        return candidates[-1] if candidates else NOT_FOUND

    def next_boundary(self, text: str, pos: int) -> int:
        """Closest boundary strictly after ``pos``."""

        for boundary in self.boundaries(text):
            if boundary > pos:
                return boundary
        return NOT_FOUND


__all__ = ["NOT_FOUND", "RegexSentenceBoundaryFinder", "SentenceBoundaryFinder"]
