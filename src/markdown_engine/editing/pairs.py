"""Paired-delimiter configuration and the auto-match state machine."""

from __future__ import annotations

from typing import Dict, Iterator, Optional, Tuple

from markdown_engine.buffer import Buffer, Caret
from markdown_engine.runtime import telemetry
from markdown_engine.runtime.settings import EditorSettings

from .results import EditResult

DEFAULT_PAIRS: Tuple[Tuple[str, str], ...] = (
    ('"', '"'),
    ("'", "'"),
    ("(", ")"),
    ("[", "]"),
    ("{", "}"),
    ("*", "*"),
    ("_", "_"),
    ("`", "`"),
    ("<", ">"),
)


def _single_char(value: str, role: str) -> str:
    if not isinstance(value, str) or len(value) != 1:
        raise ValueError(f"{role} must be a single character, got {value!r}")
    return value


class PairedDelimiterTable:
    """Ordered opener -> closer map plus a per-opener auto-match flag.

    An opener mapped to itself (``"``) is valid and pairs symmetrically.
    """

    def __init__(self, pairs: Optional[Tuple[Tuple[str, str], ...]] = None) -> None:
        self._closers: Dict[str, str] = {}
        self._auto_match: Dict[str, bool] = {}
        for opener, closer in DEFAULT_PAIRS if pairs is None else pairs:
            self.set_pair(opener, closer)

    def __contains__(self, opener: object) -> bool:
        return opener in self._closers

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._closers.items())

    def __len__(self) -> int:
        return len(self._closers)

    def set_pair(self, opener: str, closer: str, *, auto_match: bool = True) -> None:
        opener = _single_char(opener, "opener")
        self._closers[opener] = _single_char(closer, "closer")
        self._auto_match[opener] = bool(auto_match)

    def remove_pair(self, opener: str) -> None:
        self._closers.pop(opener, None)
        self._auto_match.pop(opener, None)

    def reset(self) -> None:
        self._closers.clear()
        self._auto_match.clear()
        for opener, closer in DEFAULT_PAIRS:
            self.set_pair(opener, closer)

    def set_auto_match(self, opener: str, enabled: bool) -> None:
        self._auto_match[_single_char(opener, "opener")] = bool(enabled)

    def auto_match_enabled(self, opener: str) -> bool:
        return self._auto_match.get(opener, False) and opener in self._closers

    def closer_for(self, opener: str) -> Optional[str]:
        return self._closers.get(opener)

    def opener_for(self, closer: str) -> Optional[str]:
        """First opener, in table order, whose closer is ``closer``."""

        for opener, candidate in self._closers.items():
            if candidate == closer:
                return opener
        return None


class PairedDelimiterEngine:
    """Inserts, skips over, and wraps with delimiter pairs."""

    def __init__(self, table: PairedDelimiterTable, settings: EditorSettings) -> None:
        self.table = table
        self.settings = settings

    def _auto_match(self, opener: str) -> bool:
        if not self.settings.auto_match_enabled:
            return False
        return self.table.auto_match_enabled(opener)

    def insert_paired_characters(
        self, buffer: Buffer, opener: str, caret: Optional[Caret] = None
    ) -> EditResult:
        """Handle typing ``opener``.

        A single-line selection is wrapped and stays selected (delimiters
        excluded, same direction). Without a selection, auto-match inserts
        both halves with the caret between them.
        """

        caret = buffer.set_caret(caret) if caret is not None else buffer.caret
        closer = self.table.closer_for(opener)
        if closer is None:
            return EditResult.unhandled(caret, status="not_a_delimiter")

        if caret.has_selection:
            start, end = caret.start, caret.end
            if start[0] != end[0]:
                return EditResult.unhandled(caret, status="multi_line_selection")
            row = start[0]
            with buffer.edit_group("wrap_selection"):
                buffer.insert_text(end, closer)
                buffer.insert_text(start, opener)
                inner_start, inner_end = (row, start[1] + 1), (row, end[1] + 1)
                # Keep the active end where it was.
                if caret.anchor == end:
                    result = buffer.set_cursor(inner_start, anchor=inner_end)
                else:
                    result = buffer.set_cursor(inner_end, anchor=inner_start)
            return EditResult.done(result, status="wrapped")

        if not self._auto_match(opener):
            return EditResult.unhandled(caret, status="auto_match_disabled")

        row, col = caret.position
        with buffer.edit_group("auto_match"):
            buffer.insert_text((row, col), opener + closer)
            result = buffer.set_cursor((row, col + 1))
        return EditResult.done(result, status="paired")

    def handle_end_pair_character_typed(
        self, buffer: Buffer, closer: str, caret: Optional[Caret] = None
    ) -> EditResult:
        """Skip over an auto-inserted ``closer`` instead of typing a second one."""

        caret = buffer.set_caret(caret) if caret is not None else buffer.caret
        if caret.has_selection:
            return EditResult.unhandled(caret, status="selection")
        opener = self.table.opener_for(closer)
        if opener is None or not self._auto_match(opener):
            return EditResult.unhandled(caret)

        row, col = caret.position
        line = buffer.line_at(row)
        if col >= len(line) or line[col] != closer:
            return EditResult.unhandled(caret)

        result = buffer.set_cursor((row, col + 1))
        telemetry.record_event("pairs.skip_closer", data={"closer": closer})
        return EditResult.done(result, status="skipped")

    def delete_pair_at(self, buffer: Buffer, caret: Caret) -> Optional[EditResult]:
        """Delete an empty ``opener``/``closer`` pair straddling the caret."""

        row, col = caret.position
        line = buffer.line_at(row)
        if col <= 0 or col >= len(line):
            return None
        opener = line[col - 1]
        if not self._auto_match(opener) or self.table.closer_for(opener) != line[col]:
            return None
        with buffer.edit_group("delete_pair"):
            buffer.delete_range((row, col - 1), (row, col + 1))
        return EditResult.done(buffer.caret, status="pair_deleted")


__all__ = ["DEFAULT_PAIRS", "PairedDelimiterEngine", "PairedDelimiterTable"]
