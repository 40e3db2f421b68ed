from __future__ import annotations

from typing import Optional

import pytest

from markdown_engine.buffer import Buffer, Cursor
from markdown_engine.editing import (
    DEFAULT_PAIRS,
    PairedDelimiterEngine,
    PairedDelimiterTable,
)
from markdown_engine.runtime.settings import EditorSettings


def make_engine(**settings: object) -> PairedDelimiterEngine:
    return PairedDelimiterEngine(
        PairedDelimiterTable(), EditorSettings(**settings)  # type: ignore[arg-type]
    )


def make_buffer(
    text: str = "", cursor: Cursor = (0, 0), anchor: Optional[Cursor] = None
) -> Buffer:
    buffer = Buffer.from_text(text)
    buffer.set_cursor(cursor, anchor=anchor)
    return buffer


def test_open_then_close_is_never_doubled() -> None:
    engine = make_engine()
    buffer = make_buffer()

    opened = engine.insert_paired_characters(buffer, "(")
    assert opened.status == "paired"
    assert buffer.text == "()"
    assert buffer.cursor_position() == (0, 1)

    closed = engine.handle_end_pair_character_typed(buffer, ")")
    assert closed.handled
    assert buffer.text == "()"
    assert buffer.cursor_position() == (0, 2)


def test_wrapping_selection_keeps_inner_text_selected() -> None:
    engine = make_engine()
    buffer = make_buffer("hello", cursor=(0, 5), anchor=(0, 0))

    result = engine.insert_paired_characters(buffer, '"')

    assert result.status == "wrapped"
    assert buffer.text == '"hello"'
    start, end = buffer.selection_range() or ((0, 0), (0, 0))
    assert buffer.get_text_range(start, end) == "hello"
    assert len(buffer.undo) == 1


def test_wrapping_backward_selection_keeps_its_direction() -> None:
    engine = make_engine()
    buffer = make_buffer("hello", cursor=(0, 0), anchor=(0, 5))

    engine.insert_paired_characters(buffer, "(")

    assert buffer.text == "(hello)"
    assert buffer.caret.position == (0, 1)
    assert buffer.caret.anchor == (0, 6)


def test_multi_line_selection_is_not_wrapped() -> None:
    engine = make_engine()
    buffer = make_buffer("ab\ncd", cursor=(1, 1), anchor=(0, 1))

    result = engine.insert_paired_characters(buffer, "[")

    assert result.handled is False
    assert buffer.text == "ab\ncd"


def test_auto_match_global_switch() -> None:
    engine = make_engine(auto_match_enabled=False)
    buffer = make_buffer()

    result = engine.insert_paired_characters(buffer, "(")

    assert result.handled is False
    assert result.status == "auto_match_disabled"
    assert buffer.text == ""


def test_auto_match_per_opener() -> None:
    engine = make_engine()
    engine.table.set_auto_match("{", False)
    buffer = make_buffer()

    assert engine.insert_paired_characters(buffer, "{").handled is False
    assert engine.insert_paired_characters(buffer, "[").handled is True
    assert buffer.text == "[]"


def test_selection_is_wrapped_even_without_auto_match() -> None:
    engine = make_engine(auto_match_enabled=False)
    buffer = make_buffer("x", cursor=(0, 1), anchor=(0, 0))

    engine.insert_paired_characters(buffer, "`")

    assert buffer.text == "`x`"


def test_non_delimiter_is_not_handled() -> None:
    engine = make_engine()
    buffer = make_buffer()

    result = engine.insert_paired_characters(buffer, "a")

    assert result.status == "not_a_delimiter"


def test_closer_not_under_cursor_is_typed_normally() -> None:
    engine = make_engine()
    buffer = make_buffer("(a", cursor=(0, 2))

    assert engine.handle_end_pair_character_typed(buffer, ")").handled is False


def test_symmetric_delimiter_skips_its_own_closer() -> None:
    engine = make_engine()
    buffer = make_buffer("**", cursor=(0, 1))

    result = engine.handle_end_pair_character_typed(buffer, "*")

    assert result.status == "skipped"
    assert buffer.cursor_position() == (0, 2)


def test_table_defaults_and_lookup() -> None:
    table = PairedDelimiterTable()

    assert list(table) == list(DEFAULT_PAIRS)
    assert len(table) == 9
    assert table.closer_for("<") == ">"
    assert table.opener_for("]") == "["
    assert table.closer_for("x") is None
    assert all(table.auto_match_enabled(opener) for opener, _ in table)


def test_table_setters() -> None:
    table = PairedDelimiterTable()

    table.set_pair("$", "$", auto_match=False)
    assert "$" in table
    assert table.auto_match_enabled("$") is False

    table.remove_pair("<")
    assert "<" not in table
    assert table.auto_match_enabled("<") is False

    table.reset()
    assert "$" not in table
    assert table.closer_for("<") == ">"


@pytest.mark.parametrize("opener, closer", [("ab", ")"), ("(", ""), ("", "x")])
def test_table_rejects_multi_character_entries(opener: str, closer: str) -> None:
    table = PairedDelimiterTable()

    with pytest.raises(ValueError):
        table.set_pair(opener, closer)
