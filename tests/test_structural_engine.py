from __future__ import annotations

from typing import Optional

import pytest

from markdown_engine.buffer import Buffer, Cursor
from markdown_engine.editing import (
    PairedDelimiterEngine,
    PairedDelimiterTable,
    StructuralEditEngine,
)
from markdown_engine.runtime.settings import EditorSettings
from markdown_engine.structure import BulletListItem, NumberedListItem, classify


def make_engine(**settings: object) -> StructuralEditEngine:
    config = EditorSettings(**settings)  # type: ignore[arg-type]
    pairs = PairedDelimiterEngine(PairedDelimiterTable(), config)
    return StructuralEditEngine(config, pairs)


def make_buffer(
    text: str, cursor: Cursor = (0, 0), anchor: Optional[Cursor] = None
) -> Buffer:
    buffer = Buffer.from_text(text)
    buffer.set_cursor(cursor, anchor=anchor)
    return buffer


# -- indent / unindent ------------------------------------------------------


@pytest.mark.parametrize(
    "line, expected",
    [
        ("3. item", "    1. item"),
        ("12) other", "    1) other"),
        ("  7. nested text", "      1. nested text"),
    ],
)
def test_indent_restarts_numbered_item_at_one(line: str, expected: str) -> None:
    engine = make_engine(insert_spaces_for_tabs=True)
    buffer = make_buffer(line, cursor=(0, len(line)))

    result = engine.indent(buffer)

    assert result.handled
    assert buffer.text == expected
    kind = classify(buffer.text)
    assert isinstance(kind, NumberedListItem)
    assert kind.number == 1
    assert buffer.cursor_position() == (0, 4)


def test_indent_numbered_with_tabs() -> None:
    engine = make_engine()
    buffer = make_buffer("5. five", cursor=(0, 7))

    engine.indent(buffer)

    assert buffer.text == "\t1. five"


def test_bullet_cycles_forward_every_three_indents() -> None:
    engine = make_engine()
    buffer = make_buffer("* item", cursor=(0, 6))
    markers = []

    for _ in range(3):
        engine.indent(buffer)
        kind = classify(buffer.line_at(0))
        assert isinstance(kind, BulletListItem)
        markers.append(kind.marker)

    assert markers == ["-", "+", "*"]
    assert buffer.text == "\t\t\t* item"


def test_bullet_cycles_backward_on_unindent() -> None:
    engine = make_engine()
    buffer = make_buffer("\t\t\t* item", cursor=(0, 5))
    markers = []

    for _ in range(3):
        engine.unindent(buffer)
        kind = classify(buffer.line_at(0))
        assert isinstance(kind, BulletListItem)
        markers.append(kind.marker)

    assert markers == ["+", "-", "*"]
    assert buffer.text == "* item"


def test_unindent_cycle_keeps_caret_in_place() -> None:
    engine = make_engine()
    buffer = make_buffer("\t* item", cursor=(0, 3))

    engine.unindent(buffer)

    assert buffer.text == "+ item"
    assert buffer.cursor_position() == (0, 2)
    assert len(buffer.undo) == 1


def test_indent_then_unindent_restores_bullet() -> None:
    engine = make_engine()
    buffer = make_buffer("- item", cursor=(0, 6))

    engine.indent(buffer)
    engine.unindent(buffer)

    assert buffer.text == "- item"


def test_bullet_cycling_can_be_disabled() -> None:
    engine = make_engine(bullet_cycling_enabled=False)
    buffer = make_buffer("* item", cursor=(0, 6))

    engine.indent(buffer)
    assert buffer.text == "\t* item"
    engine.unindent(buffer)
    assert buffer.text == "* item"


def test_indent_task_keeps_marker() -> None:
    engine = make_engine()
    buffer = make_buffer("- [ ] task", cursor=(0, 10))

    engine.indent(buffer)

    assert buffer.text == "\t- [ ] task"


def test_indent_plain_aligns_to_next_tab_stop() -> None:
    engine = make_engine(insert_spaces_for_tabs=True, tab_width=4)
    buffer = make_buffer("abcd", cursor=(0, 2))

    engine.indent(buffer)

    assert buffer.text == "ab  cd"
    assert buffer.cursor_position() == (0, 4)


def test_indent_plain_with_tab_character() -> None:
    engine = make_engine()
    buffer = make_buffer("abcd", cursor=(0, 2))

    engine.indent(buffer)

    assert buffer.text == "ab\tcd"


def test_indent_selection_prefixes_every_line_in_one_group() -> None:
    engine = make_engine(insert_spaces_for_tabs=True, tab_width=2)
    buffer = make_buffer("a\n* b\nc", cursor=(2, 1), anchor=(0, 0))

    engine.indent(buffer)

    assert buffer.text == "  a\n  * b\n  c"
    assert len(buffer.undo) == 1


@pytest.mark.parametrize(
    "line, expected",
    [
        ("\tx", "x"),
        ("      x", "  x"),
        ("  x", "x"),
        ("x", "x"),
        ("\t\tx", "\tx"),
    ],
)
def test_unindent_removes_one_tab_stop(line: str, expected: str) -> None:
    engine = make_engine(tab_width=4)
    buffer = make_buffer(line)

    engine.unindent(buffer)

    assert buffer.text == expected


def test_unindent_selection_does_not_cycle_bullets() -> None:
    engine = make_engine()
    buffer = make_buffer("\t* a\n\t* b", cursor=(1, 4), anchor=(0, 0))

    engine.unindent(buffer)

    assert buffer.text == "* a\n* b"


# -- carriage return --------------------------------------------------------


def test_enter_continues_numbered_list() -> None:
    engine = make_engine()
    buffer = make_buffer("3. text", cursor=(0, 7))

    result = engine.handle_carriage_return(buffer)

    assert result.status == "continued"
    assert list(buffer.lines()) == ["3. text", "4. "]
    assert buffer.cursor_position() == (1, 3)


def test_enter_on_empty_numbered_item_terminates_list() -> None:
    engine = make_engine()
    buffer = make_buffer("3. text\n4. ", cursor=(1, 3))

    result = engine.handle_carriage_return(buffer)

    assert result.status == "list_terminated"
    assert list(buffer.lines()) == ["3. text", "", ""]
    assert buffer.cursor_position() == (2, 0)


def test_enter_on_checked_task_continues_unchecked() -> None:
    engine = make_engine()
    buffer = make_buffer("- [x] done", cursor=(0, 10))

    engine.handle_carriage_return(buffer)

    assert list(buffer.lines()) == ["- [x] done", "- [ ] "]


def test_enter_on_indented_empty_task_keeps_indent() -> None:
    engine = make_engine()
    buffer = make_buffer("  - [ ] ", cursor=(0, 8))

    result = engine.handle_carriage_return(buffer)

    assert result.status == "list_terminated"
    assert list(buffer.lines()) == ["  ", ""]


@pytest.mark.parametrize(
    "line, continuation",
    [
        ("* item", "* "),
        ("  + nested", "  + "),
        ("> > quote", "> > "),
        ("> ", "> "),
        ("    code", "    "),
        ("plain", ""),
    ],
)
def test_enter_at_end_of_line_carries_prefix(line: str, continuation: str) -> None:
    engine = make_engine()
    buffer = make_buffer(line, cursor=(0, len(line)))

    engine.handle_carriage_return(buffer)

    assert list(buffer.lines()) == [line, continuation]
    assert buffer.cursor_position() == (1, len(continuation))


def test_enter_on_empty_bullet_terminates_list() -> None:
    engine = make_engine()
    buffer = make_buffer("- ", cursor=(0, 2))

    engine.handle_carriage_return(buffer)

    assert list(buffer.lines()) == ["", ""]


def test_enter_mid_line_carries_leading_whitespace_only() -> None:
    engine = make_engine()
    buffer = make_buffer("  hello world", cursor=(0, 8))

    engine.handle_carriage_return(buffer)

    assert list(buffer.lines()) == ["  hello ", "  world"]
    assert buffer.cursor_position() == (1, 2)


def test_enter_mid_line_truncates_whitespace_at_cursor() -> None:
    engine = make_engine()
    buffer = make_buffer("    abc", cursor=(0, 2))

    engine.handle_carriage_return(buffer)

    assert list(buffer.lines()) == ["  ", "    abc"]


def test_enter_mid_list_item_does_not_continue_marker() -> None:
    engine = make_engine()
    buffer = make_buffer("1. first", cursor=(0, 3))

    engine.handle_carriage_return(buffer)

    assert list(buffer.lines()) == ["1. ", "first"]


def test_enter_with_selection_is_not_handled() -> None:
    engine = make_engine()
    buffer = make_buffer("1. first", cursor=(0, 8), anchor=(0, 3))

    result = engine.handle_carriage_return(buffer)

    assert result.handled is False
    assert buffer.text == "1. first"


def test_enter_is_one_undo_step() -> None:
    engine = make_engine()
    buffer = make_buffer("4. ", cursor=(0, 3))

    engine.handle_carriage_return(buffer)
    buffer.undo_edit()

    assert buffer.text == "4. "
    assert buffer.cursor_position() == (0, 3)


# -- backspace --------------------------------------------------------------


def test_backspace_in_nested_quote_marker_drops_rest_of_line() -> None:
    # Known quirk: everything from the marker to end of line is removed,
    # including the quoted text.
    engine = make_engine()
    buffer = make_buffer("> > text", cursor=(0, 2))

    result = engine.handle_backspace_key(buffer)

    assert result.handled
    assert result.status == "marker_removed"
    assert buffer.text == ""
    assert buffer.cursor_position() == (0, 0)


@pytest.mark.parametrize(
    "line, column, expected",
    [
        ("1. item", 3, ""),
        ("  - item", 4, "  "),
        ("- [ ] task", 6, ""),
        ("- item", 1, ""),
    ],
)
def test_backspace_inside_marker_removes_marker_region(
    line: str, column: int, expected: str
) -> None:
    engine = make_engine()
    buffer = make_buffer(line, cursor=(0, column))

    result = engine.handle_backspace_key(buffer)

    assert result.handled
    assert buffer.text == expected
    assert buffer.cursor_position() == (0, len(expected))


@pytest.mark.parametrize(
    "line, column",
    [
        ("- keep this text", 0),
        ("    - item", 1),
        ("    - item", 4),
        ("> quote", 0),
    ],
)
def test_backspace_before_marker_is_not_handled(line: str, column: int) -> None:
    engine = make_engine()
    buffer = make_buffer(line, cursor=(0, column))

    result = engine.handle_backspace_key(buffer)

    assert result.handled is False
    assert buffer.text == line
    assert buffer.cursor_position() == (0, column)


def test_backspace_after_marker_is_not_handled() -> None:
    engine = make_engine()
    buffer = make_buffer("- item", cursor=(0, 4))

    result = engine.handle_backspace_key(buffer)

    assert result.handled is False
    assert buffer.text == "- item"


def test_backspace_deletes_empty_pair() -> None:
    engine = make_engine()
    buffer = make_buffer("say ()", cursor=(0, 5))

    result = engine.handle_backspace_key(buffer)

    assert result.status == "pair_deleted"
    assert buffer.text == "say "
    assert buffer.cursor_position() == (0, 4)


def test_backspace_pair_respects_auto_match_switch() -> None:
    engine = make_engine(auto_match_enabled=False)
    buffer = make_buffer("()", cursor=(0, 1))

    assert engine.handle_backspace_key(buffer).handled is False


def test_backspace_pair_respects_per_opener_flag() -> None:
    engine = make_engine()
    assert engine.pairs is not None
    engine.pairs.table.set_auto_match("(", False)
    buffer = make_buffer("()", cursor=(0, 1))

    assert engine.handle_backspace_key(buffer).handled is False


def test_backspace_with_selection_is_not_handled() -> None:
    engine = make_engine()
    buffer = make_buffer("- item", cursor=(0, 1), anchor=(0, 0))

    assert engine.handle_backspace_key(buffer).handled is False


# -- tasks ------------------------------------------------------------------


def test_toggle_task_flips_checkboxes_in_range() -> None:
    engine = make_engine()
    text = "- [ ] a\n- [x] b\nplain"
    buffer = make_buffer(text, cursor=(2, 0), anchor=(0, 0))

    result = engine.toggle_task_complete(buffer)

    assert buffer.text == "- [x] a\n- [ ] b\nplain"
    assert result.message == "2"
    assert buffer.selection_range() == ((0, 0), (2, 0))


def test_toggle_task_twice_restores_line() -> None:
    engine = make_engine()
    buffer = make_buffer("  - [ ] nested task", cursor=(0, 10))

    engine.toggle_task_complete(buffer)
    assert buffer.text == "  - [x] nested task"
    engine.toggle_task_complete(buffer)
    assert buffer.text == "  - [ ] nested task"
    assert buffer.cursor_position() == (0, 10)


# -- block creation ---------------------------------------------------------


def test_create_bullet_list_prefixes_each_line() -> None:
    engine = make_engine()
    buffer = make_buffer("a\nb", cursor=(1, 1), anchor=(0, 0))

    engine.create_bullet_list(buffer, "+")

    assert buffer.text == "+ a\n+ b"
    assert len(buffer.undo) == 1


def test_create_bullet_list_rejects_unknown_marker() -> None:
    engine = make_engine()
    buffer = make_buffer("a")

    with pytest.raises(ValueError):
        engine.create_bullet_list(buffer, "#")


def test_create_numbered_list_counts_from_one() -> None:
    engine = make_engine()
    buffer = make_buffer("a\n7. b\nc", cursor=(2, 1), anchor=(0, 0))

    engine.create_numbered_list(buffer, ")")

    assert buffer.text == "1) a\n2) 7. b\n3) c"


def test_create_task_list_and_blockquote() -> None:
    engine = make_engine()
    buffer = make_buffer("todo")

    engine.create_task_list(buffer)
    assert buffer.text == "- [ ] todo"

    engine.create_blockquote(buffer)
    assert buffer.text == "> - [ ] todo"


def test_remove_blockquote_strips_one_level() -> None:
    engine = make_engine()
    buffer = make_buffer(">  a\n> > b\nc\n > d", cursor=(3, 1), anchor=(0, 0))

    engine.remove_blockquote(buffer)

    assert buffer.text == "a\n> b\nc\n > d"
