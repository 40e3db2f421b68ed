import pytest

from markdown_engine.buffer import (
    Buffer,
    BufferValidationError,
    Caret,
    EditGroupError,
)


def make_buffer(text: str = "hello world", cursor: tuple[int, int] = (0, 0)) -> Buffer:
    buffer = Buffer.from_text(text)
    buffer.set_cursor(cursor)
    return buffer


def test_from_text_splits_lines() -> None:
    buffer = Buffer.from_text("a\nb\n")

    assert list(buffer.lines()) == ["a", "b", ""]
    assert buffer.line_count() == 3
    assert buffer.text == "a\nb\n"


def test_insert_before_cursor_shifts_cursor() -> None:
    buffer = make_buffer("hello", cursor=(0, 5))

    buffer.insert_text((0, 0), ">> ")

    assert buffer.text == ">> hello"
    assert buffer.cursor_position() == (0, 8)


def test_insert_at_cursor_moves_cursor_with_text() -> None:
    buffer = make_buffer("abcd", cursor=(0, 2))

    buffer.insert_text((0, 2), "XY")

    assert buffer.text == "abXYcd"
    assert buffer.cursor_position() == (0, 4)


def test_insert_after_cursor_leaves_cursor() -> None:
    buffer = make_buffer("abcd", cursor=(0, 1))

    buffer.insert_text((0, 3), "!")

    assert buffer.cursor_position() == (0, 1)


def test_delete_range_containing_cursor_collapses_to_start() -> None:
    buffer = make_buffer("hello world", cursor=(0, 8))

    buffer.delete_range((0, 5), (0, 11))

    assert buffer.text == "hello"
    assert buffer.cursor_position() == (0, 5)


def test_multiline_insert_moves_cursor_to_new_line() -> None:
    buffer = make_buffer("ab", cursor=(0, 1))

    buffer.insert_text((0, 1), "\n")

    assert list(buffer.lines()) == ["a", "b"]
    assert buffer.cursor_position() == (1, 0)


def test_get_text_range_spans_lines() -> None:
    buffer = make_buffer("ab\ncd")

    assert buffer.get_text_range((0, 1), (1, 1)) == "b\nc"
    assert buffer.get_text_range((1, 1), (0, 1)) == "b\nc"


def test_selection_range_is_ordered() -> None:
    buffer = make_buffer("abcdef")
    buffer.set_cursor((0, 1), anchor=(0, 4))

    assert buffer.selection_range() == ((0, 1), (0, 4))
    buffer.set_cursor((0, 2))
    assert buffer.selection_range() is None


def test_edit_group_records_single_undo_entry() -> None:
    buffer = make_buffer("one\ntwo")

    with buffer.edit_group("prefix"):
        buffer.insert_text((0, 0), "- ")
        buffer.insert_text((1, 0), "- ")

    assert buffer.text == "- one\n- two"
    assert len(buffer.undo) == 1
    assert buffer.undo.peek().label == "prefix"

    assert buffer.undo_edit() is True
    assert buffer.text == "one\ntwo"


def test_nested_groups_collapse_into_outermost() -> None:
    buffer = make_buffer("x")

    with buffer.edit_group("outer"):
        buffer.insert_text((0, 1), "y")
        with buffer.edit_group("inner"):
            buffer.insert_text((0, 2), "z")
        assert buffer.in_edit_group

    assert not buffer.in_edit_group
    assert len(buffer.undo) == 1
    assert buffer.undo.peek().label == "outer"


def test_mutation_outside_group_gets_implicit_group() -> None:
    buffer = make_buffer("x")

    buffer.insert_text((0, 1), "y")
    buffer.insert_text((0, 2), "z")

    assert len(buffer.undo) == 2


def test_group_without_changes_records_nothing() -> None:
    buffer = make_buffer("x")

    with buffer.edit_group("noop"):
        buffer.set_cursor((0, 1))

    assert len(buffer.undo) == 0


def test_group_closes_when_block_raises() -> None:
    buffer = make_buffer("x")

    with pytest.raises(RuntimeError):
        with buffer.edit_group("boom"):
            buffer.insert_text((0, 0), "y")
            raise RuntimeError("fail mid-group")

    assert not buffer.in_edit_group
    assert len(buffer.undo) == 1


def test_explicit_begin_and_end() -> None:
    buffer = make_buffer("x")

    buffer.begin_edit_group("explicit")
    buffer.insert_text((0, 0), "a")
    buffer.insert_text((0, 0), "b")
    buffer.end_edit_group()

    assert buffer.text == "bax"
    assert len(buffer.undo) == 1


def test_end_without_begin_raises() -> None:
    buffer = make_buffer()

    with pytest.raises(EditGroupError):
        buffer.end_edit_group()


def test_undo_inside_group_raises() -> None:
    buffer = make_buffer()

    with buffer.edit_group("open"):
        with pytest.raises(EditGroupError):
            buffer.undo_edit()


def test_undo_and_redo_restore_caret() -> None:
    buffer = make_buffer("abc", cursor=(0, 3))

    with buffer.edit_group("append"):
        buffer.insert_text((0, 3), "def")

    assert buffer.cursor_position() == (0, 6)
    buffer.undo_edit()
    assert buffer.text == "abc"
    assert buffer.cursor_position() == (0, 3)
    buffer.redo_edit()
    assert buffer.text == "abcdef"
    assert buffer.cursor_position() == (0, 6)
    assert buffer.redo_edit() is False


def test_out_of_range_positions_raise() -> None:
    buffer = make_buffer("abc")

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.set_cursor((0, 9))
    assert excinfo.value.cursor == (0, 9)

    with pytest.raises(BufferValidationError):
        buffer.line_at(3)


def test_mirror_and_snapshot() -> None:
    buffer = Buffer.from_text("abc", caret=Caret.selecting((0, 0), (0, 2)))

    mirror = buffer.mirror()
    view = buffer.snapshot()

    assert mirror.text == "abc"
    assert mirror.cursor == (0, 2)
    assert mirror.selection == ((0, 0), (0, 2))
    assert view.version == buffer.document.version
