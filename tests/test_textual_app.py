import pytest

from markdown_engine.adapters.textual.app import (
    _parse_args,
    build_settings,
    render_buffer,
)
from markdown_engine.buffer import BufferMirror
from markdown_engine.focus import FocusMode, FocusRange, TextSpan


def make_mirror(text: str, cursor=(0, 0), selection=None) -> BufferMirror:
    return BufferMirror(text=text, cursor=cursor, selection=selection)


def test_build_settings_applies_cli_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MARKDOWN_ENGINE_TAB_WIDTH", raising=False)
    args = _parse_args(
        ["notes.md", "--tab-width", "2", "--spaces", "--focus-mode", "paragraph"]
        + ["--no-cycling", "--no-auto-match", "--hemingway"]
    )

    settings = build_settings(args)

    assert args.file == "notes.md"
    assert settings.indent_unit() == "  "
    assert settings.focus_mode is FocusMode.PARAGRAPH
    assert settings.bullet_cycling_enabled is False
    assert settings.auto_match_enabled is False
    assert settings.hemingway_mode_enabled is True


def test_rejects_unknown_focus_mode() -> None:
    with pytest.raises(SystemExit):
        _parse_args(["--focus-mode", "chapter"])


def test_render_buffer_marks_caret() -> None:
    text = render_buffer(make_mirror("ab", cursor=(0, 1)), FocusRange())

    assert text.plain == "ab "
    assert [(span.start, span.end, span.style) for span in text.spans] == [
        (1, 2, "reverse")
    ]


def test_render_buffer_dims_faded_ranges_and_highlights_selection() -> None:
    mirror = make_mirror("one\ntwo", cursor=(1, 3), selection=((1, 0), (1, 3)))
    focus = FocusRange(
        before=TextSpan((0, 0), (0, 3)),
        sharp=TextSpan((1, 0), (1, 3)),
    )

    text = render_buffer(mirror, focus)

    styles = [(span.start, span.end, span.style) for span in text.spans]
    assert (0, 3, "dim") in styles
    assert (4, 7, "on blue") in styles
    assert (7, 8, "reverse") in styles
