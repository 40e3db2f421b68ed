"""Executable Textual app that hosts the Markdown editing engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use markdown_engine.adapters.textual.app"
    ) from exc

from markdown_engine.buffer import BufferMirror
from markdown_engine.focus import FocusMode, FocusRange
from markdown_engine.keymaps import KeyStroke
from markdown_engine.runtime.settings import EditorSettings
from markdown_engine.session import EditorSession

from .controller import MarkdownTextualAdapter, TextualUIHooks


def _offset(lines: Sequence[str], position: Tuple[int, int]) -> int:
    row, col = position
    return sum(len(line) + 1 for line in lines[:row]) + col


def render_buffer(mirror: BufferMirror, focus: FocusRange) -> Text:
    """Buffer text with faded focus spans dimmed and the caret reversed."""

    lines = mirror.text.split("\n")
    text = Text(mirror.text + " ")
    for span in focus.faded():
        text.stylize("dim", _offset(lines, span.start), _offset(lines, span.end))
    if mirror.selection:
        start, end = sorted(mirror.selection)
        text.stylize("on blue", _offset(lines, start), _offset(lines, end))
    caret = _offset(lines, mirror.cursor)
    text.stylize("reverse", caret, caret + 1)
    return text


@dataclass
class UIState:
    mirror: BufferMirror = field(
        default_factory=lambda: BufferMirror(text="", cursor=(0, 0), selection=None)
    )
    focus: FocusRange = field(default_factory=FocusRange)
    status_text: str = ""


class MarkdownEngineApp(App[None]):
    """Minimal Textual UI embedding the Markdown editing engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 1 1;
		content-align: left top;
		overflow: auto;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        settings: Optional[EditorSettings] = None,
        text: str = "",
        path: Optional[Path] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._settings = settings or EditorSettings.from_env()
        self._initial_text = text
        self._path = path
        self.session: EditorSession | None = None
        self.adapter: MarkdownTextualAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.session = EditorSession.from_text(
            self._initial_text, settings=self._settings
        )
        hooks = TextualUIHooks(
            update_buffer=self._update_buffer,
            update_status=self._update_status,
            update_focus=self._update_focus,
            handle_event=self._handle_event,
        )
        self.adapter = MarkdownTextualAdapter(self.session, hooks)
        if self._path is not None:
            self.title = str(self._path)
        interval = self._settings.typing_pause_interval_ms / 1000.0
        self.set_interval(interval, self._tick)

    def _tick(self) -> None:
        if self.adapter:
            self.adapter.tick()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_buffer(self, mirror: BufferMirror) -> None:
        self._state.mirror = mirror
        self._render_buffer()

    def _update_focus(self, focus: FocusRange) -> None:
        self._state.focus = focus
        self._render_buffer()

    def _render_buffer(self) -> None:
        if self._buffer_widget:
            self._buffer_widget.update(
                render_buffer(self._state.mirror, self._state.focus)
            )

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name.startswith("typing"):
            self._update_status(name)
        elif name == "selection.changed" and isinstance(payload, dict):
            self._update_status(f"{len(str(payload.get('text', '')))} selected")

    @staticmethod
    def _normalize_key(
        event: events.Key,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        if event.key == "ctrl+q":
            return None
        stroke = KeyStroke.parse(event.key)
        # Shifted characters arrive already shifted in ``event.character``.
        plain = stroke.modifiers in ((), ("shift",))
        if event.is_printable and event.character and plain:
            return (event.character, event.character, ())
        return (stroke.key, None, stroke.modifiers)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run the Markdown editing engine Textual demo."
    )
    parser.add_argument("file", nargs="?", help="Markdown file to open")
    parser.add_argument(
        "--tab-width",
        type=int,
        default=None,
        help="Columns per tab stop (default: MARKDOWN_ENGINE_TAB_WIDTH or 4)",
    )
    parser.add_argument(
        "--spaces",
        action="store_true",
        help="Indent with spaces instead of tab characters",
    )
    parser.add_argument(
        "--focus-mode",
        choices=[mode.value for mode in FocusMode],
        default=None,
        help="Dim text outside the current line, paragraph or sentence",
    )
    parser.add_argument(
        "--no-cycling",
        action="store_true",
        help="Keep bullet markers unchanged when indenting",
    )
    parser.add_argument(
        "--no-auto-match",
        action="store_true",
        help="Do not insert closing delimiters automatically",
    )
    parser.add_argument(
        "--hemingway",
        action="store_true",
        help="Disable Backspace and Delete",
    )
    return parser.parse_args(argv)


def build_settings(args: argparse.Namespace) -> EditorSettings:
    settings = EditorSettings.from_env()
    if args.tab_width is not None:
        settings.set_tab_width(args.tab_width)
    if args.spaces:
        settings.set_insert_spaces_for_tabs(True)
    if args.focus_mode:
        settings.set_focus_mode(args.focus_mode)
    if args.no_cycling:
        settings.set_bullet_cycling_enabled(False)
    if args.no_auto_match:
        settings.set_auto_match_enabled(False)
    if args.hemingway:
        settings.set_hemingway_mode_enabled(True)
    return settings


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    path = Path(args.file) if args.file else None
    text = path.read_text(encoding="utf-8") if path and path.exists() else ""
    app = MarkdownEngineApp(settings=build_settings(args), text=text, path=path)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
