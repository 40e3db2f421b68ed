"""Session-scoped editor configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from markdown_engine.focus.calculator import FocusMode

from .telemetry import ENV_PREFIX


def _env(name: str) -> Optional[str]:
    return os.getenv(f"{ENV_PREFIX}{name}")


def _env_flag(name: str, default: bool) -> bool:
    raw = _env(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


@dataclass
class EditorSettings:
    """Mutable editing configuration owned by one editing session.

    Engines hold a reference to the same instance, so a setter call is seen by
    the next command without any re-wiring.
    """

    tab_width: int = 4
    insert_spaces_for_tabs: bool = False
    bullet_cycling_enabled: bool = True
    auto_match_enabled: bool = True
    hemingway_mode_enabled: bool = False
    focus_mode: FocusMode = FocusMode.DISABLED
    typing_pause_interval_ms: int = 1000

    def __post_init__(self) -> None:
        self.set_tab_width(self.tab_width)
        self.focus_mode = FocusMode.parse(self.focus_mode)

    @classmethod
    def from_env(cls) -> "EditorSettings":
        settings = cls()
        width = _env("TAB_WIDTH")
        if width:
            settings.set_tab_width(int(width))
        settings.insert_spaces_for_tabs = _env_flag(
            "INSERT_SPACES", settings.insert_spaces_for_tabs
        )
        settings.bullet_cycling_enabled = _env_flag(
            "BULLET_CYCLING", settings.bullet_cycling_enabled
        )
        settings.auto_match_enabled = _env_flag(
            "AUTO_MATCH", settings.auto_match_enabled
        )
        settings.hemingway_mode_enabled = _env_flag(
            "HEMINGWAY", settings.hemingway_mode_enabled
        )
        focus = _env("FOCUS_MODE")
        if focus:
            settings.set_focus_mode(focus)
        return settings

    def set_tab_width(self, width: int) -> None:
        if width < 1:
            raise ValueError(f"tab width must be positive, got {width}")
        self.tab_width = int(width)

    def set_insert_spaces_for_tabs(self, enabled: bool) -> None:
        self.insert_spaces_for_tabs = bool(enabled)

    def set_bullet_cycling_enabled(self, enabled: bool) -> None:
        self.bullet_cycling_enabled = bool(enabled)

    def set_auto_match_enabled(self, enabled: bool) -> None:
        self.auto_match_enabled = bool(enabled)

    def set_hemingway_mode_enabled(self, enabled: bool) -> None:
        self.hemingway_mode_enabled = bool(enabled)

    def set_focus_mode(self, mode: FocusMode | str) -> None:
        self.focus_mode = FocusMode.parse(mode)

    def indent_unit(self) -> str:
        """One full tab stop of indentation."""

        if self.insert_spaces_for_tabs:
            return " " * self.tab_width
        return "\t"

    def partial_indent(self, column: int) -> str:
        """Indentation that advances ``column`` to the next tab stop."""

        if not self.insert_spaces_for_tabs:
            return "\t"
        return " " * (self.tab_width - (column % self.tab_width))


__all__ = ["EditorSettings"]
