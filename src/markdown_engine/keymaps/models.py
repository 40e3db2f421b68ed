"""Dataclasses describing key input, bindings and command metadata."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

_NAMED_KEY_ALIASES = {"return": "enter", "esc": "escape", "del": "delete"}
_TEXT_BLOCKING_MODIFIERS = frozenset({"ctrl", "alt", "meta"})


def _normalize_modifiers(modifiers: Iterable[str]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


def _normalize_key(key: str) -> str:
    if len(key) == 1:
        return key
    lowered = key.strip().lower()
    return _NAMED_KEY_ALIASES.get(lowered, lowered)


def _split_token(token: str) -> tuple[str, tuple[str, ...]]:
    if len(token) == 1:
        return token, ()
    if token.endswith("++"):
        return "+", tuple(token[:-2].split("+"))
    *modifiers, key = token.split("+")
    return key, tuple(modifiers)


@dataclass(frozen=True, slots=True)
class KeyStroke:
    """Single normalized key press; ``token`` is ``"ctrl+shift+i"`` style."""

    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "key", _normalize_key(self.key))
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @classmethod
    def parse(cls, token: str) -> "KeyStroke":
        key, modifiers = _split_token(token)
        return cls(key, modifiers)


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized host key event handed to the dispatcher."""

    key: str
    modifiers: tuple[str, ...] = ()
    text: str | None = None

    @property
    def stroke(self) -> KeyStroke:
        return KeyStroke(self.key, self.modifiers)

    @property
    def token(self) -> str:
        return self.stroke.token

    @property
    def is_printable(self) -> bool:
        if self.text is None or len(self.text) != 1 or not self.text.isprintable():
            return False
        return not _TEXT_BLOCKING_MODIFIERS.intersection(self.stroke.modifiers)

    @classmethod
    def parse(cls, token: str, *, text: str | None = None) -> "KeyInput":
        key, modifiers = _split_token(token)
        return cls(key=key, modifiers=modifiers, text=text)

    @classmethod
    def char(cls, character: str) -> "KeyInput":
        return cls(key=character, text=character)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Simple boolean condition over session flags used to gate bindings."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        expected = True
        if expr.startswith("!"):
            expected = False
            expr = expr[1:]
        return cls(expr, expected)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class CommandRef:
    """Callable metadata for one editor command.

    Handlers are called as ``handler(session, key)``; ``key`` is None when the
    command runs by id rather than from a key press.
    """

    id: str
    handler: Callable[..., object]
    description: str = ""
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("CommandRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    """Associates a key stroke with a command, optionally gated by flags."""

    id: str
    stroke: KeyStroke
    command_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.command_id:
            raise ValueError("binding command_id cannot be empty")
        if isinstance(self.stroke, str):
            object.__setattr__(self, "stroke", KeyStroke.parse(self.stroke))
        normalized_when = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", normalized_when)

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)

    @property
    def key_signature(self) -> str:
        return self.stroke.token


__all__ = [
    "KeyInput",
    "KeyStroke",
    "WhenClause",
    "CommandRef",
    "Binding",
]
