"""Logging levels, dynamic atomic levels and command-line level flags."""

from __future__ import annotations

import argparse
import enum
import functools
import threading
from dataclasses import dataclass
from typing import Callable


class Level(enum.IntEnum):
    """A logging priority. Higher levels are more important."""

    DEBUG = -1
    INFO = 0
    WARN = 1
    ERROR = 2
    DPANIC = 3
    PANIC = 4
    FATAL = 5

    def enabled(self, level: "Level") -> bool:
        """Report whether ``level`` is at or above this minimum level."""
        return level >= self

    def __str__(self) -> str:
        return self.name.lower()

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_LEVEL_NAMES = {str(level): level for level in Level}


def parse_level(text: str | bytes) -> Level:
    """Parse a level from its text form; the empty string means INFO."""
    if isinstance(text, (bytes, bytearray)):
        text = bytes(text).decode("utf-8")
    if text == "":
        return Level.INFO
    name = text.lower() if text.isupper() else text
    try:
        return _LEVEL_NAMES[name]
    except KeyError:
        raise ValueError(f"unrecognized level: {text!r}") from None


@dataclass(frozen=True)
class LevelEnablerFunc:
    """Adapt a plain function into a level enabler."""

    func: Callable[[Level], bool]

    def enabled(self, level: Level) -> bool:
        return bool(self.func(level))


class AtomicLevel:
    """A thread-safe, changeable minimum logging level."""

    def __init__(self, level: Level = Level.INFO) -> None:
        self._lock = threading.Lock()
        self._level = Level(level)

    @property
    def level(self) -> Level:
        """The minimum enabled level."""
        with self._lock:
            return self._level

    @level.setter
    def level(self, value: Level) -> None:
        value = Level(value)
        with self._lock:
            self._level = value

    def enabled(self, level: Level) -> bool:
        return self.level.enabled(level)

    def unmarshal_text(self, text: str | bytes) -> None:
        """Set the level from its text form; raises ValueError if unknown."""
        self.level = parse_level(text)

    def marshal_text(self) -> bytes:
        return str(self.level).encode("utf-8")

    def __str__(self) -> str:
        return str(self.level)

    def __repr__(self) -> str:
        return f"AtomicLevel({self.level!s})"


class _LevelAction(argparse.Action):
    def __init__(self, *args, target: AtomicLevel, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self._target = target

    def __call__(self, parser, namespace, values, option_string=None):
        self._target.level = values
        setattr(namespace, self.dest, values)


def level_flag(
    parser: argparse.ArgumentParser,
    name: str,
    default_level: Level,
    usage: str,
) -> AtomicLevel:
    """Declare ``--name`` on ``parser``; the returned holder tracks its value."""
    holder = AtomicLevel(default_level)
    parser.add_argument(
        f"--{name}",
        type=parse_level,
        default=Level(default_level),
        help=usage,
        action=functools.partial(_LevelAction, target=holder),
    )
    return holder