"""Low-level helpers for testing log output: scaled timeouts and spy writers."""

from __future__ import annotations

import logging
import os
import time
from datetime import timedelta
from typing import Callable, TypeVar

_log = logging.getLogger(__name__)

_timeout_scale = 1.0

T = TypeVar("T", float, timedelta)


def timeout(base: T) -> T:
    """Scale ``base`` (seconds or a timedelta) by the timeout factor."""
    return base * _timeout_scale


def sleep(base: float | timedelta) -> None:
    """Sleep for ``base`` scaled by the timeout factor."""
    scaled = timeout(base)
    if isinstance(scaled, timedelta):
        scaled = scaled.total_seconds()
    time.sleep(scaled)


def initialize(factor: str) -> Callable[[], None]:
    """Set the timeout factor from text and return a function undoing it.

    Raises ValueError if ``factor`` is not a number.
    """
    global _timeout_scale
    original = _timeout_scale
    value = float(factor)
    _timeout_scale = value

    def restore() -> None:
        global _timeout_scale
        _timeout_scale = original

    return restore


class Syncer:
    """A spy for the sync part of a write syncer."""

    def __init__(self) -> None:
        self._err: BaseException | None = None
        self._called = False

    def set_error(self, err: BaseException | None) -> None:
        """Set the exception that :meth:`sync` will raise."""
        self._err = err

    def sync(self) -> None:
        """Record the call, then raise the configured exception, if any."""
        self._called = True
        if self._err is not None:
            raise self._err

    @property
    def called(self) -> bool:
        """Whether :meth:`sync` has been called."""
        return self._called


class Discarder(Syncer):
    """A writer that drops everything."""

    def write(self, data: bytes) -> int:
        return len(data)


class FailWriter(Syncer):
    """A writer whose writes always fail."""

    def write(self, data: bytes) -> int:
        raise OSError("failed")


class ShortWriter(Syncer):
    """A writer that never fails yet always leaves out the last byte."""

    def write(self, data: bytes) -> int:
        return len(data) - 1


class Buffer(Syncer):
    """A writer collecting everything in memory, with line helpers."""

    def __init__(self) -> None:
        super().__init__()
        self._data = bytearray()

    def write(self, data: bytes) -> int:
        chunk = bytes(data)
        self._data += chunk
        return len(chunk)

    def getvalue(self) -> bytes:
        return bytes(self._data)

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")

    def lines(self) -> list[str]:
        """The contents split on newlines, without the part after the last one."""
        return str(self).split("\n")[:-1]

    def stripped(self) -> str:
        """The contents with trailing newlines removed."""
        return str(self).rstrip("\n")


_env_scale = os.environ.get("TEST_TIMEOUT_SCALE", "")
if _env_scale:
    initialize(_env_scale)
    _log.info("Scaling timeouts by %sx.", _timeout_scale)