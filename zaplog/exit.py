"""Process exit that tests can replace with a recording stub."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable


def _terminate() -> None:
    sys.exit(1)


_real: Callable[[], None] = _terminate


def exit_process() -> None:
    """Terminate the process with status 1, unless stubbed."""
    _real()


@dataclass
class StubbedExit:
    """A test fake for process exit; records whether exit was requested."""

    exited: bool = False
    _prev: Callable[[], None] = field(default=_terminate, repr=False)

    def _exit(self) -> None:
        self.exited = True

    def unstub(self) -> None:
        """Restore the exit function that was active before stubbing."""
        global _real
        _real = self._prev

    def __enter__(self) -> "StubbedExit":
        return self

    def __exit__(self, *exc_info) -> None:
        self.unstub()


def stub() -> StubbedExit:
    """Replace process exit with a recording fake."""
    global _real
    s = StubbedExit(_prev=_real)
    _real = s._exit
    return s


def with_stub(func: Callable[[], None]) -> StubbedExit:
    """Run ``func`` with exit stubbed and return the stub used."""
    with stub() as s:
        func()
    return s