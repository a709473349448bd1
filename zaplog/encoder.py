"""A thread-safe registry of encoder constructors, looked up by name."""

from __future__ import annotations

import threading
from typing import Any, Callable

EncoderConstructor = Callable[[Any], Any]


class NoEncoderNameError(ValueError):
    """Raised when an encoder name is empty."""

    def __init__(self) -> None:
        super().__init__("no encoder name specified")


class EncoderNotFoundError(LookupError):
    """Raised when no encoder is registered under a name."""


class EncoderRegistry:
    """Maps encoding names to constructors that take an encoder config."""

    def __init__(self, constructors: dict[str, EncoderConstructor] | None = None) -> None:
        self._lock = threading.RLock()
        self._constructors: dict[str, EncoderConstructor] = dict(constructors or {})

    def register(self, name: str, constructor: EncoderConstructor) -> None:
        """Register ``constructor`` under ``name``; names may not be reused."""
        with self._lock:
            if not name:
                raise NoEncoderNameError()
            if name in self._constructors:
                raise ValueError(f'encoder already registered for name "{name}"')
            self._constructors[name] = constructor

    def new(self, name: str, config: Any) -> Any:
        """Build the encoder registered under ``name`` from ``config``."""
        with self._lock:
            if not name:
                raise NoEncoderNameError()
            try:
                constructor = self._constructors[name]
            except KeyError:
                raise EncoderNotFoundError(
                    f'no encoder registered for name "{name}"'
                ) from None
        return constructor(config)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._constructors

    def __len__(self) -> int:
        with self._lock:
            return len(self._constructors)

    def names(self) -> list[str]:
        with self._lock:
            return sorted(self._constructors)


_default_registry = EncoderRegistry()


def register_encoder(name: str, constructor: EncoderConstructor) -> None:
    """Register an encoder constructor in the process-wide registry."""
    _default_registry.register(name, constructor)


def new_encoder(name: str, config: Any) -> Any:
    """Build an encoder from the process-wide registry."""
    return _default_registry.new(name, config)