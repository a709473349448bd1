"""Fields that carry exceptions, singly or in sequences."""

from __future__ import annotations

import traceback
from dataclasses import dataclass
from typing import Any, Iterable

from zaplog.arrays import array
from zaplog.field import Field, FieldType, skip


def error(err: BaseException | None) -> Field:
    """Shorthand for ``named_error("error", err)``."""
    return named_error("error", err)


def named_error(key: str, err: BaseException | None) -> Field:
    """A field holding ``err`` under ``key``; ``None`` gives a no-op field."""
    if err is None:
        return skip()
    return Field(key=key, type=FieldType.ERROR, interface=err)


def _verbose(err: BaseException) -> str | None:
    if err.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(type(err), err, err.__traceback__))


def _add_error(enc: Any, key: str, err: BaseException) -> None:
    enc.add_string(key, str(err))
    verbose = _verbose(err)
    if verbose is not None:
        enc.add_string(key + "Verbose", verbose)


@dataclass(frozen=True)
class _ErrorElement:
    err: BaseException

    def marshal_log_object(self, enc: Any) -> None:
        _add_error(enc, "error", self.err)


@dataclass(frozen=True)
class ErrorArray:
    """A sequence of exceptions; ``None`` entries are left out when marshaled."""

    errs: tuple = ()

    def marshal_log_array(self, enc: Any) -> None:
        """Append each exception as an object with an ``error`` key.

        Exceptions carrying a traceback also get an ``errorVerbose`` key.
        """
        for err in self.errs:
            if err is None:
                continue
            enc.append_object(_ErrorElement(err))


def errors(key: str, errs: Iterable[BaseException | None]) -> Field:
    """A field holding a sequence of exceptions."""
    return array(key, ErrorArray(tuple(errs)))