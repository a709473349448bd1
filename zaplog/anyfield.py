"""Choose the best typed field for an arbitrary value."""

from __future__ import annotations

import enum
from datetime import datetime, timedelta
from typing import Any, Callable

from zaplog import arrays
from zaplog.errors import errors, named_error
from zaplog.field import (
    Field,
    binary,
    boolean,
    complex128,
    duration,
    float64,
    integer,
    reflect,
    string,
    stringer,
    timestamp,
    uint,
)
from zaplog.field import object as object_field

_INT64_MIN, _INT64_MAX = -(1 << 63), (1 << 63) - 1
_UINT64_MAX = (1 << 64) - 1

_object_str = object.__str__


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


_SEQUENCE_BUILDERS: list[tuple[Callable[[Any], bool], Callable[[str, Any], Field]]] = [
    (lambda v: isinstance(v, bool), arrays.bools),
    (lambda v: isinstance(v, complex), arrays.complex128s),
    (lambda v: isinstance(v, float), arrays.float64s),
    (_is_int, arrays.ints),
    (lambda v: isinstance(v, str), arrays.strings),
    (lambda v: isinstance(v, datetime), arrays.times),
    (lambda v: isinstance(v, timedelta), arrays.durations),
]


def _sequence_field(key: str, values: list | tuple) -> Field | None:
    for matches, builder in _SEQUENCE_BUILDERS:
        if all(matches(v) for v in values):
            try:
                return builder(key, values)
            except ValueError:
                return None
    if all(v is None or isinstance(v, BaseException) for v in values) and any(
        v is not None for v in values
    ):
        return errors(key, values)
    return None


def _has_own_str(value: Any) -> bool:
    return type(value).__str__ is not _object_str


def any_field(key: str, value: Any) -> Field:
    """Build the most specific field for ``value``, falling back to reflection."""
    if hasattr(value, "marshal_log_object"):
        return object_field(key, value)
    if hasattr(value, "marshal_log_array"):
        return arrays.array(key, value)
    if isinstance(value, enum.Enum):
        return stringer(key, value)
    if isinstance(value, bool):
        return boolean(key, value)
    if isinstance(value, complex):
        return complex128(key, value)
    if isinstance(value, float):
        return float64(key, value)
    if isinstance(value, int):
        if _INT64_MIN <= value <= _INT64_MAX:
            return integer(key, value)
        if 0 <= value <= _UINT64_MAX:
            return uint(key, value)
        return reflect(key, value)
    if isinstance(value, str):
        return string(key, value)
    if isinstance(value, (bytes, bytearray)):
        return binary(key, value)
    if isinstance(value, datetime):
        return timestamp(key, value)
    if isinstance(value, timedelta):
        return duration(key, value)
    if isinstance(value, BaseException):
        return named_error(key, value)
    if isinstance(value, (list, tuple)) and value:
        field = _sequence_field(key, value)
        if field is not None:
            return field
        return reflect(key, value)
    if value is not None and _has_own_str(value):
        return stringer(key, value)
    return reflect(key, value)