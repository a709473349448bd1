"""Fields that carry homogeneous sequences, marshaled lazily."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from zaplog.field import Field, FieldType


@dataclass(frozen=True)
class TypedArray:
    """A sequence of values sent to an array encoder through one method.

    ``append`` names the encoder method (for example ``"append_bool"``)
    that receives each element in turn.
    """

    append: str
    values: tuple = ()

    def marshal_log_array(self, enc: Any) -> None:
        """Append every element to ``enc`` using the array's encoder method."""
        append = getattr(enc, self.append)
        for value in self.values:
            append(value)

    def __len__(self) -> int:
        return len(self.values)

    def __iter__(self):
        return iter(self.values)


def _ranged(bits: int, signed: bool) -> Callable[[Any], int]:
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        kind = "int"
    else:
        low, high = 0, (1 << bits) - 1
        kind = "uint"

    def convert(value: Any) -> int:
        value = int(value)
        if not low <= value <= high:
            raise ValueError(f"{value} is out of range for {kind}{bits}")
        return value

    return convert


def _to_float32(value: Any) -> float:
    return struct.unpack("<f", struct.pack("<f", float(value)))[0]


def _to_complex64(value: Any) -> complex:
    value = complex(value)
    return complex(_to_float32(value.real), _to_float32(value.imag))


def _typed(
    key: str,
    method: str,
    values: Iterable[Any],
    convert: Callable[[Any], Any] | None = None,
) -> Field:
    items = tuple(values) if convert is None else tuple(convert(v) for v in values)
    return array(key, TypedArray(method, items))


def array(key: str, value: Any) -> Field:
    """A field holding any value with a ``marshal_log_array`` method."""
    return Field(key=key, type=FieldType.ARRAY_MARSHALER, interface=value)


def bools(key: str, values: Iterable[bool]) -> Field:
    return _typed(key, "append_bool", values, bool)


def byte_strings(key: str, values: Iterable[bytes]) -> Field:
    """A sequence of UTF-8 encoded texts held as bytes."""
    return _typed(key, "append_byte_string", values, bytes)


def complex128s(key: str, values: Iterable[complex]) -> Field:
    return _typed(key, "append_complex128", values, complex)


def complex64s(key: str, values: Iterable[complex]) -> Field:
    """Complex numbers with single-precision parts."""
    return _typed(key, "append_complex64", values, _to_complex64)


def durations(key: str, values: Iterable[Any]) -> Field:
    """Durations, as timedeltas or integer nanoseconds."""
    return _typed(key, "append_duration", values)


def float64s(key: str, values: Iterable[float]) -> Field:
    return _typed(key, "append_float64", values, float)


def float32s(key: str, values: Iterable[float]) -> Field:
    """Floats rounded to single precision."""
    return _typed(key, "append_float32", values, _to_float32)


def ints(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_int", values, _ranged(64, True))


def int64s(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_int64", values, _ranged(64, True))


def int32s(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_int32", values, _ranged(32, True))


def int16s(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_int16", values, _ranged(16, True))


def int8s(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_int8", values, _ranged(8, True))


def strings(key: str, values: Iterable[str]) -> Field:
    return _typed(key, "append_string", values, str)


def times(key: str, values: Iterable[Any]) -> Field:
    """A sequence of datetimes."""
    return _typed(key, "append_time", values)


def uints(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_uint", values, _ranged(64, False))


def uint64s(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_uint64", values, _ranged(64, False))


def uint32s(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_uint32", values, _ranged(32, False))


def uint16s(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_uint16", values, _ranged(16, False))


def uint8s(key: str, values: Iterable[int]) -> Field:
    """Unsigned bytes; a ``bytes`` object is accepted as well."""
    return _typed(key, "append_uint8", values, _ranged(8, False))


def uintptrs(key: str, values: Iterable[int]) -> Field:
    return _typed(key, "append_uintptr", values, _ranged(64, False))