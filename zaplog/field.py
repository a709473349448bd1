"""Strongly typed log fields and their constructors."""

from __future__ import annotations

import enum
import struct
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class FieldType(enum.Enum):
    """How a field's value is stored and how an encoder should read it."""

    UNKNOWN = enum.auto()
    ARRAY_MARSHALER = enum.auto()
    OBJECT_MARSHALER = enum.auto()
    BINARY = enum.auto()
    BOOL = enum.auto()
    BYTE_STRING = enum.auto()
    COMPLEX128 = enum.auto()
    COMPLEX64 = enum.auto()
    DURATION = enum.auto()
    FLOAT64 = enum.auto()
    FLOAT32 = enum.auto()
    INT64 = enum.auto()
    INT32 = enum.auto()
    INT16 = enum.auto()
    INT8 = enum.auto()
    STRING = enum.auto()
    TIME = enum.auto()
    UINT64 = enum.auto()
    UINT32 = enum.auto()
    UINT16 = enum.auto()
    UINT8 = enum.auto()
    UINTPTR = enum.auto()
    REFLECT = enum.auto()
    NAMESPACE = enum.auto()
    STRINGER = enum.auto()
    ERROR = enum.auto()
    SKIP = enum.auto()


@dataclass(frozen=True)
class Field:
    """A key with a typed value, stored in one of three slots."""

    key: str = ""
    type: FieldType = FieldType.UNKNOWN
    integer: int = 0
    string: str = ""
    interface: Any = None


def _checked(value: int, bits: int, signed: bool) -> int:
    value = int(value)
    if signed:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
    else:
        low, high = 0, (1 << bits) - 1
    if not low <= value <= high:
        kind = "int" if signed else "uint"
        raise ValueError(f"{value} is out of range for {kind}{bits}")
    return value


def _as_int64(value: int) -> int:
    """Reinterpret an unsigned 64-bit value as signed."""
    return value - (1 << 64) if value >= (1 << 63) else value


def skip() -> Field:
    """A no-op field."""
    return Field(type=FieldType.SKIP)


def binary(key: str, value: bytes) -> Field:
    """An opaque binary blob."""
    return Field(key=key, type=FieldType.BINARY, interface=bytes(value))


def boolean(key: str, value: bool) -> Field:
    return Field(key=key, type=FieldType.BOOL, integer=1 if value else 0)


def byte_string(key: str, value: bytes) -> Field:
    """UTF-8 encoded text held as bytes."""
    return Field(key=key, type=FieldType.BYTE_STRING, interface=bytes(value))


def complex128(key: str, value: complex) -> Field:
    return Field(key=key, type=FieldType.COMPLEX128, interface=complex(value))


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def complex64(key: str, value: complex) -> Field:
    """A complex number with single-precision parts."""
    value = complex(value)
    rounded = complex(_to_float32(value.real), _to_float32(value.imag))
    return Field(key=key, type=FieldType.COMPLEX64, interface=rounded)


def float64(key: str, value: float) -> Field:
    """A double, stored as its IEEE 754 bit pattern."""
    bits = struct.unpack("<q", struct.pack("<d", float(value)))[0]
    return Field(key=key, type=FieldType.FLOAT64, integer=bits)


def float32(key: str, value: float) -> Field:
    """A single-precision float, stored as its IEEE 754 bit pattern."""
    bits = struct.unpack("<I", struct.pack("<f", float(value)))[0]
    return Field(key=key, type=FieldType.FLOAT32, integer=bits)


def integer(key: str, value: int) -> Field:
    return int64(key, value)


def int64(key: str, value: int) -> Field:
    return Field(key=key, type=FieldType.INT64, integer=_checked(value, 64, True))


def int32(key: str, value: int) -> Field:
    return Field(key=key, type=FieldType.INT32, integer=_checked(value, 32, True))


def int16(key: str, value: int) -> Field:
    return Field(key=key, type=FieldType.INT16, integer=_checked(value, 16, True))


def int8(key: str, value: int) -> Field:
    return Field(key=key, type=FieldType.INT8, integer=_checked(value, 8, True))


def string(key: str, value: str) -> Field:
    return Field(key=key, type=FieldType.STRING, string=value)


def uint(key: str, value: int) -> Field:
    return uint64(key, value)


def uint64(key: str, value: int) -> Field:
    bits = _as_int64(_checked(value, 64, False))
    return Field(key=key, type=FieldType.UINT64, integer=bits)


def uint32(key: str, value: int) -> Field:
    return Field(key=key, type=FieldType.UINT32, integer=_checked(value, 32, False))


def uint16(key: str, value: int) -> Field:
    return Field(key=key, type=FieldType.UINT16, integer=_checked(value, 16, False))


def uint8(key: str, value: int) -> Field:
    return Field(key=key, type=FieldType.UINT8, integer=_checked(value, 8, False))


def uintptr(key: str, value: int) -> Field:
    bits = _as_int64(_checked(value, 64, False))
    return Field(key=key, type=FieldType.UINTPTR, integer=bits)


def reflect(key: str, value: Any) -> Field:
    """An arbitrary object, serialized generically by the encoder."""
    return Field(key=key, type=FieldType.REFLECT, interface=value)


def namespace(key: str) -> Field:
    """Open a named scope; later fields are nested inside it."""
    return Field(key=key, type=FieldType.NAMESPACE)


def stringer(key: str, value: Any) -> Field:
    """A value logged through ``str()``, called lazily."""
    return Field(key=key, type=FieldType.STRINGER, interface=value)


def timestamp(key: str, value: datetime) -> Field:
    """A point in time: nanoseconds since the epoch plus its time zone.

    Naive datetimes are taken as local time and carry no tzinfo.
    """
    aware = value if value.tzinfo is not None else value.astimezone()
    delta = aware - _EPOCH
    nanos = (delta.days * 86400 + delta.seconds) * 1_000_000_000 + delta.microseconds * 1000
    return Field(key=key, type=FieldType.TIME, integer=nanos, interface=value.tzinfo)


def duration(key: str, value: timedelta | int) -> Field:
    """A duration; integers are taken as nanoseconds."""
    if isinstance(value, timedelta):
        nanos = (value.days * 86400 + value.seconds) * 1_000_000_000 + value.microseconds * 1000
    else:
        nanos = int(value)
    return Field(key=key, type=FieldType.DURATION, integer=_checked(nanos, 64, True))


def object(key: str, value: Any) -> Field:
    """A value with a ``marshal_log_object`` method, called lazily."""
    return Field(key=key, type=FieldType.OBJECT_MARSHALER, interface=value)