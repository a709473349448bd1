"""A growable byte buffer with number formatting, and a pool to reuse them."""

from __future__ import annotations

import math
import struct
import threading
from decimal import Decimal

_SIZE = 1024  # new buffers reserve 1 KiB


def _round32(value: float) -> float:
    """Round ``value`` to the nearest single-precision float."""
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_float(value: float, bit_size: int) -> str:
    """Shortest round-tripping decimal form, never in exponent notation."""
    if bit_size not in (32, 64):
        raise ValueError(f"bit size must be 32 or 64, not {bit_size}")
    value = float(value)
    if bit_size == 32:
        value = _round32(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if bit_size == 64:
        text = repr(value)
    else:
        for precision in range(1, 10):
            text = f"{value:.{precision}g}"
            if _round32(float(text)) == value:
                break
    return format(Decimal(text).normalize(), "f")


class Buffer:
    """A byte buffer meant to be taken from a :class:`Pool` and freed back."""

    def __init__(self, pool: "Pool | None" = None) -> None:
        self._data = bytearray()
        self._capacity = _SIZE
        self._pool = pool

    def _extend(self, chunk: bytes) -> None:
        self._data += chunk
        while len(self._data) > self._capacity:
            self._capacity *= 2

    def append_byte(self, value: int | bytes) -> None:
        """Append a single byte, given as an int or a one-byte bytes object."""
        if isinstance(value, (bytes, bytearray)):
            if len(value) != 1:
                raise ValueError("append_byte takes exactly one byte")
            value = value[0]
        if not 0 <= int(value) <= 255:
            raise ValueError(f"{value} is not a byte value")
        self._extend(bytes((int(value),)))

    def append_string(self, text: str) -> None:
        self._extend(text.encode("utf-8"))

    def append_int(self, value: int) -> None:
        """Append an integer in base 10."""
        self._extend(str(int(value)).encode("ascii"))

    def append_uint(self, value: int) -> None:
        """Append a non-negative integer in base 10."""
        value = int(value)
        if value < 0:
            raise ValueError(f"{value} is not an unsigned integer")
        self._extend(str(value).encode("ascii"))

    def append_bool(self, value: bool) -> None:
        self._extend(b"true" if value else b"false")

    def append_float(self, value: float, bit_size: int) -> None:
        """Append a float; NaN and infinities are written unquoted."""
        self._extend(_format_float(value, bit_size).encode("ascii"))

    def write(self, data: bytes) -> int:
        """Append raw bytes and return how many were written."""
        chunk = bytes(data)
        self._extend(chunk)
        return len(chunk)

    def reset(self) -> None:
        """Empty the buffer, keeping its reserved capacity."""
        self._data.clear()

    def trim_newline(self) -> None:
        """Remove one trailing newline, if present."""
        if self._data.endswith(b"\n"):
            del self._data[-1]

    def free(self) -> None:
        """Return the buffer to its pool; do not use it afterwards."""
        if self._pool is not None:
            self._pool._put(self)

    @property
    def capacity(self) -> int:
        """Bytes reserved for the buffer's contents."""
        return self._capacity

    def __len__(self) -> int:
        return len(self._data)

    def __bytes__(self) -> bytes:
        return bytes(self._data)

    def __str__(self) -> str:
        return self._data.decode("utf-8", errors="replace")


class Pool:
    """A thread-safe store of reusable buffers."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._free: list[Buffer] = []

    def get(self) -> Buffer:
        """Take an empty buffer from the pool, creating one if none is free."""
        with self._lock:
            buf = self._free.pop() if self._free else None
        if buf is None:
            buf = Buffer(self)
        buf.reset()
        buf._pool = self
        return buf

    def _put(self, buf: Buffer) -> None:
        with self._lock:
            self._free.append(buf)


_pool = Pool()


def get_buffer() -> Buffer:
    """Take a buffer from the shared pool."""
    return _pool.get()