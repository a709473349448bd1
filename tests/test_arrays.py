from datetime import datetime, timedelta, timezone

import pytest

from zaplog import arrays
from zaplog.field import Field, FieldType


class RecordingArrayEncoder:
    def __init__(self):
        self.calls = []

    def __getattr__(self, name):
        if not name.startswith("append_"):
            raise AttributeError(name)
        kind = name[len("append_"):]
        return lambda value: self.calls.append((kind, value))

    @property
    def values(self):
        return [value for _, value in self.calls]


def marshal(field):
    enc = RecordingArrayEncoder()
    field.interface.marshal_log_array(enc)
    return enc


EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

EMPTY_CASES = [
    arrays.bools, arrays.byte_strings, arrays.complex128s, arrays.complex64s,
    arrays.durations, arrays.float64s, arrays.float32s, arrays.ints,
    arrays.int64s, arrays.int32s, arrays.int16s, arrays.int8s, arrays.strings,
    arrays.times, arrays.uints, arrays.uint64s, arrays.uint32s, arrays.uint16s,
    arrays.uint8s, arrays.uintptrs,
]


@pytest.mark.parametrize("constructor", EMPTY_CASES)
def test_empty_arrays(constructor):
    field = constructor("k", [])
    assert field.key == "k"
    assert field.type is FieldType.ARRAY_MARSHALER
    assert marshal(field).calls == []
    wrapped = arrays.array("k", field.interface)
    assert wrapped == field
    assert marshal(wrapped).calls == []


@pytest.mark.parametrize(
    "constructor, values, kind, expected",
    [
        (arrays.bools, [True, False], "bool", [True, False]),
        (arrays.byte_strings, [b"\x01\x02", b"\x03\x04"], "byte_string", [b"\x01\x02", b"\x03\x04"]),
        (arrays.complex128s, [1 + 2j, 3 + 4j], "complex128", [1 + 2j, 3 + 4j]),
        (arrays.complex64s, [1 + 2j, 3 + 4j], "complex64", [1 + 2j, 3 + 4j]),
        (arrays.durations, [timedelta(microseconds=1), 2], "duration", [timedelta(microseconds=1), 2]),
        (arrays.float64s, [1.2, 3.4], "float64", [1.2, 3.4]),
        (arrays.float32s, [1.2, 3.4], "float32", [1.2000000476837158, 3.4000000953674316]),
        (arrays.ints, [1, 2], "int", [1, 2]),
        (arrays.int64s, [1, 2], "int64", [1, 2]),
        (arrays.int32s, [1, 2], "int32", [1, 2]),
        (arrays.int16s, [1, 2], "int16", [1, 2]),
        (arrays.int8s, [1, 2], "int8", [1, 2]),
        (arrays.strings, ["foo", "bar"], "string", ["foo", "bar"]),
        (arrays.times, [EPOCH, EPOCH], "time", [EPOCH, EPOCH]),
        (arrays.uints, [1, 2], "uint", [1, 2]),
        (arrays.uint64s, [1, 2], "uint64", [1, 2]),
        (arrays.uint32s, [1, 2], "uint32", [1, 2]),
        (arrays.uint16s, [1, 2], "uint16", [1, 2]),
        (arrays.uint8s, [1, 2], "uint8", [1, 2]),
        (arrays.uintptrs, [1, 2], "uintptr", [1, 2]),
    ],
)
def test_array_wrappers(constructor, values, kind, expected):
    enc = marshal(constructor("k", values))
    assert enc.values == expected
    assert {k for k, _ in enc.calls} == {kind}


def test_uint8s_accepts_bytes():
    assert marshal(arrays.uint8s("k", b"\x01\x02")).values == [1, 2]


def test_field_can_be_reused():
    field = arrays.ints("k", [5, 6])
    first = marshal(field).values
    second = marshal(field).values
    assert first == [5, 6]
    assert second == [5, 6]


def test_array_wraps_marshaler():
    typed = arrays.TypedArray("append_bool", (True,))
    assert arrays.array("k", typed) == Field(
        key="k", type=FieldType.ARRAY_MARSHALER, interface=typed
    )


def test_equal_inputs_make_equal_fields():
    assert arrays.bools("k", [True]) == arrays.bools("k", (True,))
    assert arrays.ints("k", [1]) != arrays.int64s("k", [1])


@pytest.mark.parametrize(
    "constructor, value",
    [
        (arrays.int8s, 128),
        (arrays.int16s, -32769),
        (arrays.uint8s, 256),
        (arrays.uints, -1),
        (arrays.int64s, 1 << 63),
    ],
)
def test_out_of_range_values_raise(constructor, value):
    with pytest.raises(ValueError):
        constructor("k", [value])