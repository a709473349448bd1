import dataclasses
import ipaddress
from datetime import datetime, timedelta, timezone

import pytest

from zaplog import field as f
from zaplog.field import Field, FieldType


class Username(str):
    def marshal_log_object(self, enc):
        enc.add_string("username", str(self))


ADDR = ipaddress.ip_address("1.2.3.4")
NAME = Username("phil")
INTS = [5, 6]


@pytest.mark.parametrize(
    "expect, got",
    [
        (Field(type=FieldType.SKIP), f.skip()),
        (Field(key="k", type=FieldType.BINARY, interface=b"ab12"), f.binary("k", b"ab12")),
        (Field(key="k", type=FieldType.BOOL, integer=1), f.boolean("k", True)),
        (Field(key="k", type=FieldType.BOOL, integer=0), f.boolean("k", False)),
        (Field(key="k", type=FieldType.BYTE_STRING, interface=b"ab12"), f.byte_string("k", b"ab12")),
        (Field(key="k", type=FieldType.COMPLEX128, interface=1 + 2j), f.complex128("k", 1 + 2j)),
        (Field(key="k", type=FieldType.COMPLEX64, interface=1 + 2j), f.complex64("k", 1 + 2j)),
        (Field(key="k", type=FieldType.DURATION, integer=1), f.duration("k", 1)),
        (Field(key="k", type=FieldType.INT64, integer=1), f.integer("k", 1)),
        (Field(key="k", type=FieldType.INT64, integer=1), f.int64("k", 1)),
        (Field(key="k", type=FieldType.INT32, integer=1), f.int32("k", 1)),
        (Field(key="k", type=FieldType.INT16, integer=1), f.int16("k", 1)),
        (Field(key="k", type=FieldType.INT8, integer=1), f.int8("k", 1)),
        (Field(key="k", type=FieldType.STRING, string="foo"), f.string("k", "foo")),
        (
            Field(key="k", type=FieldType.TIME, integer=0, interface=timezone.utc),
            f.timestamp("k", datetime(1970, 1, 1, tzinfo=timezone.utc)),
        ),
        (
            Field(key="k", type=FieldType.TIME, integer=1000, interface=timezone.utc),
            f.timestamp("k", datetime(1970, 1, 1, 0, 0, 0, 1, tzinfo=timezone.utc)),
        ),
        (Field(key="k", type=FieldType.UINT64, integer=1), f.uint("k", 1)),
        (Field(key="k", type=FieldType.UINT64, integer=1), f.uint64("k", 1)),
        (Field(key="k", type=FieldType.UINT32, integer=1), f.uint32("k", 1)),
        (Field(key="k", type=FieldType.UINT16, integer=1), f.uint16("k", 1)),
        (Field(key="k", type=FieldType.UINT8, integer=1), f.uint8("k", 1)),
        (Field(key="k", type=FieldType.UINTPTR, integer=10), f.uintptr("k", 0xA)),
        (Field(key="k", type=FieldType.REFLECT, interface=INTS), f.reflect("k", INTS)),
        (Field(key="k", type=FieldType.STRINGER, interface=ADDR), f.stringer("k", ADDR)),
        (Field(key="k", type=FieldType.OBJECT_MARSHALER, interface=NAME), f.object("k", NAME)),
        (Field(key="k", type=FieldType.NAMESPACE), f.namespace("k")),
    ],
)
def test_field_constructors(expect, got):
    assert got == expect


def test_float_bit_patterns():
    assert f.float64("k", 1.0).integer == 4607182418800017408
    assert f.float64("k", -2.0).integer == -4611686018427387904
    assert f.float32("k", 1.0).integer == 1065353216
    assert f.float64("k", 1.0).type is FieldType.FLOAT64
    assert f.float32("k", 1.0).type is FieldType.FLOAT32


def test_complex64_rounds_to_single_precision():
    assert f.complex64("k", 0.1).interface == complex(0.10000000149011612, 0)


def test_uint64_wraps_to_signed_storage():
    assert f.uint64("k", 2**64 - 1).integer == -1
    assert f.uintptr("k", 2**63).integer == -(2**63)


@pytest.mark.parametrize(
    "ctor, value",
    [
        (f.int8, 128),
        (f.int8, -129),
        (f.int16, 2**15),
        (f.int32, 2**31),
        (f.int64, 2**63),
        (f.uint8, 256),
        (f.uint8, -1),
        (f.uint16, 2**16),
        (f.uint32, 2**32),
        (f.uint64, 2**64),
    ],
)
def test_out_of_range_integers_rejected(ctor, value):
    with pytest.raises(ValueError):
        ctor("k", value)


def test_duration_from_timedelta():
    assert f.duration("k", timedelta(seconds=1)).integer == 1_000_000_000
    assert f.duration("k", timedelta(microseconds=-1)).integer == -1000


def test_timestamp_before_epoch():
    got = f.timestamp("k", datetime(1969, 12, 31, 23, 59, 59, tzinfo=timezone.utc))
    assert got.integer == -1_000_000_000


def test_timestamp_respects_offset():
    tz = timezone(timedelta(hours=1))
    got = f.timestamp("k", datetime(1970, 1, 1, 1, 0, 0, tzinfo=tz))
    assert got.integer == 0
    assert got.interface is tz


def test_fields_are_immutable():
    field = f.string("k", "v")
    with pytest.raises(dataclasses.FrozenInstanceError):
        field.key = "other"
    assert dataclasses.replace(field, key="other").key == "other"