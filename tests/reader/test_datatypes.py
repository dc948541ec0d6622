import math
import struct

import pytest

from inknote.elements.note import RGBA
from inknote.reader.datatypes import ArrayKind, decode_array, decode_color


def test_float_array():
    blob = struct.pack("<3f", 1.5, -2.0, 0.25)

    assert decode_array(blob, ArrayKind.FLOAT32) == [1.5, -2.0, 0.25]


def test_int_array_is_signed():
    blob = struct.pack("<3i", 3, -1, 2**31 - 1)

    assert decode_array(blob, ArrayKind.INT32) == [3.0, -1.0, float(2**31 - 1)]


@pytest.mark.parametrize("remainder", [0, 1, 2, 3])
def test_incomplete_element_is_ignored(remainder):
    blob = struct.pack("<2i", 7, 8) + b"\xff" * remainder

    assert decode_array(blob, ArrayKind.INT32) == [7.0, 8.0]


def test_empty_blob():
    assert decode_array(b"", ArrayKind.FLOAT32) == []
    assert decode_array(b"\x01\x02", ArrayKind.FLOAT32) == []


def test_nan_survives_decoding():
    values = decode_array(struct.pack("<f", float("nan")), ArrayKind.FLOAT32)

    assert len(values) == 1 and math.isnan(values[0])


def test_zero_is_opaque_black():
    assert decode_color(0) == RGBA(0, 0, 0, 1.0)


def test_little_endian_rgba():
    # bytes in memory: r=0x10 g=0x20 b=0x30 a=0xff
    color = decode_color(0xFF302010)

    assert (color.r, color.g, color.b) == (0x10, 0x20, 0x30)
    assert color.a == 1.0


def test_negative_int32_color():
    # same word as above read as a signed int32
    assert decode_color(0xFF302010 - 2**32) == decode_color(0xFF302010)


def test_alpha_zero_reads_bytes_reversed():
    # red byte set, alpha byte 0
    assert decode_color(0x000000FF) == RGBA(0, 0, 0, 1.0)

    # r=0x11 g=0x22 b=0x33 a=0, read back to front
    color = decode_color(0x00332211)
    assert (color.r, color.g, color.b) == (0x00, 0x33, 0x22)
    assert color.a == pytest.approx(0x11 / 255)


def test_black_with_full_alpha():
    assert decode_color(0xFF000000) == RGBA(0, 0, 0, 1.0)


def test_hex_and_alpha():
    color = RGBA(255, 128, 0, 0.5)

    assert color.hex == "#ff8000"
    assert color.alpha == 0.5
