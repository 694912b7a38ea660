import struct

import pytest

from vcdtrace.formatting import ValueKind, ValueState, format_value


def as_float32(number):
    return struct.unpack("f", struct.pack("f", number))[0]


@pytest.mark.parametrize(
    "bit_size, value, expected",
    [
        (9, 0x155, "b101010101 vv\n"),
        (9, 0x0AA, "b010101010 vv\n"),
        (15, 0x4242, "b100001001000010 vv\n"),
        (11, 0x355, "b01101010101 vv\n"),
        (17, 0x1DEAD, "b101111010101101 vv\n"),
        (17, 0x0, "b0 vv\n"),
        (9, 0x11, "b010001 vv\n"),
        (11, 0x21, "b0100001 vv\n"),
        (9, 1, "b01 vv\n"),
        (9, 4, "b0100 vv\n"),
    ],
)
def test_integer_values(bit_size, value, expected):
    assert format_value("vv", ValueKind.INTEGER, bit_size, ValueState.KNOWN, value) == expected


def test_integer_unknown_and_undriven():
    assert format_value("vv", ValueKind.INTEGER, 9, ValueState.UNKNOWN_X, 0) == "bx vv\n"
    assert format_value("vv", ValueKind.INTEGER, 9, ValueState.UNDRIVEN_Z, 0) == "bz vv\n"


def test_integer_all_ones_compresses_to_one_bit():
    assert format_value("!", ValueKind.INTEGER, 8, ValueState.KNOWN, 0xFF) == "b1 !\n"


def test_integer_negative_uses_low_bits():
    assert format_value("!", ValueKind.INTEGER, 4, ValueState.KNOWN, -2) == "b10 !\n"


def test_integer_invalid_bit_size():
    with pytest.raises(ValueError):
        format_value("vv", ValueKind.INTEGER, 0, ValueState.KNOWN, 1)


@pytest.mark.parametrize(
    "state, value, expected",
    [
        (ValueState.UNKNOWN_X, False, "xvv\n"),
        (ValueState.KNOWN, True, "1vv\n"),
        (ValueState.KNOWN, False, "0vv\n"),
        (ValueState.UNDRIVEN_Z, False, "zvv\n"),
    ],
)
def test_bool_values(state, value, expected):
    assert format_value("vv", ValueKind.BOOL, 1, state, value) == expected


def test_real_values():
    assert format_value("vv", ValueKind.REAL, 64, ValueState.KNOWN, 0.001) == "r0.001 vv\n"
    assert format_value("vv", ValueKind.REAL, 32, ValueState.KNOWN, 1e16) == "r1e+16 vv\n"


def test_real_float32_value():
    line = format_value("vv", ValueKind.REAL, 32, ValueState.KNOWN, as_float32(0.001))
    assert line == "r0.001000000047497451 vv\n"