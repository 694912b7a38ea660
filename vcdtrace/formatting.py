"""Formatting of single value changes in the VCD body."""

from __future__ import annotations

import enum


class ValueState(enum.Enum):
    """The state of a traced value beyond its ordinary value."""

    UNKNOWN_X = "x"
    UNDRIVEN_Z = "z"
    KNOWN = "known"


class ValueKind(enum.Enum):
    """How a traced value is represented in the trace."""

    BOOL = "bool"
    INTEGER = "integer"
    REAL = "real"

    @property
    def var_type(self) -> str:
        """The VCD ``$var`` type used in the header."""
        return "real" if self is ValueKind.REAL else "wire"


def _binary_digits(value: int, bit_size: int) -> str:
    bits = format(value & ((1 << bit_size) - 1), f"0{bit_size}b")
    # Collapse the leading run of identical bits down to a single bit.
    lead = bits[0]
    return lead + bits.lstrip(lead)


def format_value(
    identifier: str,
    kind: ValueKind,
    bit_size: int,
    state: ValueState,
    value: bool | int | float | None,
) -> str:
    """Return the VCD line recording ``value`` for ``identifier``."""
    if kind is ValueKind.REAL:
        number = 0.0 if value is None else float(value)
        return "r%.16g %s\n" % (number, identifier)
    if kind is ValueKind.BOOL:
        if state is ValueState.UNKNOWN_X:
            return f"x{identifier}\n"
        if state is ValueState.UNDRIVEN_Z:
            return f"z{identifier}\n"
        return f"{'1' if value else '0'}{identifier}\n"
    if bit_size < 1:
        raise ValueError(f"bit size must be positive, got {bit_size}")
    if state is ValueState.UNKNOWN_X:
        digits = "x"
    elif state is ValueState.UNDRIVEN_Z:
        digits = "z"
    else:
        digits = _binary_digits(int(value or 0), bit_size)
    return f"b{digits} {identifier}\n"