"""Traced values: buffering of samples and dumping them to a VCD body."""

from __future__ import annotations

import struct
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import TextIO

from vcdtrace.formatting import ValueKind, ValueState, format_value

UNSET_SEQUENCE = (1 << 64) - 1
_UINT64_MASK = (1 << 64) - 1

_DEFAULT_BIT_SIZE = {
    ValueKind.BOOL: 1,
    ValueKind.INTEGER: 32,
    ValueKind.REAL: 64,
}


@dataclass(frozen=True)
class DumpSequence:
    """What a dumper wrote and when it wants to be called again."""

    dumped: int | None = None
    next: int | None = None


END_SEQUENCE = DumpSequence()

DumperFn = Callable[[TextIO, bool], DumpSequence]
UpdaterFn = Callable[[DumperFn], None]


@dataclass
class ValueContext:
    """The identifier of a registered value and how to replace its dumper."""

    identifier: str
    updater: UpdaterFn


AddFn = Callable[[str, str, int, DumperFn], ValueContext]


def nop_dump(out: TextIO, start: bool) -> DumpSequence:
    """A dumper that writes nothing and has nothing left to dump."""
    return END_SEQUENCE


def nop_update(fn: DumperFn) -> None:
    """An updater that ignores the dumper it is given."""


@dataclass
class SequenceCounter:
    """A shared counter ordering samples across buffered values."""

    value: int = 0

    def advance(self) -> int:
        """Step the counter forward by one and return the new value."""
        self.value += 1
        return self.value


@dataclass
class _Sample:
    state: ValueState = ValueState.UNKNOWN_X
    value: bool | int | float | None = None
    sequence: int = UNSET_SEQUENCE


class Value:
    """A signal whose changes are written to a VCD trace.

    With a trace depth of one only the latest change is kept until it is
    dumped. With a larger depth, changes are buffered together with the
    value of a shared :class:`SequenceCounter` so that they can be
    written out in order.
    """

    def __init__(
        self,
        kind: ValueKind = ValueKind.INTEGER,
        bit_size: int | None = None,
        trace_depth: int = 1,
        sequence: SequenceCounter | None = None,
        add_fn: AddFn | None = None,
        var_name: str | None = None,
        default: bool | int | float | None = None,
    ) -> None:
        if trace_depth < 1:
            raise ValueError(f"trace depth must be at least 1, got {trace_depth}")
        if trace_depth > 1 and sequence is None:
            raise ValueError("a buffered value needs a sequence counter")
        if add_fn is not None and var_name is None:
            raise ValueError("a variable name is needed to register a value")
        self.kind = kind
        self.bit_size = _DEFAULT_BIT_SIZE[kind] if bit_size is None else bit_size
        if self.bit_size < 1:
            raise ValueError(f"bit size must be positive, got {self.bit_size}")
        self.trace_depth = trace_depth
        self._sequence = sequence
        self._samples = [_Sample() for _ in range(trace_depth)]
        self._write = -1
        self._read = 0
        self._scope = ValueContext("", nop_update)

        if add_fn is not None:
            self.elaborate(add_fn, var_name)
        if default is not None:
            self._record(self._samples[0], self._coerce(default))
        elif add_fn is None:
            self._record_state(self._samples[0], ValueState.UNKNOWN_X)

    @property
    def identifier(self) -> str:
        """The VCD identifier assigned when the value was elaborated."""
        return self._scope.identifier

    # -- registration -----------------------------------------------------

    def elaborate(self, add_fn: AddFn, var_name: str) -> None:
        """Register this value under ``var_name`` using ``add_fn``."""
        context = add_fn(var_name, self.kind.var_type, self.bit_size, self.dump)
        self._scope = ValueContext(context.identifier, context.updater)

    def close(self) -> None:
        """Withdraw this value's dumper from wherever it was registered."""
        self._scope.updater(nop_dump)

    def __enter__(self) -> Value:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    # -- sampling ---------------------------------------------------------

    def _current_sequence(self) -> int:
        return UNSET_SEQUENCE if self._sequence is None else self._sequence.value

    def _record(self, sample: _Sample, value: bool | int | float) -> None:
        sample.sequence = self._current_sequence()
        sample.state = ValueState.KNOWN
        sample.value = value

    def _record_state(self, sample: _Sample, state: ValueState) -> None:
        sample.sequence = self._current_sequence()
        sample.state = state

    def _coerce(self, v: bool | int | float) -> bool | int | float:
        if self.kind is ValueKind.BOOL:
            return bool(v)
        if self.kind is ValueKind.INTEGER:
            return int(v)
        number = float(v)
        if self.bit_size == 32:
            # Single precision storage.
            number = struct.unpack("f", struct.pack("f", number))[0]
        return number

    def _latest(self) -> _Sample:
        return self._samples[self._write % self.trace_depth]

    def _advance_write(self) -> bool:
        """Move the write index on if needed; report whether a slot is free."""
        if self._write == -1 or self._latest().sequence != self._current_sequence():
            self._write += 1
        return self._write < self.trace_depth

    def set(self, v: bool | int | float) -> None:
        """Record a new known value."""
        v = self._coerce(v)
        if self.trace_depth == 1:
            sample = self._samples[0]
            if v != sample.value or sample.state is not ValueState.KNOWN:
                self._record(sample, v)
                self._write = 1
            return
        if self._write == -1 or (
            self._write < self.trace_depth
            and (
                v != self._latest().value
                or self._latest().state is not ValueState.KNOWN
            )
        ):
            if self._advance_write():
                self._record(self._latest(), v)

    def _set_state(self, state: ValueState) -> None:
        if self.trace_depth == 1:
            sample = self._samples[0]
            if sample.state is not state:
                self._record_state(sample, state)
                self._write = 1
            return
        if self._write == -1 or (
            self._write < self.trace_depth and self._latest().state is not state
        ):
            if self._advance_write():
                self._record_state(self._latest(), state)

    def unknown(self) -> None:
        """Put the value into the unknown (x) state."""
        self._set_state(ValueState.UNKNOWN_X)

    def undriven(self) -> None:
        """Put the value into the undriven (z) state."""
        self._set_state(ValueState.UNDRIVEN_Z)

    def set_uint64(self, v: int) -> None:
        """Record an unsigned 64-bit integer, converted to this value's kind."""
        self.set(int(v) & _UINT64_MASK)

    def set_double(self, v: float) -> None:
        """Record a real number, converted to this value's kind."""
        self.set(self._coerce(v))

    # -- dumping ----------------------------------------------------------

    def _write_sample(self, out: TextIO, sample: _Sample) -> None:
        out.write(
            format_value(
                self._scope.identifier,
                self.kind,
                self.bit_size,
                sample.state,
                sample.value,
            )
        )

    def dump(self, out: TextIO, start: bool) -> DumpSequence:
        """Write pending samples to ``out``.

        For a buffered value a call with ``start`` set only reports the
        sequence of the first pending sample; each later call writes one
        sample and reports the sequence of the one after it.
        """
        if self.trace_depth == 1:
            if self._write:
                self._write_sample(out, self._samples[0])
                self._write = 0
            return END_SEQUENCE

        if start:
            self._read = 0
        if self._read > self._write:
            self._write = -1
            return END_SEQUENCE
        sample = self._samples[self._read % self.trace_depth]
        if start:
            return DumpSequence(None, sample.sequence)
        self._write_sample(out, sample)
        self._read += 1
        if self._read > self._write:
            self._write = -1
            return DumpSequence(sample.sequence, None)
        following = self._samples[self._read % self.trace_depth]
        return DumpSequence(sample.sequence, following.sequence)