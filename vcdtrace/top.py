"""The top of a trace: identifiers, the VCD header and trace time."""

from __future__ import annotations

import calendar
import datetime as _dt
import time
from typing import TextIO, Union

from vcdtrace.identifiers import IdentifierGenerator
from vcdtrace.module import Module
from vcdtrace.value import DumperFn, ValueContext

STATIC_VCD_HEADER = "$version\n   C++ Simple VCD Logger\n$end\n"
TIMESCALE = "ns"

Duration = Union[int, _dt.timedelta]
Date = Union[int, float, _dt.datetime]


def _to_nanoseconds(duration: Duration) -> int:
    if isinstance(duration, _dt.timedelta):
        seconds = duration.days * 86_400 + duration.seconds
        return seconds * 1_000_000_000 + duration.microseconds * 1_000
    return int(duration)


def _to_epoch_seconds(date: Date) -> int:
    if isinstance(date, _dt.datetime):
        if date.tzinfo is None:
            return calendar.timegm(date.timetuple())
        return int(date.timestamp())
    return int(date)


class Top:
    """The top scope of one VCD trace.

    It hands out identifiers to every value declared below ``root``,
    writes the header, and writes value changes as trace time moves on.
    Times are nanoseconds, given as integers or ``timedelta`` objects.
    """

    def __init__(self, name: str) -> None:
        self._identifiers = IdentifierGenerator()
        self._paths: dict[str, str] = {}
        self._dumpers: dict[str, DumperFn] = {}
        self._tracepoint = 0
        self._timestamp = 0
        self.root = Module(self._register, name)

    @property
    def variables(self) -> dict[str, str]:
        """A copy of the mapping from identifiers to full variable paths."""
        return dict(self._paths)

    def _register(self, full_path: str, fn: DumperFn) -> ValueContext:
        identifier = self._identifiers.next()
        self._paths[identifier] = full_path
        self._dumpers[identifier] = fn

        def updater(new_fn: DumperFn) -> None:
            self._dumpers[identifier] = new_fn

        return ValueContext(identifier, updater)

    def _log_time(self, out: TextIO, new_time: int, force: bool) -> None:
        if force or new_time != self._tracepoint:
            out.write(f"#{new_time}\n")
            self._tracepoint = new_time

    def finalize_header(self, out: TextIO, date: Date) -> None:
        """Write the VCD header and the initial values to ``out``.

        ``date`` is a ``datetime`` or seconds since the epoch; naive
        datetimes are taken as UTC. No values can be declared afterwards.
        """
        start = time.gmtime(_to_epoch_seconds(date))
        out.write(f"$date\n   {time.asctime(start)}\n$end\n")
        out.write(f"$timescale\n   1{TIMESCALE}\n$end\n")
        out.write(STATIC_VCD_HEADER)
        self.root.finalize_header(out)
        out.write("$enddefinitions $end\n")
        self._log_time(out, 0, True)
        self._timestamp = 0
        self._time_update_core(out)

    def time_update_delta(self, out: TextIO, delta: Duration) -> None:
        """Write pending changes, then move trace time on by ``delta``."""
        self._time_update_core(out)
        self._timestamp += _to_nanoseconds(delta)
        if self._timestamp <= self._tracepoint:
            self._timestamp = self._tracepoint
        self._log_time(out, self._timestamp, False)

    def time_update_abs(self, out: TextIO, timestamp: Duration) -> None:
        """Write pending changes, then move trace time to ``timestamp``.

        A timestamp earlier than the current one leaves the time unchanged.
        """
        self._time_update_core(out)
        new_timestamp = _to_nanoseconds(timestamp)
        if new_timestamp >= self._timestamp:
            if new_timestamp <= self._tracepoint:
                new_timestamp = self._tracepoint
            self._timestamp = new_timestamp
            self._log_time(out, self._timestamp, False)

    def finalize_trace(self, out: TextIO) -> None:
        """Flush remaining changes and leave time to view the final values."""
        self.time_update_delta(out, 1)
        self.time_update_delta(out, 1_000)

    def _time_update_core(self, out: TextIO) -> None:
        first_sequence: int | None = None
        pending: dict[int, list[str]] = {}

        # First pass: unbuffered values are written directly; buffered
        # ones report the sequence of their first pending sample.
        for identifier, dump_fn in sorted(self._dumpers.items()):
            result = dump_fn(out, True)
            if result.next is not None:
                pending.setdefault(result.next, []).append(identifier)
            if result.dumped is not None and (
                first_sequence is None or first_sequence > result.dumped
            ):
                first_sequence = result.dumped

        # Second pass: write buffered samples in sequence order.
        while pending:
            sequence = min(pending)
            identifiers = list(pending[sequence])
            if first_sequence is None:
                first_sequence = sequence
            self._log_time(out, self._timestamp + (sequence - first_sequence), False)
            for identifier in identifiers:
                dump_fn = self._dumpers.get(identifier)
                if dump_fn is None:
                    continue
                result = dump_fn(out, False)
                if result.next is not None:
                    pending.setdefault(result.next, []).append(identifier)
            del pending[sequence]