"""An example trace of clocks, a sine wave and a small memory bus."""

from __future__ import annotations

import argparse
import math
from collections.abc import Sequence
from typing import TextIO

from vcdtrace.formatting import ValueKind
from vcdtrace.module import Module
from vcdtrace.top import Top
from vcdtrace.value import Value

WAVE_FREQ_HZ = 1e6
WAVE_AMPL_V = 4.5
WAVE_BIAS_V = 5.0
CYCLES = 10000
TICK_NS = 1
MEMORY_WORDS = 8192
DEFAULT_OUTPUT = "signals.vcd"

_UINT32_MASK = 0xFFFFFFFF
_UINT16_MASK = 0xFFFF


def write_example_trace(out: TextIO, cycles: int = CYCLES) -> None:
    """Write a VCD trace of ``cycles`` one-nanosecond ticks to ``out``."""
    if cycles < 0:
        raise ValueError(f"cycle count must not be negative, got {cycles}")

    clock1 = Value(ValueKind.BOOL)
    clock2 = Value(ValueKind.BOOL)
    sine_wave = Value(ValueKind.REAL)
    addr = Value(ValueKind.INTEGER, 16)
    data = Value(ValueKind.INTEGER, 32)
    burst = Value(ValueKind.INTEGER, 4)
    wr_rd_n = Value(ValueKind.BOOL)

    dumper = Top("root")

    digital = Module(dumper.root, "digital")
    bus = Module(digital, "bus")
    analog = Module(dumper.root, "analog")

    digital.elaborate(clock1, "clk")
    analog.elaborate(sine_wave, "wave")
    bus.elaborate(clock2, "clk")
    bus.elaborate(addr, "addr")
    bus.elaborate(data, "data")
    bus.elaborate(burst, "burst")
    bus.elaborate(wr_rd_n, "wr_strb")

    dumper.finalize_header(out, 0)

    memory = [0] * MEMORY_WORDS
    mem_addr = 0
    burst.set(1)

    for i in range(cycles):
        clock1.set(i & 0x1)
        clock2.set((i >> 1) & 0x1)

        seconds = i * 1e-9 * TICK_NS
        sine_wave.set(
            WAVE_BIAS_V + WAVE_AMPL_V * math.sin(seconds * WAVE_FREQ_HZ * 2.0 * math.pi)
        )

        phase = i % 100
        if phase == 20:
            wr_rd_n.set(True)
            mem_addr = i % MEMORY_WORDS
            memory[mem_addr] = (i * 0x98764321 + 0x33442677) & _UINT32_MASK
        if phase == 21:
            wr_rd_n.set(False)
        if phase == 20:
            addr.set((i % MEMORY_WORDS) & _UINT16_MASK)
        addr.set(mem_addr & _UINT16_MASK)
        data.set(memory[mem_addr])

        dumper.time_update_abs(out, TICK_NS * i)


def main(argv: Sequence[str] | None = None) -> int:
    """Write the example trace to the file named on the command line."""
    parser = argparse.ArgumentParser(
        prog="signals", description="Write an example VCD trace."
    )
    parser.add_argument(
        "output",
        nargs="?",
        default=DEFAULT_OUTPUT,
        help=f"file to write the trace to (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "--cycles",
        type=int,
        default=CYCLES,
        help=f"number of clock ticks to trace (default: {CYCLES})",
    )
    args = parser.parse_args(argv)
    if args.cycles < 0:
        parser.error("the cycle count must not be negative")

    with open(args.output, "w", encoding="ascii", newline="\n") as out:
        write_example_trace(out, args.cycles)
    return 0