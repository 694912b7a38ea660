# vcdtrace

`vcdtrace` records the values of signals in a simulation or model and
writes them out as a Value Change Dump (VCD) file. Any waveform viewer that
reads VCD, such as GTKWave, can display the result.

## How it fits together

- `vcdtrace.top.Top` is one trace file. Its `root` attribute is the top
  module of the design hierarchy. `finalize_header(out, date)` writes the
  VCD header and the initial values; `date` is a `datetime` (naive ones are
  taken as UTC) or seconds since the epoch. Trace time, in nanoseconds, moves
  on with `time_update_abs(out, timestamp)` or `time_update_delta(out, delta)`,
  each taking an integer or a `timedelta`. A timestamp earlier than the
  current one leaves the time unchanged. `finalize_trace(out)` flushes what
  is left and adds a microsecond at the end for viewing the final values.
- `vcdtrace.module.Module` is one `$scope module` in the hierarchy. It is
  made from a parent module, `Module(parent, "name")`, or with
  `parent.get_module("name")`. Signals are placed in a module with
  `elaborate(var, "name")`.
- `vcdtrace.value.Value` is one traced signal, of kind `ValueKind.BOOL`,
  `ValueKind.INTEGER` (a bus of any bit width, 32 by default) or
  `ValueKind.REAL`. Drive it with `set(v)`, `set_uint64(v)` or
  `set_double(v)`, or put it in the unknown (`x`) or undriven (`z`) state
  with `unknown()` and `undriven()`. With `trace_depth` above one and a
  shared `SequenceCounter`, a value buffers several samples, so that changes
  made between two time updates are spread out and written in sequence
  order. `close()`, or leaving a `with` block, withdraws the value from the
  trace.
- `vcdtrace.identifiers.IdentifierGenerator` hands out the short VCD
  identifiers (`!`, `"`, ..., `z`, `!!`, ...) given to each signal. It can
  be used as an iterator.
- `vcdtrace.formatting.format_value` formats a single value change line.

Signals must all be placed in the hierarchy before the header is written;
the VCD format does not allow signals to be added later.

Only what changed is written at each time step, and integer values are
written with their leading repeated bits compressed, as VCD permits.

```python
import io

from vcdtrace.formatting import ValueKind
from vcdtrace.module import Module
from vcdtrace.top import Top
from vcdtrace.value import Value

flag = Value(ValueKind.BOOL)
top = Top("root")
Module(top.root, "cpu").elaborate(flag, "flag")

out = io.StringIO()
top.finalize_header(out, 0)
flag.set(True)
top.time_update_abs(out, 10)
top.finalize_trace(out)
```

## Example trace

The package ships with an example that traces two clocks, a sine wave and a
small memory bus over one-nanosecond cycles (10,000 by default):

```
vcdtrace-signals waves.vcd
vcdtrace-signals waves.vcd --cycles 500
```

With no file name it writes `signals.vcd` in the current directory.

The same trace can be written from Python into any text stream:

```python
import io

from vcdtrace.signals import write_example_trace

buffer = io.StringIO()
write_example_trace(buffer, 100)
print(buffer.getvalue().splitlines()[0])   # $date
```

## What it does not do

`vcdtrace` only writes VCD traces. It does not read or parse VCD files,
and it does not display waveforms; use a waveform viewer for that.

## Running the tests

Install the package with its `test` extra and run `pytest` in the
project directory.