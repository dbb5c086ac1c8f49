# mddkit

Helpers for simulation code that exchanges data with devices: packing and
unpacking signals in 8-byte CAN payloads, a minimal serial packager for
binary messages, an integer-keyed map, process priority control,
synchronization of a simulation clock with the wall clock, and a few small
utilities.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Errors and messages

Fatal conditions raise `mddkit.errors.ModelicaError` (a `RuntimeError`).
`mddkit.errors.message(text)` writes text to standard output and
`mddkit.errors.warning(text)` writes it to standard error, both exactly as
given; several functions below use `message` for progress output.

## CAN messages

```python
from mddkit.canmessage import CANMessage

msg = CANMessage(bytes(8))         # or CANMessage() for eight zero bytes
msg.pack_integer(4, 12, 1234)      # bit start 4, width 12, Intel byte order
assert msg.unpack_integer(4, 12) == 1234

msg.pack_float(8, 3.5)             # IEEE single, may start at any bit up to 32
print(msg.unpack_float(8))

msg.pack_double(2.25)              # fills all 8 bytes
print(msg.unpack_double())
print(bytes(msg))
print(msg.format(True))            # decimal and hex bytes plus the full bit vector
```

Data of a length other than 8 bytes, or an integer region that does not fit
in the 64 bits, raises `ValueError`. A float start position above 32 raises
`ModelicaError`.

## Serial packager

```python
from mddkit.packager import MinimalSerialPackager

pkg = MinimalSerialPackager(64)
pkg.add_real([1.0, 2.0])           # little-endian IEEE doubles
pkg.add_integer([7])               # little-endian 32-bit signed integers
pkg.add_string("hello")            # NUL-terminated; also prints "addString: hello"

payload = pkg.get_package()        # the whole buffer

reader = MinimalSerialPackager(64)
reader.set_package(payload)
reader.get_real(2)     # [1.0, 2.0]
reader.get_integer(1)  # [7]
reader.get_string()    # "hello"
```

`reset_pointer()` rewinds to the start, `clear()` zeroes the buffer and
rewinds, and the `buffer_size` and `position` properties report the buffer
length and current offset. Writing past the end of the buffer raises
`ModelicaError` ("Buffer overflow"); reading past it raises `ModelicaError`
("Buffer underflow").

## Integer-keyed map

```python
from mddkit.intmap import IntKeyMap

m = IntKeyMap()
m.insert(3, "three")
m.count(3)     # 1
3 in m         # True
m.lookup(3)    # "three"
m.keys()       # [3], in insertion order
len(m)         # 1
```

Looking up a missing key raises `ModelicaError`.

## Real-time synchronization

```python
from mddkit.rtsync import RTSync, get_time_ms

sync = RTSync(0.0, False)
t = 0.0
for _ in range(10):
    t += 0.1
    result = sync.synchronize(t, 1.0)   # scaling > 1 runs slower than real time
    print(result.computing_time, result.remaining_time,
          result.wall_clock_time, result.last_sim_time)

print(get_time_ms())
```

Each call returns a `SyncResult` with times in seconds. With
`should_catchup_time` true, deadlines follow an ideal schedule so that a late
step is followed by shorter waits; otherwise each period is measured from the
end of the previous step. Simulation times within 1e-4 s of the start are
treated as the first sample and not synchronized.

`RealtimeSynchronizer` offers two simpler calls, assuming a start time of
zero: `synchronize(sim_time, enable_scaling, scaling)` and
`sampled_synchronize(sim_time, last_sim_time, scaling)`; the latter raises
`ModelicaError` when `sim_time` is below `last_sim_time`.

## Process priority

```python
from mddkit.priority import ProcessPriority, Priority

with ProcessPriority() as prio:
    prio.set_priority(Priority.BELOW_NORMAL)
```

Levels run from `Priority.IDLE` (-2) to `Priority.REALTIME` (2). On Windows
the matching priority class is set and the class that was active at creation
is restored by `close()` (or on leaving the `with` block). Elsewhere the
niceness is raised or lowered by an increment (20, 10, 0 or -20), as `nice`
does, and is left as it is on close; `REALTIME` switches to the FIFO
scheduler. Raising priority usually needs elevated privileges, and a failure
raises `ModelicaError`. Values outside the range keep the default priority.

## Utilities

```python
from mddkit.utilities import load_real_parameter, get_mac_address, generate_uuid

gain = load_real_parameter("params.txt", "gain")   # reads a line like "gain = 2.5"
mac = get_mac_address(1)                            # "" if there is no such interface
uid = generate_uuid()                               # random UUID, 36 characters
```

`load_real_parameter` raises `ModelicaError` when the file cannot be opened
or the name is not found. `get_mac_address` counts interfaces from 1, joins
the bytes with `-`, and skips the loopback interface `lo` except on Windows
(where the hex digits are upper case).

`mddkit.paths` has `last_file_name(pathname)` (the part after the last `/` or
`\`) and `msleep(ms)`.

## Softing CAN tables

`mddkit.softing` holds data for configuring Softing CANL2 interface cards:
`bit_timing(baud_rate)` returns a `BitTiming` for the baud rate enumeration
values 1 (1 MBaud) to 7 (10 kBaud), `ObjectType` and `object_type_name`
describe CAN object directions, and `descriptive_error(code, caller_function)`
turns a CANL2 return code into a readable message.

## What this package does not do

It does not open CAN channels or talk to any interface card, serial port or
network bus itself; the CAN and Softing modules only build payloads, timing
values and error texts. There is no command-line program.