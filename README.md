# costeer

Building blocks for a cooperative scheduler that resumes suspended frames,
plus small networking value types. The package uses only the standard library.

## What is inside

- `costeer.errors`: `CancellationErrc` (`CANCELLATION_REQUESTED`,
  `NO_FRAME_REGISTERED`), `CancellationError` (its `code` attribute holds the
  reason) and `cancellation_message(code)`, which returns `"unknown"` for codes
  it does not know.
- `costeer.ring_container`: `RingContainer(capacity)`, a fixed-capacity FIFO
  ring with `push_back`, `pop_front`, `front`, `back`, `len()`, truth testing
  and iteration. Pushing onto a full ring raises `OverflowError`. Reading from
  an empty ring raises `IndexError`.
- `costeer.workstealing`: `RingBuffer`, a power-of-two ring addressed by
  unbounded indices, and `WorkStealingDeque`. The owner uses `push` and
  `try_pop`, which behave as a stack. Other workers use `try_steal`, which takes
  the oldest item. Both return `None` when the deque is empty. The buffer
  doubles in size when it fills.
- `costeer.signal_condition`: `SignalCondition(signum)`. Its `set(signum, frame)`
  method has the signature of a `signal` handler and marks the signal as
  delivered. `is_set()` and `clear()` poll and reset it.
- `costeer.address_v4`: `AddressV4` and `make_address_v4`. The function
  accepts an integer, four bytes or dotted-decimal text. Addresses support
  comparison, hashing, `str()`, `to_uint()`, `to_bytes()` and the
  `is_unspecified` / `is_loopback` / `is_multicast` tests. The class methods
  `any()`, `loopback()` and `broadcast()` build the well-known addresses.
- `costeer.address_v6`: `AddressV6` and `make_address_v6`. The function
  accepts text (optionally with `%scope`) or sixteen bytes, with an optional
  scope. Addresses have a settable `scope_id` and support comparison, hashing
  and `str()`. They classify themselves with the link-local, site-local,
  unique-local, v4-mapped and multicast-scope tests.
- `costeer.options`: socket option objects. `Broadcast`, `Debug`, `Error`,
  `DoNotRoute`, `KeepAlive`, `Linger`, `OutOfBandInline`, `ReceiveBufferSize`,
  `ReceiveLowWatermark`, `ReuseAddress`, `SendBufferSize`, `SendLowWatermark`,
  `NoDelay` and `V6Only` are fixed-level options. `UnicastHops`,
  `MulticastHops`, `EnableLoopback`, `JoinGroup`, `LeaveGroup` and
  `OutboundInterface` depend on the address family. Each option reports
  `level(protocol)`, `name(protocol)`, encoded `data(protocol)` and
  `size(protocol)`. The `protocol` argument may be an address family number or
  any object with a `family` attribute or method. `BasicOption.from_data(raw)`
  loads a value returned by `getsockopt`.
- `costeer.services`: `Latch` and five wait services: `FlagService`,
  `FutureService`, `LatchService`, `YieldService` and `EnqueueService`. Each
  service is built around a context that has a `push_frame_to_executor(frame)`
  method. `post_frame` parks a frame, and `commit_frame` hands every frame
  whose condition now holds back to the context. A flag is set, a future is
  done, a latch is open, or a value fits below the queue bound; yielded frames
  are always ready.
- `costeer.frame`: `Frame(step, semaphore=None)`, one resumable unit of work.
  The step is a generator or coroutine object, advanced once per `resume()`,
  or a callable that runs to completion. `inherit` takes over a parent's
  control data. `get_value` takes the result once. Exceptions raise at once
  from a root frame and are otherwise kept for `rethrow`.
- `costeer.executor`: `FrameExecutor(concurrency=0)`. `push_frame` queues a
  frame. `dispatch_frame` either resumes the queued frames in place (no
  workers) or deals them round-robin to worker threads, and idle workers steal
  from each other. `request_launch` and `request_stop` start and stop the
  workers, and the executor also works as a context manager. Exceptions raised
  inside worker threads are collected in `errors`.

## Examples

```python
from costeer.address_v4 import make_address_v4

addr = make_address_v4("127.0.0.1")
assert addr.is_loopback()
print(addr)  # 127.0.0.1
```

```python
from costeer.ring_container import RingContainer

ring = RingContainer(4)
ring.push_back(1)
ring.push_back(2)
assert ring.front() == 1
ring.pop_front()
assert len(ring) == 1
```

```python
from costeer.executor import FrameExecutor
from costeer.frame import Frame

executor = FrameExecutor()  # no worker threads: frames run inline
frame = Frame(lambda: 42)
executor.push_frame(frame)
executor.dispatch_frame()
assert frame.get_value() == 42
```

```python
from costeer.services import Latch, LatchService


class Context:
    def __init__(self):
        self.ready = []

    def push_frame_to_executor(self, frame):
        self.ready.append(frame)


context = Context()
service = LatchService(context)
latch = Latch(1)
service.post_frame("waiting frame", latch)
service.commit_frame()
assert context.ready == []
latch.count_down()
service.commit_frame()
assert context.ready == ["waiting frame"]
```

## What it does not do

The package provides parts, not a complete runtime. There is no event loop or
execution context that ties the executor and the services together. There are
no `async`/`await` helpers such as spawning, `when_all` or `when_any`, and no
channels, mutexes, timers or signal registration built on top of them. The
address and option types describe sockets but do not open them. Nothing here
accepts connections or performs network I/O or remote procedure calls.

## Running the tests

```
pip install -e .[test]
pytest
```