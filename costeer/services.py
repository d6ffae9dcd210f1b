"""Services that park suspended frames until a condition holds, then reschedule them."""

from __future__ import annotations

import threading
from concurrent.futures import Future
from dataclasses import dataclass
from typing import Any, Callable, ClassVar, ContextManager, Protocol


class SchedulingContext(Protocol):
    """What a service needs from its execution context."""

    def push_frame_to_executor(self, frame: Any) -> None: ...


class Latch:
    """A single-use downward counter that opens once it reaches zero."""

    def __init__(self, count: int) -> None:
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError("latch count must be an integer")
        if count < 0:
            raise ValueError("latch count must not be negative")
        self._count = count
        self._lock = threading.Lock()

    @property
    def count(self) -> int:
        """The number of arrivals still expected."""
        with self._lock:
            return self._count

    def count_down(self, n: int = 1) -> None:
        """Decrease the counter by n."""
        if isinstance(n, bool) or not isinstance(n, int):
            raise TypeError("count_down amount must be an integer")
        with self._lock:
            if n < 0 or n > self._count:
                raise ValueError("count_down amount out of range")
            self._count -= n

    def try_wait(self) -> bool:
        """Return whether the counter has reached zero, without blocking."""
        with self._lock:
            return self._count == 0


@dataclass
class _Parked:
    frame: Any
    ready: Callable[[], bool]


class _PollingService:
    """Keeps parked frames and reschedules those whose condition is met.

    Conditions are tested newest-first; the frames that pass are handed to
    the context in the order they were posted.
    """

    overlap_arity: ClassVar[int] = 1

    def __init__(self, context: SchedulingContext) -> None:
        self.context = context
        self._lock = threading.Lock()
        self._parked: list[_Parked] = []

    def _park(self, frame: Any, ready: Callable[[], bool]) -> None:
        with self._lock:
            self._parked.append(_Parked(frame, ready))

    def commit_frame(self) -> None:
        """Reschedule every parked frame whose condition now holds."""
        outstanding: list[Any] = []
        with self._lock:
            still_parked: list[_Parked] = []
            for entry in reversed(self._parked):
                if entry.ready():
                    outstanding.append(entry.frame)
                else:
                    still_parked.append(entry)
            still_parked.reverse()
            self._parked = still_parked
        # Resume outside the lock: pushing to the executor takes its own locks.
        for frame in reversed(outstanding):
            self.context.push_frame_to_executor(frame)

    def __len__(self) -> int:
        with self._lock:
            return len(self._parked)


class FlagService(_PollingService):
    """Resumes frames once their flag (e.g. a threading.Event) is set."""

    def __init__(self, context: SchedulingContext) -> None:
        super().__init__(context)

    def post_frame(self, frame: Any, flag: Any) -> None:
        """Park a frame until flag.is_set() is true."""
        self._park(frame, flag.is_set)

    def commit_frame(self) -> None:
        """Reschedule frames whose flag is set."""
        super().commit_frame()


class FutureService(_PollingService):
    """Resumes frames once their future has a result or exception."""

    def __init__(self, context: SchedulingContext) -> None:
        super().__init__(context)

    def post_frame(self, frame: Any, future: Future) -> None:
        """Park a frame until the future is done."""
        self._park(frame, future.done)

    def commit_frame(self) -> None:
        """Reschedule frames whose future is done."""
        super().commit_frame()


class LatchService(_PollingService):
    """Resumes frames once their latch has counted down to zero."""

    def __init__(self, context: SchedulingContext) -> None:
        super().__init__(context)

    def post_frame(self, frame: Any, latch: Latch) -> None:
        """Park a frame until the latch opens."""
        self._park(frame, latch.try_wait)

    def commit_frame(self) -> None:
        """Reschedule frames whose latch is open."""
        super().commit_frame()


class YieldService:
    """Gives up the thread: every posted frame is rescheduled on the next commit.

    Frames are rescheduled newest first.
    """

    overlap_arity: ClassVar[int] = 0

    def __init__(self, context: SchedulingContext) -> None:
        self.context = context
        self._lock = threading.Lock()
        self._parked: list[Any] = []

    def post_frame(self, frame: Any) -> None:
        """Park a frame until the next commit."""
        with self._lock:
            self._parked.append(frame)

    def commit_frame(self) -> None:
        """Reschedule all parked frames."""
        with self._lock:
            outstanding, self._parked = self._parked, []
        for frame in reversed(outstanding):
            self.context.push_frame_to_executor(frame)

    def __len__(self) -> int:
        with self._lock:
            return len(self._parked)


def _append(queue: Any, value: Any) -> None:
    push = getattr(queue, "push_back", None)
    if push is None:
        push = queue.append
    push(value)


class EnqueueService(_PollingService):
    """Resumes producers once their value fits into a bounded queue."""

    overlap_arity: ClassVar[int] = 4

    def __init__(self, context: SchedulingContext) -> None:
        super().__init__(context)

    def post_frame(
        self,
        frame: Any,
        queue: Any,
        value: Any,
        mutex: ContextManager[Any],
        bound: int,
    ) -> None:
        """Park a producer until value can be appended to queue below bound."""

        def try_enqueue() -> bool:
            with mutex:
                if len(queue) < bound:
                    _append(queue, value)
                    return True
                return False

        self._park(frame, try_enqueue)

    def commit_frame(self) -> None:
        """Enqueue what fits and reschedule those producers."""
        super().commit_frame()