"""Distributes frames to worker threads through work-stealing deques."""

from __future__ import annotations

import collections
import threading
from typing import Optional

from costeer.frame import Frame
from costeer.workstealing import WorkStealingDeque

_IDLE_WAIT = 0.0005


def _resume_to(frame: Optional[Frame]) -> None:
    """Resume a frame and every frame it hands control to, one at a time."""
    while frame is not None:
        with frame.semaphore:
            frame = frame.resume()


class FrameExecutor:
    """Runs frames either inline or on a pool of work-stealing threads.

    Frames are first pushed to a shared remote queue. ``dispatch_frame``
    drains that queue: with no worker threads each frame is resumed in
    place, otherwise frames are dealt round-robin to the workers' local
    deques, from which idle workers also steal.
    """

    def __init__(self, concurrency: int = 0) -> None:
        if isinstance(concurrency, bool) or not isinstance(concurrency, int):
            raise TypeError("concurrency must be an integer")
        if concurrency < 0:
            raise ValueError("concurrency must not be negative")
        self._concurrency = concurrency
        self._remote: collections.deque[Frame] = collections.deque()
        self._locals = [WorkStealingDeque() for _ in range(concurrency)]
        self._rotation = 0
        self._threads: list[threading.Thread] = []
        self._stop = threading.Event()
        self.errors: list[BaseException] = []

    @property
    def concurrency(self) -> int:
        """Number of worker threads."""
        return self._concurrency

    @property
    def running(self) -> bool:
        """Whether the worker threads are started."""
        return bool(self._threads)

    def push_frame(self, frame: Frame) -> None:
        """Submit a frame to the remote queue to be resumed later."""
        self._remote.append(frame)

    def dispatch_frame(self) -> None:
        """Move every frame from the remote queue to its executing place."""
        while True:
            try:
                frame = self._remote.popleft()
            except IndexError:
                return
            if self._concurrency:
                self._push_local(frame)
            else:
                _resume_to(frame)

    def request_launch(self) -> None:
        """Start the worker threads."""
        if not self._concurrency or self._threads:
            return
        self._stop = threading.Event()
        for index in range(self._concurrency):
            thread = threading.Thread(
                target=self._work,
                args=(index, self._stop),
                name=f"frame-worker-{index}",
                daemon=True,
            )
            self._threads.append(thread)
            thread.start()

    def request_stop(self) -> None:
        """Stop the worker threads and wait for them to finish."""
        if not self._threads:
            return
        self._stop.set()
        for thread in self._threads:
            thread.join()
        self._threads.clear()

    def __enter__(self) -> FrameExecutor:
        self.request_launch()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.request_stop()

    def _push_local(self, frame: Frame) -> None:
        self._locals[self._rotation].push(frame)
        self._rotation = (self._rotation + 1) % self._concurrency

    def _try_steal(self, own: int) -> Optional[Frame]:
        for victim, deque in enumerate(self._locals):
            if victim == own:
                continue
            frame = deque.try_steal()
            if frame is not None:
                return frame
        return None

    def _work(self, index: int, stop: threading.Event) -> None:
        local = self._locals[index]
        while not stop.is_set():
            frame = local.try_pop()
            if frame is None:
                frame = self._try_steal(index)
            if frame is None:
                stop.wait(_IDLE_WAIT)
                continue
            try:
                _resume_to(frame)
            except Exception as exc:
                self.errors.append(exc)