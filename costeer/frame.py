"""Suspendable frames: a unit of work that can be resumed until it finishes."""

from __future__ import annotations

import threading
from typing import Any, Callable, Optional, Union

_EMPTY = object()

Step = Union[Callable[[], Any], Any]


class Frame:
    """A resumable unit of work together with the control data it carries.

    The step is either a generator or coroutine object, advanced by one
    ``send(None)`` per resume, or a plain callable that runs to completion
    on its first resume. A frame may have a previous frame that is handed
    control once this one finishes. It also carries an execution context,
    an id, a stop token and a semaphore that serialises its resumption.
    """

    def __init__(self, step: Step, semaphore: Optional[Any] = None) -> None:
        if not callable(step) and not hasattr(step, "send"):
            raise TypeError("a frame step must be callable or a generator")
        self._step = step
        self.semaphore = (
            semaphore if semaphore is not None else threading.BoundedSemaphore(1)
        )
        self.previous: Optional[Frame] = None
        self.context: Any = None
        self.id = 0
        self.stop_token: Any = None
        self.done = False
        self._exception: Optional[BaseException] = None
        self._value: Any = _EMPTY

    def inherit(self, previous: Frame) -> None:
        """Make previous the parent frame and take over its control data."""
        self.previous = previous
        self.id = previous.id
        self.context = previous.context
        self.semaphore = previous.semaphore
        if previous.stop_token is not None:
            self.stop_token = previous.stop_token

    def resume(self) -> Optional[Frame]:
        """Run the step until it suspends or finishes.

        Returns the frame to continue with once this one finishes (its
        previous frame, if any), or None while it is still suspended.
        """
        if self.done:
            raise RuntimeError("cannot resume a finished frame")
        try:
            if hasattr(self._step, "send"):
                self._step.send(None)
                return None
            result = self._step()
        except StopIteration as stop:
            result = stop.value
        except Exception as exc:
            self.done = True
            self.unhandled_exception(exc)
            return self.final_target()
        self.done = True
        self.return_value(result)
        return self.final_target()

    def set_exception(self, exc: Optional[BaseException]) -> None:
        """Store an exception to be raised later by rethrow."""
        self._exception = exc

    def rethrow(self) -> None:
        """Raise the stored exception, if any, and forget it."""
        exc, self._exception = self._exception, None
        if exc is not None:
            raise exc

    def unhandled_exception(self, exc: BaseException) -> None:
        """Raise at once for a root frame; otherwise keep it for the parent."""
        if self.previous is None:
            raise exc
        self.set_exception(exc)

    def final_target(self) -> Optional[Frame]:
        """The frame that receives control when this one finishes."""
        return self.previous

    def return_value(self, value: Any) -> None:
        """Record the result of the frame."""
        self._value = value

    def get_value(self) -> Any:
        """Take the result of the frame; it can be taken only once."""
        if self._value is _EMPTY:
            raise RuntimeError("frame has no value to take")
        value, self._value = self._value, _EMPTY
        return value

    def __repr__(self) -> str:
        state = "done" if self.done else "suspended"
        return f"Frame(id={self.id}, {state})"