"""A flag raised from a signal handler and polled by the scheduler."""

from __future__ import annotations

from types import FrameType


class SignalCondition:
    """Records that a particular signal has arrived."""

    def __init__(self, signum: int) -> None:
        self.signum = int(signum)
        self._flag = False

    def set(self, signum: int, frame: FrameType | None = None) -> None:
        """Signal-handler entry point: mark the signal as delivered."""
        if int(signum) != self.signum:
            raise ValueError(
                f"signal {int(signum)} delivered to condition for {self.signum}"
            )
        self._flag = True

    def is_set(self) -> bool:
        """Return whether the signal has been delivered since the last clear."""
        return self._flag

    def clear(self) -> None:
        """Reset the condition."""
        self._flag = False