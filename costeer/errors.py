"""Cancellation error codes and the exception that carries them."""

from __future__ import annotations

import enum


class CancellationErrc(enum.IntEnum):
    """Reasons an asynchronous operation can be cancelled."""

    CANCELLATION_REQUESTED = 1
    NO_FRAME_REGISTERED = 2


_MESSAGES = {
    CancellationErrc.CANCELLATION_REQUESTED: "cancellation_requested at waiting site",
    CancellationErrc.NO_FRAME_REGISTERED: "no_frame_registered at cancelling site",
}


def cancellation_message(code: int) -> str:
    """Return the human-readable message for a cancellation code."""
    try:
        return _MESSAGES[CancellationErrc(int(code))]
    except ValueError:
        return "unknown"


class CancellationError(Exception):
    """Raised when a suspended operation is cancelled or cannot be cancelled."""

    def __init__(self, errc: CancellationErrc | int) -> None:
        try:
            code: CancellationErrc | int = CancellationErrc(int(errc))
        except ValueError:
            code = int(errc)
        self.code = code
        super().__init__(cancellation_message(code))