import signal

import pytest

from costeer.signal_condition import SignalCondition


def test_initially_unset():
    condition = SignalCondition(signal.SIGINT)
    assert condition.is_set() is False


def test_set_marks_condition():
    condition = SignalCondition(signal.SIGINT)
    condition.set(signal.SIGINT, None)
    assert condition.is_set() is True


def test_clear_resets():
    condition = SignalCondition(signal.SIGTERM)
    condition.set(signal.SIGTERM, None)
    condition.clear()
    assert condition.is_set() is False


def test_mismatched_signal_rejected():
    condition = SignalCondition(signal.SIGINT)
    with pytest.raises(ValueError):
        condition.set(signal.SIGTERM, None)
    assert condition.is_set() is False


def test_signum_kept():
    condition = SignalCondition(signal.SIGINT)
    assert condition.signum == int(signal.SIGINT)


def test_works_as_real_signal_handler():
    condition = SignalCondition(signal.SIGINT)
    previous = signal.signal(signal.SIGINT, condition.set)
    try:
        signal.raise_signal(signal.SIGINT)
    finally:
        signal.signal(signal.SIGINT, previous)
    assert condition.is_set() is True