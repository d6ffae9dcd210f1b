import threading

import pytest

from costeer.frame import Frame


def _counting(log, result):
    log.append("start")
    yield
    log.append("middle")
    yield
    log.append("end")
    return result


def test_generator_frame_runs_until_return():
    log = []
    frame = Frame(_counting(log, "result"))
    assert frame.resume() is None
    assert frame.done is False
    assert frame.resume() is None
    assert frame.resume() is None
    assert frame.done is True
    assert log == ["start", "middle", "end"]
    assert frame.get_value() == "result"


def test_value_can_be_taken_once():
    frame = Frame(lambda: 42)
    frame.resume()
    assert frame.get_value() == 42
    with pytest.raises(RuntimeError):
        frame.get_value()


def test_callable_frame_finishes_on_first_resume():
    frame = Frame(lambda: "done")
    assert frame.resume() is None
    assert frame.done is True
    assert frame.get_value() == "done"


def test_resuming_finished_frame_raises():
    frame = Frame(lambda: None)
    frame.resume()
    with pytest.raises(RuntimeError):
        frame.resume()


def test_non_callable_step_rejected():
    with pytest.raises(TypeError):
        Frame(3)


def test_inherit_copies_control_data():
    parent = Frame(lambda: None)
    parent.id = 7
    parent.context = object()
    parent.stop_token = threading.Event()
    child = Frame(lambda: None)
    child.inherit(parent)
    assert child.previous is parent
    assert child.id == parent.id
    assert child.context is parent.context
    assert child.semaphore is parent.semaphore
    assert child.stop_token is parent.stop_token
    assert child.final_target() is parent


def test_inherit_keeps_own_stop_token_when_parent_has_none():
    parent = Frame(lambda: None)
    child = Frame(lambda: None)
    token = threading.Event()
    child.stop_token = token
    child.inherit(parent)
    assert child.stop_token is token


def test_finished_child_hands_control_to_parent():
    parent = Frame(lambda: None)
    child = Frame(lambda: 1)
    child.inherit(parent)
    assert child.resume() is parent


def test_root_frame_reraises_unhandled_exception():
    def fail():
        raise KeyError("boom")

    frame = Frame(fail)
    with pytest.raises(KeyError):
        frame.resume()
    assert frame.done is True


def test_child_frame_stores_exception_for_rethrow():
    def fail():
        raise ValueError("bad")

    parent = Frame(lambda: None)
    child = Frame(fail)
    child.inherit(parent)
    assert child.resume() is parent
    with pytest.raises(ValueError, match="bad"):
        child.rethrow()
    child.rethrow()
    assert child.done is True


def test_set_exception_then_rethrow():
    frame = Frame(lambda: None)
    frame.set_exception(OSError("io"))
    with pytest.raises(OSError):
        frame.rethrow()


def test_unhandled_exception_with_parent_does_not_raise_immediately():
    parent = Frame(lambda: None)
    child = Frame(lambda: None)
    child.inherit(parent)
    child.unhandled_exception(RuntimeError("later"))
    with pytest.raises(RuntimeError, match="later"):
        child.rethrow()


def test_return_value_none_is_a_value():
    frame = Frame(lambda: None)
    frame.resume()
    assert frame.get_value() is None
    with pytest.raises(RuntimeError):
        frame.get_value()