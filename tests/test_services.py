import threading
from collections import deque
from concurrent.futures import Future

import pytest

from costeer.ring_container import RingContainer
from costeer.services import (
    EnqueueService,
    FlagService,
    FutureService,
    Latch,
    LatchService,
    YieldService,
)


class RecordingContext:
    def __init__(self):
        self.pushed = []

    def push_frame_to_executor(self, frame):
        self.pushed.append(frame)


@pytest.fixture
def context():
    return RecordingContext()


def test_latch_opens_at_zero():
    latch = Latch(2)
    assert not latch.try_wait()
    latch.count_down()
    assert latch.count == 1
    assert not latch.try_wait()
    latch.count_down()
    assert latch.try_wait()


def test_latch_rejects_over_count_down():
    latch = Latch(1)
    with pytest.raises(ValueError):
        latch.count_down(2)
    assert latch.count == 1


def test_latch_rejects_negative_count():
    with pytest.raises(ValueError):
        Latch(-1)


def test_flag_service_resumes_only_set_flags(context):
    service = FlagService(context)
    ready, waiting = threading.Event(), threading.Event()
    service.post_frame("ready", ready)
    service.post_frame("waiting", waiting)
    ready.set()
    service.commit_frame()
    assert context.pushed == ["ready"]
    assert len(service) == 1
    waiting.set()
    service.commit_frame()
    assert context.pushed == ["ready", "waiting"]
    assert len(service) == 0


def test_flag_service_resumes_in_posting_order(context):
    service = FlagService(context)
    flag = threading.Event()
    flag.set()
    for name in ["a", "b", "c"]:
        service.post_frame(name, flag)
    service.commit_frame()
    assert context.pushed == ["a", "b", "c"]


def test_future_service_waits_for_result(context):
    service = FutureService(context)
    future = Future()
    service.post_frame("frame", future)
    service.commit_frame()
    assert context.pushed == []
    future.set_result(7)
    service.commit_frame()
    assert context.pushed == ["frame"]


def test_future_service_resumes_on_exception(context):
    service = FutureService(context)
    future = Future()
    future.set_exception(RuntimeError("boom"))
    service.post_frame("frame", future)
    service.commit_frame()
    assert context.pushed == ["frame"]


def test_latch_service(context):
    service = LatchService(context)
    latch = Latch(1)
    service.post_frame("frame", latch)
    service.commit_frame()
    assert context.pushed == []
    latch.count_down()
    service.commit_frame()
    assert context.pushed == ["frame"]
    assert len(service) == 0


def test_yield_service_resumes_everything_newest_first(context):
    service = YieldService(context)
    for name in ["a", "b", "c"]:
        service.post_frame(name)
    assert len(service) == 3
    service.commit_frame()
    assert context.pushed == ["c", "b", "a"]
    assert len(service) == 0


def test_yield_service_empty_commit(context):
    service = YieldService(context)
    service.commit_frame()
    assert context.pushed == []


def test_enqueue_service_respects_bound(context):
    service = EnqueueService(context)
    queue = deque()
    mutex = threading.Lock()
    service.post_frame("a", queue, 1, mutex, 2)
    service.post_frame("b", queue, 2, mutex, 2)
    service.post_frame("c", queue, 3, mutex, 2)
    service.commit_frame()
    assert len(queue) == 2
    assert list(queue) == [3, 2]
    assert context.pushed == ["b", "c"]
    assert len(service) == 1

    queue.popleft()
    service.commit_frame()
    assert list(queue) == [2, 1]
    assert context.pushed == ["b", "c", "a"]
    assert len(service) == 0


def test_enqueue_service_with_ring_container(context):
    service = EnqueueService(context)
    ring = RingContainer(4)
    mutex = threading.Lock()
    service.post_frame("producer", ring, "message", mutex, 3)
    service.commit_frame()
    assert ring.front() == "message"
    assert context.pushed == ["producer"]


def test_enqueue_service_full_queue_keeps_frame(context):
    service = EnqueueService(context)
    queue = deque([0])
    service.post_frame("producer", queue, 1, threading.Lock(), 1)
    service.commit_frame()
    assert list(queue) == [0]
    assert context.pushed == []
    assert len(service) == 1


def test_overlap_arity_values(context):
    assert EnqueueService(context).overlap_arity == 4
    assert YieldService(context).overlap_arity == 0
    assert FlagService(context).overlap_arity == 1
    assert FutureService(context).overlap_arity == 1
    assert LatchService(context).overlap_arity == 1