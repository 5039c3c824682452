"""
I/O Queue Tests

Tests for the single-worker job queue: futures, FIFO ordering, error
propagation and shutdown.

To run these tests:
    pytest tests/sysfs_gpio/test_io_queue.py -v
"""

import threading

import pytest

from sysfs_gpio.workers.io_queue import IOQueue


@pytest.fixture
def io_queue():
    q = IOQueue(name="Test-IO")
    yield q
    q.stop()


@pytest.mark.unit
def test_submit_returns_result(io_queue):
    future = io_queue.submit(lambda a, b: a + b, 2, 3)

    assert future.result(timeout=1.0) == 5


@pytest.mark.unit
def test_jobs_run_in_submission_order(io_queue):
    order = []

    futures = [io_queue.submit(order.append, i) for i in range(20)]

    for future in futures:
        future.result(timeout=1.0)
    assert order == list(range(20))


@pytest.mark.unit
def test_job_exception_goes_to_future(io_queue):
    def boom():
        raise KeyError("nope")

    failed = io_queue.submit(boom)
    after = io_queue.submit(lambda: "still running")

    with pytest.raises(KeyError):
        failed.result(timeout=1.0)
    # Worker survives the failing job
    assert after.result(timeout=1.0) == "still running"


@pytest.mark.unit
def test_wait_until_idle(io_queue):
    gate = threading.Event()
    io_queue.submit(gate.wait, 1.0)

    assert io_queue.is_busy() is True
    assert io_queue.wait_until_idle(timeout=0.05) is False

    gate.set()

    assert io_queue.wait_until_idle(timeout=1.0) is True
    assert io_queue.is_busy() is False


@pytest.mark.unit
def test_clear_queue_cancels_pending(io_queue):
    gate = threading.Event()
    started = threading.Event()

    def blocker():
        started.set()
        gate.wait(1.0)

    running = io_queue.submit(blocker)
    started.wait(1.0)
    pending = io_queue.submit(lambda: "never")

    assert io_queue.clear_queue() == 1
    gate.set()

    assert pending.cancelled()
    running.result(timeout=1.0)
    assert io_queue.wait_until_idle(timeout=1.0) is True


@pytest.mark.unit
def test_stop_rejects_new_jobs():
    q = IOQueue()
    q.stop()

    with pytest.raises(RuntimeError):
        q.submit(lambda: None)

    # Second stop is a no-op
    q.stop()


@pytest.mark.unit
def test_get_status(io_queue):
    io_queue.wait_until_idle(timeout=1.0)

    status = io_queue.get_status()

    assert status == {
        "current_job": None,
        "queue_size": 0,
        "is_busy": False,
        "worker_running": True,
    }
