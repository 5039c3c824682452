"""
I/O Queue

Runs sysfs file operations on a background worker thread, one at a time, in
the order they were submitted. Every submission returns immediately with a
concurrent.futures.Future that resolves when the job has run.

Why a queue?
- Callers are never blocked on slow or stuck sysfs writes
- Jobs run in submission order (FIFO), so a sequence issued by one caller
  completes in order
- One worker means the filesystem is never hit concurrently by this process
"""

import logging
import queue
import threading
from concurrent.futures import Future
from typing import Any, Callable, Dict, Optional

from sysfs_gpio.constants import IO_QUEUE_POLL_TIMEOUT, THREAD_SHUTDOWN_TIMEOUT

_Job = tuple[Callable[..., Any], tuple, Future, str]


class IOQueue:
    """
    Sequential job queue with a single worker thread.

    Usage:
        io_queue = IOQueue()
        future = io_queue.submit(sysfs.write, "export", "17")
        future.result(timeout=1.0)
        io_queue.stop()
    """

    def __init__(self, name: str = "GPIO-IO"):
        self.logger = logging.getLogger(__name__)
        self.name = name

        self._job_queue: "queue.Queue[_Job]" = queue.Queue()

        # Jobs submitted but not finished (queued + running)
        self._pending = 0
        self._idle = threading.Condition()

        self._worker_thread: Optional[threading.Thread] = None
        self._worker_running = False
        self._current_job: Optional[str] = None

        self._start_worker()

    def _start_worker(self) -> None:
        if self._worker_running:
            self.logger.warning("Worker already running")
            return

        self._worker_running = True
        self._worker_thread = threading.Thread(
            target=self._worker_loop,
            daemon=True,  # Dies when main program exits
            name=f"{self.name}-Worker",
        )
        self._worker_thread.start()

        self.logger.debug(f"{self.name} worker started")

    def _worker_loop(self) -> None:
        # get() with a timeout so the loop notices stop() while idle
        while self._worker_running:
            try:
                job = self._job_queue.get(timeout=IO_QUEUE_POLL_TIMEOUT)
            except queue.Empty:
                continue

            try:
                self._run_job(job)
            finally:
                self._job_finished()

        self.logger.debug(f"{self.name} worker stopped")

    def _run_job(self, job: _Job) -> None:
        func, args, future, description = job

        if not future.set_running_or_notify_cancel():
            return

        self._current_job = description
        try:
            result = func(*args)
        except Exception as e:
            # Never let a job kill the worker; the exception goes to the caller
            self.logger.error(f"Error in {description}: {e}", exc_info=True)
            future.set_exception(e)
        else:
            future.set_result(result)
        finally:
            self._current_job = None

    def _job_finished(self) -> None:
        with self._idle:
            self._pending -= 1
            if self._pending == 0:
                self._idle.notify_all()

    def submit(
        self,
        func: Callable[..., Any],
        *args: Any,
        description: Optional[str] = None,
    ) -> Future:
        """
        Queue a job for the worker thread.

        Returns IMMEDIATELY - the job runs in background.

        Args:
            func: Callable to run on the worker
            *args: Positional arguments for func
            description: Label used in logs

        Returns:
            Future resolving to func's return value

        Raises:
            RuntimeError: If the queue has been stopped
        """
        if not self._worker_running:
            raise RuntimeError(f"{self.name} queue is stopped")

        future: Future = Future()
        label = description or getattr(func, "__name__", "job")

        with self._idle:
            self._pending += 1
        self._job_queue.put((func, args, future, label))

        return future

    def clear_queue(self) -> int:
        """
        Cancel all pending jobs.

        Cannot stop the job that is currently running.

        Returns:
            Number of jobs cancelled
        """
        cleared_count = 0

        try:
            while True:
                _, _, future, _ = self._job_queue.get_nowait()
                future.cancel()
                self._job_finished()
                cleared_count += 1
        except queue.Empty:
            pass

        if cleared_count > 0:
            self.logger.info(f"Cancelled {cleared_count} queued jobs")

        return cleared_count

    def get_queue_size(self) -> int:
        """Number of jobs waiting, not counting the one running"""
        return self._job_queue.qsize()

    def is_busy(self) -> bool:
        """True while any job is queued or running"""
        with self._idle:
            return self._pending > 0

    def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until every submitted job has run.

        Args:
            timeout: Maximum time to wait in seconds, or None for no limit

        Returns:
            True if the queue became idle, False on timeout
        """
        with self._idle:
            return self._idle.wait_for(lambda: self._pending == 0, timeout=timeout)

    def get_status(self) -> Dict[str, Any]:
        return {
            "current_job": self._current_job,
            "queue_size": self.get_queue_size(),
            "is_busy": self.is_busy(),
            "worker_running": self._worker_running,
        }

    def stop(self, timeout: float = THREAD_SHUTDOWN_TIMEOUT) -> None:
        """
        Cancel pending jobs and stop the worker thread.

        Safe to call multiple times.
        """
        if not getattr(self, "_worker_running", False):
            return

        self.logger.debug(f"Stopping {self.name} queue")

        self._worker_running = False
        self.clear_queue()

        if (
            self._worker_thread
            and self._worker_thread.is_alive()
            and self._worker_thread is not threading.current_thread()
        ):
            self._worker_thread.join(timeout=timeout)

    def __del__(self):
        """Destructor - ensure worker is stopped"""
        self.stop()
