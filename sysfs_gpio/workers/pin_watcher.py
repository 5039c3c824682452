"""
Pin Watcher

Polls one value file and calls back whenever it is modified. Like a polling
file watcher, it compares a modification token (mtime/size on Linux, a
version counter in the mock) between polls; any difference is one change.

One watcher thread runs per exported pin, from setup until unexport.

Limitation: the kernel does not touch the mtime of a real gpio<N>/value
file when an input line changes level. On real hardware only writes to
the file (by this or another process) are seen; input edges are not.
"""

import logging
import threading
from typing import Callable, Hashable, Optional

from sysfs_gpio.constants import THREAD_SHUTDOWN_TIMEOUT, WATCH_INTERVAL
from sysfs_gpio.interfaces.sysfs_interface import GPIOIOError, SysfsInterface


class PinWatcher:
    """
    Background observer for a single sysfs file.

    Usage:
        watcher = PinWatcher(sysfs, "gpio17/value", on_change)
        watcher.start()
        ...
        watcher.stop()
    """

    def __init__(
        self,
        sysfs: SysfsInterface,
        relative: str,
        on_change: Callable[[], None],
        interval: float = WATCH_INTERVAL,
    ):
        self.logger = logging.getLogger(__name__)
        self.sysfs = sysfs
        self.relative = relative
        self.on_change = on_change
        self.interval = interval

        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._last_token: Optional[Hashable] = None

    def start(self) -> None:
        """Record the current state of the file and begin polling"""
        if self.is_running():
            self.logger.warning(f"Watcher for {self.relative} already running")
            return

        self._last_token = self._read_token()
        self._stop_event.clear()

        self._thread = threading.Thread(
            target=self._watch_loop,
            daemon=True,
            name=f"PinWatcher-{self.relative}",
        )
        self._thread.start()

        self.logger.debug(f"Watching {self.relative} every {self.interval}s")

    def _read_token(self) -> Optional[Hashable]:
        try:
            return self.sysfs.modified_token(self.relative)
        except GPIOIOError as e:
            self.logger.debug(f"Cannot stat {self.relative}: {e}")
            return None

    def _watch_loop(self) -> None:
        while not self._stop_event.wait(self.interval):
            token = self._read_token()

            # A vanished file (None) is not a change; unexport stops us anyway
            if token is None or token == self._last_token:
                continue

            self._last_token = token

            try:
                self.on_change()
            except Exception as e:
                # Never let a callback error kill the watcher
                self.logger.error(
                    f"Error in change callback for {self.relative}: {e}",
                    exc_info=True,
                )

    def stop(self) -> None:
        """Stop polling. Safe to call multiple times, even from the callback."""
        self._stop_event.set()

        if (
            self._thread
            and self._thread.is_alive()
            and self._thread is not threading.current_thread()
        ):
            self._thread.join(timeout=THREAD_SHUTDOWN_TIMEOUT)

        self._thread = None

    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def __repr__(self) -> str:
        return f"PinWatcher({self.relative!r}, running={self.is_running()})"
