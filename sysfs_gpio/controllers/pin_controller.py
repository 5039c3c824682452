"""
Pin Controller

Translates channels into hardware pin numbers and drives the sysfs GPIO
files: export/unexport, direction, value reads and writes, and change
notifications for exported pins.

Every filesystem operation runs on the controller's I/O queue, so public
methods return immediately with a Future resolving to a PinResult. Argument
errors (bad mode, bad direction, unmapped channel) are raised right away,
before any I/O is queued. I/O errors are logged and reported in the
PinResult, never raised.

Usage:
    with PinController() as gpio:
        gpio.add_change_listener(lambda channel, value: print(channel, value))
        gpio.setup(11, gpio.DIR_OUT).result()
        gpio.write(11, True)
        print(gpio.read(11).result().value)   # "1"
"""

import atexit
import logging
import threading
from concurrent.futures import Future, wait
from typing import Any, Callable, Dict, Mapping, Optional, Union

from sysfs_gpio.constants import (
    CLEANUP_TIMEOUT,
    DEFAULT_NAMING_MODE,
    DIR_IN,
    DIR_OUT,
    EXPORT_FILE,
    MODE_BCM,
    MODE_RPI,
    UNEXPORT_FILE,
    WATCH_INTERVAL,
    Direction,
    NamingMode,
)
from sysfs_gpio.factory import create_sysfs
from sysfs_gpio.interfaces.sysfs_interface import (
    GPIOIOError,
    InvalidArgumentError,
    SysfsInterface,
    UnmappedPinError,
)
from sysfs_gpio.models.pin_result import PinResult
from sysfs_gpio.pin_map import PinMapConfig
from sysfs_gpio.utils.gpio_utils import (
    check_sysfs_available,
    direction_path,
    format_value,
    pin_dir,
    safe_controller_cleanup,
    validate_channel,
    value_path,
)
from sysfs_gpio.workers.io_queue import IOQueue
from sysfs_gpio.workers.pin_watcher import PinWatcher

ChangeListener = Callable[[int, str], None]
ResultCallback = Callable[[PinResult], None]


class PinController:
    """
    Owns the pin map, the naming mode, the set of exported pins and the
    change listeners for one sysfs GPIO tree.

    State lives on the instance, so several controllers (e.g. one per test)
    never interfere with each other.
    """

    # Exposed for caller convenience: gpio.setup(7, gpio.DIR_IN)
    MODE_RPI = MODE_RPI
    MODE_BCM = MODE_BCM
    DIR_IN = DIR_IN
    DIR_OUT = DIR_OUT
    NamingMode = NamingMode
    Direction = Direction

    def __init__(
        self,
        sysfs: Optional[SysfsInterface] = None,
        pin_map: Optional[Mapping[int, Optional[int]]] = None,
        naming_mode: Union[NamingMode, str] = DEFAULT_NAMING_MODE,
        watch_interval: float = WATCH_INTERVAL,
    ):
        """
        Initialize pin controller.

        Args:
            sysfs: Sysfs backend to use, or None to auto-create
            pin_map: Header position -> hardware pin table, or None to load
                     the built-in map (plus GPIO_PIN_MAP_FILE overrides)
            naming_mode: Initial naming mode (NamingMode or "rpi"/"bcm")
            watch_interval: Poll interval of the value file watchers

        Raises:
            InvalidArgumentError: If naming_mode is not recognized
            ValueError: If pin_map holds invalid entries
        """
        self.logger = logging.getLogger(__name__)

        # Sysfs backend - either provided or auto-created
        self.sysfs = sysfs or create_sysfs()

        if pin_map is None:
            self._pin_map = PinMapConfig().mapping
        else:
            self._pin_map = PinMapConfig.freeze(pin_map)

        self._naming_mode = self._coerce_mode(naming_mode)
        self.watch_interval = watch_interval

        # Guards _exported, _watchers and _listeners; watcher threads and the
        # I/O worker both touch them
        self._lock = threading.Lock()

        # Key: hardware pin, Value: channel it was set up through
        self._exported: Dict[int, int] = {}

        # Key: hardware pin, Value: active watcher on its value file
        self._watchers: Dict[int, PinWatcher] = {}

        # (callback, channel filter or None for every channel)
        self._listeners: list[tuple[ChangeListener, Optional[int]]] = []

        self._io = IOQueue(name="GPIO-IO")

        self._exit_handler_installed = False
        self._cleaned_up = False

        check_sysfs_available(self.sysfs, self.logger)

        self.logger.info(
            f"Pin Controller initialized (mode: {self._naming_mode.value}, "
            f"sysfs: {self.sysfs.base_path})",
        )

    # =========================================================================
    # NAMING
    # =========================================================================

    @staticmethod
    def _coerce_mode(mode: Any) -> NamingMode:
        if isinstance(mode, NamingMode):
            return mode
        try:
            return NamingMode(mode)
        except (ValueError, TypeError):
            raise InvalidArgumentError(f"Cannot set invalid mode [{mode}]") from None

    @staticmethod
    def _coerce_direction(direction: Any) -> Direction:
        if isinstance(direction, Direction):
            return direction
        try:
            return Direction(direction)
        except (ValueError, TypeError):
            raise InvalidArgumentError(
                f"Cannot set invalid direction [{direction}]"
            ) from None

    def set_naming_mode(self, mode: Union[NamingMode, str]) -> None:
        """
        Set how channels are translated to hardware pins.

        Already exported pins are not re-translated; call this before
        referencing channels under the new mode.

        Args:
            mode: NamingMode, "rpi" or "bcm"

        Raises:
            InvalidArgumentError: If mode is not recognized (mode unchanged)
        """
        self._naming_mode = self._coerce_mode(mode)
        self.logger.info(f"Naming mode set to {self._naming_mode.value}")

    @property
    def naming_mode(self) -> NamingMode:
        return self._naming_mode

    @property
    def pin_map(self) -> Mapping[int, Optional[int]]:
        """Read-only header position -> hardware pin table"""
        return self._pin_map

    def get_pin(self, channel: int) -> int:
        """
        Translate a channel to its hardware pin number.

        HARDWARE mode uses the channel verbatim; LOGICAL mode looks it up in
        the pin map.

        Raises:
            InvalidArgumentError: If channel is not a non-negative int
            UnmappedPinError: If LOGICAL mode has no pin for the channel
        """
        validate_channel(channel)

        if self._naming_mode is NamingMode.HARDWARE:
            return channel

        pin = self._pin_map.get(channel)
        if pin is None:
            raise UnmappedPinError(channel)

        return pin

    # =========================================================================
    # PUBLIC OPERATIONS
    # =========================================================================

    def setup(
        self,
        channel: int,
        direction: Union[Direction, str] = DIR_OUT,
        callback: Optional[ResultCallback] = None,
    ) -> Future:
        """
        Export a channel and set its direction.

        Runs as one job: unexport if already exported, export, start the
        change watcher, write the direction. A failing step stops the chain.

        Args:
            channel: Channel in the current naming mode
            direction: Direction, "in" or "out" (default "out")
            callback: Called with the PinResult once the job has run

        Returns:
            Future resolving to PinResult

        Raises:
            InvalidArgumentError: Bad channel or direction
            UnmappedPinError: Channel has no hardware pin
        """
        pin = self.get_pin(channel)
        resolved = self._coerce_direction(direction)

        return self._submit(
            self._setup_job,
            channel,
            pin,
            resolved,
            callback=callback,
            description=f"setup channel {channel}",
        )

    def write(
        self,
        channel: int,
        value: Any,
        callback: Optional[ResultCallback] = None,
    ) -> Future:
        """
        Drive an output channel HIGH (truthy value) or LOW (falsy value).

        Returns:
            Future resolving to PinResult with value "1" or "0"
        """
        pin = self.get_pin(channel)

        return self._submit(
            self._write_job,
            channel,
            pin,
            format_value(value),
            callback=callback,
            description=f"write channel {channel}",
        )

    output = write

    def read(
        self,
        channel: int,
        callback: Optional[ResultCallback] = None,
    ) -> Future:
        """
        Read a channel's value file.

        Returns:
            Future resolving to PinResult; value is the raw text read
            (e.g. "1\\n" from the kernel) or None if the read failed
        """
        pin = self.get_pin(channel)

        return self._submit(
            self._read_job,
            channel,
            pin,
            callback=callback,
            description=f"read channel {channel}",
        )

    input = read

    def unexport(
        self,
        channel: int,
        callback: Optional[ResultCallback] = None,
    ) -> Future:
        """
        Release a channel.

        The change watcher stops before this returns, so no further change
        events fire for the channel. A watcher started by a setup still
        queued ahead of this call is stopped when the unexport job runs.

        Returns:
            Future resolving to PinResult
        """
        pin = self.get_pin(channel)
        self._stop_watcher(pin)

        return self._submit(
            self._unexport_job,
            channel,
            pin,
            callback=callback,
            description=f"unexport channel {channel}",
        )

    unexport_channel = unexport

    def release_all(
        self,
        callback: Optional[ResultCallback] = None,
    ) -> list[Future]:
        """
        Best-effort release of every pin this controller exported.

        Issues one unexport per exported pin and returns without waiting.
        The kernel may still leave gpio<N> entries behind (e.g. if another
        process holds the pin); nothing stronger is promised.

        Returns:
            One Future per unexport issued
        """
        with self._lock:
            pins = sorted(self._exported.items())

        if pins:
            self.logger.info(f"Releasing {len(pins)} exported pins")

        futures = []
        for pin, channel in pins:
            self._stop_watcher(pin)
            try:
                futures.append(
                    self._submit(
                        self._unexport_job,
                        channel,
                        pin,
                        callback=callback,
                        description=f"release pin {pin}",
                    )
                )
            except RuntimeError as e:
                self.logger.warning(f"Cannot release pin {pin}: {e}")

        return futures

    def is_exported(self, channel: int) -> bool:
        """Check synchronously whether gpio<N> exists for a channel"""
        return self.sysfs.exists(pin_dir(self.get_pin(channel)))

    @property
    def exported_pins(self) -> frozenset:
        """Snapshot of hardware pins currently claimed by this controller"""
        with self._lock:
            return frozenset(self._exported)

    def wait_until_idle(self, timeout: Optional[float] = None) -> bool:
        """Wait until every queued operation has run"""
        return self._io.wait_until_idle(timeout)

    # =========================================================================
    # CHANGE LISTENERS
    # =========================================================================

    def add_change_listener(
        self,
        callback: ChangeListener,
        channel: Optional[int] = None,
    ) -> None:
        """
        Register a listener for value changes.

        The callback receives (channel, value) where value is the raw text
        read after the change. It runs on the I/O worker thread, so it must
        be thread-safe, should return quickly, and must not block on the
        Future of another operation (that job would never get to run).

        Args:
            callback: Function taking (channel, value)
            channel: Only notify for this channel, or None for all
        """
        with self._lock:
            self._listeners.append((callback, channel))
        self.logger.debug("Change listener registered")

    def remove_change_listener(self, callback: ChangeListener) -> None:
        """Remove every registration of a listener"""
        with self._lock:
            self._listeners = [
                (cb, ch) for cb, ch in self._listeners if cb != callback
            ]

    def _emit_change(self, channel: int, value: str) -> None:
        with self._lock:
            listeners = list(self._listeners)

        self.logger.debug(f"Channel {channel} changed to {value!r}")

        for callback, wanted in listeners:
            if wanted is not None and wanted != channel:
                continue
            try:
                callback(channel, value)
            except Exception as e:
                # Never let listener errors break notifications for others
                self.logger.error(f"Error in change listener: {e}", exc_info=True)

    # =========================================================================
    # JOBS (run on the I/O worker thread)
    # =========================================================================

    def _submit(
        self,
        job: Callable[..., PinResult],
        *args: Any,
        callback: Optional[ResultCallback] = None,
        description: str,
    ) -> Future:
        future = self._io.submit(job, *args, description=description)

        if callback:
            future.add_done_callback(
                lambda done: self._invoke_callback(callback, done),
            )

        return future

    def _invoke_callback(self, callback: ResultCallback, future: Future) -> None:
        if future.cancelled():
            return

        try:
            callback(future.result())
        except Exception as e:
            self.logger.error(f"Error in operation callback: {e}", exc_info=True)

    def _setup_job(self, channel: int, pin: int, direction: Direction) -> PinResult:
        try:
            if self.sysfs.exists(pin_dir(pin)):
                self.logger.debug(f"Pin {pin} already exported, unexporting first")
                self._stop_watcher(pin)
                self._unexport_pin(pin)

            self.sysfs.write(EXPORT_FILE, str(pin))
            with self._lock:
                self._exported[pin] = channel

            self._start_watcher(channel, pin)
            self.sysfs.write(direction_path(pin), direction.value)

        except GPIOIOError as e:
            self.logger.error(f"Failed to set up channel {channel} (pin {pin}): {e}")
            return PinResult("setup", channel, pin, error=e)

        self.logger.info(
            f"Channel {channel} (pin {pin}) set up as {direction.name}",
        )
        return PinResult("setup", channel, pin)

    def _write_job(self, channel: int, pin: int, text: str) -> PinResult:
        try:
            self.sysfs.write(value_path(pin), text)
        except GPIOIOError as e:
            self.logger.error(f"Failed to set output {channel}: {e}")
            return PinResult("write", channel, pin, value=text, error=e)

        self.logger.info(f"Output {channel} set to {text}")
        return PinResult("write", channel, pin, value=text)

    def _read_job(self, channel: int, pin: int) -> PinResult:
        try:
            raw = self.sysfs.read(value_path(pin))
        except GPIOIOError as e:
            self.logger.error(f"Failed to read channel {channel}: {e}")
            return PinResult("read", channel, pin, error=e)

        return PinResult("read", channel, pin, value=raw)

    def _unexport_job(self, channel: int, pin: int) -> PinResult:
        # A setup queued ahead of this job may have started a new watcher
        self._stop_watcher(pin)

        try:
            self._unexport_pin(pin)
        except GPIOIOError as e:
            self.logger.error(f"Failed to unexport channel {channel}: {e}")
            return PinResult("unexport", channel, pin, error=e)

        self.logger.info(f"Channel {channel} (pin {pin}) unexported")
        return PinResult("unexport", channel, pin)

    def _unexport_pin(self, pin: int) -> None:
        self.sysfs.write(UNEXPORT_FILE, str(pin))
        with self._lock:
            self._exported.pop(pin, None)

    def _emit_change_job(self, channel: int, pin: int, watcher: PinWatcher) -> None:
        result = self._read_job(channel, pin)

        # The pin may have been unexported while the read was queued
        if result.failed or not self._is_current_watcher(pin, watcher):
            return

        self._emit_change(channel, result.value)

    # =========================================================================
    # WATCHERS
    # =========================================================================

    def _start_watcher(self, channel: int, pin: int) -> None:
        watcher = PinWatcher(
            self.sysfs,
            value_path(pin),
            on_change=lambda: None,
            interval=self.watch_interval,
        )
        watcher.on_change = lambda: self._on_value_modified(channel, pin, watcher)

        with self._lock:
            previous = self._watchers.pop(pin, None)
            self._watchers[pin] = watcher

        if previous:
            previous.stop()

        watcher.start()

    def _stop_watcher(self, pin: int) -> None:
        with self._lock:
            watcher = self._watchers.pop(pin, None)

        if watcher:
            watcher.stop()
            self.logger.debug(f"Stopped watching pin {pin}")

    def _stop_all_watchers(self) -> None:
        with self._lock:
            pins = list(self._watchers)
        for pin in pins:
            self._stop_watcher(pin)

    def _is_current_watcher(self, pin: int, watcher: PinWatcher) -> bool:
        with self._lock:
            return self._watchers.get(pin) is watcher

    def _on_value_modified(self, channel: int, pin: int, watcher: PinWatcher) -> None:
        """Watcher thread callback - hand the read over to the I/O worker"""
        if not self._is_current_watcher(pin, watcher):
            return

        try:
            self._io.submit(
                self._emit_change_job,
                channel,
                pin,
                watcher,
                description=f"change on channel {channel}",
            )
        except RuntimeError:
            self.logger.debug(f"Dropped change on channel {channel} (stopped)")

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def install_exit_handler(self) -> None:
        """
        Run cleanup() automatically when the interpreter exits.

        Best-effort: pending unexports get at most the cleanup timeout.
        """
        if self._exit_handler_installed:
            return

        atexit.register(self.cleanup)
        self._exit_handler_installed = True
        self.logger.debug("Exit cleanup handler installed")

    def get_status(self) -> Dict[str, Any]:
        """
        Get current controller status.

        Returns:
            Dictionary with current state information
        """
        with self._lock:
            exported = sorted(self._exported)
            watched = sorted(self._watchers)
            listener_count = len(self._listeners)

        return {
            "naming_mode": self._naming_mode.value,
            "sysfs_path": str(self.sysfs.base_path),
            "sysfs_available": self.sysfs.is_available(),
            "exported_pins": exported,
            "watched_pins": watched,
            "listeners": listener_count,
            "io_queue": self._io.get_status(),
        }

    def cleanup(self, timeout: float = CLEANUP_TIMEOUT) -> None:
        """
        Release every exported pin and stop background threads.

        Safe to call multiple times - idempotent.

        Args:
            timeout: Maximum time to wait for the unexports (seconds)
        """
        if self._cleaned_up:
            return

        self.logger.info("Cleaning up Pin Controller")

        futures = self.release_all()
        if futures:
            _, not_done = wait(futures, timeout=timeout)
            if not_done:
                self.logger.warning(
                    f"{len(not_done)} unexports did not finish within {timeout}s",
                )

        self._stop_all_watchers()
        self._io.stop()

        # A setup job still running during stop() may have started one more
        self._stop_all_watchers()

        if self._exit_handler_installed:
            atexit.unregister(self.cleanup)
            self._exit_handler_installed = False

        self._cleaned_up = True
        self.logger.info("Pin Controller cleanup complete")

    def __enter__(self):
        """
        Enter context manager.

        Usage:
            with PinController() as gpio:
                gpio.setup(11, gpio.DIR_OUT)
        """
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Exit context manager - always cleanup, propagate exceptions"""
        self.cleanup()
        return False

    def __del__(self):
        """
        Destructor - fallback cleanup if not properly closed.

        WARNING: Use context manager (`with` statement) or
        call cleanup() explicitly instead of relying on __del__.
        """
        if not getattr(self, "_cleaned_up", True):
            self.logger.warning(
                "PinController not properly cleaned up - "
                "use 'with' statement or call cleanup() explicitly",
            )
            safe_controller_cleanup(self, self.logger)
