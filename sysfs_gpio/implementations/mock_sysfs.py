"""
Mock Sysfs Implementation

Simulated /sys/class/gpio tree for development and testing without a
board. Allows you to develop and test on your laptop or in CI.

This is a "Fake" rather than a stub: it emulates what the kernel does when
you write to the control files:
- writing N to export creates gpioN/direction ("in") and gpioN/value ("0")
- exporting an already exported pin fails with EBUSY
- unexporting a pin that is not exported fails with EINVAL
- writing to the value of an input pin fails with EPERM
- setting direction "out" drives the pin low; "high"/"low" set both
"""

import errno
import itertools
import logging
import os
import threading
from pathlib import Path
from typing import Hashable, Iterable, Optional, Union

from sysfs_gpio.constants import (
    DEFAULT_SYSFS_PATH,
    DIR_IN,
    DIR_OUT,
    EXPORT_FILE,
    UNEXPORT_FILE,
    VALUE_HIGH,
    VALUE_LOW,
)
from sysfs_gpio.interfaces.sysfs_interface import GPIOIOError, SysfsInterface
from sysfs_gpio.utils.gpio_utils import direction_path, pin_dir, value_path

# BCM 0-27 are the pins broken out on the Raspberry Pi header family
DEFAULT_AVAILABLE_PINS = range(0, 28)


def _io_error(code: int, relative: str, action: str) -> GPIOIOError:
    return GPIOIOError(
        f"Failed to {action} {relative}: {os.strerror(code)}",
        path=relative,
        errno=code,
    )


class MockSysfs(SysfsInterface):
    """
    In-memory sysfs GPIO tree that mimics the kernel's behavior.

    Thread-safe: watcher threads poll it while the I/O worker writes to it.
    """

    def __init__(
        self,
        available_pins: Iterable[int] = DEFAULT_AVAILABLE_PINS,
        base_path: Union[str, Path, None] = None,
    ):
        self.logger = logging.getLogger(__name__)
        self._base_path = Path(base_path or DEFAULT_SYSFS_PATH)
        self._available_pins = frozenset(available_pins)

        self._lock = threading.RLock()

        # Key: relative path ("gpio4/value"), Value: file contents
        self._files: dict[str, str] = {}

        # Key: relative path, Value: modification counter
        self._versions: dict[str, int] = {}
        self._version_counter = itertools.count(1)

        self._exported: set[int] = set()

        # Key: relative path, Value: errno to fail with
        self._failures: dict[str, int] = {}

        # Every successful write, in order: (relative path, data)
        self.write_history: list[tuple[str, str]] = []

        self.logger.info("Mock sysfs initialized (simulation mode)")

    @property
    def base_path(self) -> Path:
        return self._base_path

    # =========================================================================
    # SysfsInterface
    # =========================================================================

    def write(self, relative: str, data: str) -> None:
        with self._lock:
            self._check_failure(relative, "write")

            if relative == EXPORT_FILE:
                self._export(self._parse_pin(relative, data))
            elif relative == UNEXPORT_FILE:
                self._unexport(self._parse_pin(relative, data))
            elif relative not in self._files:
                raise _io_error(errno.ENOENT, relative, "write")
            elif relative.endswith("/direction"):
                self._write_direction(relative, data)
            else:
                self._write_value(relative, data)

            self.write_history.append((relative, data))

        self.logger.debug(f"[MOCK] {relative} <- {data!r}")

    def read(self, relative: str) -> str:
        with self._lock:
            self._check_failure(relative, "read")

            if relative in (EXPORT_FILE, UNEXPORT_FILE):
                # Control files are write-only
                raise _io_error(errno.EACCES, relative, "read")

            if relative not in self._files:
                raise _io_error(errno.ENOENT, relative, "read")

            return self._files[relative]

    def exists(self, relative: str) -> bool:
        with self._lock:
            if relative in (EXPORT_FILE, UNEXPORT_FILE) or relative in self._files:
                return True
            return any(relative == pin_dir(pin) for pin in self._exported)

    def modified_token(self, relative: str) -> Optional[Hashable]:
        with self._lock:
            return self._versions.get(relative)

    def is_available(self) -> bool:
        """Mock sysfs is always "available" (it's simulated)"""
        return True

    # =========================================================================
    # KERNEL EMULATION
    # =========================================================================

    def _parse_pin(self, relative: str, data: str) -> int:
        try:
            pin = int(str(data).strip())
        except ValueError:
            raise _io_error(errno.EINVAL, relative, "write") from None

        if pin not in self._available_pins:
            raise _io_error(errno.EINVAL, relative, "write")

        return pin

    def _export(self, pin: int) -> None:
        if pin in self._exported:
            raise _io_error(errno.EBUSY, EXPORT_FILE, "write")

        self._exported.add(pin)
        self._set_file(direction_path(pin), DIR_IN)
        self._set_file(value_path(pin), VALUE_LOW)

    def _unexport(self, pin: int) -> None:
        if pin not in self._exported:
            raise _io_error(errno.EINVAL, UNEXPORT_FILE, "write")

        self._exported.discard(pin)
        for relative in (direction_path(pin), value_path(pin)):
            self._files.pop(relative, None)
            self._versions.pop(relative, None)

    def _write_direction(self, relative: str, data: str) -> None:
        direction = str(data).strip()
        value_file = relative.rsplit("/", 1)[0] + "/value"

        if direction == DIR_IN:
            self._set_file(relative, DIR_IN)
        elif direction in (DIR_OUT, "low"):
            self._set_file(relative, DIR_OUT)
            self._files[value_file] = VALUE_LOW
        elif direction == "high":
            self._set_file(relative, DIR_OUT)
            self._files[value_file] = VALUE_HIGH
        else:
            raise _io_error(errno.EINVAL, relative, "write")

    def _write_value(self, relative: str, data: str) -> None:
        direction_file = relative.rsplit("/", 1)[0] + "/direction"
        if self._files.get(direction_file) != DIR_OUT:
            raise _io_error(errno.EPERM, relative, "write")

        try:
            level = int(str(data).strip())
        except ValueError:
            raise _io_error(errno.EINVAL, relative, "write") from None

        self._set_file(relative, VALUE_HIGH if level else VALUE_LOW)

    def _set_file(self, relative: str, contents: str) -> None:
        self._files[relative] = contents
        self._versions[relative] = next(self._version_counter)

    def _check_failure(self, relative: str, action: str) -> None:
        code = self._failures.get(relative)
        if code is not None:
            raise _io_error(code, relative, action)

    # =========================================================================
    # TESTING HELPER METHODS (not part of SysfsInterface)
    # =========================================================================
    # These methods are ONLY for testing - they simulate hardware events

    def simulate_external_change(self, pin: int, value) -> None:
        """
        Simulate the outside world changing a pin's value.

        Bypasses the direction check, like a signal on an input line.

        Args:
            pin: Exported hardware pin number
            value: New level (truthy = HIGH)
        """
        with self._lock:
            if pin not in self._exported:
                raise _io_error(errno.ENOENT, value_path(pin), "write")

            self._set_file(value_path(pin), VALUE_HIGH if value else VALUE_LOW)

        self.logger.info(f"[MOCK] Simulated external change on pin {pin}")

    def inject_failure(self, relative: str, code: int = errno.EIO) -> None:
        """
        Make every read/write of a path fail with the given errno.

        Example:
            sysfs.inject_failure("export", errno.EACCES)
        """
        with self._lock:
            self._failures[relative] = code

    def clear_failures(self) -> None:
        with self._lock:
            self._failures.clear()

    @property
    def exported_pins(self) -> frozenset:
        """Pins the simulated kernel currently considers exported"""
        with self._lock:
            return frozenset(self._exported)

    def get_direction(self, pin: int) -> Optional[str]:
        with self._lock:
            return self._files.get(direction_path(pin))

    def get_writes(self, relative: str) -> list[str]:
        """All data successfully written to one path, in order"""
        with self._lock:
            return [data for path, data in self.write_history if path == relative]
