"""
Linux Sysfs Implementation

Concrete implementation of SysfsInterface for the kernel's GPIO class
directory (/sys/class/gpio). Every OSError is wrapped in GPIOIOError so
the controller deals with a single error type.
"""

import logging
from pathlib import Path
from typing import Hashable, Optional, Union

from sysfs_gpio.constants import DEFAULT_SYSFS_PATH, EXPORT_FILE
from sysfs_gpio.interfaces.sysfs_interface import GPIOIOError, SysfsInterface


class LinuxSysfs(SysfsInterface):
    """
    Sysfs backend on top of pathlib.

    Usage:
        sysfs = LinuxSysfs()                      # /sys/class/gpio
        sysfs = LinuxSysfs("/tmp/fake-gpio")      # any directory tree
    """

    def __init__(self, base_path: Union[str, Path, None] = None):
        self.logger = logging.getLogger(__name__)
        self._base_path = Path(base_path or DEFAULT_SYSFS_PATH)

        self.logger.debug(f"Linux sysfs backend at {self._base_path}")

    @property
    def base_path(self) -> Path:
        return self._base_path

    def _resolve(self, relative: str) -> Path:
        return self._base_path / relative

    def write(self, relative: str, data: str) -> None:
        """Write text to a control file"""
        try:
            # Control files must be opened for writing only; "w" truncates,
            # which the kernel ignores
            with open(self._resolve(relative), "w") as f:
                f.write(data)
        except OSError as e:
            raise GPIOIOError(
                f"Failed to write {data!r} to {relative}: {e.strerror or e}",
                path=relative,
                errno=e.errno,
            ) from e

    def read(self, relative: str) -> str:
        """Read a control file as text"""
        try:
            return self._resolve(relative).read_text(encoding="utf-8")
        except OSError as e:
            raise GPIOIOError(
                f"Failed to read {relative}: {e.strerror or e}",
                path=relative,
                errno=e.errno,
            ) from e

    def exists(self, relative: str) -> bool:
        return self._resolve(relative).exists()

    def modified_token(self, relative: str) -> Optional[Hashable]:
        """Use (mtime, size) from stat, like a polling file watcher"""
        try:
            stat = self._resolve(relative).stat()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise GPIOIOError(
                f"Failed to stat {relative}: {e.strerror or e}",
                path=relative,
                errno=e.errno,
            ) from e

        return (stat.st_mtime_ns, stat.st_size)

    def is_available(self) -> bool:
        """The class directory exists and exposes an export file"""
        return self._resolve(EXPORT_FILE).exists()

    def __repr__(self) -> str:
        return f"LinuxSysfs(base_path={str(self._base_path)!r})"
