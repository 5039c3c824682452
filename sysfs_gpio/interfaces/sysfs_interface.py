"""
Sysfs Interface - Abstract Filesystem Layer

This defines the contract that any sysfs GPIO backend must follow. The
controller never touches the filesystem directly; it goes through this
interface, so the real /sys/class/gpio tree and an in-memory fake are
interchangeable.

All paths are RELATIVE to the backend's base path, e.g. "export" or
"gpio17/value".
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Hashable, Optional


class SysfsInterface(ABC):
    """
    Abstract base class for the sysfs GPIO file contract.

    Implementations raise GPIOIOError for every filesystem failure so callers
    only ever have one exception type to deal with.
    """

    @property
    @abstractmethod
    def base_path(self) -> Path:
        """Root of the GPIO class directory"""

    @abstractmethod
    def write(self, relative: str, data: str) -> None:
        """
        Write text to a control file.

        Args:
            relative: Path relative to base_path ("export", "gpio4/value")
            data: Text to write

        Raises:
            GPIOIOError: If the write fails (missing file, EBUSY, EACCES...)
        """

    @abstractmethod
    def read(self, relative: str) -> str:
        """
        Read a control file as text.

        Args:
            relative: Path relative to base_path

        Returns:
            Raw file contents (not stripped)

        Raises:
            GPIOIOError: If the read fails
        """

    @abstractmethod
    def exists(self, relative: str) -> bool:
        """
        Check whether a file or directory exists.

        Used to test "is pin N exported" via the gpio<N> directory.
        """

    @abstractmethod
    def modified_token(self, relative: str) -> Optional[Hashable]:
        """
        Return a value that changes every time the file is modified.

        Watchers compare successive tokens to detect changes.

        Returns:
            Opaque comparable token, or None if the file does not exist
        """

    @abstractmethod
    def is_available(self) -> bool:
        """
        Check if the backend is usable.

        Returns:
            True if the GPIO class directory is present (or simulated)
        """


class GPIOError(Exception):
    """Base class for every error raised by sysfs_gpio"""


class InvalidArgumentError(GPIOError, ValueError):
    """Unrecognized naming mode, direction or channel value"""


class UnmappedPinError(GPIOError, LookupError):
    """
    Logical channel has no hardware pin behind it.

    Raised for header positions such as power and ground that are absent
    or explicitly None in the pin map.
    """

    def __init__(self, channel: int):
        super().__init__(f"Channel {channel} is not mapped to a hardware pin")
        self.channel = channel


class GPIOIOError(GPIOError):
    """
    A sysfs file operation failed.

    Attributes:
        path: Relative path of the file involved
        errno: errno of the underlying OSError, if any
    """

    def __init__(self, message: str, path: str = "", errno: Optional[int] = None):
        super().__init__(message)
        self.path = path
        self.errno = errno
