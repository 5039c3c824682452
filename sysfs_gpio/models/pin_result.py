"""
Pin Result Model

Outcome of an asynchronous pin operation. I/O failures are reported here
instead of being raised, so a flaky sysfs write never crashes the caller but
is still visible to it.
"""

from dataclasses import dataclass
from typing import Optional

from sysfs_gpio.interfaces.sysfs_interface import GPIOIOError
from sysfs_gpio.utils.gpio_utils import parse_value


@dataclass(frozen=True)
class PinResult:
    """
    Result of setup / read / write / unexport.

    Attributes:
        operation: "setup", "read", "write" or "unexport"
        channel: Channel as supplied by the caller
        pin: Hardware pin number the channel translated to
        value: Raw text read, or "0"/"1" written; None otherwise
        error: The I/O failure, or None on success
    """

    operation: str
    channel: int
    pin: int
    value: Optional[str] = None
    error: Optional[GPIOIOError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def failed(self) -> bool:
        return self.error is not None

    def as_bool(self) -> bool:
        """
        Interpret value as a logic level.

        Raises:
            ValueError: If there is no valid value (e.g. the read failed)
        """
        return parse_value(self.value)

    def __str__(self) -> str:
        status = "ok" if self.ok else f"failed: {self.error}"
        return f"{self.operation}(channel={self.channel}, pin={self.pin}) {status}"
