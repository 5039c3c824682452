"""
GPIO Utilities

Shared helper functions for sysfs GPIO operations: building the relative
paths of control files, converting values to and from their text form, and
validating channel arguments.
"""

import logging
from typing import Any, Optional

from sysfs_gpio.constants import (
    DIRECTION_FILE,
    PIN_DIR_PREFIX,
    VALUE_FILE,
    VALUE_HIGH,
    VALUE_LOW,
)
from sysfs_gpio.interfaces.sysfs_interface import InvalidArgumentError, SysfsInterface


def pin_dir(pin: int) -> str:
    """
    Relative directory of an exported pin.

    Example:
        pin_dir(17)  # "gpio17"
    """
    return f"{PIN_DIR_PREFIX}{pin}"


def direction_path(pin: int) -> str:
    """Relative path of a pin's direction file ("gpio17/direction")"""
    return f"{pin_dir(pin)}/{DIRECTION_FILE}"


def value_path(pin: int) -> str:
    """Relative path of a pin's value file ("gpio17/value")"""
    return f"{pin_dir(pin)}/{VALUE_FILE}"


def format_value(value: Any) -> str:
    """
    Convert any value to the text written to a value file.

    Truthy values become "1", falsy values "0".

    Example:
        format_value(True)  # "1"
        format_value(0)     # "0"
    """
    return VALUE_HIGH if value else VALUE_LOW


def parse_value(text: Optional[str]) -> bool:
    """
    Interpret the raw text read from a value file.

    The kernel returns "0\\n" or "1\\n"; whitespace is ignored.

    Args:
        text: Raw file contents

    Returns:
        True if the pin reads HIGH

    Raises:
        ValueError: If text is empty or not "0"/"1"
    """
    if text is None:
        raise ValueError("No value to parse")

    stripped = text.strip()
    if stripped == VALUE_HIGH:
        return True
    if stripped == VALUE_LOW:
        return False

    raise ValueError(f"Unexpected GPIO value: {text!r}")


def validate_channel(channel: Any) -> int:
    """
    Validate a caller-supplied channel reference.

    Channels are non-negative integers. Booleans are rejected even though
    they are ints, since True/False as a channel is always a caller mistake.

    Args:
        channel: Value to validate

    Returns:
        The channel, unchanged

    Raises:
        InvalidArgumentError: If channel is not a non-negative int
    """
    if isinstance(channel, bool) or not isinstance(channel, int):
        raise InvalidArgumentError(
            f"Channel must be an integer, got {type(channel).__name__}"
        )

    if channel < 0:
        raise InvalidArgumentError(f"Invalid channel: {channel}")

    return channel


def check_sysfs_available(
    sysfs: SysfsInterface,
    logger: Optional[logging.Logger] = None
) -> bool:
    """
    Check if the sysfs backend is usable and log an appropriate message.

    Args:
        sysfs: Backend to check
        logger: Optional logger for messages

    Returns:
        True if the GPIO class directory is available
    """
    is_available = sysfs.is_available()

    if logger:
        if is_available:
            logger.info(f"GPIO sysfs available at {sysfs.base_path}")
        else:
            logger.warning(f"GPIO sysfs not available at {sysfs.base_path}")

    return is_available


def safe_controller_cleanup(
    controller: Optional[Any],
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Clean up a controller without ever raising.

    Shutdown paths call this so a failing release cannot crash the host.

    Args:
        controller: Object with a cleanup() method, or None
        logger: Optional logger for error messages
    """
    if controller is None:
        return

    try:
        controller.cleanup()
    except Exception as e:
        if logger:
            logger.error(f"Error during GPIO cleanup: {e}")
