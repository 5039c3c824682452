"""
GPIO Utilities Package

Exposes shared helper functions for sysfs GPIO operations.

Public API:
    - pin_dir / direction_path / value_path: relative control file paths
    - format_value: value -> "1"/"0"
    - parse_value: "1\\n"/"0\\n" -> bool
    - validate_channel: reject non-integer or negative channels
    - check_sysfs_available: availability check with logging
    - safe_controller_cleanup: cleanup that never raises
"""

from sysfs_gpio.utils.gpio_utils import (
    check_sysfs_available,
    direction_path,
    format_value,
    parse_value,
    pin_dir,
    safe_controller_cleanup,
    validate_channel,
    value_path,
)

# Public API (sorted alphabetically)
__all__ = [
    "check_sysfs_available",
    "direction_path",
    "format_value",
    "parse_value",
    "pin_dir",
    "safe_controller_cleanup",
    "validate_channel",
    "value_path",
]
