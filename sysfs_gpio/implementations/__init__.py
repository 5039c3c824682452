"""
Sysfs Implementations Package

Exposes concrete implementations of the sysfs interface.
"""

from sysfs_gpio.implementations.linux_sysfs import LinuxSysfs
from sysfs_gpio.implementations.mock_sysfs import MockSysfs

# Public API (sorted alphabetically)
__all__ = [
    "LinuxSysfs",
    "MockSysfs",
]
