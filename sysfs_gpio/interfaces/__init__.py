"""
Sysfs Interfaces Package

Exposes the abstract filesystem contract and the error taxonomy.
"""

from sysfs_gpio.interfaces.sysfs_interface import (
    GPIOError,
    GPIOIOError,
    InvalidArgumentError,
    SysfsInterface,
    UnmappedPinError,
)

# Public API (sorted alphabetically)
__all__ = [
    "GPIOError",
    "GPIOIOError",
    "InvalidArgumentError",
    "SysfsInterface",
    "UnmappedPinError",
]
