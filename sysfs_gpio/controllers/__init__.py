"""
Controllers Package

High-level controller for sysfs GPIO pins.
"""

from sysfs_gpio.controllers.pin_controller import PinController

# Public API (sorted alphabetically)
__all__ = [
    "PinController",
]
