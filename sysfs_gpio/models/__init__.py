"""
Models Package

Data classes returned by the pin controller.
"""

from sysfs_gpio.models.pin_result import PinResult

__all__ = [
    "PinResult",
]
