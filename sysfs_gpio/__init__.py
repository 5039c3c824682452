"""
Sysfs GPIO Module

GPIO pin control through the Linux sysfs class directory (/sys/class/gpio).

Provides channel translation (header position or raw pin number), export
and unexport, direction setup, value reads and writes, and change
notifications, with automatic fallback to a simulated sysfs tree for
development and testing.

Public API:
    - PinController: The pin controller
    - HardwareFactory: Factory for creating sysfs backends
    - create_sysfs: Quick backend creation with auto-detection
    - create_controller: Quick controller creation with auto-detection
    - SysfsInterface: Filesystem contract
    - PinResult: Outcome of an asynchronous operation
    - NamingMode, Direction and the MODE_*/DIR_* string constants
    - GPIOError, InvalidArgumentError, UnmappedPinError, GPIOIOError

Usage:
    from sysfs_gpio import create_controller

    gpio = create_controller()
    gpio.setup(11, gpio.DIR_OUT).result()
    gpio.write(11, True)
    gpio.cleanup()
"""

from sysfs_gpio.constants import (
    DIR_IN,
    DIR_OUT,
    MODE_BCM,
    MODE_RPI,
    Direction,
    NamingMode,
)
from sysfs_gpio.controllers.pin_controller import PinController
from sysfs_gpio.factory import HardwareFactory, create_controller, create_sysfs
from sysfs_gpio.interfaces.sysfs_interface import (
    GPIOError,
    GPIOIOError,
    InvalidArgumentError,
    SysfsInterface,
    UnmappedPinError,
)
from sysfs_gpio.models.pin_result import PinResult

__all__ = [
    "DIR_IN",
    "DIR_OUT",
    "Direction",
    "GPIOError",
    "GPIOIOError",
    "HardwareFactory",
    "InvalidArgumentError",
    "MODE_BCM",
    "MODE_RPI",
    "NamingMode",
    "PinController",
    "PinResult",
    "SysfsInterface",
    "UnmappedPinError",
    "create_controller",
    "create_sysfs",
]
