"""
GPIO Constants

This file centralizes the naming modes, directions, file names and timing
values used throughout the sysfs_gpio package. Values that deployments need
to tune come from config.settings; the rest are fixed by the kernel's sysfs
GPIO contract.
"""

from enum import Enum

from config.settings import (
    GPIO_CLEANUP_TIMEOUT,
    GPIO_NAMING_MODE,
    GPIO_PIN_MAP_FILE,
    GPIO_SYSFS_PATH,
    GPIO_WATCH_INTERVAL,
)

# =============================================================================
# NAMING MODES AND DIRECTIONS
# =============================================================================


class NamingMode(Enum):
    """How a caller-supplied channel is turned into a hardware pin number"""

    LOGICAL = "rpi"  # Physical header position, translated through the pin map
    HARDWARE = "bcm"  # Raw hardware (BCM) pin number, used verbatim


class Direction(Enum):
    """Pin direction as written to gpio<N>/direction"""

    INPUT = "in"
    OUTPUT = "out"


# Plain string constants, exposed for callers who prefer them over the enums
MODE_RPI = NamingMode.LOGICAL.value
MODE_BCM = NamingMode.HARDWARE.value
DIR_IN = Direction.INPUT.value
DIR_OUT = Direction.OUTPUT.value


# =============================================================================
# SYSFS FILE LAYOUT
# =============================================================================
# Everything is relative to GPIO_SYSFS_PATH (normally /sys/class/gpio)

EXPORT_FILE = "export"
UNEXPORT_FILE = "unexport"
PIN_DIR_PREFIX = "gpio"
DIRECTION_FILE = "direction"
VALUE_FILE = "value"

VALUE_HIGH = "1"
VALUE_LOW = "0"


# =============================================================================
# BUILT-IN PIN MAP
# =============================================================================
# 26-pin Raspberry Pi header: physical position -> BCM pin number.
# None marks power and ground positions, which have no GPIO behind them.

DEFAULT_PIN_MAP = {
    1: None,   # 3.3V
    2: None,   # 5V
    3: 0,
    4: None,   # 5V
    5: 1,
    6: None,   # GND
    7: 4,
    8: 14,
    9: None,   # GND
    10: 15,
    11: 17,
    12: 18,
    13: 21,
    14: None,  # GND
    15: 22,
    16: 23,
    17: None,  # 3.3V
    18: 24,
    19: 10,
    20: None,  # GND
    21: 9,
    22: 25,
    23: 11,
    24: 8,
    25: None,  # GND
    26: 7,
}


# =============================================================================
# DEFAULTS FROM SETTINGS
# =============================================================================
# Imported from config.settings so there is a single source of truth.
# NEVER modify here - change in config/settings.py (or .env) instead!

DEFAULT_SYSFS_PATH = GPIO_SYSFS_PATH
DEFAULT_NAMING_MODE = GPIO_NAMING_MODE
DEFAULT_PIN_MAP_FILE = GPIO_PIN_MAP_FILE

# Watcher poll interval (seconds)
WATCH_INTERVAL = GPIO_WATCH_INTERVAL

# How long cleanup waits for queued unexports before giving up (seconds)
CLEANUP_TIMEOUT = GPIO_CLEANUP_TIMEOUT


# =============================================================================
# THREADING CONFIGURATION
# =============================================================================

# How long the I/O worker blocks on an empty queue before re-checking its flag
IO_QUEUE_POLL_TIMEOUT = 0.5

# How long to wait for threads to stop gracefully (seconds)
THREAD_SHUTDOWN_TIMEOUT = 2.0
