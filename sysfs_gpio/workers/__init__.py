"""
Workers Package

Background threads used by the pin controller: the sequential I/O queue and
the per-pin value file watchers.
"""

from sysfs_gpio.workers.io_queue import IOQueue
from sysfs_gpio.workers.pin_watcher import PinWatcher

# Public API (sorted alphabetically)
__all__ = [
    "IOQueue",
    "PinWatcher",
]
