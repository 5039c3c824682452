"""
Hardware Factory

Factory for creating sysfs backends. Automatically selects the real
/sys/class/gpio tree or the in-memory mock depending on availability.

Why use a factory?
1. Single place to decide real vs mock hardware
2. Easy to force mock mode for testing
3. The controller doesn't need to know about implementation details
"""

import logging
from pathlib import Path
from typing import Any, Literal, Union

from config.settings import GPIO_HARDWARE_MODE
from sysfs_gpio.implementations.linux_sysfs import LinuxSysfs
from sysfs_gpio.implementations.mock_sysfs import MockSysfs
from sysfs_gpio.interfaces.sysfs_interface import SysfsInterface

# Type aliases for better type hints
HardwareMode = Literal["auto", "real", "mock"]

_VALID_MODES = ("auto", "real", "mock")


class HardwareFactory:
    """
    Factory for creating SysfsInterface implementations.

    Usage:
        # Auto-detect (uses real sysfs if available, mock otherwise)
        sysfs = HardwareFactory.create_sysfs()

        # Force mock mode (useful for testing)
        sysfs = HardwareFactory.create_sysfs(mode="mock")

        # Force real hardware (raises error if not available)
        sysfs = HardwareFactory.create_sysfs(mode="real")
    """

    _logger = logging.getLogger(__name__)

    @classmethod
    def create_sysfs(
        cls,
        mode: HardwareMode = "auto",
        base_path: Union[str, Path, None] = None,
    ) -> SysfsInterface:
        """
        Create a sysfs backend.

        Args:
            mode: "auto" (detect), "real" (force sysfs), "mock" (force simulation)
            base_path: GPIO class directory (None = GPIO_SYSFS_PATH setting)

        Returns:
            SysfsInterface implementation (LinuxSysfs or MockSysfs)

        Raises:
            ValueError: If mode is not recognized
            RuntimeError: If mode="real" but sysfs GPIO is not available
        """
        if mode not in _VALID_MODES:
            raise ValueError(f"Invalid hardware mode: {mode!r}")

        if mode == "mock":
            cls._logger.info("Creating Mock sysfs (forced)")
            return MockSysfs(base_path=base_path)

        sysfs = LinuxSysfs(base_path)

        if mode == "real":
            if not sysfs.is_available():
                raise RuntimeError(
                    f"Real GPIO requested but not available at {sysfs.base_path}",
                )
            cls._logger.info(f"Creating Linux sysfs at {sysfs.base_path} (forced)")
            return sysfs

        # mode == "auto" - try real first, fall back to mock
        if sysfs.is_available():
            cls._logger.info(
                f"Creating Linux sysfs at {sysfs.base_path} (auto-detected)",
            )
            return sysfs

        cls._logger.warning(
            f"GPIO sysfs not available at {sysfs.base_path}, using Mock sysfs",
        )
        return MockSysfs(base_path=base_path)

    @classmethod
    def is_real_hardware_available(
        cls,
        base_path: Union[str, Path, None] = None,
    ) -> bool:
        """
        Check if the real sysfs GPIO directory is present.

        Useful for diagnostics and configuration display.
        """
        return LinuxSysfs(base_path).is_available()


# Convenience functions for quick creation


def create_sysfs(force_mock: bool = False) -> SysfsInterface:
    """
    Quick sysfs creation with simple mock override.

    Uses the GPIO_HARDWARE_MODE setting unless force_mock is set.

    Example:
        sysfs = create_sysfs()
        sysfs = create_sysfs(force_mock=True)  # Testing
    """
    mode = "mock" if force_mock else GPIO_HARDWARE_MODE
    return HardwareFactory.create_sysfs(mode=mode)


def create_controller(force_mock: bool = False, **kwargs: Any):
    """
    Quick PinController creation.

    Args:
        force_mock: If True, always use the mock backend
        **kwargs: Passed through to PinController

    Example:
        gpio = create_controller()
        gpio.setup(11, gpio.DIR_OUT)
    """
    from sysfs_gpio.controllers.pin_controller import PinController

    return PinController(sysfs=create_sysfs(force_mock=force_mock), **kwargs)
