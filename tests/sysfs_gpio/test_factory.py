"""
Hardware Factory Tests

To run these tests:
    pytest tests/sysfs_gpio/test_factory.py -v
"""

import pytest

from sysfs_gpio.controllers.pin_controller import PinController
from sysfs_gpio.factory import HardwareFactory, create_controller, create_sysfs
from sysfs_gpio.implementations.linux_sysfs import LinuxSysfs
from sysfs_gpio.implementations.mock_sysfs import MockSysfs


@pytest.mark.unit
def test_mock_mode():
    assert isinstance(HardwareFactory.create_sysfs(mode="mock"), MockSysfs)


@pytest.mark.unit
def test_real_mode_without_sysfs_raises(tmp_path):
    with pytest.raises(RuntimeError):
        HardwareFactory.create_sysfs(mode="real", base_path=tmp_path)


@pytest.mark.unit
def test_real_mode_with_sysfs(fake_sysfs_dir):
    sysfs = HardwareFactory.create_sysfs(mode="real", base_path=fake_sysfs_dir)

    assert isinstance(sysfs, LinuxSysfs)
    assert sysfs.base_path == fake_sysfs_dir


@pytest.mark.unit
def test_auto_mode_detects_sysfs(fake_sysfs_dir):
    sysfs = HardwareFactory.create_sysfs(mode="auto", base_path=fake_sysfs_dir)

    assert isinstance(sysfs, LinuxSysfs)


@pytest.mark.unit
def test_auto_mode_falls_back_to_mock(tmp_path):
    sysfs = HardwareFactory.create_sysfs(mode="auto", base_path=tmp_path)

    assert isinstance(sysfs, MockSysfs)
    assert sysfs.base_path == tmp_path


@pytest.mark.unit
def test_invalid_mode():
    with pytest.raises(ValueError):
        HardwareFactory.create_sysfs(mode="simulated")


@pytest.mark.unit
def test_is_real_hardware_available(fake_sysfs_dir, tmp_path_factory):
    assert HardwareFactory.is_real_hardware_available(fake_sysfs_dir) is True
    assert (
        HardwareFactory.is_real_hardware_available(tmp_path_factory.mktemp("none"))
        is False
    )


@pytest.mark.unit
def test_create_sysfs_force_mock():
    assert isinstance(create_sysfs(force_mock=True), MockSysfs)


@pytest.mark.unit
def test_create_controller_force_mock():
    controller = create_controller(force_mock=True, naming_mode="bcm")
    try:
        assert isinstance(controller, PinController)
        assert isinstance(controller.sysfs, MockSysfs)
        assert controller.naming_mode is PinController.NamingMode.HARDWARE
    finally:
        controller.cleanup()
