"""
Linux Sysfs Tests

Tests for the pathlib-based backend against a temporary directory laid out
like /sys/class/gpio.

To run these tests:
    pytest tests/sysfs_gpio/test_linux_sysfs.py -v
"""

import errno

import pytest

from sysfs_gpio.implementations.linux_sysfs import LinuxSysfs
from sysfs_gpio.interfaces.sysfs_interface import GPIOIOError


@pytest.mark.unit
def test_write_and_read(fake_sysfs_dir):
    sysfs = LinuxSysfs(fake_sysfs_dir)

    sysfs.write("gpio4/value", "1")

    assert sysfs.read("gpio4/value") == "1"
    assert (fake_sysfs_dir / "gpio4" / "value").read_text() == "1"


@pytest.mark.unit
def test_read_returns_raw_text(fake_sysfs_dir):
    sysfs = LinuxSysfs(fake_sysfs_dir)

    assert sysfs.read("gpio4/direction") == "in\n"


@pytest.mark.unit
def test_write_missing_file_raises(fake_sysfs_dir):
    sysfs = LinuxSysfs(fake_sysfs_dir)

    with pytest.raises(GPIOIOError) as exc_info:
        sysfs.write("gpio17/value", "1")

    assert exc_info.value.errno == errno.ENOENT
    assert exc_info.value.path == "gpio17/value"
    assert isinstance(exc_info.value.__cause__, OSError)


@pytest.mark.unit
def test_read_missing_file_raises(fake_sysfs_dir):
    sysfs = LinuxSysfs(fake_sysfs_dir)

    with pytest.raises(GPIOIOError) as exc_info:
        sysfs.read("gpio17/value")

    assert exc_info.value.errno == errno.ENOENT


@pytest.mark.unit
def test_exists(fake_sysfs_dir):
    sysfs = LinuxSysfs(fake_sysfs_dir)

    assert sysfs.exists("gpio4")
    assert not sysfs.exists("gpio17")


@pytest.mark.unit
def test_modified_token(fake_sysfs_dir):
    sysfs = LinuxSysfs(fake_sysfs_dir)
    before = sysfs.modified_token("gpio4/value")

    # Size changes too, so the token differs even on coarse mtime filesystems
    sysfs.write("gpio4/value", "10\n")

    assert before is not None
    assert sysfs.modified_token("gpio4/value") != before
    assert sysfs.modified_token("gpio17/value") is None


@pytest.mark.unit
def test_is_available(fake_sysfs_dir, tmp_path_factory):
    assert LinuxSysfs(fake_sysfs_dir).is_available() is True

    empty = tmp_path_factory.mktemp("empty")
    assert LinuxSysfs(empty).is_available() is False


@pytest.mark.unit
def test_base_path(fake_sysfs_dir):
    sysfs = LinuxSysfs(str(fake_sysfs_dir))

    assert sysfs.base_path == fake_sysfs_dir
    assert str(fake_sysfs_dir) in repr(sysfs)
