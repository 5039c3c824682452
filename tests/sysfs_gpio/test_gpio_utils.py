"""
GPIO Utility and Result Model Tests

To run these tests:
    pytest tests/sysfs_gpio/test_gpio_utils.py -v
"""

import logging
from unittest.mock import Mock

import pytest

from sysfs_gpio.interfaces.sysfs_interface import GPIOIOError, InvalidArgumentError
from sysfs_gpio.models.pin_result import PinResult
from sysfs_gpio.utils.gpio_utils import (
    check_sysfs_available,
    direction_path,
    format_value,
    parse_value,
    pin_dir,
    safe_controller_cleanup,
    validate_channel,
    value_path,
)


# =============================================================================
# PATH / VALUE HELPERS
# =============================================================================

@pytest.mark.unit
def test_paths():
    assert pin_dir(17) == "gpio17"
    assert direction_path(17) == "gpio17/direction"
    assert value_path(17) == "gpio17/value"


@pytest.mark.unit
@pytest.mark.parametrize(
    "value,expected",
    [(True, "1"), (1, "1"), (5, "1"), ("x", "1"), (False, "0"), (0, "0"), (None, "0"), ("", "0")],
)
def test_format_value(value, expected):
    assert format_value(value) == expected


@pytest.mark.unit
@pytest.mark.parametrize(
    "text,expected",
    [("1", True), ("1\n", True), (" 0 \n", False), ("0", False)],
)
def test_parse_value(text, expected):
    assert parse_value(text) is expected


@pytest.mark.unit
@pytest.mark.parametrize("text", [None, "", "2", "high"])
def test_parse_value_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_value(text)


@pytest.mark.unit
@pytest.mark.parametrize("channel", [0, 11, 1000])
def test_validate_channel_accepts(channel):
    assert validate_channel(channel) == channel


@pytest.mark.unit
@pytest.mark.parametrize("channel", [-1, True, "11", 11.0, None])
def test_validate_channel_rejects(channel):
    with pytest.raises(InvalidArgumentError):
        validate_channel(channel)


# =============================================================================
# DIAGNOSTIC HELPERS
# =============================================================================

@pytest.mark.unit
def test_check_sysfs_available_logs(mock_sysfs, caplog):
    logger = logging.getLogger("test_gpio_utils")

    with caplog.at_level(logging.INFO, logger="test_gpio_utils"):
        assert check_sysfs_available(mock_sysfs, logger) is True

    assert "available" in caplog.text


@pytest.mark.unit
def test_safe_controller_cleanup_swallows_errors():
    controller = Mock()
    controller.cleanup.side_effect = RuntimeError("stuck")

    safe_controller_cleanup(controller, logging.getLogger(__name__))
    safe_controller_cleanup(None)

    controller.cleanup.assert_called_once()


# =============================================================================
# PIN RESULT
# =============================================================================

@pytest.mark.unit
def test_pin_result_success():
    result = PinResult("read", 11, 17, value="1\n")

    assert result.ok
    assert not result.failed
    assert result.as_bool() is True
    assert str(result) == "read(channel=11, pin=17) ok"


@pytest.mark.unit
def test_pin_result_failure():
    error = GPIOIOError("Permission denied", path="gpio17/value")
    result = PinResult("read", 11, 17, error=error)

    assert result.failed
    assert "failed: Permission denied" in str(result)
    with pytest.raises(ValueError):
        result.as_bool()


@pytest.mark.unit
def test_pin_result_is_immutable():
    result = PinResult("write", 11, 17, value="1")

    with pytest.raises(AttributeError):
        result.value = "0"
