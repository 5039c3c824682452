"""
Test Configuration and Fixtures

Shared pytest fixtures for the sysfs_gpio tests.

To use pytest:
    pip install -e ".[test]"
    pytest tests/sysfs_gpio/
"""

import threading
import time

import pytest

from sysfs_gpio.controllers.pin_controller import PinController
from sysfs_gpio.implementations.mock_sysfs import MockSysfs

# Fast polling keeps change-notification tests short
TEST_WATCH_INTERVAL = 0.01


# =============================================================================
# SYSFS FIXTURES
# =============================================================================

@pytest.fixture
def mock_sysfs():
    """
    Provide a fresh MockSysfs for each test.

    Usage in test:
        def test_something(mock_sysfs):
            mock_sysfs.write("export", "4")
    """
    return MockSysfs()


@pytest.fixture
def fake_sysfs_dir(tmp_path):
    """
    Provide a directory laid out like /sys/class/gpio with pin 4 exported.

    Plain files only - nothing emulates the kernel here.
    """
    (tmp_path / "export").write_text("")
    (tmp_path / "unexport").write_text("")
    pin_dir = tmp_path / "gpio4"
    pin_dir.mkdir()
    (pin_dir / "direction").write_text("in\n")
    (pin_dir / "value").write_text("0\n")
    return tmp_path


# =============================================================================
# CONTROLLER FIXTURES
# =============================================================================

@pytest.fixture
def controller(mock_sysfs):
    """
    Provide a PinController in LOGICAL (header position) mode on mock sysfs.

    Automatically cleans up after test.
    """
    gpio = PinController(
        sysfs=mock_sysfs,
        naming_mode=PinController.MODE_RPI,
        watch_interval=TEST_WATCH_INTERVAL,
    )
    yield gpio
    gpio.cleanup()


@pytest.fixture
def bcm_controller(mock_sysfs):
    """Provide a PinController in HARDWARE (BCM) mode on mock sysfs"""
    gpio = PinController(
        sysfs=mock_sysfs,
        naming_mode=PinController.MODE_BCM,
        watch_interval=TEST_WATCH_INTERVAL,
    )
    yield gpio
    gpio.cleanup()


# =============================================================================
# HELPER FIXTURES
# =============================================================================

@pytest.fixture
def callback_tracker():
    """
    Provide a thread-safe helper for tracking callback calls.

    Callbacks fire on worker threads, so tests wait for them explicitly.

    Usage:
        def test_callback(controller, callback_tracker):
            controller.add_change_listener(callback_tracker.track)
            # ... trigger change ...
            assert callback_tracker.wait_for_calls(1)
    """
    class CallbackTracker:
        def __init__(self):
            self.calls = []
            self._lock = threading.Lock()

        def track(self, *args, **kwargs):
            """Record a callback invocation"""
            with self._lock:
                self.calls.append({'args': args, 'kwargs': kwargs})

        def was_called(self) -> bool:
            return self.get_call_count() > 0

        def get_call_count(self) -> int:
            with self._lock:
                return len(self.calls)

        def get_last_call(self):
            with self._lock:
                return self.calls[-1] if self.calls else None

        def get_args(self) -> list:
            with self._lock:
                return [call['args'] for call in self.calls]

        def wait_for_calls(self, count: int, timeout: float = 2.0) -> bool:
            """Block until at least count calls arrived, or timeout"""
            deadline = time.monotonic() + timeout
            while self.get_call_count() < count:
                if time.monotonic() >= deadline:
                    return False
                time.sleep(0.005)
            return True

        def reset(self):
            with self._lock:
                self.calls.clear()

    return CallbackTracker()


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """
    Configure pytest with custom markers.

        pytest -m unit          # Only unit tests
        pytest -m integration   # Only integration tests
    """
    config.addinivalue_line("markers", "unit: Unit tests (fast, isolated)")
    config.addinivalue_line("markers", "integration: Integration tests (threads, timing)")
    config.addinivalue_line("markers", "hardware: Tests requiring a real GPIO sysfs tree")
